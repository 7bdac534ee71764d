"""Random variates driving arrivals and service times.

VariateGenerator wraps a ``numpy.random.Generator`` so both engines draw from
one injectable source. Passing a seed (or a pre-built generator) makes a run
reproducible; leaving both out seeds from OS entropy.

The transforms are written out explicitly rather than delegated to numpy's
own samplers, so a given uniform stream maps to the same durations as the
formulas below:

- Exponential: ``-ln(1 - U) / rate``
- Triangular: inverse CDF with the branch point at ``(mode - low) / (high - low)``
- Normal: Box-Muller, clamped to ``MIN_DURATION``
"""

from __future__ import annotations

import logging
import math

import numpy as np

logger = logging.getLogger(__name__)

MIN_DURATION = 0.1
"""Floor, in minutes, applied to sampled service durations."""


class VariateGenerator:
    """Source of uniform draws and the variates built on top of them.

    Args:
        seed: Seed for a fresh ``numpy.random.default_rng``.
        rng: An existing generator to draw from. Takes precedence over seed.
    """

    def __init__(self, seed: int | None = None, rng: np.random.Generator | None = None):
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        logger.debug("VariateGenerator created (seed=%s, injected_rng=%s)", seed, rng is not None)

    @property
    def rng(self) -> np.random.Generator:
        return self._rng

    def uniform(self) -> float:
        """Uniform draw in [0, 1)."""
        return float(self._rng.random())

    def _open_uniform(self) -> float:
        """Uniform draw in (0, 1)."""
        u = self.uniform()
        while u == 0.0:
            u = self.uniform()
        return u

    def exponential(self, rate: float) -> float:
        """Exponential gap with the given rate (events per minute).

        Raises:
            ValueError: If rate is not a positive finite number.
        """
        if not rate > 0 or not math.isfinite(rate):
            raise ValueError(f"rate must be finite and > 0, got {rate}")
        return -math.log(1.0 - self.uniform()) / rate

    def triangular(self, low: float, mode: float, high: float) -> float:
        """Triangular draw by inverse-CDF sampling.

        Raises:
            ValueError: Unless ``low <= mode <= high``.
        """
        if not low <= mode <= high:
            raise ValueError(f"triangular requires low <= mode <= high, got ({low}, {mode}, {high})")
        span = high - low
        if span == 0:
            return low

        u = self.uniform()
        f = (mode - low) / span
        if u < f:
            return low + math.sqrt(u * span * (mode - low))
        return high - math.sqrt((1.0 - u) * span * (high - mode))

    def normal(self, mean: float, std_dev: float) -> float:
        """Box-Muller normal draw, never below ``MIN_DURATION``."""
        if std_dev < 0:
            raise ValueError(f"std_dev must be >= 0, got {std_dev}")
        u = self._open_uniform()
        v = self._open_uniform()
        z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
        return max(MIN_DURATION, mean + z * std_dev)

    def bernoulli(self, p: float) -> bool:
        """True with probability p."""
        return self.uniform() < p
