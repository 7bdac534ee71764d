"""Service-time distributions for each stage of a visit.

Every service stage is configured by a single mean. Reception, both doctor
stages and the kiosk use a triangular spread of ±50% around that mean;
triage uses a normal distribution with a 20% coefficient of variation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from clinicflow.config import ClinicConfig
from clinicflow.core.types import Stage
from clinicflow.distributions.variates import MIN_DURATION, VariateGenerator

logger = logging.getLogger(__name__)


class ServiceTimeDistribution(ABC):
    """Samples a service duration in minutes for one stage."""

    def __init__(self, mean: float):
        if not mean > 0:
            raise ValueError(f"mean must be > 0, got {mean}")
        self._mean = mean

    @property
    def mean(self) -> float:
        return self._mean

    @abstractmethod
    def sample(self, variates: VariateGenerator) -> float:
        """Draw one service duration."""


class TriangularServiceTime(ServiceTimeDistribution):
    """Triangular(0.5·mean, mean, 1.5·mean).

    The lower bound is lifted to ``MIN_DURATION`` so that a very small mean
    never produces a zero-length service; mode and upper bound follow it up
    if needed so the triangle stays well-formed.
    """

    def __init__(self, mean: float):
        super().__init__(mean)
        self.low = max(MIN_DURATION, 0.5 * mean)
        self.mode = max(mean, self.low)
        self.high = max(1.5 * mean, self.mode)

    def sample(self, variates: VariateGenerator) -> float:
        return variates.triangular(self.low, self.mode, self.high)

    def __repr__(self) -> str:
        return f"TriangularServiceTime(low={self.low:g}, mode={self.mode:g}, high={self.high:g})"


class NormalServiceTime(ServiceTimeDistribution):
    """Normal(mean, cv·mean), clamped to ``MIN_DURATION``."""

    def __init__(self, mean: float, cv: float = 0.2):
        super().__init__(mean)
        if cv < 0:
            raise ValueError(f"cv must be >= 0, got {cv}")
        self.std_dev = cv * mean

    def sample(self, variates: VariateGenerator) -> float:
        return variates.normal(self._mean, self.std_dev)

    def __repr__(self) -> str:
        return f"NormalServiceTime(mean={self._mean:g}, std_dev={self.std_dev:g})"


def service_time_model(config: ClinicConfig) -> dict[Stage, ServiceTimeDistribution]:
    """Map each service stage to its distribution for this configuration."""
    model: dict[Stage, ServiceTimeDistribution] = {
        Stage.RECEPTION: TriangularServiceTime(config.std_reception_time_avg),
        Stage.STD_DOCTOR: TriangularServiceTime(config.standard_doctor_time_avg),
        Stage.KIOSK: TriangularServiceTime(config.ai_kiosk_time_avg),
        Stage.TRIAGE: NormalServiceTime(config.ai_triage_time_avg),
        Stage.AI_DOCTOR: TriangularServiceTime(config.ai_doctor_time_avg),
    }
    logger.debug("Service-time model: %s", model)
    return model
