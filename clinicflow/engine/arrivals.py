"""Joint arrival process feeding both clinics.

One exponential draw sets the instant of the next *joint* arrival: at that
instant each clinic receives one new patient, and a Bernoulli trial against
the digital adoption rate decides whether the AI-clinic patient is a walk-in
or a digital check-in. Sharing the instants removes arrival-volume noise from
the standard-vs-AI comparison.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from clinicflow.config import ClinicConfig
from clinicflow.core.types import PatientClass
from clinicflow.distributions.variates import VariateGenerator

logger = logging.getLogger(__name__)

MIN_ARRIVAL_STEP = 0.1
"""Smallest forward step, in minutes, between consecutive joint arrivals."""


@dataclass(frozen=True)
class JointArrival:
    """Patients arriving together at both clinics."""

    time: float
    ai_class: PatientClass


class JointArrivalProcess:
    """Schedules joint arrivals from t=0 onwards.

    The realtime engine polls ``due()`` each tick; the batch engine asks for
    the whole stream up front with ``generate()``.

    Args:
        config: Provides the arrival rate, horizon and adoption rate.
        variates: Random source shared with the owning engine.
        first_arrival: Instant of the first joint arrival.
    """

    def __init__(self, config: ClinicConfig, variates: VariateGenerator, first_arrival: float = 0.0):
        self._rate = config.arrival_rate
        self._adoption = config.digital_adoption_rate
        self._horizon = config.duration_minutes
        self._variates = variates
        self.next_arrival = first_arrival
        self.generated = 0

    def _ai_class(self) -> PatientClass:
        if self._variates.bernoulli(self._adoption):
            return PatientClass.AI_DIGITAL
        return PatientClass.AI_WALK_IN

    def _advance(self) -> None:
        gap = self._variates.exponential(self._rate)
        following = self.next_arrival + gap
        if not following > self.next_arrival:
            logger.debug(
                "Degenerate arrival gap %.3g at t=%.3f, stepping %.1f min instead",
                gap, self.next_arrival, MIN_ARRIVAL_STEP,
            )
            following = self.next_arrival + MIN_ARRIVAL_STEP
        self.next_arrival = following

    def due(self, now: float) -> Iterator[JointArrival]:
        """Yield, in order, every joint arrival at or before ``now``.

        Arrivals at or after the configured duration are never produced, so a
        single long tick catches up on every instant it spans and nothing
        more. Calling again with the same ``now`` yields nothing.
        """
        while self.next_arrival <= now and self.next_arrival < self._horizon:
            arrival = JointArrival(time=self.next_arrival, ai_class=self._ai_class())
            self.generated += 1
            self._advance()
            yield arrival

    def generate(self) -> list[JointArrival]:
        """Draw the complete arrival stream for the configured duration.

        The first instant is one exponential gap after ``first_arrival``.
        """
        arrivals: list[JointArrival] = []
        self._advance()
        while self.next_arrival < self._horizon:
            arrivals.append(JointArrival(time=self.next_arrival, ai_class=self._ai_class()))
            self.generated += 1
            self._advance()
        logger.debug("Generated %d joint arrivals over %.1f min", len(arrivals), self._horizon)
        return arrivals
