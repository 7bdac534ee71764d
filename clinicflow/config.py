"""Run configuration shared by the realtime and batch engines.

All durations are in simulated minutes. The defaults reproduce the staffing
the comparison dashboard ships with: an 8 hour day, one joint arrival every
4.5 minutes on average, two receptionists and one doctor in the standard
clinic, and two kiosks, two triage nurses and one doctor in the AI clinic.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any

logger = logging.getLogger(__name__)


class InvalidConfigurationError(ValueError):
    """Raised when a configuration cannot drive a simulation run."""


# Keys used by the host dashboard, mapped onto dataclass field names.
_CAMEL_KEYS: dict[str, str] = {
    "durationMinutes": "duration_minutes",
    "avgArrivalInterval": "avg_arrival_interval",
    "numStdReceptionists": "num_std_receptionists",
    "numStdDoctors": "num_std_doctors",
    "stdReceptionTimeAvg": "std_reception_time_avg",
    "standardDoctorTimeAvg": "standard_doctor_time_avg",
    "digitalAdoptionRate": "digital_adoption_rate",
    "numKiosks": "num_kiosks",
    "numNurses": "num_nurses",
    "numAiDoctors": "num_ai_doctors",
    "aiKioskTimeAvg": "ai_kiosk_time_avg",
    "aiTriageTimeAvg": "ai_triage_time_avg",
    "aiDoctorTimeAvg": "ai_doctor_time_avg",
}
_SNAKE_KEYS: dict[str, str] = {v: k for k, v in _CAMEL_KEYS.items()}

_CAPACITY_FIELDS = (
    "num_std_receptionists",
    "num_std_doctors",
    "num_kiosks",
    "num_nurses",
    "num_ai_doctors",
)
_DURATION_FIELDS = (
    "duration_minutes",
    "avg_arrival_interval",
    "std_reception_time_avg",
    "standard_doctor_time_avg",
    "ai_kiosk_time_avg",
    "ai_triage_time_avg",
    "ai_doctor_time_avg",
)


@dataclass(frozen=True)
class ClinicConfig:
    """Staffing and timing assumptions for one comparison run.

    Attributes:
        duration_minutes: Arrival horizon. No patient arrives at or after it.
        avg_arrival_interval: Mean gap between joint arrivals.
        num_std_receptionists: Reception desks in the standard clinic.
        num_std_doctors: Doctors in the standard clinic.
        std_reception_time_avg: Mean reception service time.
        standard_doctor_time_avg: Mean standard consultation time.
        digital_adoption_rate: Probability an AI-clinic patient checked in
            digitally and skips the kiosk.
        num_kiosks: Pre-consult kiosks in the AI clinic.
        num_nurses: Triage nurses in the AI clinic.
        num_ai_doctors: Doctors in the AI clinic.
        ai_kiosk_time_avg: Mean kiosk session time.
        ai_triage_time_avg: Mean triage time.
        ai_doctor_time_avg: Mean AI-assisted consultation time.

    Raises:
        InvalidConfigurationError: On a capacity below one, a non-positive or
            non-finite duration, an arrival interval so small its rate is
            infinite, or an adoption rate outside [0, 1].
    """

    duration_minutes: float = 480.0
    avg_arrival_interval: float = 4.5

    num_std_receptionists: int = 2
    num_std_doctors: int = 1
    std_reception_time_avg: float = 13.0
    standard_doctor_time_avg: float = 48.0

    digital_adoption_rate: float = 0.5
    num_kiosks: int = 2
    num_nurses: int = 2
    num_ai_doctors: int = 1
    ai_kiosk_time_avg: float = 3.0
    ai_triage_time_avg: float = 4.5
    ai_doctor_time_avg: float = 4.0

    def __post_init__(self) -> None:
        problems: list[str] = []

        for name in _CAPACITY_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                problems.append(f"{name} must be an integer, got {value!r}")
            elif value < 1:
                problems.append(f"{name} must be >= 1, got {value}")

        for name in _DURATION_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                problems.append(f"{name} must be a number, got {value!r}")
            elif not math.isfinite(value) or value <= 0:
                problems.append(f"{name} must be finite and > 0, got {value}")

        interval = self.avg_arrival_interval
        if isinstance(interval, numbers.Real) and math.isfinite(interval) and interval > 0:
            if not math.isfinite(1.0 / interval):
                problems.append(f"avg_arrival_interval {interval!r} gives an infinite arrival rate")

        rate = self.digital_adoption_rate
        if isinstance(rate, bool) or not isinstance(rate, numbers.Real) or not 0.0 <= rate <= 1.0:
            problems.append(f"digital_adoption_rate must be in [0, 1], got {rate!r}")

        if problems:
            logger.error("Rejected configuration: %s", "; ".join(problems))
            raise InvalidConfigurationError("; ".join(problems))

    @property
    def arrival_rate(self) -> float:
        """Joint arrivals per minute."""
        return 1.0 / self.avg_arrival_interval

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], strict: bool = True) -> ClinicConfig:
        """Build a config from dashboard (camelCase) or snake_case keys.

        Missing keys keep their defaults. The dashboard form also carries
        fields the engines never read (salaries, nurse pool sizes); pass
        ``strict=False`` to drop unrecognised keys instead of rejecting them.

        Raises:
            InvalidConfigurationError: On unknown keys (when strict) or
                invalid values.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                unknown.append(key)
                continue
            kwargs[name] = value
        if unknown:
            if strict:
                raise InvalidConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
            logger.debug("Ignoring configuration keys: %s", sorted(unknown))
        return cls(**kwargs)

    def to_dict(self, camel_case: bool = False) -> dict[str, Any]:
        data = asdict(self)
        if camel_case:
            return {_SNAKE_KEYS[k]: v for k, v in data.items()}
        return data
