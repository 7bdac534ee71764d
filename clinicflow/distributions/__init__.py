"""Random variates and per-stage service-time distributions."""

from clinicflow.distributions.service_time import (
    NormalServiceTime,
    ServiceTimeDistribution,
    TriangularServiceTime,
    service_time_model,
)
from clinicflow.distributions.variates import MIN_DURATION, VariateGenerator

__all__ = [
    "MIN_DURATION",
    "NormalServiceTime",
    "ServiceTimeDistribution",
    "TriangularServiceTime",
    "VariateGenerator",
    "service_time_model",
]
