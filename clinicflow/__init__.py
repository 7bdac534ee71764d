"""clinicflow: patient-flow simulation of a standard clinic versus an AI-enabled clinic.

Two engines share one configuration, routing table and random source:

- ``RealtimeEngine`` is stepped by a host frame loop and exposes agent
  positions for animation.
- ``BatchEngine`` is a discrete-event run that drains every event and returns
  per-clinic throughput, wait, length-of-stay and utilization figures.

The library logs under the ``clinicflow`` logger and is silent until one of
the ``enable_*_logging`` helpers (or ``configure_from_env``) is called.
"""

import logging

from clinicflow.analysis import compare_clinics, run_replications
from clinicflow.config import ClinicConfig, InvalidConfigurationError
from clinicflow.core import AgentState, ClinicType, PatientClass, Stage, StationId
from clinicflow.distributions import VariateGenerator
from clinicflow.engine import BatchEngine, RealtimeEngine, run_simulation
from clinicflow.instrumentation import (
    ClinicResult,
    HistoryPoint,
    PatientRecord,
    RealtimeSnapshot,
    SimulationResult,
    StationUtilization,
)
from clinicflow.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)

logging.getLogger("clinicflow").addHandler(logging.NullHandler())

__all__ = [
    "AgentState",
    "BatchEngine",
    "ClinicConfig",
    "ClinicResult",
    "ClinicType",
    "HistoryPoint",
    "InvalidConfigurationError",
    "PatientClass",
    "PatientRecord",
    "RealtimeEngine",
    "RealtimeSnapshot",
    "SimulationResult",
    "Stage",
    "StationId",
    "StationUtilization",
    "VariateGenerator",
    "compare_clinics",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "run_replications",
    "run_simulation",
    "set_level",
    "set_module_level",
]
