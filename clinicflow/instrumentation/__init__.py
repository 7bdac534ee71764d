"""Result records, history series and state snapshots."""

from clinicflow.instrumentation.history import HISTORY_INTERVAL, HistoryPoint, history_frame
from clinicflow.instrumentation.results import (
    ClinicResult,
    PatientRecord,
    SimulationResult,
    StationUtilization,
    build_clinic_result,
)
from clinicflow.instrumentation.snapshot import (
    AgentView,
    RealtimeSnapshot,
    RealtimeStats,
    RoomView,
)

__all__ = [
    "AgentView",
    "ClinicResult",
    "HISTORY_INTERVAL",
    "HistoryPoint",
    "PatientRecord",
    "RealtimeSnapshot",
    "RealtimeStats",
    "RoomView",
    "SimulationResult",
    "StationUtilization",
    "build_clinic_result",
    "history_frame",
]
