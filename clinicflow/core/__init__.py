"""Station model, routing table and event primitives shared by both engines."""

from clinicflow.core.event import SimEvent
from clinicflow.core.event_heap import EventHeap
from clinicflow.core.layout import AGENT_SPEED, Point
from clinicflow.core.routing import ROUTES, Leg, first_stage, leg_for, next_stage
from clinicflow.core.station import BatchStation, SeizeResult, TickStation
from clinicflow.core.types import (
    AgentState,
    ClinicType,
    EventKind,
    PatientClass,
    Stage,
    StationId,
    StationKind,
)

__all__ = [
    "AGENT_SPEED",
    "AgentState",
    "BatchStation",
    "ClinicType",
    "EventHeap",
    "EventKind",
    "Leg",
    "PatientClass",
    "Point",
    "ROUTES",
    "SeizeResult",
    "SimEvent",
    "Stage",
    "StationId",
    "StationKind",
    "TickStation",
    "first_stage",
    "leg_for",
    "next_stage",
]
