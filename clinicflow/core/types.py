"""Enumerations shared by the routing table, stations and both engines."""

from __future__ import annotations

from enum import Enum


class ClinicType(str, Enum):
    STANDARD = "standard"
    AI = "ai"


class PatientClass(str, Enum):
    STANDARD = "STANDARD"
    AI_WALK_IN = "AI_WALK_IN"
    AI_DIGITAL = "AI_DIGITAL"

    @property
    def clinic(self) -> ClinicType:
        if self is PatientClass.STANDARD:
            return ClinicType.STANDARD
        return ClinicType.AI


class AgentState(str, Enum):
    """Lifecycle of an agent in the realtime engine."""

    MOVING = "MOVING"
    WAITING = "WAITING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"


class StationKind(str, Enum):
    QUEUE = "QUEUE"  # waiting area, no service
    SERVICE = "SERVICE"


class StationId(str, Enum):
    # Standard clinic
    STD_CHECKIN_WAIT = "std_checkin_wait"
    STD_RECEPTION = "std_reception"
    STD_MAIN_WAIT = "std_main_wait"
    STD_DOCTOR = "std_doctor"
    # AI-enabled clinic
    AI_KIOSK = "ai_kiosk"
    AI_WAITING = "ai_waiting"
    AI_TRIAGE = "ai_triage"
    AI_POST_TRIAGE_WAIT = "ai_post_triage_wait"
    AI_DOCTOR = "ai_doctor"


class Stage(str, Enum):
    """One step of a patient's visit.

    ENTRY and EXIT bracket the service stages; the routing table maps
    ``(PatientClass, Stage)`` to the following stage.
    """

    ENTRY = "ENTRY"
    RECEPTION = "RECEPTION"
    STD_DOCTOR = "STD_DOCTOR"
    KIOSK = "KIOSK"
    TRIAGE = "TRIAGE"
    AI_DOCTOR = "AI_DOCTOR"
    EXIT = "EXIT"


class EventKind(str, Enum):
    ARRIVAL = "ARRIVAL"
    SERVICE_COMPLETED = "SERVICE_COMPLETED"
