"""Routing table: the ordered stages each patient class visits.

Each class follows a single chain of service stages ending at the clinic
exit. A stage is served at one station; the patient waits for it either in
a separate waiting area or at the service station itself.

    STANDARD    ENTRY -> RECEPTION -> STD_DOCTOR -> EXIT
    AI_WALK_IN  ENTRY -> KIOSK -> TRIAGE -> AI_DOCTOR -> EXIT
    AI_DIGITAL  ENTRY -> TRIAGE -> AI_DOCTOR -> EXIT

The ``(PatientClass, Stage) -> Stage`` table is derived from ``ROUTES`` and
checked when this module is imported, so a class without a route or a stage
without a station fails at import rather than mid-run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from clinicflow.core.types import PatientClass, Stage, StationId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Leg:
    """One service stage of a route.

    Attributes:
        stage: The service stage.
        station: Station providing the service.
        waiting_area: Waypoint where the patient waits for the station, or
            None to queue at the station itself.
    """

    stage: Stage
    station: StationId
    waiting_area: StationId | None = None

    @property
    def approach(self) -> StationId:
        """Where the patient heads to queue for this stage."""
        return self.waiting_area if self.waiting_area is not None else self.station


_RECEPTION = Leg(Stage.RECEPTION, StationId.STD_RECEPTION, StationId.STD_CHECKIN_WAIT)
_STD_DOCTOR = Leg(Stage.STD_DOCTOR, StationId.STD_DOCTOR, StationId.STD_MAIN_WAIT)
_KIOSK = Leg(Stage.KIOSK, StationId.AI_KIOSK)
_TRIAGE = Leg(Stage.TRIAGE, StationId.AI_TRIAGE, StationId.AI_WAITING)
_AI_DOCTOR = Leg(Stage.AI_DOCTOR, StationId.AI_DOCTOR, StationId.AI_POST_TRIAGE_WAIT)

ROUTES: dict[PatientClass, tuple[Leg, ...]] = {
    PatientClass.STANDARD: (_RECEPTION, _STD_DOCTOR),
    PatientClass.AI_WALK_IN: (_KIOSK, _TRIAGE, _AI_DOCTOR),
    PatientClass.AI_DIGITAL: (_TRIAGE, _AI_DOCTOR),
}

STAGE_STATIONS: dict[Stage, StationId] = {
    leg.stage: leg.station for route in ROUTES.values() for leg in route
}


def _build_table(routes: dict[PatientClass, tuple[Leg, ...]]) -> dict[tuple[PatientClass, Stage], Stage]:
    missing = [cls for cls in PatientClass if not routes.get(cls)]
    if missing:
        raise RuntimeError(f"No route defined for patient classes: {missing}")

    table: dict[tuple[PatientClass, Stage], Stage] = {}
    for cls, legs in routes.items():
        stages = [Stage.ENTRY, *(leg.stage for leg in legs), Stage.EXIT]
        if len(set(stages)) != len(stages):
            raise RuntimeError(f"Route for {cls.value} revisits a stage: {stages}")
        for current, following in zip(stages, stages[1:]):
            table[(cls, current)] = following
    return table


NEXT_STAGE = _build_table(ROUTES)

_LEGS: dict[tuple[PatientClass, Stage], Leg] = {
    (cls, leg.stage): leg for cls, legs in ROUTES.items() for leg in legs
}


def next_stage(patient_class: PatientClass, current: Stage) -> Stage:
    """Stage that follows ``current`` for this class.

    Raises:
        KeyError: If ``current`` is not on the class's route (including EXIT,
            which has no successor).
    """
    try:
        return NEXT_STAGE[(patient_class, current)]
    except KeyError:
        logger.error("No routing entry for (%s, %s)", patient_class.value, current.value)
        raise


def leg_for(patient_class: PatientClass, stage: Stage) -> Leg:
    """Station and waiting area serving ``stage`` for this class.

    Raises:
        KeyError: If the class never visits ``stage``.
    """
    try:
        return _LEGS[(patient_class, stage)]
    except KeyError:
        logger.error("Patient class %s has no %s stage", patient_class.value, stage.value)
        raise


def first_stage(patient_class: PatientClass) -> Stage:
    return next_stage(patient_class, Stage.ENTRY)
