"""Events processed by the batch engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count

from clinicflow.core.types import ClinicType, EventKind, Stage

_event_sequence = count()


@dataclass(order=True, frozen=True)
class SimEvent:
    """Something that happens to one patient at one instant.

    Ordering is by ``(time, sequence)``; the sequence number is assigned at
    creation, so events scheduled for the same instant are processed in the
    order they were created.

    Attributes:
        time: Simulated minute at which the event fires.
        kind: ARRIVAL or SERVICE_COMPLETED.
        patient_id: Patient identifier, unique within its clinic.
        clinic: Which clinic the patient belongs to.
        stage: For SERVICE_COMPLETED, the stage that just finished.
    """

    time: float
    sequence: int = field(default_factory=lambda: next(_event_sequence), init=False)
    kind: EventKind = field(default=EventKind.ARRIVAL, compare=False)
    patient_id: int = field(default=0, compare=False)
    clinic: ClinicType = field(default=ClinicType.STANDARD, compare=False)
    stage: Stage | None = field(default=None, compare=False)

    @classmethod
    def arrival(cls, time: float, patient_id: int, clinic: ClinicType) -> SimEvent:
        return cls(time=time, kind=EventKind.ARRIVAL, patient_id=patient_id, clinic=clinic)

    @classmethod
    def service_completed(cls, time: float, patient_id: int, clinic: ClinicType, stage: Stage) -> SimEvent:
        return cls(
            time=time,
            kind=EventKind.SERVICE_COMPLETED,
            patient_id=patient_id,
            clinic=clinic,
            stage=stage,
        )
