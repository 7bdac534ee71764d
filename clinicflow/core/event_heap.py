"""Pending-event list for the batch engine."""

from __future__ import annotations

import heapq

from clinicflow.core.event import SimEvent
from clinicflow.core.types import ClinicType, Stage


class EventHeap:
    """Pending SimEvents for both clinics, popped earliest first.

    Events scheduled for the same instant pop in the order they were
    scheduled, so a joint arrival reaches the standard clinic before the AI
    clinic when it is scheduled that way.
    """

    def __init__(self):
        self._heap: list[SimEvent] = []

    def schedule_arrival(self, time: float, patient_id: int, clinic: ClinicType) -> SimEvent:
        event = SimEvent.arrival(time, patient_id, clinic)
        heapq.heappush(self._heap, event)
        return event

    def schedule_completion(self, time: float, patient_id: int, clinic: ClinicType, stage: Stage) -> SimEvent:
        """Schedule the end of ``stage`` for one patient."""
        event = SimEvent.service_completed(time, patient_id, clinic, stage)
        heapq.heappush(self._heap, event)
        return event

    def pop(self) -> SimEvent:
        return heapq.heappop(self._heap)

    def has_events(self) -> bool:
        return bool(self._heap)
