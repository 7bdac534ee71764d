"""Capacity-bound service points and waiting areas.

Two station models share one contract (capacity-bound, FIFO, never blocking):

- ``TickStation`` is used by the realtime engine. It keeps an explicit FIFO
  queue of patient ids, admits only the queue head when a unit is free and
  counts busy units and occupants.
- ``BatchStation`` is used by the batch engine. It keeps, per unit, the time
  at which the unit next becomes free. Seizing picks the earliest-free unit
  and computes start, finish and wait directly, so no waiting list is needed:
  each patient's path is linear and all contention is resolved through the
  ``available_at`` ordering.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from clinicflow.core.types import StationId, StationKind

if TYPE_CHECKING:
    from clinicflow.distributions.service_time import ServiceTimeDistribution
    from clinicflow.distributions.variates import VariateGenerator

logger = logging.getLogger(__name__)

STATION_NAMES: dict[StationId, str] = {
    StationId.STD_CHECKIN_WAIT: "Check-in Q",
    StationId.STD_RECEPTION: "Reception",
    StationId.STD_MAIN_WAIT: "Waiting Room",
    StationId.STD_DOCTOR: "Doctor Office",
    StationId.AI_KIOSK: "AI Pre-Consult",
    StationId.AI_WAITING: "Triage Waiting",
    StationId.AI_TRIAGE: "Triage Nurses",
    StationId.AI_POST_TRIAGE_WAIT: "Dr. Waiting",
    StationId.AI_DOCTOR: "AI Doctor",
}


class TickStation:
    """A station in the realtime engine.

    Service stations hold ``capacity`` parallel units and a FIFO queue.
    Queue-kind stations are waiting areas: they only mark a place on the
    floor plan, have unbounded capacity and never admit anyone.

    Args:
        station_id: Identity of the station.
        kind: SERVICE or QUEUE.
        capacity: Parallel service units (ignored for QUEUE stations).
        service_time: Distribution sampled on each admission.
    """

    def __init__(
        self,
        station_id: StationId,
        kind: StationKind,
        capacity: int = 0,
        service_time: ServiceTimeDistribution | None = None,
    ):
        if kind is StationKind.SERVICE:
            if capacity < 1:
                raise ValueError(f"capacity must be >= 1 for a service station, got {capacity}")
            if service_time is None:
                raise ValueError(f"service station {station_id.value} needs a service-time distribution")
        self.station_id = station_id
        self.kind = kind
        self.capacity = capacity
        self.service_time = service_time

        self._busy = 0
        self._queue: deque[int] = deque()
        self._occupants: list[int] = []
        self._handled = 0

    @property
    def name(self) -> str:
        return STATION_NAMES[self.station_id]

    @property
    def busy(self) -> int:
        return self._busy

    @property
    def queue(self) -> tuple[int, ...]:
        return tuple(self._queue)

    @property
    def occupants(self) -> tuple[int, ...]:
        return tuple(self._occupants)

    @property
    def handled(self) -> int:
        return self._handled

    def has_capacity(self) -> bool:
        return self.kind is StationKind.SERVICE and self._busy < self.capacity

    def enqueue(self, patient_id: int) -> None:
        if self.kind is not StationKind.SERVICE:
            logger.error("[%s] Attempted to queue patient %d at a waiting area", self.station_id.value, patient_id)
            raise RuntimeError(f"Cannot queue for service at waiting area {self.station_id.value}")
        self._queue.append(patient_id)
        logger.debug("[%s] Patient %d queued (depth=%d)", self.station_id.value, patient_id, len(self._queue))

    def try_admit(self, patient_id: int, variates: VariateGenerator) -> float | None:
        """Admit ``patient_id`` if it heads the queue and a unit is free.

        Returns:
            The sampled service duration on admission, otherwise None.
        """
        if not self._queue or self._queue[0] != patient_id or not self.has_capacity():
            return None

        self._queue.popleft()
        self._busy += 1
        self._occupants.append(patient_id)
        duration = self.service_time.sample(variates)
        logger.debug(
            "[%s] Admitted patient %d for %.3f min (busy=%d/%d)",
            self.station_id.value, patient_id, duration, self._busy, self.capacity,
        )
        return duration

    def release(self, patient_id: int) -> None:
        """Free the unit held by ``patient_id`` and count the patient as handled.

        Raises:
            RuntimeError: If the patient is not being served here.
        """
        if patient_id not in self._occupants:
            logger.error("[%s] Release of patient %d who is not an occupant", self.station_id.value, patient_id)
            raise RuntimeError(f"Patient {patient_id} is not being served at {self.station_id.value}")
        self._occupants.remove(patient_id)
        self._busy -= 1
        self._handled += 1
        logger.debug("[%s] Released patient %d (handled=%d)", self.station_id.value, patient_id, self._handled)


@dataclass(frozen=True)
class SeizeResult:
    """Outcome of seizing a unit at a batch station."""

    unit: int
    start: float
    finish: float
    wait: float


class BatchStation:
    """A station in the batch engine, tracked per unit.

    Args:
        station_id: Identity of the station.
        capacity: Number of parallel units.
    """

    def __init__(self, station_id: StationId, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.station_id = station_id
        self.capacity = capacity
        self.available_at: list[float] = [0.0] * capacity
        self.busy_time: list[float] = [0.0] * capacity
        self._handled = 0

    @property
    def name(self) -> str:
        return STATION_NAMES[self.station_id]

    @property
    def handled(self) -> int:
        return self._handled

    def earliest_unit(self) -> int:
        """Index of the unit that frees up first; ties go to the lowest index."""
        best = 0
        for i in range(1, self.capacity):
            if self.available_at[i] < self.available_at[best]:
                best = i
        return best

    def seize(self, now: float, duration: float) -> SeizeResult:
        """Book the earliest-free unit for ``duration`` minutes from ``now``."""
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got {duration}")
        unit = self.earliest_unit()
        start = max(now, self.available_at[unit])
        finish = start + duration

        self.available_at[unit] = finish
        self.busy_time[unit] += duration
        self._handled += 1

        logger.debug(
            "[%s] Seized unit %d at t=%.3f: start=%.3f finish=%.3f wait=%.3f",
            self.station_id.value, unit, now, start, finish, start - now,
        )
        return SeizeResult(unit=unit, start=start, finish=finish, wait=start - now)

    def utilization_percent(self, horizon: float) -> float:
        """Mean busy time across all units as a percentage of ``horizon``.

        Clamped to [0, 100]: patients still in service when arrivals stop keep
        accumulating busy time past the horizon.
        """
        if horizon <= 0:
            return 0.0
        mean_busy = sum(self.busy_time) / self.capacity
        return min(100.0, max(0.0, mean_busy / horizon * 100.0))
