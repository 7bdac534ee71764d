"""Immutable views of the realtime engine's state.

The engine mutates its agents and stations in place on every tick. Hosts
(renderers, dashboards) receive these frozen copies instead, so a snapshot
kept from an earlier tick never changes underneath them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from clinicflow.core.layout import Point
from clinicflow.instrumentation.history import HistoryPoint


@dataclass(frozen=True)
class AgentView:
    id: int
    patient_class: str
    state: str
    position: Point
    target_position: Point
    current_station_id: str | None
    arrival_time: float
    wait_time: float
    service_time: float


@dataclass(frozen=True)
class RoomView:
    id: str
    name: str
    kind: str
    capacity: int
    staff_count: int
    staff_busy: int
    queue: tuple[int, ...]
    occupants: tuple[int, ...]
    handled: int
    position: Point


@dataclass(frozen=True)
class RealtimeStats:
    """Running counters of a realtime run.

    Doctor busy times are in doctor-minutes normalised by the number of
    doctors, so ``busy_time / elapsed`` is the utilization fraction.
    """

    std_arrived: int = 0
    ai_arrived: int = 0
    std_finished: int = 0
    ai_finished: int = 0
    std_reception_handled: int = 0
    std_doctor_handled: int = 0
    ai_kiosk_handled: int = 0
    ai_triage_handled: int = 0
    ai_doctor_handled: int = 0
    std_doctor_busy_time: float = 0.0
    ai_doctor_busy_time: float = 0.0
    std_doctor_utilization_percent: float = 0.0
    ai_doctor_utilization_percent: float = 0.0


@dataclass(frozen=True)
class RealtimeSnapshot:
    time: float
    patients: tuple[AgentView, ...]
    rooms: tuple[RoomView, ...]
    history: tuple[HistoryPoint, ...]
    stats: RealtimeStats

    def room(self, room_id: str) -> RoomView:
        for room in self.rooms:
            if room.id == room_id:
                return room
        raise KeyError(f"No room {room_id!r}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
