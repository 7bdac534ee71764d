"""Floor-plan coordinates used by the realtime engine.

Positions live on a 0-100 grid: the standard clinic runs left to right along
y=20 and the AI clinic along y=70. Agents walk between these waypoints at
``AGENT_SPEED`` grid units per simulated minute.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from clinicflow.core.types import ClinicType, StationId

AGENT_SPEED = 30.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def step_towards(self, target: Point, distance: float) -> Point:
        """Move ``distance`` units along the straight line to ``target``.

        Returns ``target`` itself when it is within reach.
        """
        total = self.distance_to(target)
        if total <= distance:
            return target
        ratio = distance / total
        return Point(self.x + (target.x - self.x) * ratio, self.y + (target.y - self.y) * ratio)


ENTRY_POSITIONS: dict[ClinicType, Point] = {
    ClinicType.STANDARD: Point(5, 20),
    ClinicType.AI: Point(5, 70),
}

EXIT_POSITIONS: dict[ClinicType, Point] = {
    ClinicType.STANDARD: Point(95, 20),
    ClinicType.AI: Point(95, 70),
}

STATION_POSITIONS: dict[StationId, Point] = {
    StationId.STD_CHECKIN_WAIT: Point(20, 20),
    StationId.STD_RECEPTION: Point(40, 20),
    StationId.STD_MAIN_WAIT: Point(60, 20),
    StationId.STD_DOCTOR: Point(80, 20),
    StationId.AI_KIOSK: Point(20, 60),
    StationId.AI_WAITING: Point(35, 70),
    StationId.AI_TRIAGE: Point(50, 70),
    StationId.AI_POST_TRIAGE_WAIT: Point(68, 70),
    StationId.AI_DOCTOR: Point(85, 70),
}
