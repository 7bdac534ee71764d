"""Continuously-stepped engine for live animation.

A host rendering loop calls ``update(dt)`` with whatever simulated time passed
since its last frame. Each agent walks across the floor plan between station
waypoints, waits in FIFO order for a free unit, is served and moves on:

    MOVING -> WAITING -> PROCESSING -> MOVING -> ... -> COMPLETED

An agent joins the next station's queue as soon as it leaves the previous
one, but it is only admitted once it has physically reached the waiting area
and is at the head of that queue.

Large ticks are handled by catching up: every joint arrival whose instant
falls inside the tick is spawned in order. A tick of zero advances nothing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import pandas as pd

from clinicflow.config import ClinicConfig
from clinicflow.core.layout import AGENT_SPEED, ENTRY_POSITIONS, EXIT_POSITIONS, STATION_POSITIONS, Point
from clinicflow.core.routing import STAGE_STATIONS, first_stage, leg_for, next_stage
from clinicflow.core.station import TickStation
from clinicflow.core.types import AgentState, ClinicType, PatientClass, Stage, StationId, StationKind
from clinicflow.distributions.service_time import service_time_model
from clinicflow.distributions.variates import VariateGenerator
from clinicflow.engine.arrivals import JointArrivalProcess
from clinicflow.instrumentation.history import HISTORY_INTERVAL, HistoryPoint, history_frame
from clinicflow.instrumentation.snapshot import AgentView, RealtimeSnapshot, RealtimeStats, RoomView

logger = logging.getLogger(__name__)

_WAITING_AREAS = (
    StationId.STD_CHECKIN_WAIT,
    StationId.STD_MAIN_WAIT,
    StationId.AI_WAITING,
    StationId.AI_POST_TRIAGE_WAIT,
)


@dataclass
class Agent:
    """A patient walking through the realtime floor plan."""

    id: int
    patient_class: PatientClass
    arrival_time: float
    position: Point
    target_position: Point
    state: AgentState = AgentState.MOVING
    stage: Stage = Stage.ENTRY
    queued_at: StationId | None = None
    current_station: StationId | None = None
    processing_since: float = 0.0
    processing_duration: float = 0.0
    wait_time: float = 0.0
    service_time: float = 0.0
    exit_time: float | None = None

    @property
    def clinic(self) -> ClinicType:
        return self.patient_class.clinic

    def view(self) -> AgentView:
        return AgentView(
            id=self.id,
            patient_class=self.patient_class.value,
            state=self.state.value,
            position=self.position,
            target_position=self.target_position,
            current_station_id=self.current_station.value if self.current_station else None,
            arrival_time=self.arrival_time,
            wait_time=self.wait_time,
            service_time=self.service_time,
        )


def _service_capacities(config: ClinicConfig) -> dict[StationId, int]:
    return {
        StationId.STD_RECEPTION: config.num_std_receptionists,
        StationId.STD_DOCTOR: config.num_std_doctors,
        StationId.AI_KIOSK: config.num_kiosks,
        StationId.AI_TRIAGE: config.num_nurses,
        StationId.AI_DOCTOR: config.num_ai_doctors,
    }


class RealtimeEngine:
    """Frame-driven simulation of both clinics on a shared floor plan.

    The engine owns its agents and stations outright; ``snapshot()`` is the
    only way state leaves it, as a frozen copy.

    Args:
        config: Staffing and timing for the run.
        variates: Random source. Built from ``seed`` when omitted.
        seed: Seed for a fresh VariateGenerator.
    """

    def __init__(
        self,
        config: ClinicConfig,
        variates: VariateGenerator | None = None,
        seed: int | None = None,
    ):
        self.config = config
        self._variates = variates if variates is not None else VariateGenerator(seed=seed)

        services = service_time_model(config)
        stage_for_station = {station: stage for stage, station in STAGE_STATIONS.items()}
        capacities = _service_capacities(config)

        self._stations: dict[StationId, TickStation] = {}
        for station_id in StationId:
            if station_id in _WAITING_AREAS:
                self._stations[station_id] = TickStation(station_id, StationKind.QUEUE)
            else:
                self._stations[station_id] = TickStation(
                    station_id,
                    StationKind.SERVICE,
                    capacity=capacities[station_id],
                    service_time=services[stage_for_station[station_id]],
                )

        self._arrivals = JointArrivalProcess(config, self._variates)
        self._time = 0.0
        self._agents: list[Agent] = []
        self._next_id = 1

        self._arrived = {ClinicType.STANDARD: 0, ClinicType.AI: 0}
        self._finished = {ClinicType.STANDARD: 0, ClinicType.AI: 0}
        self._doctor_busy_time = {ClinicType.STANDARD: 0.0, ClinicType.AI: 0.0}

        self._history: list[HistoryPoint] = [HistoryPoint(time=0)]
        self._last_history_capture = 0.0

        logger.info(
            "RealtimeEngine created: duration=%.1f min, mean interval=%.2f min",
            config.duration_minutes, config.avg_arrival_interval,
        )

    # --- Read accessors ---

    @property
    def time(self) -> float:
        return self._time

    @property
    def is_finished(self) -> bool:
        """True once the clock has reached the configured duration."""
        return self._time >= self.config.duration_minutes

    @property
    def active_patients(self) -> int:
        return len(self._agents)

    def snapshot(self) -> RealtimeSnapshot:
        """Frozen copy of the current state for rendering or retention."""
        return RealtimeSnapshot(
            time=self._time,
            patients=tuple(agent.view() for agent in self._agents),
            rooms=tuple(self._room_view(station) for station in self._stations.values()),
            history=tuple(self._history),
            stats=self._stats(),
        )

    def history_frame(self) -> pd.DataFrame:
        return history_frame(self._history)

    # --- Driving ---

    def update(self, dt: float) -> None:
        """Advance the simulation by ``dt`` simulated minutes.

        Raises:
            ValueError: If dt is negative or not finite.
        """
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be a finite number >= 0, got {dt}")

        self._time += dt

        for arrival in self._arrivals.due(self._time):
            self._spawn(PatientClass.STANDARD, arrival.time)
            self._spawn(arrival.ai_class, arrival.time)

        for agent in list(self._agents):
            self._update_agent(agent, dt)

        still_active: list[Agent] = []
        for agent in self._agents:
            if agent.state is AgentState.COMPLETED:
                agent.exit_time = self._time
                self._finished[agent.clinic] += 1
                logger.debug(
                    "Patient %d (%s) left at t=%.2f", agent.id, agent.patient_class.value, self._time,
                    extra={"sim_time": self._time},
                )
            else:
                still_active.append(agent)
        self._agents = still_active

        for clinic, station_id in ((ClinicType.STANDARD, StationId.STD_DOCTOR), (ClinicType.AI, StationId.AI_DOCTOR)):
            doctor = self._stations[station_id]
            if doctor.busy > 0:
                self._doctor_busy_time[clinic] += dt * doctor.busy / doctor.capacity

        if self._time - self._last_history_capture >= HISTORY_INTERVAL:
            self._capture_history()
            self._last_history_capture = self._time

    def run(self, dt: float = 1.0, until: float | None = None) -> RealtimeSnapshot:
        """Drive the engine headless with a fixed tick.

        Args:
            dt: Tick length in simulated minutes.
            until: Stop time; defaults to the configured duration.

        Returns:
            Snapshot taken after the final tick.
        """
        if not dt > 0:
            raise ValueError(f"dt must be > 0, got {dt}")
        end = self.config.duration_minutes if until is None else until
        while self._time < end:
            self.update(min(dt, end - self._time))
        logger.info(
            "Realtime run reached t=%.1f: %d standard and %d AI patients finished",
            self._time, self._finished[ClinicType.STANDARD], self._finished[ClinicType.AI],
        )
        return self.snapshot()

    # --- Internals ---

    def _station(self, station_id: StationId | None) -> TickStation:
        try:
            return self._stations[station_id]
        except KeyError:
            logger.error("Unknown station %r", station_id)
            raise

    def _spawn(self, patient_class: PatientClass, arrival_time: float) -> None:
        clinic = patient_class.clinic
        start = ENTRY_POSITIONS[clinic]
        agent = Agent(
            id=self._next_id,
            patient_class=patient_class,
            arrival_time=arrival_time,
            position=start,
            target_position=start,
        )
        self._next_id += 1
        self._arrived[clinic] += 1
        self._agents.append(agent)
        self._route_to(agent, first_stage(patient_class))
        logger.debug(
            "Spawned patient %d (%s) at t=%.3f", agent.id, patient_class.value, arrival_time,
            extra={"sim_time": arrival_time},
        )

    def _route_to(self, agent: Agent, stage: Stage) -> None:
        """Send ``agent`` towards ``stage``: join its queue and walk to the waiting area."""
        agent.stage = stage
        agent.current_station = None
        agent.state = AgentState.MOVING

        if stage is Stage.EXIT:
            agent.queued_at = None
            agent.target_position = EXIT_POSITIONS[agent.clinic]
            return

        leg = leg_for(agent.patient_class, stage)
        self._station(leg.station).enqueue(agent.id)
        agent.queued_at = leg.station
        agent.target_position = STATION_POSITIONS[leg.approach]

    def _update_agent(self, agent: Agent, dt: float) -> None:
        if agent.state is AgentState.MOVING:
            self._move(agent, dt)

        elif agent.state is AgentState.WAITING:
            agent.wait_time += dt
            station = self._station(agent.queued_at)
            duration = station.try_admit(agent.id, self._variates)
            if duration is not None:
                agent.state = AgentState.PROCESSING
                agent.current_station = station.station_id
                agent.queued_at = None
                agent.position = STATION_POSITIONS[station.station_id]
                agent.processing_since = self._time
                agent.processing_duration = duration

        elif agent.state is AgentState.PROCESSING:
            if self._time >= agent.processing_since + agent.processing_duration:
                self._station(agent.current_station).release(agent.id)
                agent.service_time += agent.processing_duration
                self._route_to(agent, next_stage(agent.patient_class, agent.stage))

    def _move(self, agent: Agent, dt: float) -> None:
        reach = AGENT_SPEED * dt
        if agent.position.distance_to(agent.target_position) <= reach:
            agent.position = agent.target_position
            agent.state = AgentState.COMPLETED if agent.stage is Stage.EXIT else AgentState.WAITING
        else:
            agent.position = agent.position.step_towards(agent.target_position, reach)

    def _capture_history(self) -> None:
        s = self._stations
        self._history.append(
            HistoryPoint(
                time=math.floor(self._time),
                std_doctor_total=s[StationId.STD_DOCTOR].handled,
                ai_doctor_total=s[StationId.AI_DOCTOR].handled,
                std_intake_total=s[StationId.STD_RECEPTION].handled,
                ai_intake_total=s[StationId.AI_TRIAGE].handled,
            )
        )

    def _utilization_percent(self, clinic: ClinicType) -> float:
        if self._time <= 0:
            return 0.0
        return min(100.0, self._doctor_busy_time[clinic] / self._time * 100.0)

    def _stats(self) -> RealtimeStats:
        s = self._stations
        return RealtimeStats(
            std_arrived=self._arrived[ClinicType.STANDARD],
            ai_arrived=self._arrived[ClinicType.AI],
            std_finished=self._finished[ClinicType.STANDARD],
            ai_finished=self._finished[ClinicType.AI],
            std_reception_handled=s[StationId.STD_RECEPTION].handled,
            std_doctor_handled=s[StationId.STD_DOCTOR].handled,
            ai_kiosk_handled=s[StationId.AI_KIOSK].handled,
            ai_triage_handled=s[StationId.AI_TRIAGE].handled,
            ai_doctor_handled=s[StationId.AI_DOCTOR].handled,
            std_doctor_busy_time=self._doctor_busy_time[ClinicType.STANDARD],
            ai_doctor_busy_time=self._doctor_busy_time[ClinicType.AI],
            std_doctor_utilization_percent=self._utilization_percent(ClinicType.STANDARD),
            ai_doctor_utilization_percent=self._utilization_percent(ClinicType.AI),
        )

    @staticmethod
    def _room_view(station: TickStation) -> RoomView:
        return RoomView(
            id=station.station_id.value,
            name=station.name,
            kind=station.kind.value,
            capacity=station.capacity,
            staff_count=station.capacity,
            staff_busy=station.busy,
            queue=station.queue,
            occupants=station.occupants,
            handled=station.handled,
            position=STATION_POSITIONS[station.station_id],
        )
