"""Discrete-event batch engine for aggregate comparison statistics.

The full joint arrival stream is drawn first. The engine then repeatedly pops
the earliest event, moves the clock to it and hands it to the clinic's
handler. A handler looks up the patient's next stage, seizes that stage's
station and schedules SERVICE_COMPLETED at the finish time, or records the
exit when the next stage is EXIT. The run ends when no events remain, so
every patient who arrived before the horizon is served to completion.
"""

from __future__ import annotations

import copy
import logging
import time
from types import MappingProxyType

from clinicflow.config import ClinicConfig
from clinicflow.core.event_heap import EventHeap
from clinicflow.core.routing import next_stage
from clinicflow.core.station import BatchStation
from clinicflow.core.types import ClinicType, EventKind, PatientClass, Stage, StationId
from clinicflow.distributions.service_time import ServiceTimeDistribution, service_time_model
from clinicflow.distributions.variates import VariateGenerator
from clinicflow.engine.arrivals import JointArrivalProcess
from clinicflow.instrumentation.results import PatientRecord, SimulationResult, build_clinic_result

logger = logging.getLogger(__name__)

PatientKey = tuple[ClinicType, int]


class BatchEngine:
    """Runs both clinics to completion and summarises them.

    Each engine performs exactly one run.

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
        self._service_times: dict[Stage, ServiceTimeDistribution] = service_time_model(config)

        self._stations: dict[Stage, BatchStation] = {
            Stage.RECEPTION: BatchStation(StationId.STD_RECEPTION, config.num_std_receptionists),
            Stage.STD_DOCTOR: BatchStation(StationId.STD_DOCTOR, config.num_std_doctors),
            Stage.KIOSK: BatchStation(StationId.AI_KIOSK, config.num_kiosks),
            Stage.TRIAGE: BatchStation(StationId.AI_TRIAGE, config.num_nurses),
            Stage.AI_DOCTOR: BatchStation(StationId.AI_DOCTOR, config.num_ai_doctors),
        }

        self.current_time = 0.0
        self.events_processed = 0
        self._events = EventHeap()
        self._patients: dict[PatientKey, PatientRecord] = {}
        self._handlers = {
            ClinicType.STANDARD: self._handle_standard,
            ClinicType.AI: self._handle_ai,
        }
        self._has_run = False

    @property
    def patients(self) -> MappingProxyType[PatientKey, PatientRecord]:
        """Read-only view of copied patient records, keyed by (clinic, id)."""
        return MappingProxyType({key: copy.copy(record) for key, record in self._patients.items()})

    def station(self, stage: Stage) -> BatchStation:
        """Copy of the station serving ``stage``."""
        return copy.deepcopy(self._stations[stage])

    def run(self) -> SimulationResult:
        """Generate arrivals, drain the event list and compile results.

        Raises:
            RuntimeError: If this engine has already run.
        """
        if self._has_run:
            raise RuntimeError("BatchEngine.run() may only be called once; create a new engine")
        self._has_run = True

        wall_start = time.perf_counter()
        self._schedule_arrivals()

        while self._events.has_events():
            event = self._events.pop()
            self.current_time = event.time
            self.events_processed += 1
            self._handlers[event.clinic](event)

        result = self._compile()
        logger.info(
            "Batch run finished: %d events in %.3fs wall, standard throughput=%d, AI throughput=%d",
            self.events_processed,
            time.perf_counter() - wall_start,
            result.standard.throughput,
            result.ai.throughput,
        )
        return result

    def _schedule_arrivals(self) -> None:
        arrivals = JointArrivalProcess(self.config, self._variates).generate()
        for patient_id, arrival in enumerate(arrivals, start=1):
            for patient_class in (PatientClass.STANDARD, arrival.ai_class):
                clinic = patient_class.clinic
                self._patients[(clinic, patient_id)] = PatientRecord(
                    id=patient_id,
                    patient_class=patient_class,
                    arrival_time=arrival.time,
                )
                self._events.schedule_arrival(arrival.time, patient_id, clinic)
        logger.info("Scheduled %d joint arrivals over %.1f min", len(arrivals), self.config.duration_minutes)

    def _patient(self, clinic: ClinicType, patient_id: int) -> PatientRecord:
        try:
            return self._patients[(clinic, patient_id)]
        except KeyError:
            logger.error("Event for unknown patient %d in %s clinic", patient_id, clinic.value)
            raise

    def _handle_standard(self, event: SimEvent) -> None:
        self._advance(self._patient(ClinicType.STANDARD, event.patient_id), event)

    def _handle_ai(self, event: SimEvent) -> None:
        self._advance(self._patient(ClinicType.AI, event.patient_id), event)

    def _advance(self, patient: PatientRecord, event: SimEvent) -> None:
        """Move ``patient`` past the stage ``event`` closes."""
        completed = Stage.ENTRY if event.kind is EventKind.ARRIVAL else event.stage
        stage = next_stage(patient.patient_class, completed)

        if stage is Stage.EXIT:
            patient.exit_time = event.time
            logger.debug(
                "Patient %d (%s) exited at t=%.3f after LoS %.3f",
                patient.id, patient.patient_class.value, event.time, patient.length_of_stay,
                extra={"sim_time": event.time},
            )
            return

        duration = self._service_times[stage].sample(self._variates)
        seized = self._stations[stage].seize(event.time, duration)
        patient.wait_time += seized.wait
        patient.service_time += duration
        self._events.schedule_completion(seized.finish, patient.id, patient.clinic, stage)

    def _compile(self) -> SimulationResult:
        horizon = self.config.duration_minutes
        by_clinic: dict[ClinicType, list[PatientRecord]] = {ClinicType.STANDARD: [], ClinicType.AI: []}
        for (clinic, _), record in self._patients.items():
            by_clinic[clinic].append(record)

        s = self._stations
        standard = build_clinic_result(
            "Standard Clinic",
            ClinicType.STANDARD,
            by_clinic[ClinicType.STANDARD],
            [s[Stage.RECEPTION], s[Stage.STD_DOCTOR]],
            doctor=s[Stage.STD_DOCTOR],
            horizon=horizon,
        )
        ai = build_clinic_result(
            "AI-Enabled Clinic",
            ClinicType.AI,
            by_clinic[ClinicType.AI],
            [s[Stage.KIOSK], s[Stage.TRIAGE], s[Stage.AI_DOCTOR]],
            doctor=s[Stage.AI_DOCTOR],
            horizon=horizon,
        )

        if logger.isEnabledFor(logging.DEBUG):
            for clinic in (standard, ai):
                logger.debug(
                    "%s stations: %s",
                    clinic.name,
                    ", ".join(f"{s.name}={s.utilization_percent:.1f}%/{s.handled}" for s in clinic.station_utilization),
                )
        return SimulationResult(standard=standard, ai=ai, duration_minutes=horizon)


def run_simulation(config: ClinicConfig, seed: int | None = None) -> SimulationResult:
    """Run one batch comparison with a fresh engine."""
    return BatchEngine(config, seed=seed).run()
