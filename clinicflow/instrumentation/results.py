"""Per-clinic results produced by the batch engine.

SimulationResult pairs the standard and AI clinic outcomes of one run. Each
ClinicResult carries the aggregate KPIs the comparison dashboard shows, the
per-station utilization table and the completed patient records.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pandas as pd

from clinicflow.core.types import ClinicType, PatientClass

if TYPE_CHECKING:
    from clinicflow.core.station import BatchStation


@dataclass
class PatientRecord:
    """Visit bookkeeping for one patient in the batch engine."""

    id: int
    patient_class: PatientClass
    arrival_time: float
    exit_time: float | None = None
    wait_time: float = 0.0
    service_time: float = 0.0

    @property
    def clinic(self) -> ClinicType:
        return self.patient_class.clinic

    @property
    def used_kiosk(self) -> bool:
        return self.patient_class is PatientClass.AI_WALK_IN

    @property
    def completed(self) -> bool:
        return self.exit_time is not None

    @property
    def length_of_stay(self) -> float | None:
        if self.exit_time is None:
            return None
        return self.exit_time - self.arrival_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "clinic": self.clinic.value,
            "patient_class": self.patient_class.value,
            "arrival_time": self.arrival_time,
            "exit_time": self.exit_time,
            "wait_time": self.wait_time,
            "service_time": self.service_time,
            "length_of_stay": self.length_of_stay,
            "used_kiosk": self.used_kiosk,
        }


@dataclass(frozen=True)
class StationUtilization:
    """Utilization of one station, averaged over all of its units."""

    name: str
    station_id: str
    capacity: int
    utilization_percent: float
    handled: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "station_id": self.station_id,
            "capacity": self.capacity,
            "utilization_percent": self.utilization_percent,
            "handled": self.handled,
        }


@dataclass
class ClinicResult:
    """Aggregate outcome for one clinic.

    Averages are taken over completed patients only and are 0.0 when nobody
    completed. Utilization percentages are capped at 100.
    """

    name: str
    clinic: ClinicType
    total_patients: int
    throughput: int
    avg_length_of_stay: float
    avg_wait_time: float
    avg_service_time: float
    doctor_utilization_percent: float
    station_utilization: list[StationUtilization] = field(default_factory=list)
    patients: list[PatientRecord] = field(default_factory=list)

    def station(self, name: str) -> StationUtilization:
        """Look up a station entry by display name or station id."""
        for entry in self.station_utilization:
            if entry.name == name or entry.station_id == name:
                return entry
        raise KeyError(f"{self.name} has no station {name!r}")

    def count(self, patient_class: PatientClass) -> int:
        return sum(1 for p in self.patients if p.patient_class is patient_class)

    def class_summary(self) -> pd.DataFrame:
        """Completed patients broken down by the path they took.

        One row per class this clinic serves, indexed by class name, with the
        count and the mean length of stay, wait and service. In the AI clinic
        this compares kiosk walk-ins against app check-ins. A class with no
        completed patients has a count of 0 and zero averages.
        """
        rows = []
        for patient_class in PatientClass:
            if patient_class.clinic is not self.clinic:
                continue
            group = [p for p in self.patients if p.patient_class is patient_class]
            rows.append({
                "patient_class": patient_class.value,
                "count": len(group),
                "avg_length_of_stay": _mean([p.length_of_stay for p in group]),
                "avg_wait_time": _mean([p.wait_time for p in group]),
                "avg_service_time": _mean([p.service_time for p in group]),
            })
        return pd.DataFrame(rows).set_index("patient_class")

    def to_dict(self, include_patients: bool = False) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "clinic": self.clinic.value,
            "total_patients": self.total_patients,
            "throughput": self.throughput,
            "avg_length_of_stay": self.avg_length_of_stay,
            "avg_wait_time": self.avg_wait_time,
            "avg_service_time": self.avg_service_time,
            "doctor_utilization_percent": self.doctor_utilization_percent,
            "station_utilization": [s.to_dict() for s in self.station_utilization],
        }
        if include_patients:
            result["patients"] = [p.to_dict() for p in self.patients]
        return result

    def patients_frame(self) -> pd.DataFrame:
        """Completed patient records, one row each."""
        columns = [
            "id", "clinic", "patient_class", "arrival_time", "exit_time",
            "wait_time", "service_time", "length_of_stay", "used_kiosk",
        ]
        return pd.DataFrame([p.to_dict() for p in self.patients], columns=columns)


@dataclass
class SimulationResult:
    """Both clinics' results from one batch run."""

    standard: ClinicResult
    ai: ClinicResult
    duration_minutes: float

    @property
    def clinics(self) -> tuple[ClinicResult, ClinicResult]:
        return (self.standard, self.ai)

    def __str__(self) -> str:
        lines = [f"Clinic comparison over {self.duration_minutes:.0f} min"]
        for clinic in self.clinics:
            lines.append(
                f"  {clinic.name}: throughput={clinic.throughput}/{clinic.total_patients}"
                f" | LoS={clinic.avg_length_of_stay:.1f}"
                f" | wait={clinic.avg_wait_time:.1f}"
                f" | service={clinic.avg_service_time:.1f}"
                f" | doctor util={clinic.doctor_utilization_percent:.1f}%"
            )
            for station in clinic.station_utilization:
                lines.append(
                    f"    {station.name} (x{station.capacity}): {station.utilization_percent:.1f}%"
                    f", {station.handled} handled"
                )
            by_class = clinic.class_summary()
            if len(by_class) > 1:
                for patient_class, row in by_class.iterrows():
                    lines.append(
                        f"    {patient_class}: {int(row['count'])} completed"
                        f", LoS={row['avg_length_of_stay']:.1f}"
                    )
        return "\n".join(lines)

    def to_dict(self, include_patients: bool = False) -> dict[str, Any]:
        return {
            "duration_minutes": self.duration_minutes,
            "standard": self.standard.to_dict(include_patients),
            "ai": self.ai.to_dict(include_patients),
        }

    def summary_frame(self) -> pd.DataFrame:
        """One row of headline KPIs per clinic."""
        rows = []
        for clinic in self.clinics:
            row = clinic.to_dict()
            row.pop("station_utilization")
            rows.append(row)
        return pd.DataFrame(rows).set_index("clinic")


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def build_clinic_result(
    name: str,
    clinic: ClinicType,
    records: Iterable[PatientRecord],
    stations: Sequence[BatchStation],
    doctor: BatchStation,
    horizon: float,
) -> ClinicResult:
    """Aggregate patient records and station counters into a ClinicResult."""
    records = list(records)
    completed = [p for p in records if p.completed]

    return ClinicResult(
        name=name,
        clinic=clinic,
        total_patients=len(records),
        throughput=len(completed),
        avg_length_of_stay=_mean([p.length_of_stay for p in completed]),
        avg_wait_time=_mean([p.wait_time for p in completed]),
        avg_service_time=_mean([p.service_time for p in completed]),
        doctor_utilization_percent=doctor.utilization_percent(horizon),
        station_utilization=[
            StationUtilization(
                name=s.name,
                station_id=s.station_id.value,
                capacity=s.capacity,
                utilization_percent=s.utilization_percent(horizon),
                handled=s.handled,
            )
            for s in stations
        ],
        patients=completed,
    )
