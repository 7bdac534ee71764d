"""Tests for the patient routing table."""

from __future__ import annotations

import pytest

from clinicflow.core.routing import NEXT_STAGE, ROUTES, STAGE_STATIONS, first_stage, leg_for, next_stage
from clinicflow.core.types import PatientClass, Stage, StationId


def walk(patient_class: PatientClass) -> list[Stage]:
    stages = [Stage.ENTRY]
    while stages[-1] is not Stage.EXIT:
        stages.append(next_stage(patient_class, stages[-1]))
    return stages


class TestRoutes:
    def test_standard_route(self):
        assert walk(PatientClass.STANDARD) == [Stage.ENTRY, Stage.RECEPTION, Stage.STD_DOCTOR, Stage.EXIT]

    def test_walk_in_route(self):
        assert walk(PatientClass.AI_WALK_IN) == [
            Stage.ENTRY, Stage.KIOSK, Stage.TRIAGE, Stage.AI_DOCTOR, Stage.EXIT,
        ]

    def test_digital_patients_skip_the_kiosk(self):
        route = walk(PatientClass.AI_DIGITAL)
        assert route == [Stage.ENTRY, Stage.TRIAGE, Stage.AI_DOCTOR, Stage.EXIT]
        assert Stage.KIOSK not in route

    def test_every_class_has_a_route(self):
        assert set(ROUTES) == set(PatientClass)
        for patient_class in PatientClass:
            assert (patient_class, Stage.ENTRY) in NEXT_STAGE

    def test_first_stage(self):
        assert first_stage(PatientClass.STANDARD) is Stage.RECEPTION
        assert first_stage(PatientClass.AI_DIGITAL) is Stage.TRIAGE


class TestLegs:
    def test_stage_stations(self):
        assert STAGE_STATIONS == {
            Stage.RECEPTION: StationId.STD_RECEPTION,
            Stage.STD_DOCTOR: StationId.STD_DOCTOR,
            Stage.KIOSK: StationId.AI_KIOSK,
            Stage.TRIAGE: StationId.AI_TRIAGE,
            Stage.AI_DOCTOR: StationId.AI_DOCTOR,
        }

    def test_approach_uses_waiting_area(self):
        leg = leg_for(PatientClass.STANDARD, Stage.STD_DOCTOR)
        assert leg.station is StationId.STD_DOCTOR
        assert leg.approach is StationId.STD_MAIN_WAIT

    def test_kiosk_is_approached_directly(self):
        leg = leg_for(PatientClass.AI_WALK_IN, Stage.KIOSK)
        assert leg.waiting_area is None
        assert leg.approach is StationId.AI_KIOSK


class TestLookupErrors:
    def test_exit_has_no_successor(self):
        with pytest.raises(KeyError):
            next_stage(PatientClass.STANDARD, Stage.EXIT)

    def test_stage_off_route(self):
        with pytest.raises(KeyError):
            next_stage(PatientClass.AI_DIGITAL, Stage.KIOSK)
        with pytest.raises(KeyError):
            leg_for(PatientClass.STANDARD, Stage.TRIAGE)
