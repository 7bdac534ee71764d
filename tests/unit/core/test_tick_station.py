"""Tests for the realtime engine's TickStation."""

from __future__ import annotations

import pytest

from clinicflow.core.station import TickStation
from clinicflow.core.types import StationId, StationKind
from clinicflow.distributions.service_time import TriangularServiceTime
from clinicflow.distributions.variates import VariateGenerator


def make_station(capacity: int = 1) -> TickStation:
    return TickStation(
        StationId.STD_DOCTOR,
        StationKind.SERVICE,
        capacity=capacity,
        service_time=TriangularServiceTime(10.0),
    )


@pytest.fixture
def variates():
    return VariateGenerator(seed=0)


class TestConstruction:
    def test_service_station_needs_capacity(self):
        with pytest.raises(ValueError):
            TickStation(StationId.STD_DOCTOR, StationKind.SERVICE, capacity=0,
                        service_time=TriangularServiceTime(1.0))

    def test_service_station_needs_distribution(self):
        with pytest.raises(ValueError):
            TickStation(StationId.STD_DOCTOR, StationKind.SERVICE, capacity=1)

    def test_display_name(self):
        assert make_station().name == "Doctor Office"


class TestAdmission:
    def test_only_queue_head_is_admitted(self, variates):
        station = make_station()
        station.enqueue(1)
        station.enqueue(2)

        assert station.try_admit(2, variates) is None
        duration = station.try_admit(1, variates)

        assert duration is not None
        assert 5.0 <= duration <= 15.0
        assert station.busy == 1
        assert station.occupants == (1,)
        assert station.queue == (2,)

    def test_full_station_admits_nobody(self, variates):
        station = make_station(capacity=1)
        station.enqueue(1)
        station.enqueue(2)
        station.try_admit(1, variates)

        assert station.try_admit(2, variates) is None
        assert station.queue == (2,)

    def test_release_frees_a_unit(self, variates):
        station = make_station(capacity=1)
        station.enqueue(1)
        station.enqueue(2)
        station.try_admit(1, variates)

        station.release(1)

        assert station.busy == 0
        assert station.handled == 1
        assert station.try_admit(2, variates) is not None

    def test_parallel_units(self, variates):
        station = make_station(capacity=2)
        for pid in (1, 2, 3):
            station.enqueue(pid)

        assert station.try_admit(1, variates) is not None
        assert station.try_admit(2, variates) is not None
        assert station.try_admit(3, variates) is None
        assert station.busy == 2
        assert not station.has_capacity()

    def test_patient_not_queued_is_not_admitted(self, variates):
        station = make_station()
        assert station.try_admit(9, variates) is None
        assert station.busy == 0


class TestErrors:
    def test_release_of_non_occupant_raises(self, variates):
        station = make_station()
        station.enqueue(1)
        with pytest.raises(RuntimeError):
            station.release(1)

    def test_waiting_area_refuses_queueing(self):
        waiting_room = TickStation(StationId.STD_MAIN_WAIT, StationKind.QUEUE)
        with pytest.raises(RuntimeError):
            waiting_room.enqueue(1)

    def test_waiting_area_never_has_capacity(self):
        waiting_room = TickStation(StationId.AI_WAITING, StationKind.QUEUE)
        assert not waiting_room.has_capacity()
        assert waiting_room.busy == 0
