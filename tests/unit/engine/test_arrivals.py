"""Tests for the joint arrival process."""

from __future__ import annotations

import pytest

from clinicflow.config import ClinicConfig
from clinicflow.core.types import PatientClass
from clinicflow.distributions.variates import VariateGenerator
from clinicflow.engine.arrivals import MIN_ARRIVAL_STEP, JointArrivalProcess


class TestDue:
    def test_first_arrival_at_time_zero(self, fixed_gap_variates):
        process = JointArrivalProcess(ClinicConfig(duration_minutes=60.0), fixed_gap_variates(5.0))

        arrivals = list(process.due(0.0))

        assert [a.time for a in arrivals] == [0.0]
        assert process.next_arrival == 5.0

    def test_repeated_poll_yields_nothing_new(self, fixed_gap_variates):
        process = JointArrivalProcess(ClinicConfig(duration_minutes=60.0), fixed_gap_variates(5.0))
        list(process.due(0.0))

        assert list(process.due(0.0)) == []
        assert process.generated == 1

    def test_long_poll_catches_up_every_instant(self, fixed_gap_variates):
        process = JointArrivalProcess(ClinicConfig(duration_minutes=60.0), fixed_gap_variates(5.0))

        arrivals = list(process.due(49.0))

        assert [a.time for a in arrivals] == [0.0, 5.0, 10.0, 15.0, 20.0, 25.0, 30.0, 35.0, 40.0, 45.0]

    def test_nothing_at_or_after_horizon(self, fixed_gap_variates):
        process = JointArrivalProcess(ClinicConfig(duration_minutes=60.0), fixed_gap_variates(5.0))

        arrivals = list(process.due(1_000.0))

        assert len(arrivals) == 12
        assert arrivals[-1].time == 55.0
        assert list(process.due(10_000.0)) == []

    def test_degenerate_gap_steps_forward(self, fixed_gap_variates):
        process = JointArrivalProcess(ClinicConfig(duration_minutes=60.0), fixed_gap_variates(0.0))

        times = [a.time for a in process.due(0.35)]

        assert times == pytest.approx([0.0, 0.1, 0.2, 0.3])
        assert process.next_arrival == pytest.approx(0.4)
        assert MIN_ARRIVAL_STEP == 0.1


class TestGenerate:
    def test_first_instant_is_one_gap_in(self, fixed_gap_variates):
        process = JointArrivalProcess(ClinicConfig(duration_minutes=60.0), fixed_gap_variates(5.0))

        arrivals = process.generate()

        assert [a.time for a in arrivals] == [5.0 * k for k in range(1, 12)]
        assert process.generated == 11

    def test_strictly_increasing(self):
        process = JointArrivalProcess(ClinicConfig(), VariateGenerator(seed=12))
        times = [a.time for a in process.generate()]
        assert all(later > earlier for earlier, later in zip(times, times[1:]))
        assert times[-1] < 480.0

    def test_mean_count_matches_rate(self):
        config = ClinicConfig(duration_minutes=60.0, avg_arrival_interval=5.0)
        gen = VariateGenerator(seed=21)
        counts = [len(JointArrivalProcess(config, gen).generate()) for _ in range(400)]
        assert sum(counts) / len(counts) == pytest.approx(12.0, abs=0.75)


class TestAiClass:
    @pytest.mark.parametrize("rate,expected", [
        (0.0, PatientClass.AI_WALK_IN),
        (1.0, PatientClass.AI_DIGITAL),
    ])
    def test_adoption_extremes(self, rate, expected):
        config = ClinicConfig(digital_adoption_rate=rate)
        arrivals = JointArrivalProcess(config, VariateGenerator(seed=3)).generate()
        assert arrivals
        assert all(a.ai_class is expected for a in arrivals)

    def test_mixed_adoption(self):
        config = ClinicConfig(duration_minutes=4_800.0, digital_adoption_rate=0.5)
        arrivals = JointArrivalProcess(config, VariateGenerator(seed=4)).generate()
        digital = sum(a.ai_class is PatientClass.AI_DIGITAL for a in arrivals)
        assert 0.4 < digital / len(arrivals) < 0.6
