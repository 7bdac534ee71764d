"""Tests for per-stage service-time distributions."""

from __future__ import annotations

import pytest

from clinicflow.config import ClinicConfig
from clinicflow.core.types import Stage
from clinicflow.distributions.service_time import (
    NormalServiceTime,
    TriangularServiceTime,
    service_time_model,
)
from clinicflow.distributions.variates import MIN_DURATION, VariateGenerator


class TestTriangularServiceTime:
    def test_spread_is_half_the_mean(self):
        dist = TriangularServiceTime(10.0)
        assert (dist.low, dist.mode, dist.high) == (5.0, 10.0, 15.0)

    def test_tiny_mean_collapses_to_floor(self):
        dist = TriangularServiceTime(0.05)
        assert dist.low == MIN_DURATION
        assert dist.mode == MIN_DURATION
        assert dist.high == MIN_DURATION
        assert dist.sample(VariateGenerator(seed=1)) == MIN_DURATION

    def test_samples_within_bounds(self):
        dist = TriangularServiceTime(48.0)
        gen = VariateGenerator(seed=2)
        draws = [dist.sample(gen) for _ in range(1_000)]
        assert all(24.0 <= d <= 72.0 for d in draws)

    @pytest.mark.parametrize("mean", [0.0, -3.0])
    def test_rejects_non_positive_mean(self, mean):
        with pytest.raises(ValueError):
            TriangularServiceTime(mean)


class TestNormalServiceTime:
    def test_default_coefficient_of_variation(self):
        assert NormalServiceTime(5.0).std_dev == pytest.approx(1.0)

    def test_never_below_floor(self):
        dist = NormalServiceTime(0.2, cv=3.0)
        gen = VariateGenerator(seed=4)
        assert all(dist.sample(gen) >= MIN_DURATION for _ in range(500))

    def test_rejects_negative_cv(self):
        with pytest.raises(ValueError):
            NormalServiceTime(1.0, cv=-0.5)


class TestServiceTimeModel:
    def test_covers_every_service_stage(self):
        model = service_time_model(ClinicConfig())
        assert set(model) == {Stage.RECEPTION, Stage.STD_DOCTOR, Stage.KIOSK, Stage.TRIAGE, Stage.AI_DOCTOR}

    def test_triage_is_normal_and_the_rest_triangular(self):
        model = service_time_model(ClinicConfig())
        assert isinstance(model[Stage.TRIAGE], NormalServiceTime)
        for stage in (Stage.RECEPTION, Stage.STD_DOCTOR, Stage.KIOSK, Stage.AI_DOCTOR):
            assert isinstance(model[stage], TriangularServiceTime)

    def test_means_follow_config(self):
        config = ClinicConfig(std_reception_time_avg=7.0, ai_doctor_time_avg=9.0)
        model = service_time_model(config)
        assert model[Stage.RECEPTION].mean == 7.0
        assert model[Stage.AI_DOCTOR].mean == 9.0
        assert model[Stage.TRIAGE].mean == config.ai_triage_time_avg
