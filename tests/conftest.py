"""
Shared pytest fixtures for clinicflow tests.
"""

import logging
from pathlib import Path

import pytest

from clinicflow.distributions.variates import VariateGenerator


class FixedGapVariates(VariateGenerator):
    """Seeded generator whose exponential draws are a constant gap.

    Arrival instants become 0, gap, 2·gap, ... so tests can count spawns
    exactly while service times stay random.
    """

    def __init__(self, gap: float, seed: int = 0):
        super().__init__(seed=seed)
        self.gap = gap

    def exponential(self, rate: float) -> float:
        return self.gap


class DeterministicVariates(FixedGapVariates):
    """Constant gaps, and every service time equal to its configured mean."""

    def triangular(self, low: float, mode: float, high: float) -> float:
        return mode

    def normal(self, mean: float, std_dev: float) -> float:
        return mean


@pytest.fixture
def fixed_gap_variates():
    """Factory for FixedGapVariates: ``fixed_gap_variates(gap, seed=0)``."""
    return FixedGapVariates


@pytest.fixture
def deterministic_variates():
    """Factory for DeterministicVariates: ``deterministic_variates(gap)``."""
    return DeterministicVariates


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Root test_output directory, created once per session. Files written
    here are kept after the run for inspection.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Per-test output directory: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_dir = test_output_root / module_name / request.node.name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture(autouse=True)
def reset_clinicflow_logging():
    """Give every test a clinicflow logger with only a NullHandler and no level."""

    def _reset():
        logger = logging.getLogger("clinicflow")
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()
