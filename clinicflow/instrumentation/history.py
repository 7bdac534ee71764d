"""Sampled time series recorded by the realtime engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass

import pandas as pd

HISTORY_INTERVAL = 5.0
"""Minimum simulated minutes between two history points."""


@dataclass(frozen=True)
class HistoryPoint:
    """Cumulative per-station completions at one sampled instant.

    Attributes:
        time: Whole simulated minute of the sample.
        std_doctor_total: Patients the standard doctors have finished with.
        ai_doctor_total: Patients the AI-clinic doctors have finished with.
        std_intake_total: Patients through standard reception.
        ai_intake_total: Patients through AI-clinic triage.
    """

    time: int
    std_doctor_total: int = 0
    ai_doctor_total: int = 0
    std_intake_total: int = 0
    ai_intake_total: int = 0


def history_frame(points: Iterable[HistoryPoint]) -> pd.DataFrame:
    """History points as a DataFrame indexed by time."""
    columns = ["time", "std_doctor_total", "ai_doctor_total", "std_intake_total", "ai_intake_total"]
    frame = pd.DataFrame([asdict(p) for p in points], columns=columns)
    return frame.set_index("time")
