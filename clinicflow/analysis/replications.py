"""Monte-Carlo replication of batch runs.

A single batch run is one sample of a noisy process. ``run_replications``
repeats the comparison with independent random streams spawned from one
seed, and ``compare_clinics`` reduces the per-run table to means and
standard errors per clinic.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from clinicflow.config import ClinicConfig
from clinicflow.distributions.variates import VariateGenerator
from clinicflow.engine.batch import BatchEngine

logger = logging.getLogger(__name__)

KPI_COLUMNS = [
    "total_patients",
    "throughput",
    "avg_length_of_stay",
    "avg_wait_time",
    "avg_service_time",
    "doctor_utilization_percent",
]


def run_replications(config: ClinicConfig, replications: int, seed: int | None = None) -> pd.DataFrame:
    """Run ``replications`` independent batch comparisons.

    Each replication draws from its own child of ``np.random.SeedSequence(seed)``,
    so the table is reproducible for a fixed seed.

    Returns:
        One row per (replication, clinic) with the headline KPIs.
    """
    if replications < 1:
        raise ValueError(f"replications must be >= 1, got {replications}")

    children = np.random.SeedSequence(seed).spawn(replications)
    rows = []
    for index, child in enumerate(children):
        variates = VariateGenerator(rng=np.random.default_rng(child))
        result = BatchEngine(config, variates=variates).run()
        for clinic in result.clinics:
            row = {"replication": index, "clinic": clinic.clinic.value}
            row.update({column: getattr(clinic, column) for column in KPI_COLUMNS})
            rows.append(row)

    logger.info("Completed %d replications", replications)
    return pd.DataFrame(rows, columns=["replication", "clinic", *KPI_COLUMNS])


def compare_clinics(frame: pd.DataFrame) -> pd.DataFrame:
    """Mean and standard error of each KPI, one row per clinic."""
    grouped = frame.groupby("clinic")[KPI_COLUMNS]
    means = grouped.mean().add_suffix("_mean")
    errors = grouped.sem(ddof=1).fillna(0.0).add_suffix("_sem")
    return pd.concat([means, errors], axis=1)
