"""
core/progress.py
────────────────────────────────────────────────────────────────────────
Progress analytics over stored evaluation records.

Records are plain dicts shaped like rows of the `evaluations` table
(`student_id`, `evaluation_date`, `weight`, `body_fat_percentage`,
`lean_mass`). Loading them is the caller's job; this module only reads.

Nothing here invents numbers: a student with fewer than two evaluations
has no progress, and it is reported as `None`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Hashable, Iterable

import numpy as np
import pandas as pd

from config import settings

_LOG = logging.getLogger(__name__)

TRACKED = ["weight", "body_fat_percentage", "lean_mass"]
_COLUMNS = ["student_id", "evaluation_date", *TRACKED]


@dataclass(frozen=True)
class StudentProgress:
    student_id: Hashable
    evaluations: int
    first_date: date
    last_date: date
    weight_change: float | None
    body_fat_change: float | None
    lean_mass_change: float | None
    body_fat_trend_per_30d: float | None   # least-squares slope


@dataclass(frozen=True)
class TrainerStats:
    total_students: int
    total_evaluations: int
    progress_rate: int                 # % of students with > 1 evaluation
    due_for_evaluation: int
    due_student_ids: tuple[Hashable, ...]


def progress_frame(records: Iterable[dict[str, Any]]) -> pd.DataFrame:
    """Evaluation records as a date-sorted DataFrame."""
    df = pd.DataFrame(list(records), columns=_COLUMNS)
    # offset-aware timestamps become naive UTC so they compare with plain dates
    df["evaluation_date"] = pd.to_datetime(
        df["evaluation_date"], utc=True, format="ISO8601"
    ).dt.tz_localize(None)
    for col in TRACKED:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df.sort_values("evaluation_date", kind="mergesort").reset_index(drop=True)


def _delta(first: pd.Series, last: pd.Series, col: str) -> float | None:
    a, b = first[col], last[col]
    if pd.isna(a) or pd.isna(b):
        return None
    return float(b - a)


def _body_fat_trend(df: pd.DataFrame) -> float | None:
    bf = df.dropna(subset=["body_fat_percentage"])
    if len(bf) < 2:
        return None
    days = (bf["evaluation_date"] - bf["evaluation_date"].iloc[0]).dt.days.to_numpy(dtype=float)
    if np.ptp(days) == 0:
        return None
    slope = np.polyfit(days, bf["body_fat_percentage"].to_numpy(dtype=float), 1)[0]
    return float(slope * 30)


def student_progress(records: Iterable[dict[str, Any]], student_id: Hashable) -> StudentProgress | None:
    df = progress_frame(records)
    df = df[df["student_id"] == student_id]
    if len(df) < 2:
        _LOG.debug("student %s has %d evaluation(s); no progress", student_id, len(df))
        return None

    first, last = df.iloc[0], df.iloc[-1]
    return StudentProgress(
        student_id=student_id,
        evaluations=len(df),
        first_date=first["evaluation_date"].date(),
        last_date=last["evaluation_date"].date(),
        weight_change=_delta(first, last, "weight"),
        body_fat_change=_delta(first, last, "body_fat_percentage"),
        lean_mass_change=_delta(first, last, "lean_mass"),
        body_fat_trend_per_30d=_body_fat_trend(df),
    )


def trainer_stats(
    student_ids: Iterable[Hashable],
    records: Iterable[dict[str, Any]],
    today: date | None = None,
    interval_days: int | None = None,
) -> TrainerStats:
    """
    Headline numbers for a trainer's dashboard.

    A student is due for evaluation when none of their evaluations falls
    within the last `interval_days` (default `settings.evaluation_interval_days`).
    """
    ids = list(dict.fromkeys(student_ids))
    interval = settings.evaluation_interval_days if interval_days is None else interval_days
    today = today or date.today()

    df = progress_frame(records)
    df = df[df["student_id"].isin(ids)]

    counts = df.groupby("student_id").size()
    with_progress = int((counts > 1).sum())
    progress_rate = int(with_progress / len(ids) * 100 + 0.5) if ids else 0

    cutoff = pd.Timestamp(today) - pd.Timedelta(days=interval)
    recent = set(df.loc[df["evaluation_date"] >= cutoff, "student_id"])
    due = tuple(sid for sid in ids if sid not in recent)

    return TrainerStats(
        total_students=len(ids),
        total_evaluations=len(df),
        progress_rate=progress_rate,
        due_for_evaluation=len(due),
        due_student_ids=due,
    )
