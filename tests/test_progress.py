# tests/test_progress.py
# Progress analytics over in-memory evaluation rows (no DB).
from datetime import date

import pytest

from core.progress import progress_frame, student_progress, trainer_stats

# --- evaluation log for three students ----------------------------------
RECORDS = [
    {"student_id": "ana", "evaluation_date": "2026-07-01", "weight": 70.0, "body_fat_percentage": 28.0, "lean_mass": 50.4},
    {"student_id": "ana", "evaluation_date": "2026-09-29", "weight": 67.0, "body_fat_percentage": 25.0, "lean_mass": 50.25},
    {"student_id": "ana", "evaluation_date": "2026-08-15", "weight": 68.5, "body_fat_percentage": 26.5, "lean_mass": 50.35},
    {"student_id": "bruno", "evaluation_date": "2026-10-10", "weight": 90.0, "body_fat_percentage": 22.0, "lean_mass": 70.2},
    {"student_id": "carla", "evaluation_date": "2026-05-02", "weight": 55.0, "body_fat_percentage": None, "lean_mass": None},
    {"student_id": "carla", "evaluation_date": "2026-06-02", "weight": 56.0, "body_fat_percentage": 24.0, "lean_mass": 42.5},
]


def test_frame_is_sorted_by_date():
    df = progress_frame(RECORDS)
    assert list(df["evaluation_date"]) == sorted(df["evaluation_date"])
    assert len(df) == len(RECORDS)


def test_frame_empty():
    assert progress_frame([]).empty


def test_student_progress_deltas():
    p = student_progress(RECORDS, "ana")
    assert p is not None
    assert p.evaluations == 3
    assert p.first_date == date(2026, 7, 1)
    assert p.last_date == date(2026, 9, 29)
    assert p.weight_change == pytest.approx(-3.0)
    assert p.body_fat_change == pytest.approx(-3.0)
    assert p.lean_mass_change == pytest.approx(-0.15)
    # 3 points on a straight line: -3 % over 90 days
    assert p.body_fat_trend_per_30d == pytest.approx(-1.0)


def test_single_evaluation_has_no_progress():
    assert student_progress(RECORDS, "bruno") is None
    assert student_progress(RECORDS, "nobody") is None


def test_missing_values_give_none():
    p = student_progress(RECORDS, "carla")
    assert p is not None
    assert p.weight_change == pytest.approx(1.0)
    assert p.body_fat_change is None
    assert p.body_fat_trend_per_30d is None


def test_trainer_stats():
    stats = trainer_stats(["ana", "bruno", "carla", "diego"], RECORDS, today=date(2026, 10, 19))
    assert stats.total_students == 4
    assert stats.total_evaluations == 6
    # ana and carla have more than one evaluation
    assert stats.progress_rate == 50
    # ana (09-29) and bruno (10-10) were evaluated within 30 days
    assert stats.due_for_evaluation == 2
    assert stats.due_student_ids == ("carla", "diego")


def test_trainer_stats_ignores_other_trainers_students():
    stats = trainer_stats(["bruno"], RECORDS, today=date(2026, 10, 19), interval_days=5)
    assert stats.total_evaluations == 1
    assert stats.progress_rate == 0
    assert stats.due_student_ids == ("bruno",)


def test_trainer_stats_without_students():
    stats = trainer_stats([], RECORDS, today=date(2026, 10, 19))
    assert stats.total_students == 0
    assert stats.progress_rate == 0
    assert stats.due_for_evaluation == 0


def test_offset_aware_timestamps():
    rows = [
        {"student_id": "ana", "evaluation_date": "2026-10-01T10:00:00+00:00", "weight": 67.0,
         "body_fat_percentage": 25.0, "lean_mass": 50.25},
        {"student_id": "ana", "evaluation_date": "2026-08-01T09:00:00-03:00", "weight": 68.0,
         "body_fat_percentage": 26.0, "lean_mass": 50.3},
        {"student_id": "bruno", "evaluation_date": "2026-07-01", "weight": 90.0,
         "body_fat_percentage": 22.0, "lean_mass": 70.2},
    ]
    stats = trainer_stats(["ana", "bruno"], rows, today=date(2026, 10, 19))
    assert stats.due_student_ids == ("bruno",)
    p = student_progress(rows, "ana")
    assert p.first_date == date(2026, 8, 1)
    assert p.weight_change == pytest.approx(-1.0)
