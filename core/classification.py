"""
core/classification.py
────────────────────────────────────────────────────────────────────────
Display categories for BMI and body-fat percentage.
"""

from __future__ import annotations

from bisect import bisect_right

from core.body_composition import Gender, require_positive

# upper bounds (exclusive) of each band; the last label is open-ended
_BMI_BOUNDS = (18.5, 25.0, 30.0)
_BMI_LABELS = ("underweight", "normal", "overweight", "obese")

_BODY_FAT_BOUNDS = {
    Gender.male: (6.0, 14.0, 18.0, 25.0),
    Gender.female: (14.0, 21.0, 25.0, 32.0),
}
_BODY_FAT_LABELS = ("essential", "athletic", "fitness", "acceptable", "high")


def bmi(weight_kg: float, height_cm: float) -> float:
    height_m = require_positive("height_cm", height_cm) / 100
    return require_positive("weight_kg", weight_kg) / (height_m * height_m)


def bmi_category(value: float) -> str:
    return _BMI_LABELS[bisect_right(_BMI_BOUNDS, value)]


def body_fat_category(percent: float, gender: Gender | str) -> str:
    """ACE-style band for a body-fat percentage."""
    return _BODY_FAT_LABELS[bisect_right(_BODY_FAT_BOUNDS[Gender(gender)], percent)]
