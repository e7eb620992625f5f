# tests/test_classification.py
from __future__ import annotations

import math

import pytest

from core.body_composition import Gender
from core.classification import bmi, bmi_category, body_fat_category
from core.errors import MissingRequiredFieldError


def test_bmi_value():
    assert math.isclose(bmi(80, 180), 80 / 1.8**2, rel_tol=1e-12)


def test_bmi_rejects_zero_height():
    with pytest.raises(MissingRequiredFieldError):
        bmi(80, 0)


@pytest.mark.parametrize(
    "value,label",
    [(17.0, "underweight"), (18.5, "normal"), (24.9, "normal"),
     (25.0, "overweight"), (29.99, "overweight"), (30.0, "obese")],
)
def test_bmi_bands(value, label):
    assert bmi_category(value) == label


@pytest.mark.parametrize(
    "percent,gender,label",
    [
        (5.0, Gender.male, "essential"),
        (6.0, Gender.male, "athletic"),
        (16.1, Gender.male, "fitness"),
        (20.0, "male", "acceptable"),
        (25.0, Gender.male, "high"),
        (13.9, Gender.female, "essential"),
        (22.0, "female", "fitness"),
        (31.0, Gender.female, "acceptable"),
        (40.0, Gender.female, "high"),
    ],
)
def test_body_fat_bands(percent, gender, label):
    assert body_fat_category(percent, gender) == label
