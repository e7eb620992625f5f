"""
core/body_composition.py
────────────────────────────────────────────────────────────────────────
Body-composition estimator used when a trainer records an evaluation.

1. Body fat  – U.S. Navy circumference method
2. Body fat  – Jackson & Pollock 7-fold / 3-fold density + Siri
3. Fat mass, lean mass, BMR (Harris-Benedict) and daily kcal, shared
   by both protocols through `derive_metrics`

Every function is pure; nothing here touches I/O or keeps state.
"""

from __future__ import annotations

import logging
import math
import numbers
import warnings
from dataclasses import dataclass
from enum import Enum

from config import settings
from core.errors import (
    InvalidMeasurementError,
    MissingRequiredFieldError,
    OutOfRangeWarning,
)

Logger = logging.getLogger(__name__)

BODY_FAT_MIN = 0.0
BODY_FAT_MAX = 50.0
ACTIVITY_MULTIPLIER = 1.55  # moderate activity, fixed


# ──────────────────────────────────────────────────────────────────────
#  Input / output dataclasses
# ──────────────────────────────────────────────────────────────────────
class Gender(str, Enum):
    male = "male"
    female = "female"


class SkinfoldProtocol(str, Enum):
    seven_fold = "seven_fold"
    three_fold = "three_fold"


SEVEN_FOLD_SITES = (
    "triceps", "subscapular", "chest", "axillary",
    "abdominal", "suprailiac", "thigh",
)
THREE_FOLD_SITES = ("triceps", "subscapular", "thigh")


@dataclass(frozen=True)
class Subject:
    age: int
    gender: Gender
    height_cm: float

    def __post_init__(self) -> None:
        if isinstance(self.age, bool) or not isinstance(self.age, numbers.Integral) or self.age <= 0:
            raise MissingRequiredFieldError("age", "must be a positive integer")
        object.__setattr__(self, "age", int(self.age))
        try:
            gender = Gender(self.gender)
        except ValueError:
            raise MissingRequiredFieldError(
                "gender", f"expected 'male' or 'female', got {self.gender!r}"
            ) from None
        object.__setattr__(self, "gender", gender)
        object.__setattr__(self, "height_cm", require_positive("height_cm", self.height_cm))


@dataclass(frozen=True)
class CircumferenceMeasurement:
    weight_kg: float
    waist_cm: float
    neck_cm: float
    hip_cm: float | None = None   # required for female subjects only


@dataclass(frozen=True)
class SkinfoldMeasurement:
    weight_kg: float
    triceps: float
    subscapular: float
    thigh: float
    chest: float | None = None
    axillary: float | None = None
    abdominal: float | None = None
    suprailiac: float | None = None
    variant: str = "jackson-pollock"   # label only, never changes the formula


@dataclass(frozen=True)
class DerivedMetrics:
    body_fat_percent: float
    fat_mass_kg: float
    lean_mass_kg: float
    bmr_kcal: float
    daily_calories_kcal: float
    raw_body_fat_percent: float   # before clamping, for diagnostics

    @property
    def clamped(self) -> bool:
        return self.raw_body_fat_percent != self.body_fat_percent

    def as_record(self) -> dict[str, float]:
        """Columns of the stored evaluation row."""
        return {
            "body_fat_percentage": self.body_fat_percent,
            "fat_weight": self.fat_mass_kg,
            "lean_mass": self.lean_mass_kg,
            "bmr": self.bmr_kcal,
            "daily_calories": self.daily_calories_kcal,
        }


# ──────────────────────────────────────────────────────────────────────
#  Validation helpers
# ──────────────────────────────────────────────────────────────────────
def require_positive(field: str, value: object) -> float:
    if value is None:
        raise MissingRequiredFieldError(field, "value is required")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MissingRequiredFieldError(field, f"not a number: {value!r}")
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        raise MissingRequiredFieldError(field, f"must be > 0, got {value!r}")
    return number


def _log10(field: str, argument: float) -> float:
    if argument <= 0:
        raise InvalidMeasurementError(
            field, f"logarithm argument must be > 0, got {argument:g}"
        )
    return math.log10(argument)


# ──────────────────────────────────────────────────────────────────────
#  Formulas
# ──────────────────────────────────────────────────────────────────────
def navy_body_fat(subject: Subject, waist_cm: float, neck_cm: float,
                  hip_cm: float | None = None) -> float:
    """Unclamped U.S. Navy body-fat percentage (all lengths in cm)."""
    log_height = _log10("height_cm", subject.height_cm)
    if subject.gender is Gender.male:
        log_girth = _log10("waist_cm - neck_cm", waist_cm - neck_cm)
        denominator = 1.0324 - 0.19077 * log_girth + 0.15456 * log_height
    else:
        if hip_cm is None:
            raise MissingRequiredFieldError("hip_cm", "required for female subjects")
        log_girth = _log10("waist_cm + hip_cm - neck_cm", waist_cm + hip_cm - neck_cm)
        denominator = 1.29579 - 0.35004 * log_girth + 0.22100 * log_height
    if denominator <= 0:
        raise InvalidMeasurementError("circumferences", "girths too large for the Navy equation")
    return 495 / denominator - 450


def jackson_pollock_density(subject: Subject, fold_sum: float,
                            protocol: SkinfoldProtocol) -> float:
    male = subject.gender is Gender.male
    age = subject.age
    s = fold_sum
    if protocol is SkinfoldProtocol.seven_fold:
        if male:
            return 1.112 - 0.00043499 * s + 0.00000055 * s * s - 0.00028826 * age
        return 1.097 - 0.00046971 * s + 0.00000056 * s * s - 0.00012828 * age
    if male:
        return 1.10938 - 0.0008267 * s + 0.0000016 * s * s - 0.0002574 * age
    return 1.0994921 - 0.0009929 * s + 0.0000023 * s * s - 0.0001392 * age


def siri_body_fat(body_density: float) -> float:
    if body_density <= 0:
        raise InvalidMeasurementError(
            "body_density", f"must be > 0, got {body_density:g}"
        )
    return (4.95 / body_density - 4.5) * 100


def harris_benedict_bmr(subject: Subject, weight_kg: float) -> float:
    """Revised Harris-Benedict BMR in kcal/day."""
    if subject.gender is Gender.male:
        return 88.362 + 13.397 * weight_kg + 4.799 * subject.height_cm - 5.677 * subject.age
    return 447.593 + 9.247 * weight_kg + 3.098 * subject.height_cm - 4.330 * subject.age


# ──────────────────────────────────────────────────────────────────────
#  Shared derivation
# ──────────────────────────────────────────────────────────────────────
def derive_metrics(subject: Subject, weight_kg: float,
                   raw_body_fat_percent: float) -> DerivedMetrics:
    """
    Clamp a body-fat estimate and derive masses, BMR and daily kcal.

    Both protocols end here so the downstream numbers cannot drift
    between call paths.
    """
    weight = require_positive("weight_kg", weight_kg)
    if math.isnan(raw_body_fat_percent):
        raise InvalidMeasurementError("body_fat_percent", "estimate is NaN")

    percent = min(max(raw_body_fat_percent, BODY_FAT_MIN), BODY_FAT_MAX)
    if percent != raw_body_fat_percent:
        Logger.warning(
            "Body fat %.2f%% outside [%g, %g], clamped to %g%%",
            raw_body_fat_percent, BODY_FAT_MIN, BODY_FAT_MAX, percent,
        )
        if settings.warn_on_clamp:
            warnings.warn(OutOfRangeWarning(raw_body_fat_percent, percent), stacklevel=3)

    fat_mass = percent / 100 * weight
    bmr = harris_benedict_bmr(subject, weight)
    return DerivedMetrics(
        body_fat_percent=percent,
        fat_mass_kg=fat_mass,
        lean_mass_kg=weight - fat_mass,
        bmr_kcal=bmr,
        daily_calories_kcal=bmr * ACTIVITY_MULTIPLIER,
        raw_body_fat_percent=raw_body_fat_percent,
    )


# ──────────────────────────────────────────────────────────────────────
#  Public entrypoints
# ──────────────────────────────────────────────────────────────────────
def estimate_from_circumferences(subject: Subject,
                                 measurement: CircumferenceMeasurement) -> DerivedMetrics:
    weight = require_positive("weight_kg", measurement.weight_kg)
    waist = require_positive("waist_cm", measurement.waist_cm)
    neck = require_positive("neck_cm", measurement.neck_cm)
    hip = None
    if subject.gender is Gender.female:
        hip = require_positive("hip_cm", measurement.hip_cm)

    raw = navy_body_fat(subject, waist, neck, hip)
    Logger.debug("Navy estimate for %s: %.3f%%", subject.gender.value, raw)
    return derive_metrics(subject, weight, raw)


def estimate_from_skinfolds(subject: Subject, measurement: SkinfoldMeasurement,
                            protocol: SkinfoldProtocol) -> DerivedMetrics:
    try:
        protocol = SkinfoldProtocol(protocol)
    except ValueError:
        raise InvalidMeasurementError(
            "protocol", f"expected 'seven_fold' or 'three_fold', got {protocol!r}"
        ) from None
    weight = require_positive("weight_kg", measurement.weight_kg)
    sites = SEVEN_FOLD_SITES if protocol is SkinfoldProtocol.seven_fold else THREE_FOLD_SITES
    fold_sum = sum(require_positive(site, getattr(measurement, site)) for site in sites)

    density = jackson_pollock_density(subject, fold_sum, protocol)
    raw = siri_body_fat(density)
    Logger.debug(
        "%s (%s) sum=%.1fmm density=%.5f -> %.3f%%",
        protocol.value, measurement.variant, fold_sum, density, raw,
    )
    return derive_metrics(subject, weight, raw)
