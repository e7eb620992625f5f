"""Body-composition core: estimator, boundary models and analytics."""

from __future__ import annotations

import logging

from config import settings
from core.body_composition import (
    CircumferenceMeasurement,
    DerivedMetrics,
    Gender,
    SkinfoldMeasurement,
    SkinfoldProtocol,
    Subject,
    derive_metrics,
    estimate_from_circumferences,
    estimate_from_skinfolds,
)
from core.errors import (
    BodyCompositionError,
    InvalidMeasurementError,
    MissingRequiredFieldError,
    OutOfRangeWarning,
)


def configure_logging(level: str | None = None) -> None:
    """Apply `settings.log_level` (or `level`) to the root logger."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel((level or settings.log_level).upper())


__all__ = [
    "BodyCompositionError",
    "CircumferenceMeasurement",
    "DerivedMetrics",
    "Gender",
    "InvalidMeasurementError",
    "MissingRequiredFieldError",
    "OutOfRangeWarning",
    "SkinfoldMeasurement",
    "SkinfoldProtocol",
    "Subject",
    "configure_logging",
    "derive_metrics",
    "estimate_from_circumferences",
    "estimate_from_skinfolds",
]
