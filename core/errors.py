"""
core/errors.py
────────────────────────────────────────────────────────────────────────
Failure kinds raised by the body-composition estimator.

Both errors are fatal to a single estimation call and must reach the
caller before anything is persisted. `OutOfRangeWarning` is the only
non-fatal kind: the clamped value is still returned.
"""

from __future__ import annotations


class BodyCompositionError(ValueError):
    """Base class for estimator input failures."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class MissingRequiredFieldError(BodyCompositionError):
    """A required numeric field is absent, non-numeric or not positive."""


class InvalidMeasurementError(BodyCompositionError):
    """Fields are present but produce a mathematically undefined value."""


class OutOfRangeWarning(UserWarning):
    """Body-fat estimate fell outside [0, 50] and was clamped."""

    def __init__(self, raw_percent: float, clamped_percent: float) -> None:
        super().__init__(
            f"body fat {raw_percent:.2f}% clamped to {clamped_percent:.1f}%"
        )
        self.raw_percent = raw_percent
        self.clamped_percent = clamped_percent
