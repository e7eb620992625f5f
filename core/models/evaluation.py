"""
Boundary models for evaluation form payloads.

Raw form values (strings, numbers, empty strings) are parsed exactly once
here. Any pydantic `ValidationError` leaves this module as a
`MissingRequiredFieldError` so callers only ever see the estimator's own
error kinds.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.body_composition import (
    SEVEN_FOLD_SITES,
    THREE_FOLD_SITES,
    CircumferenceMeasurement,
    DerivedMetrics,
    Gender,
    SkinfoldMeasurement,
    SkinfoldProtocol,
    Subject,
    estimate_from_circumferences,
    estimate_from_skinfolds,
)
from core.errors import InvalidMeasurementError, MissingRequiredFieldError

_LOG = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)

# labels stored by the trainer app alongside the canonical enum values
_GENDER_LABELS = {"masculino": "male", "feminino": "female", "m": "male", "f": "female"}
_PROTOCOL_LABELS = {
    "7-folds": "seven_fold", "7": "seven_fold",
    "3-folds": "three_fold", "3": "three_fold",
}


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip().replace(",", ".")
        return v or None
    return v


def _positive(*names: str) -> Any:
    return Field(
        None,
        gt=0,
        validation_alias=AliasChoices(*names),
    )


class _FormModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ───────────────────────── subject ──────────────────────────
class SubjectIn(_FormModel):
    age: int = Field(..., gt=0)
    gender: Gender
    height_cm: float = Field(
        ..., gt=0, allow_inf_nan=False,
        validation_alias=AliasChoices("height_cm", "height"),
    )

    @field_validator("age", "height_cm", mode="before")
    @classmethod
    def _numbers(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("gender", mode="before")
    @classmethod
    def _gender(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return _GENDER_LABELS.get(v, v)
        return v

    def to_subject(self) -> Subject:
        return Subject(age=self.age, gender=self.gender, height_cm=self.height_cm)


# ───────────────────────── circumferences ───────────────────
class CircumferenceEvaluationIn(_FormModel):
    weight_kg: float | None = _positive("weight_kg", "weight")
    waist_cm: float | None = _positive("waist_cm", "waist")
    neck_cm: float | None = _positive("neck_cm", "neck")
    hip_cm: float | None = _positive("hip_cm", "hip")

    @field_validator("*", mode="before")
    @classmethod
    def _numbers(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def to_measurement(self) -> CircumferenceMeasurement:
        return CircumferenceMeasurement(
            weight_kg=self.weight_kg,  # type: ignore[arg-type]
            waist_cm=self.waist_cm,    # type: ignore[arg-type]
            neck_cm=self.neck_cm,      # type: ignore[arg-type]
            hip_cm=self.hip_cm,
        )


# ───────────────────────── skinfolds ────────────────────────
class SkinfoldEvaluationIn(_FormModel):
    protocol: SkinfoldProtocol = SkinfoldProtocol.seven_fold
    variant: str = Field("jackson-pollock", validation_alias=AliasChoices("variant", "skinfold_protocol"))
    weight_kg: float | None = _positive("weight_kg", "weight")
    triceps: float | None = _positive("triceps", "triceps_skinfold")
    subscapular: float | None = _positive("subscapular", "subscapular_skinfold")
    chest: float | None = _positive("chest", "chest_skinfold")
    axillary: float | None = _positive("axillary", "axillary_skinfold")
    abdominal: float | None = _positive("abdominal", "abdominal_skinfold")
    suprailiac: float | None = _positive("suprailiac", "suprailiac_skinfold")
    thigh: float | None = _positive("thigh", "thigh_skinfold")

    @field_validator("protocol", mode="before")
    @classmethod
    def _protocol(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return _PROTOCOL_LABELS.get(v, v)
        return v

    @field_validator(
        "weight_kg", "triceps", "subscapular", "chest", "axillary",
        "abdominal", "suprailiac", "thigh",
        mode="before",
    )
    @classmethod
    def _numbers(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def required_sites(self) -> tuple[str, ...]:
        if self.protocol is SkinfoldProtocol.seven_fold:
            return SEVEN_FOLD_SITES
        return THREE_FOLD_SITES

    def to_measurement(self) -> SkinfoldMeasurement:
        for site in ("weight_kg", *self.required_sites()):
            if getattr(self, site) is None:
                raise MissingRequiredFieldError(
                    site, f"required for the {self.protocol.value} protocol"
                )
        return SkinfoldMeasurement(
            weight_kg=self.weight_kg,      # type: ignore[arg-type]
            triceps=self.triceps,          # type: ignore[arg-type]
            subscapular=self.subscapular,  # type: ignore[arg-type]
            thigh=self.thigh,              # type: ignore[arg-type]
            chest=self.chest,
            axillary=self.axillary,
            abdominal=self.abdominal,
            suprailiac=self.suprailiac,
            variant=self.variant,
        )


# ───────────────────────── parsing helpers ──────────────────
def _validate(model: type[_M], payload: dict[str, Any]) -> _M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first["loc"]) or model.__name__
        raise MissingRequiredFieldError(field, first["msg"]) from exc


def parse_subject(payload: dict[str, Any]) -> Subject:
    return _validate(SubjectIn, payload).to_subject()


def parse_circumferences(payload: dict[str, Any]) -> CircumferenceMeasurement:
    return _validate(CircumferenceEvaluationIn, payload).to_measurement()


def parse_skinfolds(payload: dict[str, Any]) -> tuple[SkinfoldMeasurement, SkinfoldProtocol]:
    form = _validate(SkinfoldEvaluationIn, payload)
    return form.to_measurement(), form.protocol


def _circumferences(subject: Subject, payload: dict[str, Any]) -> DerivedMetrics:
    return estimate_from_circumferences(subject, parse_circumferences(payload))


def _skinfolds(subject: Subject, payload: dict[str, Any]) -> DerivedMetrics:
    measurement, protocol = parse_skinfolds(payload)
    return estimate_from_skinfolds(subject, measurement, protocol)


_METHODS: dict[str, Callable[[Subject, dict[str, Any]], DerivedMetrics]] = {
    "circumferences": _circumferences,
    "skinfolds": _skinfolds,
}


def evaluate(subject_payload: dict[str, Any], evaluation_payload: dict[str, Any]) -> DerivedMetrics:
    """
    Parse both payloads and run the estimator selected by
    `evaluation_payload["evaluation_method"]`.
    """
    method = str(evaluation_payload.get("evaluation_method") or "").strip().lower()
    handler = _METHODS.get(method)
    if handler is None:
        raise InvalidMeasurementError(
            "evaluation_method", f"unsupported method {method!r}"
        )
    subject = parse_subject(subject_payload)
    _LOG.debug("evaluating %s for %s subject aged %d", method, subject.gender.value, subject.age)
    return handler(subject, evaluation_payload)
