"""Re-export boundary models for easy imports."""

from .evaluation import (
    CircumferenceEvaluationIn,
    SkinfoldEvaluationIn,
    SubjectIn,
    evaluate,
    parse_circumferences,
    parse_skinfolds,
    parse_subject,
)

__all__ = [
    "CircumferenceEvaluationIn",
    "SkinfoldEvaluationIn",
    "SubjectIn",
    "evaluate",
    "parse_circumferences",
    "parse_skinfolds",
    "parse_subject",
]
