# src/study_kit/grading/models.py

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel


class FeedbackBand(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ADEQUATE = "adequate"
    NEEDS_IMPROVEMENT = "needs_improvement"


class AnswerSubmission(BaseModel):
    """One submitted answer. Any field may be missing; grading never raises on it."""

    question_id: str | None = None
    selected: str | None = None
    correct: str | None = None


@dataclass(frozen=True)
class GradedAnswer:
    question_id: str | None
    selected: str | None
    correct: str | None
    is_correct: bool
    feedback: str


@dataclass(frozen=True)
class GradeSummary:
    total: int
    correct: int
    percentage: float
    band: FeedbackBand
    feedback: str
    results: tuple[GradedAnswer, ...]
