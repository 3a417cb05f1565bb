from .grader import BAND_THRESHOLDS, feedback_band, grade, grade_answer
from .models import AnswerSubmission, FeedbackBand, GradedAnswer, GradeSummary

__all__ = [
    "AnswerSubmission",
    "BAND_THRESHOLDS",
    "FeedbackBand",
    "GradeSummary",
    "GradedAnswer",
    "feedback_band",
    "grade",
    "grade_answer",
]
