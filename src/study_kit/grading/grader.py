# src/study_kit/grading/grader.py

import logging
from collections.abc import Sequence

from study_kit.errors import EmptySubmissionError

from .models import AnswerSubmission, FeedbackBand, GradedAnswer, GradeSummary

logger = logging.getLogger(__name__)

# Lower bound (inclusive) of each band, best first.
BAND_THRESHOLDS: tuple[tuple[float, FeedbackBand], ...] = (
    (90.0, FeedbackBand.EXCELLENT),
    (70.0, FeedbackBand.GOOD),
    (50.0, FeedbackBand.ADEQUATE),
)

BAND_FEEDBACK = {
    FeedbackBand.EXCELLENT: "Excellent work! You have a strong grasp of the material.",
    FeedbackBand.GOOD: "Good job! Review the questions you missed to close the gaps.",
    FeedbackBand.ADEQUATE: "Fair attempt. Revisit the summary and try again.",
    FeedbackBand.NEEDS_IMPROVEMENT: (
        "Keep practicing. Reread the material before your next attempt."
    ),
}


def _normalize(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip().casefold()


def feedback_band(percentage: float) -> FeedbackBand:
    for lower_bound, band in BAND_THRESHOLDS:
        if percentage >= lower_bound:
            return band
    return FeedbackBand.NEEDS_IMPROVEMENT


def grade_answer(submission: AnswerSubmission) -> GradedAnswer:
    selected = _normalize(submission.selected)
    correct = _normalize(submission.correct)

    if correct is None:
        is_correct, feedback = False, "No answer key was provided for this question."
    elif selected is None:
        is_correct, feedback = False, "No answer was submitted."
    elif selected == correct:
        is_correct, feedback = True, "Correct!"
    else:
        is_correct = False
        feedback = f"Incorrect. The correct answer is {submission.correct.strip()}."

    return GradedAnswer(
        question_id=submission.question_id,
        selected=submission.selected,
        correct=submission.correct,
        is_correct=is_correct,
        feedback=feedback,
    )


def grade(submissions: Sequence[AnswerSubmission]) -> GradeSummary:
    """Grade answers case-insensitively and band the overall score.

    Raises:
        EmptySubmissionError: If there is nothing to grade.
    """
    if not submissions:
        raise EmptySubmissionError()

    results = tuple(grade_answer(s) for s in submissions)
    correct = sum(1 for r in results if r.is_correct)
    percentage = 100 * correct / len(results)
    band = feedback_band(percentage)

    logger.debug("Graded %d answers: %d correct (%.1f%%)", len(results), correct, percentage)
    return GradeSummary(
        total=len(results),
        correct=correct,
        percentage=percentage,
        band=band,
        feedback=BAND_FEEDBACK[band],
        results=results,
    )
