# src/study_kit/api/schemas.py

from pydantic import BaseModel, ConfigDict, Field

from study_kit.aggregation.outcomes import SummaryReport
from study_kit.grading.models import AnswerSubmission, GradeSummary
from study_kit.quiz.models import QuizSet


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


# --- Summarization ---


class SummarizeRequest(BaseModel):
    text: str


class SummaryMetadata(CamelModel):
    total_chunks: int = Field(alias="totalChunks")
    successful_summaries: int = Field(alias="successfulSummaries")
    failed_summaries: int = Field(alias="failedSummaries")
    skipped_chunks: int = Field(alias="skippedChunks")


class SummaryResponse(BaseModel):
    summary: str
    metadata: SummaryMetadata

    @classmethod
    def from_report(cls, report: SummaryReport) -> "SummaryResponse":
        return cls(
            summary=report.combined_text,
            metadata=SummaryMetadata(
                total_chunks=report.total_segments,
                successful_summaries=report.success_count,
                failed_summaries=report.failed_count,
                skipped_chunks=len(report.skipped_indices),
            ),
        )


# --- Quiz ---


class GenerateQuizRequest(BaseModel):
    text: str
    count: int | None = Field(default=None, ge=1, le=20)
    refine: bool | None = None


class QuestionPayload(BaseModel):
    id: str
    question: str
    options: list[str]
    correct: str


class QuizPayload(BaseModel):
    questions: list[QuestionPayload]


class QuizResponse(BaseModel):
    quiz: QuizPayload

    @classmethod
    def from_quiz(cls, quiz: QuizSet) -> "QuizResponse":
        return cls(
            quiz=QuizPayload(
                questions=[
                    QuestionPayload(
                        id=q.id,
                        question=q.stem,
                        options=list(q.options),
                        correct=q.correct_answer,
                    )
                    for q in quiz
                ]
            )
        )


# --- Grading ---


class AnswerPayload(CamelModel):
    question_id: str | None = Field(default=None, alias="questionId")
    selected: str | None = None
    correct: str | None = None

    def to_submission(self) -> AnswerSubmission:
        return AnswerSubmission(
            question_id=self.question_id,
            selected=self.selected,
            correct=self.correct,
        )


class GradeQuizRequest(BaseModel):
    answers: list[AnswerPayload]


class GradedAnswerPayload(CamelModel):
    question_id: str | None = Field(alias="questionId")
    selected: str | None
    correct: str | None
    is_correct: bool = Field(alias="isCorrect")
    feedback: str


class GradeSummaryPayload(BaseModel):
    total: int
    correct: int
    percentage: float
    band: str
    feedback: str


class GradeResponse(BaseModel):
    results: list[GradedAnswerPayload]
    summary: GradeSummaryPayload

    @classmethod
    def from_summary(cls, summary: GradeSummary) -> "GradeResponse":
        return cls(
            results=[
                GradedAnswerPayload(
                    question_id=r.question_id,
                    selected=r.selected,
                    correct=r.correct,
                    is_correct=r.is_correct,
                    feedback=r.feedback,
                )
                for r in summary.results
            ],
            summary=GradeSummaryPayload(
                total=summary.total,
                correct=summary.correct,
                percentage=round(summary.percentage, 2),
                band=summary.band.value,
                feedback=summary.feedback,
            ),
        )
