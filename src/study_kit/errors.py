# src/study_kit/errors.py

"""Exception tree for study-kit.

Three families, matching how far a failure reaches:

- Input errors are rejected before any processing starts.
- Summarization errors belong to a single segment. The aggregator records
  them as outcomes and keeps going.
- Pipeline errors end the whole request (nothing usable was produced).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from study_kit.aggregation.outcomes import SummaryReport


class StudyKitError(Exception):
    """Base class for every error raised by study-kit."""


# ============================================================================
# Input errors
# ============================================================================


class InvalidInputError(StudyKitError):
    """Input was rejected before processing."""


class EmptyDocumentError(InvalidInputError):
    def __init__(self, message: str = "No text content found") -> None:
        super().__init__(message)


class DocumentTooLargeError(InvalidInputError):
    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(
            f"Text is too long ({length} characters). "
            f"Please provide text under {limit} characters."
        )


class EmptySubmissionError(InvalidInputError):
    def __init__(self) -> None:
        super().__init__("At least one answer is required for grading")


class UnsupportedDocumentError(InvalidInputError):
    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(
            f"Unsupported document type: {filename!r}. "
            "Only PDF and Word (.docx) documents are allowed"
        )


# ============================================================================
# Per-segment summarization errors
# ============================================================================


class ErrorClass(str, Enum):
    """Why a single segment produced no summary."""

    OVERSIZE_FOR_MODEL = "oversize_for_model"
    RATE_LIMITED = "rate_limited"
    TRANSIENT = "transient"
    UNUSABLE = "unusable"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RateLimitInfo:
    """Quota signals read from a provider response.

    All fields are optional because providers send different subsets.
    """

    remaining: int | None = None
    limit: int | None = None
    reset_at: datetime | None = None


class SummarizationError(StudyKitError):
    error_class: ErrorClass = ErrorClass.UNKNOWN


class OversizeForModel(SummarizationError):
    error_class = ErrorClass.OVERSIZE_FOR_MODEL

    def __init__(self, length: int, ceiling: int) -> None:
        self.length = length
        self.ceiling = ceiling
        super().__init__(
            f"Input of {length} characters exceeds model ceiling of {ceiling}"
        )


class RateLimited(SummarizationError):
    error_class = ErrorClass.RATE_LIMITED

    def __init__(self, message: str, info: RateLimitInfo | None = None) -> None:
        self.info = info or RateLimitInfo()
        super().__init__(message)


class TransientError(SummarizationError):
    error_class = ErrorClass.TRANSIENT


class UnusableResponse(SummarizationError):
    error_class = ErrorClass.UNUSABLE


# ============================================================================
# LLM provider errors (normalized at the adapter boundary)
# ============================================================================


class LLMError(StudyKitError):
    """The provider rejected the request."""


class LLMTransportError(LLMError):
    """Network failure, timeout or provider-side 5xx."""


class LLMRateLimitError(LLMError):
    def __init__(self, message: str, info: RateLimitInfo | None = None) -> None:
        self.info = info or RateLimitInfo()
        super().__init__(message)


# ============================================================================
# Whole-pipeline errors
# ============================================================================


class PipelineError(StudyKitError):
    """The request as a whole produced nothing usable."""


class NoSummariesProduced(PipelineError):
    def __init__(self, report: SummaryReport) -> None:
        self.report = report
        super().__init__(
            f"Failed to generate any summaries "
            f"({report.failed_count} failed, "
            f"{len(report.skipped_indices)} skipped "
            f"of {report.total_segments})"
        )

    @property
    def rate_limited(self) -> bool:
        return self.report.rate_limited


class InsufficientContent(PipelineError):
    def __init__(
        self, message: str = "Could not generate questions from the provided text"
    ) -> None:
        super().__init__(message)


class SummarizationTimeout(PipelineError):
    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Summarization did not finish within {timeout:.0f}s")
