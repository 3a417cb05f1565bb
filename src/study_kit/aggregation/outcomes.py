# src/study_kit/aggregation/outcomes.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias

from study_kit.errors import ErrorClass

SUMMARY_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class Summarized:
    index: int
    text: str


@dataclass(frozen=True)
class Skipped:
    index: int
    reason: ErrorClass


@dataclass(frozen=True)
class Failed:
    index: int
    error_class: ErrorClass
    message: str = ""


SegmentOutcome: TypeAlias = Summarized | Skipped | Failed


@dataclass(frozen=True)
class SummaryReport:
    """Result of one fan-out, assembled in segment-index order."""

    combined_text: str
    total_segments: int
    success_count: int
    failed_count: int
    skipped_indices: tuple[int, ...]
    failed_indices: tuple[int, ...]
    rate_limited_indices: tuple[int, ...]
    outcomes: tuple[SegmentOutcome, ...]

    @property
    def rate_limited(self) -> bool:
        return bool(self.rate_limited_indices)

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[SegmentOutcome]) -> SummaryReport:
        ordered = tuple(sorted(outcomes, key=lambda o: o.index))

        summaries = [o.text for o in ordered if isinstance(o, Summarized)]
        failed = [o for o in ordered if isinstance(o, Failed)]

        return cls(
            combined_text=SUMMARY_SEPARATOR.join(summaries),
            total_segments=len(ordered),
            success_count=len(summaries),
            failed_count=len(failed),
            skipped_indices=tuple(o.index for o in ordered if isinstance(o, Skipped)),
            failed_indices=tuple(o.index for o in failed),
            rate_limited_indices=tuple(
                o.index for o in failed if o.error_class == ErrorClass.RATE_LIMITED
            ),
            outcomes=ordered,
        )
