# src/study_kit/summarization/base.py

from dataclasses import dataclass
from typing import Protocol

from study_kit.chunking.boundaries import tokenize
from study_kit.observability.base import MetricsHook

DEFAULT_MIN_WORDS = 30
DEFAULT_MAX_WORDS = 512


@dataclass(frozen=True)
class LengthHint:
    """Target summary length in words."""

    max_length: int
    min_length: int


def target_length_hint(
    text: str,
    *,
    floor: int = DEFAULT_MIN_WORDS,
    ceiling: int = DEFAULT_MAX_WORDS,
) -> LengthHint:
    """Derive a summary length from the input size.

    Roughly a third of the input words as the maximum and a quarter as the
    minimum, both clamped to [floor, ceiling]. Keeps short segments from
    producing summaries longer than themselves.
    """
    if floor > ceiling:
        raise ValueError("floor must be <= ceiling")
    words = len(text.split())
    max_length = min(max(words // 3, floor), ceiling)
    min_length = min(max(words // 4, floor), max_length)
    return LengthHint(max_length=max_length, min_length=min_length)


def is_usable_summary(text: str | None) -> bool:
    """A summary needs at least one word; empty or punctuation-only is garbage."""
    return bool(text and tokenize(text))


class SummarizationClient(Protocol):
    """Protocol for summarization capabilities.

    `max_input_chars` is the model's hard ceiling. Callers compare segment
    length against it before calling; implementations also enforce it.
    """

    max_input_chars: int
    metrics_hook: MetricsHook

    async def summarize(self, text: str, hint: LengthHint) -> str:
        """Summarize one piece of text.

        Raises:
            OversizeForModel: Text is longer than `max_input_chars`.
            RateLimited: Provider quota exhausted.
            TransientError: Network failure, timeout or provider 5xx.
            UnusableResponse: Provider returned an empty or garbage summary.
            SummarizationError: Any other provider rejection.
        """
        ...
