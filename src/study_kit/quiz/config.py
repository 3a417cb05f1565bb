# src/study_kit/quiz/config.py

from dataclasses import dataclass

DEFAULT_TARGET_COUNT = 5
DEFAULT_IMPORTANCE_THRESHOLD = 0.3
DEFAULT_MAX_DOCUMENT_CHARS = 40_000


@dataclass(frozen=True)
class QuizConfig:
    """Configuration for quiz generation.

    Immutable. Explicit. No magic defaults from environment.
    """

    target_count: int = DEFAULT_TARGET_COUNT
    importance_threshold: float = DEFAULT_IMPORTANCE_THRESHOLD
    max_document_chars: int = DEFAULT_MAX_DOCUMENT_CHARS
    refine: bool = False  # Needs an LLM client when enabled
