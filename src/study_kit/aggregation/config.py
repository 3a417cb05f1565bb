# src/study_kit/aggregation/config.py

from dataclasses import dataclass, field

from study_kit.summarization.base import DEFAULT_MAX_WORDS, DEFAULT_MIN_WORDS


@dataclass(frozen=True)
class AggregatorConfig:
    """Fan-out settings.

    `timeout` bounds the whole fan-out, not a single call. None disables it.
    """

    max_concurrency: int = 8
    timeout: float | None = 120.0
    min_summary_words: int = DEFAULT_MIN_WORDS
    max_summary_words: int = DEFAULT_MAX_WORDS


@dataclass(frozen=True)
class SummaryPipelineConfig:
    """Document-level settings.

    `max_chunk_size` is the chunker's target. The model's hard ceiling is a
    property of the summarization client, not of this config.
    """

    max_chunk_size: int = 2000
    max_document_chars: int = 40_000
    aggregator: AggregatorConfig = field(default_factory=AggregatorConfig)
