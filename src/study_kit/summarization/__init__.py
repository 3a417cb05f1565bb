# src/study_kit/summarization/__init__.py

"""Summarization capability adapters.

Every adapter turns one segment of text into a summary or fails with a
classified `SummarizationError` (oversize, rate-limited, transient,
unusable). Retries, where any, happen inside the adapter.
"""

from .base import LengthHint, SummarizationClient, target_length_hint
from .config import SummarizationConfig
from .factory import create_summarization_client
from .fallback import FallbackSummarizationClient

__all__ = [
    # Factory
    "create_summarization_client",
    # Protocol
    "SummarizationClient",
    "FallbackSummarizationClient",
    # Config
    "SummarizationConfig",
    # Types
    "LengthHint",
    "target_length_hint",
]
