# src/study_kit/summarization/config.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Provider = Literal["huggingface", "openai", "anthropic"]


@dataclass(frozen=True)
class SummarizationConfig:
    """Configuration for summarization clients.

    Immutable. Explicit. `fallback` names a second capability to try when
    this one is rate-limited, unreachable or returns nothing usable.
    """

    provider: Provider
    model: str
    api_key: str | None = None
    timeout: float = 30.0
    max_retries: int = 3
    max_input_chars: int = 4000

    # provider-specific (used only when relevant)
    base_url: str | None = None

    fallback: SummarizationConfig | None = None
