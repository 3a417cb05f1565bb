# src/study_kit/llms/config.py

from dataclasses import dataclass
from typing import Literal

Provider = Literal["openai", "anthropic"]


@dataclass(frozen=True)
class LLMConfig:
    """Chat model settings. Built explicitly; never read from the environment here.

    `api_key=None` lets the provider SDK use its own environment variable.
    `base_url` points the OpenAI adapter at any OpenAI-compatible endpoint.
    """

    provider: Provider
    model: str
    api_key: str | None = None
    timeout: float = 30.0
    max_retries: int = 3
    base_url: str | None = None
