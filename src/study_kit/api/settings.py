# src/study_kit/api/settings.py

"""HTTP service settings.

This is the only place that reads the environment. Library code receives
explicit config objects built from these settings.
"""

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from study_kit.aggregation.config import AggregatorConfig, SummaryPipelineConfig
from study_kit.llms.config import LLMConfig
from study_kit.quiz.config import QuizConfig
from study_kit.summarization.config import SummarizationConfig

SummarizationProvider = Literal["huggingface", "openai", "anthropic"]
LLMProvider = Literal["openai", "anthropic"]

_ENV_VARS = (
    "SUMMARIZATION_PROVIDER",
    "SUMMARIZATION_MODEL",
    "SUMMARIZATION_API_KEY",
    "SUMMARIZATION_FALLBACK_PROVIDER",
    "SUMMARIZATION_FALLBACK_MODEL",
    "SUMMARIZATION_FALLBACK_API_KEY",
    "MAX_INPUT_CHARS",
    "MAX_CHUNK_SIZE",
    "MAX_DOCUMENT_CHARS",
    "MAX_CONCURRENCY",
    "SUMMARIZATION_TIMEOUT",
    "MAX_UPLOAD_BYTES",
    "QUIZ_LLM_PROVIDER",
    "QUIZ_LLM_MODEL",
    "QUIZ_LLM_API_KEY",
    "QUIZ_LLM_BASE_URL",
    "QUIZ_TARGET_COUNT",
)


class Settings(BaseModel):
    """Service configuration loaded from environment variables."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    summarization_provider: SummarizationProvider = Field(
        default="huggingface", alias="SUMMARIZATION_PROVIDER"
    )
    summarization_model: str = Field(
        default="google/pegasus-xsum", alias="SUMMARIZATION_MODEL"
    )
    summarization_api_key: str | None = Field(
        default=None, alias="SUMMARIZATION_API_KEY"
    )

    fallback_provider: SummarizationProvider | None = Field(
        default=None, alias="SUMMARIZATION_FALLBACK_PROVIDER"
    )
    fallback_model: str | None = Field(
        default=None, alias="SUMMARIZATION_FALLBACK_MODEL"
    )
    fallback_api_key: str | None = Field(
        default=None, alias="SUMMARIZATION_FALLBACK_API_KEY"
    )

    max_input_chars: int = Field(default=4000, ge=100, alias="MAX_INPUT_CHARS")
    max_chunk_size: int = Field(default=2000, ge=100, alias="MAX_CHUNK_SIZE")
    max_document_chars: int = Field(
        default=40_000, ge=1000, alias="MAX_DOCUMENT_CHARS"
    )
    max_concurrency: int = Field(default=8, ge=1, le=64, alias="MAX_CONCURRENCY")
    summarization_timeout: float = Field(
        default=120.0, gt=0, alias="SUMMARIZATION_TIMEOUT"
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1, alias="MAX_UPLOAD_BYTES"
    )

    quiz_llm_provider: LLMProvider | None = Field(
        default=None, alias="QUIZ_LLM_PROVIDER"
    )
    quiz_llm_model: str | None = Field(default=None, alias="QUIZ_LLM_MODEL")
    quiz_llm_api_key: str | None = Field(default=None, alias="QUIZ_LLM_API_KEY")
    quiz_llm_base_url: str | None = Field(default=None, alias="QUIZ_LLM_BASE_URL")
    quiz_target_count: int = Field(default=5, ge=1, le=20, alias="QUIZ_TARGET_COUNT")

    def summarization_config(self) -> SummarizationConfig:
        fallback = None
        if self.fallback_provider and self.fallback_model:
            fallback = SummarizationConfig(
                provider=self.fallback_provider,
                model=self.fallback_model,
                api_key=self.fallback_api_key,
                max_input_chars=self.max_input_chars,
            )
        return SummarizationConfig(
            provider=self.summarization_provider,
            model=self.summarization_model,
            api_key=self.summarization_api_key,
            max_input_chars=self.max_input_chars,
            fallback=fallback,
        )

    def pipeline_config(self) -> SummaryPipelineConfig:
        return SummaryPipelineConfig(
            max_chunk_size=min(self.max_chunk_size, self.max_input_chars),
            max_document_chars=self.max_document_chars,
            aggregator=AggregatorConfig(
                max_concurrency=self.max_concurrency,
                timeout=self.summarization_timeout,
            ),
        )

    def quiz_llm_config(self) -> LLMConfig | None:
        if not (self.quiz_llm_provider and self.quiz_llm_model):
            return None
        return LLMConfig(
            provider=self.quiz_llm_provider,
            model=self.quiz_llm_model,
            api_key=self.quiz_llm_api_key,
            base_url=self.quiz_llm_base_url,
        )

    def quiz_config(self) -> QuizConfig:
        return QuizConfig(
            target_count=self.quiz_target_count,
            max_document_chars=self.max_document_chars,
            refine=self.quiz_llm_config() is not None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    load_dotenv()
    data = {name: os.environ[name] for name in _ENV_VARS if os.environ.get(name)}
    return Settings.model_validate(data)
