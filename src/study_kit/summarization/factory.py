# src/study_kit/summarization/factory.py

from study_kit.llms.config import LLMConfig
from study_kit.llms.factory import create_llm_client
from study_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import SummarizationClient
from .config import SummarizationConfig
from .fallback import FallbackSummarizationClient


def create_summarization_client(
    config: SummarizationConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> SummarizationClient:
    """Create a summarization client from config.

    Which capability is primary (a dedicated summarization model or a
    chat-completion model) is purely a configuration decision.

    Raises:
        ValueError: If provider is unknown.
    """
    client = _create_single(config, metrics_hook)
    if config.fallback is not None:
        return FallbackSummarizationClient(
            primary=client,
            secondary=create_summarization_client(config.fallback, metrics_hook),
        )
    return client


def _create_single(
    config: SummarizationConfig, metrics_hook: MetricsHook
) -> SummarizationClient:
    if config.provider == "huggingface":
        from .huggingface import DEFAULT_BASE_URL, HuggingFaceSummarizationClient

        return HuggingFaceSummarizationClient(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url or DEFAULT_BASE_URL,
            timeout=config.timeout,
            max_retries=config.max_retries,
            max_input_chars=config.max_input_chars,
            metrics_hook=metrics_hook,
        )

    if config.provider in ("openai", "anthropic"):
        from .llm import LLMSummarizationClient

        llm = create_llm_client(
            LLMConfig(
                provider=config.provider,
                model=config.model,
                api_key=config.api_key,
                timeout=config.timeout,
                max_retries=config.max_retries,
            ),
            metrics_hook=metrics_hook,
        )
        return LLMSummarizationClient(
            llm,
            max_input_chars=config.max_input_chars,
            metrics_hook=metrics_hook,
        )

    raise ValueError(f"Unknown summarization provider: {config.provider}")
