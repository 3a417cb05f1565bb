# src/study_kit/llms/factory.py

from collections.abc import Callable

from study_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient
from .config import LLMConfig


def _openai(config: LLMConfig, metrics_hook: MetricsHook) -> LLMClient:
    from .openai import OpenAILLMClient

    return OpenAILLMClient(
        api_key=config.api_key,
        model=config.model,
        timeout=config.timeout,
        max_retries=config.max_retries,
        base_url=config.base_url,
        metrics_hook=metrics_hook,
    )


def _anthropic(config: LLMConfig, metrics_hook: MetricsHook) -> LLMClient:
    from .anthropic import AnthropicLLMClient

    return AnthropicLLMClient(
        api_key=config.api_key,
        model=config.model,
        timeout=config.timeout,
        max_retries=config.max_retries,
        metrics_hook=metrics_hook,
    )


# SDK imports stay lazy so an unused provider never has to be installed.
_BUILDERS: dict[str, Callable[[LLMConfig, MetricsHook], LLMClient]] = {
    "openai": _openai,
    "anthropic": _anthropic,
}


def create_llm_client(
    config: LLMConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LLMClient:
    """Build the chat-completion client named by ``config.provider``.

    Raises:
        ValueError: If provider is unknown.

    Example:
        >>> config = LLMConfig(provider="anthropic", model="claude-sonnet-4-20250514")
        >>> client = create_llm_client(config)
        >>> response = await client.complete(messages=[...])
    """
    try:
        builder = _BUILDERS[config.provider]
    except KeyError:
        raise ValueError(f"Unknown LLM provider: {config.provider}") from None
    return builder(config, metrics_hook)
