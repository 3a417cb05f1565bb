# src/study_kit/llms/openai.py

import logging
from time import monotonic
from typing import Any

from openai import (
    NOT_GIVEN,
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
    InternalServerError,
    OpenAIError,
    RateLimitError,
)

from study_kit.errors import LLMError, LLMRateLimitError, LLMTransportError
from study_kit.observability import names
from study_kit.observability.base import MetricsHook, NoOpMetricsHook
from study_kit.rate_limits import parse_rate_limit_headers
from study_kit.retrying import transport_retrying

from .base import FinishReason, LLMClient, LLMResponse, Message, Usage

logger = logging.getLogger(__name__)

_RETRYABLE = (APIConnectionError, APITimeoutError, InternalServerError, RateLimitError)

_FINISH_REASONS: dict[str, FinishReason] = {"stop": "stop", "length": "length"}


class OpenAILLMClient(LLMClient):
    """Chat completions against OpenAI or any OpenAI-compatible server.

    Point `base_url` at a local server (vLLM, Ollama, LM Studio) to keep quiz
    refinement and summaries off the public API.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        max_retries: int = 3,
        base_url: str | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        # SDK-level retries are disabled; tenacity owns the retry policy.
        self._client = AsyncOpenAI(
            api_key=api_key, timeout=timeout, max_retries=0, base_url=base_url
        )
        self._model = model
        self._max_retries = max_retries
        self.metrics_hook = metrics_hook
        logger.info(
            "OpenAI client ready: model=%s, base_url=%s", model, base_url or "default"
        )

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        start = monotonic()
        request = {
            "model": self._model,
            "messages": self._to_provider_messages(messages),
            "temperature": temperature,
            "max_tokens": max_tokens or NOT_GIVEN,
        }

        try:
            async for attempt in transport_retrying(
                self._max_retries, _RETRYABLE, logger
            ):
                with attempt:
                    raw = await self._client.chat.completions.create(**request)
        except OpenAIError as e:
            self.metrics_hook.increment(
                names.LLM_ERRORS_TOTAL,
                labels={"provider": "openai", "error": type(e).__name__},
            )
            raise self._to_llm_error(e) from e

        response = self._to_response(raw, 1000 * (monotonic() - start))
        self._observe(response)
        return response

    def _to_provider_messages(self, messages: list[Message]) -> list[dict[str, str]]:
        return [{"role": m.role.value, "content": m.content} for m in messages]

    def _to_llm_error(self, error: OpenAIError) -> LLMError:
        if isinstance(error, RateLimitError):
            info = parse_rate_limit_headers(dict(error.response.headers))
            return LLMRateLimitError(str(error), info)
        # APITimeoutError is a subclass of APIConnectionError
        if isinstance(error, (APIConnectionError, InternalServerError)):
            return LLMTransportError(str(error))
        return LLMError(str(error))

    def _to_response(self, raw: Any, latency_ms: float) -> LLMResponse:
        choice = raw.choices[0]
        return LLMResponse(
            content=choice.message.content,
            finish_reason=_FINISH_REASONS.get(choice.finish_reason, "error"),
            usage=Usage(
                prompt_tokens=raw.usage.prompt_tokens,
                completion_tokens=raw.usage.completion_tokens,
                total_tokens=raw.usage.total_tokens,
            ),
            latency_ms=latency_ms,
        )

    def _observe(self, response: LLMResponse) -> None:
        usage = response.usage
        self.metrics_hook.record_latency(
            names.LLM_COMPLETION_DURATION, response.latency_ms
        )
        self.metrics_hook.increment(
            names.LLM_REQUESTS_TOTAL,
            labels={"provider": "openai", "model": self._model},
        )
        self.metrics_hook.increment(names.LLM_TOKENS_PROMPT, usage.prompt_tokens)
        self.metrics_hook.increment(names.LLM_TOKENS_COMPLETION, usage.completion_tokens)
        self.metrics_hook.increment(names.LLM_TOKENS_TOTAL, usage.total_tokens)
        logger.info(
            "OpenAI completion: finish=%s, tokens=%d, latency=%.0fms",
            response.finish_reason,
            usage.total_tokens,
            response.latency_ms,
        )
