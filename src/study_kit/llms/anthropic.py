# src/study_kit/llms/anthropic.py

import logging
from time import monotonic
from typing import Any

from anthropic import (
    NOT_GIVEN,
    AnthropicError,
    APIConnectionError,
    APITimeoutError,
    AsyncAnthropic,
    InternalServerError,
    RateLimitError,
)

from study_kit.errors import LLMError, LLMRateLimitError, LLMTransportError
from study_kit.observability import names
from study_kit.observability.base import MetricsHook, NoOpMetricsHook
from study_kit.rate_limits import parse_rate_limit_headers
from study_kit.retrying import transport_retrying

from .base import FinishReason, LLMClient, LLMResponse, Message, Role, Usage

logger = logging.getLogger(__name__)

_RETRYABLE = (APIConnectionError, APITimeoutError, InternalServerError, RateLimitError)

_STOP_REASONS: dict[str, FinishReason] = {"end_turn": "stop", "max_tokens": "length"}

# The Messages API refuses requests without an explicit output budget.
_DEFAULT_MAX_TOKENS = 4096


class AnthropicLLMClient(LLMClient):
    """Claude models through the Messages API.

    System turns are lifted out of the message list into the `system`
    parameter; if several are given the last one wins.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-20250514",
        timeout: float = 30.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)
        self._model = model
        self._max_retries = max_retries
        self.metrics_hook = metrics_hook
        logger.info("Anthropic client ready: model=%s, timeout=%s", model, timeout)

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        start = monotonic()
        system, turns = self._split_system(messages)
        request = {
            "model": self._model,
            "messages": turns,
            "temperature": temperature,
            "max_tokens": max_tokens or _DEFAULT_MAX_TOKENS,
            "system": system or NOT_GIVEN,
        }

        try:
            async for attempt in transport_retrying(
                self._max_retries, _RETRYABLE, logger
            ):
                with attempt:
                    raw = await self._client.messages.create(**request)
        except AnthropicError as e:
            self.metrics_hook.increment(
                names.LLM_ERRORS_TOTAL,
                labels={"provider": "anthropic", "error": type(e).__name__},
            )
            raise self._to_llm_error(e) from e

        response = self._to_response(raw, 1000 * (monotonic() - start))
        self.metrics_hook.record_latency(
            names.LLM_COMPLETION_DURATION, response.latency_ms
        )
        self.metrics_hook.increment(
            names.LLM_REQUESTS_TOTAL,
            labels={"provider": "anthropic", "model": self._model},
        )
        self.metrics_hook.increment(names.LLM_TOKENS_TOTAL, response.usage.total_tokens)
        logger.info(
            "Anthropic completion: finish=%s, tokens=%d, latency=%.0fms",
            response.finish_reason,
            response.usage.total_tokens,
            response.latency_ms,
        )
        return response

    @staticmethod
    def _split_system(
        messages: list[Message],
    ) -> tuple[str | None, list[dict[str, str]]]:
        system = None
        turns = []
        for m in messages:
            if m.role == Role.SYSTEM:
                system = m.content
            else:
                turns.append({"role": m.role.value, "content": m.content})
        return system, turns

    def _to_llm_error(self, error: AnthropicError) -> LLMError:
        if isinstance(error, RateLimitError):
            info = parse_rate_limit_headers(dict(error.response.headers))
            return LLMRateLimitError(str(error), info)
        if isinstance(error, (APIConnectionError, InternalServerError)):
            return LLMTransportError(str(error))
        return LLMError(str(error))

    def _to_response(self, raw: Any, latency_ms: float) -> LLMResponse:
        # Thinking and tool-use blocks carry no summary text.
        text = "".join(block.text for block in raw.content if block.type == "text")
        input_tokens = raw.usage.input_tokens
        output_tokens = raw.usage.output_tokens
        return LLMResponse(
            content=text or None,
            finish_reason=_STOP_REASONS.get(raw.stop_reason, "error"),
            usage=Usage(
                prompt_tokens=input_tokens,
                completion_tokens=output_tokens,
                total_tokens=input_tokens + output_tokens,
            ),
            latency_ms=latency_ms,
        )
