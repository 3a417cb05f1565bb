# src/study_kit/summarization/huggingface.py

import logging
from time import monotonic
from typing import Any

import httpx

from study_kit.errors import (
    OversizeForModel,
    RateLimited,
    SummarizationError,
    TransientError,
    UnusableResponse,
)
from study_kit.observability import names
from study_kit.observability.base import MetricsHook, NoOpMetricsHook
from study_kit.rate_limits import log_rate_limit_status, parse_rate_limit_headers
from study_kit.retrying import transport_retrying

from .base import LengthHint, SummarizationClient, is_usable_summary

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://router.huggingface.co/hf-inference/models/"
DEFAULT_MODEL = "google/pegasus-xsum"

_RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})


class _RetryableStatus(Exception):
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        super().__init__(f"HTTP {response.status_code}")


class HuggingFaceSummarizationClient(SummarizationClient):
    """Hosted summarization model behind the Hugging Face inference API.

    Reads rate-limit headers on every response. Retries 429/5xx and transport
    errors a bounded number of times, then classifies what is left.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
        max_input_chars: int = 4000,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        http_client: httpx.AsyncClient | None = None,
    ):
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout, headers=headers
        )
        self._model = model
        self._max_retries = max_retries
        self.max_input_chars = max_input_chars
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized HuggingFaceSummarizationClient with model=%s, timeout=%s",
            model,
            timeout,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def summarize(self, text: str, hint: LengthHint) -> str:
        if len(text) > self.max_input_chars:
            raise OversizeForModel(len(text), self.max_input_chars)

        start = monotonic()
        payload = {
            "inputs": text,
            "parameters": {
                "max_length": hint.max_length,
                "min_length": hint.min_length,
                "do_sample": False,
                "truncation": "longest_first",
            },
        }

        try:
            response = await self._post(payload)
        except httpx.TransportError as e:
            raise self._record(TransientError(f"Request failed: {e}")) from e
        except _RetryableStatus as e:
            response = e.response

        info = parse_rate_limit_headers(response.headers)
        log_rate_limit_status(info, "Hugging Face")
        if info is not None and info.remaining is not None:
            self.metrics_hook.record_gauge(
                names.SUMMARIZATION_RATE_LIMIT_REMAINING, info.remaining
            )

        if response.status_code == 429:
            raise self._record(RateLimited("Rate limit exceeded", info))
        if response.status_code >= 500:
            raise self._record(
                TransientError(f"Provider error: HTTP {response.status_code}")
            )
        if response.status_code >= 400:
            raise self._record(
                SummarizationError(
                    f"Request rejected: HTTP {response.status_code} {response.text[:200]}"
                )
            )

        summary = self._extract_summary(response)
        if not is_usable_summary(summary):
            raise self._record(UnusableResponse("Model returned no usable summary"))

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.SUMMARIZATION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.SUMMARIZATION_REQUESTS_TOTAL,
            labels={"backend": "huggingface", "model": self._model},
        )
        logger.debug("Summarized %d characters in %.0fms", len(text), elapsed_ms)
        return summary.strip()

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        """POST with retries on transport errors, 429 and 5xx."""
        async for attempt in transport_retrying(
            self._max_retries, (httpx.TransportError, _RetryableStatus), logger
        ):
            with attempt:
                response = await self._client.post(self._model, json=payload)
                if response.status_code in _RETRY_STATUSES:
                    raise _RetryableStatus(response)
                return response

    def _extract_summary(self, response: httpx.Response) -> str | None:
        try:
            data = response.json()
        except ValueError:
            logger.warning("Summarization response is not JSON: %s", response.text[:200])
            return None

        # The inference API answers with a one-element list
        if isinstance(data, list) and data and isinstance(data[0], dict):
            data = data[0]
        if isinstance(data, dict):
            summary = data.get("summary_text")
            return summary if isinstance(summary, str) else None
        return None

    def _record(self, error: SummarizationError) -> SummarizationError:
        self.metrics_hook.increment(
            names.SUMMARIZATION_ERRORS_TOTAL,
            labels={"backend": "huggingface", "error_class": error.error_class.value},
        )
        return error
