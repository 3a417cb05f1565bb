# src/study_kit/summarization/llm.py

import logging
from time import monotonic

from study_kit.errors import (
    LLMError,
    LLMRateLimitError,
    LLMTransportError,
    OversizeForModel,
    RateLimited,
    SummarizationError,
    TransientError,
    UnusableResponse,
)
from study_kit.llms.base import LLMClient, Message
from study_kit.observability import names
from study_kit.observability.base import MetricsHook, NoOpMetricsHook
from study_kit.prompts.prompt import Prompt
from study_kit.prompts.prompts_library import PromptsLibrary

from .base import LengthHint, SummarizationClient, is_usable_summary

logger = logging.getLogger(__name__)

# Generous budget: roughly two tokens per requested word.
_TOKENS_PER_WORD = 2


class LLMSummarizationClient(SummarizationClient):
    """Summarization through a general-purpose chat-completion model."""

    def __init__(
        self,
        llm: LLMClient,
        prompt: Prompt | None = None,
        max_input_chars: int = 4000,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._llm = llm
        self._prompt = prompt or PromptsLibrary().latest("summarize_segment")
        self.max_input_chars = max_input_chars
        self.metrics_hook = metrics_hook

    async def summarize(self, text: str, hint: LengthHint) -> str:
        if len(text) > self.max_input_chars:
            raise OversizeForModel(len(text), self.max_input_chars)

        start = monotonic()
        messages = [
            Message.user(
                self._prompt.render(
                    text=text,
                    min_words=hint.min_length,
                    max_words=hint.max_length,
                )
            )
        ]

        try:
            response = await self._llm.complete(
                messages=messages,
                max_tokens=hint.max_length * _TOKENS_PER_WORD,
            )
        except LLMRateLimitError as e:
            raise self._record(RateLimited(str(e), e.info)) from e
        except LLMTransportError as e:
            raise self._record(TransientError(str(e))) from e
        except LLMError as e:
            raise self._record(SummarizationError(str(e))) from e

        summary = (response.content or "").strip()
        if response.truncated:
            logger.warning(
                "Summary hit the token budget (%d tokens) and may be cut off",
                hint.max_length * _TOKENS_PER_WORD,
            )
        if not is_usable_summary(summary):
            raise self._record(
                UnusableResponse(
                    f"Model returned no usable summary (finish={response.finish_reason})"
                )
            )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.SUMMARIZATION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.SUMMARIZATION_REQUESTS_TOTAL, labels={"backend": "llm"}
        )
        logger.debug(
            "Summarized %d characters into %d words", len(text), len(summary.split())
        )
        return summary

    def _record(self, error: SummarizationError) -> SummarizationError:
        self.metrics_hook.increment(
            names.SUMMARIZATION_ERRORS_TOTAL,
            labels={"backend": "llm", "error_class": error.error_class.value},
        )
        return error
