# src/study_kit/summarization/fallback.py

import logging

from study_kit.errors import ErrorClass, SummarizationError

from .base import LengthHint, SummarizationClient

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ON = frozenset(
    {ErrorClass.RATE_LIMITED, ErrorClass.TRANSIENT, ErrorClass.UNUSABLE}
)


class FallbackSummarizationClient(SummarizationClient):
    """Try a primary capability, then a secondary one.

    Only failures whose class is in `fallback_on` reach the secondary.
    Anything else (including the secondary's own failure) propagates.
    """

    def __init__(
        self,
        primary: SummarizationClient,
        secondary: SummarizationClient,
        fallback_on: frozenset[ErrorClass] = DEFAULT_FALLBACK_ON,
    ):
        self._primary = primary
        self._secondary = secondary
        self._fallback_on = fallback_on
        # A segment must be acceptable to whichever client ends up serving it.
        self.max_input_chars = min(primary.max_input_chars, secondary.max_input_chars)
        self.metrics_hook = primary.metrics_hook

    async def summarize(self, text: str, hint: LengthHint) -> str:
        try:
            return await self._primary.summarize(text, hint)
        except SummarizationError as e:
            if e.error_class not in self._fallback_on:
                raise
            logger.warning(
                "Primary summarizer failed (%s: %s); trying fallback",
                e.error_class.value,
                e,
            )
        return await self._secondary.summarize(text, hint)
