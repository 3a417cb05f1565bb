# src/study_kit/aggregation/pipeline.py

import logging

from study_kit.chunking.chunking import Segment, split_text
from study_kit.errors import DocumentTooLargeError, EmptyDocumentError
from study_kit.observability.base import MetricsHook, NoOpMetricsHook
from study_kit.summarization.base import SummarizationClient

from .aggregator import FanOutAggregator
from .config import SummaryPipelineConfig
from .outcomes import SummaryReport

logger = logging.getLogger(__name__)


class DocumentSummarizer:
    """Document text in, summary report out.

    Text that fits in one model call skips chunking and goes through the
    aggregator as a single segment, so it shares the same failure handling.
    """

    def __init__(
        self,
        client: SummarizationClient,
        config: SummaryPipelineConfig = SummaryPipelineConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._client = client
        self._config = config
        self._aggregator = FanOutAggregator(config.aggregator, metrics_hook)
        self.metrics_hook = metrics_hook

    def segment(self, text: str) -> list[Segment]:
        if not text or not text.strip():
            raise EmptyDocumentError()
        if len(text) > self._config.max_document_chars:
            raise DocumentTooLargeError(len(text), self._config.max_document_chars)

        stripped = text.strip()
        if len(stripped) <= self._client.max_input_chars:
            logger.debug(
                "Document of %d characters fits in one call; not chunking",
                len(stripped),
            )
            return [Segment(index=0, text=stripped)]

        segments = split_text(
            text,
            max_chunk_size=self._config.max_chunk_size,
            metrics_hook=self.metrics_hook,
        )
        logger.info(
            "Processing document of %d characters as %d segments",
            len(text),
            len(segments),
        )
        return segments

    async def summarize(self, text: str) -> SummaryReport:
        """Validate, segment and summarize a document.

        Raises:
            EmptyDocumentError: Text is empty or whitespace.
            DocumentTooLargeError: Text exceeds `max_document_chars`.
            NoSummariesProduced: Every segment failed or was skipped.
            SummarizationTimeout: The fan-out took too long.
        """
        return await self._aggregator.aggregate(self.segment(text), self._client)
