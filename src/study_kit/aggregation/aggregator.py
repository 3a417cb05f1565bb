# src/study_kit/aggregation/aggregator.py

import asyncio
import logging
from collections.abc import Sequence
from time import monotonic

from study_kit.chunking.chunking import Segment
from study_kit.errors import (
    EmptyDocumentError,
    ErrorClass,
    NoSummariesProduced,
    OversizeForModel,
    SummarizationError,
    SummarizationTimeout,
)
from study_kit.observability import names
from study_kit.observability.base import MetricsHook, NoOpMetricsHook
from study_kit.summarization.base import SummarizationClient, target_length_hint

from .config import AggregatorConfig
from .outcomes import Failed, SegmentOutcome, Skipped, Summarized, SummaryReport

logger = logging.getLogger(__name__)


class FanOutAggregator:
    """Summarize segments concurrently and merge the results.

    Every segment ends with exactly one outcome. A failing segment never
    affects its siblings; the report is always assembled in index order,
    whatever order the calls completed in. No retries happen here.
    """

    def __init__(
        self,
        config: AggregatorConfig = AggregatorConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if config.max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._config = config
        self.metrics_hook = metrics_hook

    async def aggregate(
        self,
        segments: Sequence[Segment],
        client: SummarizationClient,
    ) -> SummaryReport:
        """Summarize every segment and build the report.

        Raises:
            EmptyDocumentError: No segments were given.
            NoSummariesProduced: Not a single segment was summarized. The
                partial report is attached to the exception.
            SummarizationTimeout: The fan-out exceeded `config.timeout`.
                In-flight calls are cancelled and nothing is returned.
        """
        if not segments:
            raise EmptyDocumentError("No segments to summarize")

        start = monotonic()
        outcomes: dict[int, SegmentOutcome] = {}
        pending: list[Segment] = []

        for segment in segments:
            if segment.char_length > client.max_input_chars:
                logger.warning(
                    "Skipping segment %d: %d characters exceeds model ceiling of %d",
                    segment.index,
                    segment.char_length,
                    client.max_input_chars,
                )
                self._store(
                    outcomes, Skipped(segment.index, ErrorClass.OVERSIZE_FOR_MODEL)
                )
            else:
                pending.append(segment)

        logger.info(
            "Summarizing %d segments (%d skipped) with max_concurrency=%d",
            len(pending),
            len(segments) - len(pending),
            self._config.max_concurrency,
        )

        semaphore = asyncio.Semaphore(self._config.max_concurrency)
        try:
            results = await asyncio.wait_for(
                asyncio.gather(
                    *(self._summarize_one(s, client, semaphore) for s in pending)
                ),
                timeout=self._config.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(
                "Summarization of %d segments timed out after %ss",
                len(pending),
                self._config.timeout,
            )
            raise SummarizationTimeout(self._config.timeout or 0.0) from None

        for outcome in results:
            self._store(outcomes, outcome)

        report = SummaryReport.from_outcomes(outcomes.values())

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.AGGREGATION_DURATION, elapsed_ms)
        for label, count in (
            ("summarized", report.success_count),
            ("failed", report.failed_count),
            ("skipped", len(report.skipped_indices)),
        ):
            if count:
                self.metrics_hook.increment(
                    names.AGGREGATION_SEGMENTS_TOTAL, count, labels={"outcome": label}
                )

        logger.info(
            "Summarized %d/%d segments (failed=%s, skipped=%s) in %.0fms",
            report.success_count,
            report.total_segments,
            list(report.failed_indices),
            list(report.skipped_indices),
            elapsed_ms,
        )

        if report.success_count == 0:
            raise NoSummariesProduced(report)
        return report

    async def _summarize_one(
        self,
        segment: Segment,
        client: SummarizationClient,
        semaphore: asyncio.Semaphore,
    ) -> SegmentOutcome:
        hint = target_length_hint(
            segment.text,
            floor=self._config.min_summary_words,
            ceiling=self._config.max_summary_words,
        )
        async with semaphore:
            logger.debug("Summarizing segment %d", segment.index)
            try:
                summary = await client.summarize(segment.text, hint)
            except OversizeForModel as e:
                logger.warning("Segment %d rejected as oversize: %s", segment.index, e)
                return Skipped(segment.index, ErrorClass.OVERSIZE_FOR_MODEL)
            except SummarizationError as e:
                logger.warning(
                    "Segment %d failed (%s): %s",
                    segment.index,
                    e.error_class.value,
                    e,
                )
                return Failed(segment.index, e.error_class, str(e))
            except Exception as e:
                logger.exception(
                    "Unexpected error summarizing segment %d", segment.index
                )
                return Failed(segment.index, ErrorClass.UNKNOWN, str(e))

        return Summarized(segment.index, summary)

    @staticmethod
    def _store(outcomes: dict[int, SegmentOutcome], outcome: SegmentOutcome) -> None:
        if outcome.index in outcomes:
            raise RuntimeError(f"Outcome for segment {outcome.index} recorded twice")
        outcomes[outcome.index] = outcome
