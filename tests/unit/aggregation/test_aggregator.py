import asyncio

import pytest

from study_kit.aggregation.aggregator import FanOutAggregator
from study_kit.aggregation.config import AggregatorConfig
from study_kit.aggregation.outcomes import Failed, Skipped, Summarized
from study_kit.chunking.chunking import Segment, split_text
from study_kit.errors import (
    EmptyDocumentError,
    ErrorClass,
    NoSummariesProduced,
    OversizeForModel,
    RateLimited,
    SummarizationTimeout,
    TransientError,
    UnusableResponse,
)
from study_kit.observability import InMemoryMetricsHook, names
from study_kit.summarization.base import LengthHint

from .conftest import FakeSummarizer


def _paragraph(number: int, length: int) -> str:
    return (f"Part{number:02d} " + "abcde " * length)[: length - 1] + "."


class TestFanOutAggregator:
    @pytest.mark.asyncio
    async def test_combines_summaries_in_index_order(
        self, segments: list[Segment]
    ) -> None:
        report = await FanOutAggregator().aggregate(segments, FakeSummarizer())

        assert report.combined_text == "\n\n".join(
            f"summary of segment {i}" for i in range(5)
        )
        assert report.total_segments == 5
        assert report.success_count == 5
        assert report.failed_count == 0
        assert report.skipped_indices == ()

    @pytest.mark.asyncio
    async def test_order_does_not_depend_on_completion_order(
        self, segments: list[Segment]
    ) -> None:
        """Earlier segments finishing last still read first."""
        client = FakeSummarizer(
            delays={"segment 0": 0.05, "segment 1": 0.03, "segment 2": 0.01}
        )

        report = await FanOutAggregator().aggregate(segments, client)

        assert report.combined_text.split("\n\n") == [
            f"summary of segment {i}" for i in range(5)
        ]

    @pytest.mark.asyncio
    async def test_failure_on_one_segment_is_isolated(
        self, segments: list[Segment]
    ) -> None:
        client = FakeSummarizer(failures={"segment 2": TransientError("boom")})

        report = await FanOutAggregator().aggregate(segments, client)

        assert len(report.outcomes) == 5
        assert [type(o) for o in report.outcomes] == [
            Summarized,
            Summarized,
            Failed,
            Summarized,
            Summarized,
        ]
        assert report.outcomes[2] == Failed(2, ErrorClass.TRANSIENT, "boom")
        assert report.failed_indices == (2,)
        assert report.success_count == 4

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_recorded_as_unknown(
        self, segments: list[Segment]
    ) -> None:
        client = FakeSummarizer(failures={"segment 0": RuntimeError("surprise")})

        report = await FanOutAggregator().aggregate(segments, client)

        assert report.outcomes[0] == Failed(0, ErrorClass.UNKNOWN, "surprise")
        assert report.success_count == 4

    @pytest.mark.asyncio
    async def test_rate_limited_failures_are_reported_separately(
        self, segments: list[Segment]
    ) -> None:
        client = FakeSummarizer(
            failures={
                "segment 1": RateLimited("slow down"),
                "segment 3": UnusableResponse("empty"),
            }
        )

        report = await FanOutAggregator().aggregate(segments, client)

        assert report.failed_indices == (1, 3)
        assert report.rate_limited_indices == (1,)
        assert report.rate_limited

    @pytest.mark.asyncio
    async def test_oversize_segments_are_skipped_without_a_call(self) -> None:
        segments = [
            Segment(index=0, text="short"),
            Segment(index=1, text="x" * 50),
            Segment(index=2, text="also short"),
        ]
        client = FakeSummarizer(max_input_chars=20)

        report = await FanOutAggregator().aggregate(segments, client)

        assert [text for text, _ in client.calls] == ["short", "also short"]
        assert report.outcomes[1] == Skipped(1, ErrorClass.OVERSIZE_FOR_MODEL)
        assert report.skipped_indices == (1,)
        assert report.failed_count == 0
        assert report.combined_text == "summary of short\n\nsummary of also short"

    @pytest.mark.asyncio
    async def test_oversize_raised_by_client_counts_as_skipped(
        self, segments: list[Segment]
    ) -> None:
        client = FakeSummarizer(failures={"segment 4": OversizeForModel(9, 5)})

        report = await FanOutAggregator().aggregate(segments, client)

        assert report.skipped_indices == (4,)
        assert report.failed_count == 0

    @pytest.mark.asyncio
    async def test_no_successes_raises_with_report(
        self, segments: list[Segment]
    ) -> None:
        client = FakeSummarizer(
            failures={s.text: RateLimited("quota") for s in segments}
        )

        with pytest.raises(NoSummariesProduced) as exc_info:
            await FanOutAggregator().aggregate(segments, client)

        report = exc_info.value.report
        assert report.failed_count == 5
        assert report.combined_text == ""
        assert exc_info.value.rate_limited

    @pytest.mark.asyncio
    async def test_all_skipped_raises(self) -> None:
        segments = [Segment(index=0, text="x" * 10)]

        with pytest.raises(NoSummariesProduced):
            await FanOutAggregator().aggregate(
                segments, FakeSummarizer(max_input_chars=5)
            )

    @pytest.mark.asyncio
    async def test_empty_segment_list_raises(self) -> None:
        with pytest.raises(EmptyDocumentError):
            await FanOutAggregator().aggregate([], FakeSummarizer())

    @pytest.mark.asyncio
    async def test_timeout_abandons_the_whole_request(
        self, segments: list[Segment]
    ) -> None:
        client = FakeSummarizer(delays={"segment 3": 5.0})
        aggregator = FanOutAggregator(AggregatorConfig(timeout=0.05))

        with pytest.raises(SummarizationTimeout):
            await aggregator.aggregate(segments, client)

        await asyncio.sleep(0)
        assert client.in_flight == 0

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self) -> None:
        segments = [Segment(index=i, text=f"s{i}") for i in range(10)]
        client = FakeSummarizer(delays={f"s{i}": 0.01 for i in range(10)})
        aggregator = FanOutAggregator(AggregatorConfig(max_concurrency=3))

        report = await aggregator.aggregate(segments, client)

        assert report.success_count == 10
        assert 1 < client.max_in_flight <= 3

    @pytest.mark.asyncio
    async def test_length_hint_follows_segment_size(self) -> None:
        text = " ".join(["word"] * 300)
        client = FakeSummarizer()

        await FanOutAggregator().aggregate([Segment(index=0, text=text)], client)

        assert client.calls[0][1] == LengthHint(max_length=100, min_length=75)

    @pytest.mark.asyncio
    async def test_duplicate_indices_are_rejected(self) -> None:
        segments = [Segment(index=0, text="a"), Segment(index=0, text="b")]

        with pytest.raises(RuntimeError, match="recorded twice"):
            await FanOutAggregator().aggregate(segments, FakeSummarizer())

    @pytest.mark.asyncio
    async def test_records_outcome_metrics(self, segments: list[Segment]) -> None:
        hook = InMemoryMetricsHook()
        client = FakeSummarizer(failures={"segment 0": TransientError("x")})

        await FanOutAggregator(metrics_hook=hook).aggregate(segments, client)

        assert hook.count(names.AGGREGATION_SEGMENTS_TOTAL, outcome="summarized") == 4
        assert hook.count(names.AGGREGATION_SEGMENTS_TOTAL, outcome="failed") == 1

    def test_rejects_non_positive_concurrency(self) -> None:
        with pytest.raises(ValueError, match="max_concurrency"):
            FanOutAggregator(AggregatorConfig(max_concurrency=0))


@pytest.mark.asyncio
async def test_end_to_end_partial_failure() -> None:
    """6500 characters, 4 segments, segment 2 times out."""
    paragraphs = [_paragraph(i, 498) for i in range(12)] + [_paragraph(12, 500)]
    text = "\n\n".join(paragraphs)
    assert len(text) == 6500
    segments = split_text(text, max_chunk_size=2000)
    assert len(segments) == 4

    position = {s.text: s.index for s in segments}
    client = FakeSummarizer(
        failures={segments[2].text: TransientError("Request timed out")},
        respond=lambda t: f"Summary of part {position[t]}.",
    )

    report = await FanOutAggregator().aggregate(segments, client)

    assert report.success_count == 3
    assert report.failed_count == 1
    assert report.skipped_indices == ()
    assert report.combined_text.split("\n\n") == [
        "Summary of part 0.",
        "Summary of part 1.",
        "Summary of part 3.",
    ]
