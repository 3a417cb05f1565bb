import pytest

from study_kit.aggregation.config import AggregatorConfig, SummaryPipelineConfig
from study_kit.aggregation.pipeline import DocumentSummarizer
from study_kit.errors import DocumentTooLargeError, EmptyDocumentError

from .conftest import FakeSummarizer


def _paragraph(word: str, length: int) -> str:
    return (f"{word} " + "abcde " * length)[: length - 1] + "."


class TestDocumentSummarizer:
    def test_short_document_is_one_segment(self) -> None:
        summarizer = DocumentSummarizer(FakeSummarizer(max_input_chars=4000))

        segments = summarizer.segment("  \n  A short note about cells.\n\n")

        assert len(segments) == 1
        assert segments[0].text == "A short note about cells."

    def test_short_path_ignores_chunk_size(self) -> None:
        # Fits the model, so it is not split even though it exceeds the chunk target
        config = SummaryPipelineConfig(max_chunk_size=100)
        text = "\n\n".join(_paragraph(w, 90) for w in ("One", "Two", "Three"))

        segments = DocumentSummarizer(FakeSummarizer(), config).segment(text)

        assert len(segments) == 1

    def test_long_document_is_chunked(self) -> None:
        config = SummaryPipelineConfig(max_chunk_size=100)
        client = FakeSummarizer(max_input_chars=150)
        text = "\n\n".join(_paragraph(w, 90) for w in ("One", "Two", "Three"))

        segments = DocumentSummarizer(client, config).segment(text)

        assert [s.index for s in segments] == [0, 1, 2]
        assert all(s.char_length <= 100 for s in segments)

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
    def test_empty_document(self, text: str) -> None:
        with pytest.raises(EmptyDocumentError):
            DocumentSummarizer(FakeSummarizer()).segment(text)

    def test_document_too_large(self) -> None:
        config = SummaryPipelineConfig(max_document_chars=1000)

        with pytest.raises(DocumentTooLargeError) as exc_info:
            DocumentSummarizer(FakeSummarizer(), config).segment("x" * 1001)

        assert exc_info.value.limit == 1000
        assert exc_info.value.length == 1001

    @pytest.mark.asyncio
    async def test_summarize_short_document_issues_one_call(self) -> None:
        client = FakeSummarizer()

        report = await DocumentSummarizer(client).summarize("Mitochondria make ATP.")

        assert len(client.calls) == 1
        assert report.total_segments == 1
        assert report.combined_text == "summary of Mitochondria make ATP."

    @pytest.mark.asyncio
    async def test_summarize_long_document(self) -> None:
        config = SummaryPipelineConfig(
            max_chunk_size=100, aggregator=AggregatorConfig(max_concurrency=2)
        )
        client = FakeSummarizer(max_input_chars=150, respond=lambda t: t.split()[0])
        text = "\n\n".join(_paragraph(w, 90) for w in ("One", "Two", "Three"))

        report = await DocumentSummarizer(client, config).summarize(text)

        assert report.combined_text == "One\n\nTwo\n\nThree"
        assert report.success_count == 3
        assert client.max_in_flight <= 2
