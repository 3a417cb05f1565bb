import pytest
from fastapi.testclient import TestClient

from study_kit.api import Settings, create_app
from study_kit.errors import SummarizationError
from study_kit.observability.base import NoOpMetricsHook
from study_kit.summarization.base import LengthHint


class StubSummarizer:
    """Summarizes by prefixing; raises for segments that contain a marker."""

    def __init__(
        self, max_input_chars: int = 4000, failures: dict[str, SummarizationError] | None = None
    ) -> None:
        self.max_input_chars = max_input_chars
        self.metrics_hook = NoOpMetricsHook()
        self.failures = failures or {}
        self.calls: list[str] = []

    async def summarize(self, text: str, hint: LengthHint) -> str:
        self.calls.append(text)
        for marker, error in self.failures.items():
            if marker in text:
                raise error
        return f"Summary of {text.split()[0]}"


@pytest.fixture
def summarizer() -> StubSummarizer:
    return StubSummarizer()


@pytest.fixture
def client(summarizer: StubSummarizer) -> TestClient:
    return TestClient(create_app(Settings(), summarization_client=summarizer))
