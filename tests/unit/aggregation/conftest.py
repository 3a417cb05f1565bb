import asyncio
from collections.abc import Callable

import pytest

from study_kit.chunking.chunking import Segment
from study_kit.observability.base import NoOpMetricsHook
from study_kit.summarization.base import LengthHint


class FakeSummarizer:
    """In-memory summarization client keyed by segment text."""

    def __init__(
        self,
        *,
        max_input_chars: int = 4000,
        failures: dict[str, Exception] | None = None,
        delays: dict[str, float] | None = None,
        respond: Callable[[str], str] = lambda text: f"summary of {text}",
    ) -> None:
        self.max_input_chars = max_input_chars
        self.metrics_hook = NoOpMetricsHook()
        self.failures = failures or {}
        self.delays = delays or {}
        self.respond = respond
        self.calls: list[tuple[str, LengthHint]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def summarize(self, text: str, hint: LengthHint) -> str:
        self.calls.append((text, hint))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(text, 0))
            if text in self.failures:
                raise self.failures[text]
            return self.respond(text)
        finally:
            self.in_flight -= 1


@pytest.fixture
def segments() -> list[Segment]:
    return [Segment(index=i, text=f"segment {i}") for i in range(5)]
