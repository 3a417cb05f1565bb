from unittest.mock import AsyncMock, MagicMock

import pytest

from study_kit.errors import OversizeForModel, RateLimited, TransientError
from study_kit.summarization.base import LengthHint
from study_kit.summarization.fallback import FallbackSummarizationClient

HINT = LengthHint(max_length=40, min_length=30)


def _client(max_input_chars: int = 4000) -> MagicMock:
    client = MagicMock()
    client.max_input_chars = max_input_chars
    client.summarize = AsyncMock(return_value="summary")
    return client


class TestFallbackSummarizationClient:
    @pytest.mark.asyncio
    async def test_uses_primary_when_it_succeeds(self) -> None:
        primary, secondary = _client(), _client()

        result = await FallbackSummarizationClient(primary, secondary).summarize(
            "text", HINT
        )

        assert result == "summary"
        secondary.summarize.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_on_rate_limit(self) -> None:
        primary, secondary = _client(), _client()
        primary.summarize.side_effect = RateLimited("quota")
        secondary.summarize.return_value = "from secondary"

        result = await FallbackSummarizationClient(primary, secondary).summarize(
            "text", HINT
        )

        assert result == "from secondary"

    @pytest.mark.asyncio
    async def test_does_not_fall_back_on_oversize(self) -> None:
        primary, secondary = _client(), _client()
        primary.summarize.side_effect = OversizeForModel(10, 5)

        with pytest.raises(OversizeForModel):
            await FallbackSummarizationClient(primary, secondary).summarize(
                "text", HINT
            )

        secondary.summarize.assert_not_called()

    @pytest.mark.asyncio
    async def test_secondary_failure_propagates(self) -> None:
        primary, secondary = _client(), _client()
        primary.summarize.side_effect = TransientError("down")
        secondary.summarize.side_effect = TransientError("also down")

        with pytest.raises(TransientError, match="also down"):
            await FallbackSummarizationClient(primary, secondary).summarize(
                "text", HINT
            )

    def test_ceiling_is_the_smaller_of_both(self) -> None:
        client = FallbackSummarizationClient(_client(4000), _client(1024))

        assert client.max_input_chars == 1024
