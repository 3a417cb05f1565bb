# src/study_kit/llms/base.py

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol

from study_kit.observability.base import MetricsHook

FinishReason = Literal["stop", "length", "error"]


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """One chat turn. Provider-agnostic."""

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)


@dataclass(frozen=True)
class Usage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class LLMResponse:
    """What every adapter returns. SDK response objects stay inside the adapter."""

    content: str | None
    finish_reason: FinishReason
    usage: Usage
    latency_ms: float

    @property
    def truncated(self) -> bool:
        """The reply hit the token budget and may end mid-sentence."""
        return self.finish_reason == "length"


class LLMClient(Protocol):
    """Chat-completion capability used for summaries and quiz refinement.

    Adapters are stateless and retry only transport failures (network,
    timeouts, 5xx, 429). Unusable output is returned as-is; deciding what to
    do with it belongs to the caller.
    """

    metrics_hook: MetricsHook

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Run one completion over the full message list.

        Raises:
            LLMRateLimitError: Quota exhausted after retries.
            LLMTransportError: Network, timeout or 5xx after retries.
            LLMError: Anything else the provider rejected.
        """
        ...
