# src/study_kit/llms/__init__.py

"""Chat-completion adapters (OpenAI, Anthropic).

Two callers use them: `LLMSummarizationClient` when a chat model is the
summarization backend, and `QuestionRefiner` for rewording quiz questions.
Provider exceptions are normalized to `study_kit.errors.LLMError` subclasses,
with rate-limit quota parsed from the response headers.

Example:
    >>> from study_kit.llms import create_llm_client, LLMConfig, Message
    >>>
    >>> client = create_llm_client(LLMConfig(provider="openai", model="gpt-4o-mini"))
    >>> response = await client.complete(messages=[Message.user("Summarize: ...")])
    >>> response.truncated
    False
"""

from .base import FinishReason, LLMClient, LLMResponse, Message, Role, Usage
from .config import LLMConfig
from .factory import create_llm_client

__all__ = [
    "FinishReason",
    "LLMClient",
    "LLMConfig",
    "LLMResponse",
    "Message",
    "Role",
    "Usage",
    "create_llm_client",
]
