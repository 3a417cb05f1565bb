# src/study_kit/chunking/boundaries.py

"""Text boundary helpers shared by the chunker and the quiz pipeline.

Every splitter strips surrounding whitespace and drops empty pieces, so no
non-whitespace character is ever lost or duplicated.
"""

import re

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
_WORD = re.compile(r"\w+(?:['-]\w+)*")


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines."""
    return [p.strip() for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def split_sentences(text: str) -> list[str]:
    """Split after `.`, `!` or `?` followed by whitespace.

    Terminal punctuation stays attached to its sentence.
    """
    return [s.strip() for s in _SENTENCE_BREAK.split(text) if s.strip()]


def split_words(text: str) -> list[str]:
    """Whitespace-delimited words, punctuation included."""
    return text.split()


def tokenize(text: str) -> list[str]:
    """Alphanumeric word tokens (punctuation removed)."""
    return _WORD.findall(text)
