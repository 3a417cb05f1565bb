import logging
from dataclasses import dataclass
from time import monotonic

from study_kit.observability import names
from study_kit.observability.base import MetricsHook, NoOpMetricsHook

from .boundaries import split_paragraphs, split_sentences, split_words

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"
INLINE_SEPARATOR = " "


@dataclass(frozen=True)
class Segment:
    """A model-safe slice of a document.

    `hard_split` is set when the segment holds part of a token that was cut at
    its midpoint because it exceeded the chunk size on its own. That is the
    only split that ignores word boundaries; callers that care about fidelity
    should check it.
    """

    index: int
    text: str
    hard_split: bool = False

    @property
    def char_length(self) -> int:
        return len(self.text)


class _Packer:
    """Greedy packer that flushes a segment whenever the next piece won't fit."""

    def __init__(self, max_chunk_size: int) -> None:
        self._max = max_chunk_size
        self._buffer = ""
        self._hard_split = False
        self.segments: list[Segment] = []

    def add(self, piece: str, separator: str, hard_split: bool = False) -> None:
        if not self._buffer:
            self._buffer = piece
        elif len(self._buffer) + len(separator) + len(piece) > self._max:
            self.flush()
            self._buffer = piece
        else:
            self._buffer += separator + piece
        self._hard_split = self._hard_split or hard_split

    def flush(self) -> None:
        if self._buffer:
            self.segments.append(
                Segment(
                    index=len(self.segments),
                    text=self._buffer,
                    hard_split=self._hard_split,
                )
            )
        self._buffer = ""
        self._hard_split = False


def _halve(token: str, max_chunk_size: int) -> list[str]:
    """Cut a token at its midpoint until every piece fits."""
    if len(token) <= max_chunk_size:
        return [token]
    mid = len(token) // 2
    return _halve(token[:mid], max_chunk_size) + _halve(token[mid:], max_chunk_size)


def split_text(
    text: str,
    *,
    max_chunk_size: int,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Segment]:
    """Split text into ordered segments of at most `max_chunk_size` characters.

    Boundaries are tried in order: paragraphs (blank lines), sentences, words,
    and finally a midpoint cut of any single token longer than the limit.
    Each finer level is only used for a unit that doesn't fit at the level
    above. Whitespace-only input yields no segments.
    """
    start = monotonic()
    if max_chunk_size <= 0:
        raise ValueError("max_chunk_size must be > 0")

    packer = _Packer(max_chunk_size)
    hard_splits = 0

    for paragraph in split_paragraphs(text):
        if len(paragraph) <= max_chunk_size:
            packer.add(paragraph, PARAGRAPH_SEPARATOR)
            continue

        separator = PARAGRAPH_SEPARATOR
        for sentence in split_sentences(paragraph):
            if len(sentence) <= max_chunk_size:
                packer.add(sentence, separator)
                separator = INLINE_SEPARATOR
                continue

            for word in split_words(sentence):
                if len(word) <= max_chunk_size:
                    packer.add(word, separator)
                else:
                    pieces = _halve(word, max_chunk_size)
                    hard_splits += 1
                    logger.warning(
                        "Token of %d characters exceeds max_chunk_size=%d; "
                        "hard-splitting into %d pieces",
                        len(word),
                        max_chunk_size,
                        len(pieces),
                    )
                    for piece in pieces:
                        packer.add(piece, separator, hard_split=True)
                        separator = INLINE_SEPARATOR
                separator = INLINE_SEPARATOR

    packer.flush()
    segments = packer.segments

    logger.debug(
        "Split %d characters into %d segments (max_chunk_size=%d)",
        len(text),
        len(segments),
        max_chunk_size,
    )
    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms)
    metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(segments))
    if hard_splits:
        metrics_hook.increment(names.CHUNKING_HARD_SPLITS, hard_splits)
    return segments
