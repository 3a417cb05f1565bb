from .boundaries import split_paragraphs, split_sentences, split_words, tokenize
from .chunking import Segment, split_text

__all__ = [
    "Segment",
    "split_paragraphs",
    "split_sentences",
    "split_text",
    "split_words",
    "tokenize",
]
