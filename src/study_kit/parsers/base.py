# src/study_kit/parsers/base.py

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

from .models import ExtractedDocument

UNTITLED = "Untitled Document"


class DocumentParser(ABC):
    suffixes: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, source: str | Path | BinaryIO) -> ExtractedDocument:
        """
        Extract the text of a document.

        Requirements:
        - Deterministic output for same input
        - Reading order preserved
        - Blank line between pages or paragraphs
        """
        raise NotImplementedError
