# src/study_kit/parsers/docx_parser.py

from pathlib import Path
from typing import BinaryIO

import docx

from .base import UNTITLED, DocumentParser
from .models import PAGE_SEPARATOR, ExtractedDocument


class DocxParser(DocumentParser):
    """Word documents, body paragraphs in order. Tables are not read."""

    suffixes = (".docx",)

    def parse(self, source: str | Path | BinaryIO) -> ExtractedDocument:
        document = docx.Document(source)
        paragraphs = [p.text.strip() for p in document.paragraphs if p.text.strip()]

        title = document.core_properties.title or (
            paragraphs[0] if paragraphs else UNTITLED
        )
        return ExtractedDocument(
            title=title,
            text=PAGE_SEPARATOR.join(paragraphs),
            metadata={"source_type": "docx", "paragraphs": len(paragraphs)},
        )
