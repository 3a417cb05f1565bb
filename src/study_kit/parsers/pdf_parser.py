# src/study_kit/parsers/pdf_parser.py

import logging
from pathlib import Path
from typing import Any, BinaryIO, cast

import pdfplumber

from .base import UNTITLED, DocumentParser
from .models import PAGE_SEPARATOR, ExtractedDocument

logger = logging.getLogger(__name__)


class PdfParser(DocumentParser):
    """
    Deterministic PDF text extraction.
    - Uses page order
    - Pages without a text layer are skipped
    """

    suffixes = (".pdf",)

    def parse(self, source: str | Path | BinaryIO) -> ExtractedDocument:
        pages: list[str] = []

        # pdfplumber.open accepts path-like or buffer objects; cast to Any
        with pdfplumber.open(cast(Any, source)) as pdf:
            page_count = len(pdf.pages)
            for page_number, page in enumerate(pdf.pages, start=1):
                text = page.extract_text() or ""
                lines = [line.strip() for line in text.splitlines() if line.strip()]
                if not lines:
                    logger.debug("No text on page %d", page_number)
                    continue
                pages.append("\n".join(lines))

        return ExtractedDocument(
            title=self._extract_title(pages),
            text=PAGE_SEPARATOR.join(pages),
            metadata={"source_type": "pdf", "pages": page_count},
        )

    def _extract_title(self, pages: list[str]) -> str:
        """
        Simple heuristic:
        - First line of the first page with text
        """
        if not pages:
            return UNTITLED
        return pages[0].splitlines()[0]
