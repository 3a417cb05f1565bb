# src/study_kit/parsers/registry.py

from pathlib import PurePath

from study_kit.errors import UnsupportedDocumentError

from .base import DocumentParser
from .docx_parser import DocxParser
from .pdf_parser import PdfParser

_PARSERS: tuple[DocumentParser, ...] = (PdfParser(), DocxParser())


def supported_suffixes() -> tuple[str, ...]:
    return tuple(suffix for parser in _PARSERS for suffix in parser.suffixes)


def parser_for(filename: str) -> DocumentParser:
    """Pick a parser from the file extension.

    Raises:
        UnsupportedDocumentError: If no parser handles the extension.
    """
    suffix = PurePath(filename).suffix.lower()
    for parser in _PARSERS:
        if suffix in parser.suffixes:
            return parser
    raise UnsupportedDocumentError(filename)
