from .base import DocumentParser
from .docx_parser import DocxParser
from .models import ExtractedDocument
from .pdf_parser import PdfParser
from .registry import parser_for, supported_suffixes

__all__ = [
    "DocumentParser",
    "DocxParser",
    "ExtractedDocument",
    "PdfParser",
    "parser_for",
    "supported_suffixes",
]
