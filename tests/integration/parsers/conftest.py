from pathlib import Path

import docx
import pytest
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas

from study_kit.parsers import DocxParser, ExtractedDocument, PdfParser


def _write_pages(path: Path, pages: list[list[str]]) -> None:
    """Creates a deterministic PDF, one list of lines per page."""
    c = canvas.Canvas(str(path), pagesize=LETTER)
    width, height = LETTER

    for lines in pages:
        if lines:
            text = c.beginText(40, height - 50)
            for line in lines:
                text.textLine(line)
            c.drawText(text)
        c.showPage()

    c.save()


def _create_sample_pdf(path: Path) -> None:
    _write_pages(
        path,
        [
            [
                "CELL BIOLOGY NOTES",
                "Cells are the basic unit of life.",
                "The nucleus stores genetic material.",
            ]
        ],
    )


def _create_multipage_pdf(path: Path) -> None:
    _write_pages(
        path,
        [
            ["PHOTOSYNTHESIS", "This content is on page one."],
            [],  # no text layer
            ["This content is on page three."],
        ],
    )


def _create_sample_docx(path: Path) -> None:
    document = docx.Document()
    document.core_properties.title = "Revision Guide"
    document.add_heading("The Water Cycle", level=1)
    document.add_paragraph("Water evaporates from oceans and lakes.")
    document.add_paragraph("")
    document.add_paragraph("Clouds form when water vapour condenses.")
    document.save(str(path))


@pytest.fixture(scope="module")
def document_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Create all test documents once per module."""
    dir_path: Path = tmp_path_factory.mktemp("documents")

    _create_sample_pdf(dir_path / "sample.pdf")
    _create_multipage_pdf(dir_path / "multipage.pdf")
    _write_pages(dir_path / "blank.pdf", [[]])
    _create_sample_docx(dir_path / "sample.docx")
    docx.Document().save(str(dir_path / "blank.docx"))

    return dir_path


@pytest.fixture(scope="module")
def parsed_sample(document_dir: Path) -> ExtractedDocument:
    """Parse sample PDF once, reuse across tests."""
    with open(document_dir / "sample.pdf", "rb") as f:
        return PdfParser().parse(f)


@pytest.fixture(scope="module")
def parsed_multipage(document_dir: Path) -> ExtractedDocument:
    with open(document_dir / "multipage.pdf", "rb") as f:
        return PdfParser().parse(f)


@pytest.fixture(scope="module")
def parsed_docx(document_dir: Path) -> ExtractedDocument:
    with open(document_dir / "sample.docx", "rb") as f:
        return DocxParser().parse(f)
