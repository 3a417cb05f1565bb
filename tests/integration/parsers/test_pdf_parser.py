from pathlib import Path

from study_kit.parsers import ExtractedDocument, PdfParser


def test_extracts_lines_in_order(parsed_sample: ExtractedDocument) -> None:
    assert parsed_sample.text.splitlines() == [
        "CELL BIOLOGY NOTES",
        "Cells are the basic unit of life.",
        "The nucleus stores genetic material.",
    ]


def test_title_is_first_line(parsed_sample: ExtractedDocument) -> None:
    assert parsed_sample.title == "CELL BIOLOGY NOTES"


def test_metadata(parsed_sample: ExtractedDocument) -> None:
    assert parsed_sample.metadata == {"source_type": "pdf", "pages": 1}


def test_pages_separated_by_blank_line(parsed_multipage: ExtractedDocument) -> None:
    assert parsed_multipage.text == (
        "PHOTOSYNTHESIS\nThis content is on page one."
        "\n\n"
        "This content is on page three."
    )
    assert parsed_multipage.metadata["pages"] == 3


def test_accepts_a_path(document_dir: Path) -> None:
    parsed = PdfParser().parse(document_dir / "sample.pdf")

    assert "nucleus" in parsed.text


def test_blank_pdf_is_empty(document_dir: Path) -> None:
    parsed = PdfParser().parse(document_dir / "blank.pdf")

    assert parsed.is_empty
    assert parsed.title == "Untitled Document"


def test_is_deterministic(document_dir: Path) -> None:
    parser = PdfParser()

    assert parser.parse(document_dir / "multipage.pdf") == parser.parse(
        document_dir / "multipage.pdf"
    )
