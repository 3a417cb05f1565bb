# src/study_kit/parsers/models.py

from dataclasses import dataclass, field

PAGE_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class ExtractedDocument:
    """Plain text pulled out of an uploaded document.

    ``text`` keeps blank lines between pages and paragraphs so the chunker
    can split on them.
    """

    title: str
    text: str
    metadata: dict = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
