# src/study_kit/quiz/related_terms.py

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

import yaml

BUNDLED_RELATED_TERMS = Path(__file__).parent / "data" / "related_terms.yaml"


class RelatedTermsProvider(Protocol):
    def related(self, term: str) -> tuple[str, ...]:
        """Plausible wrong answers for a term, or an empty tuple."""
        ...


class StaticRelatedTerms:
    """Read-only term table. Lookups are case-insensitive."""

    def __init__(self, table: Mapping[str, Iterable[str]]):
        self._table = MappingProxyType(
            {term.lower(): tuple(related) for term, related in table.items()}
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "StaticRelatedTerms":
        with open(path) as f:
            return cls(yaml.safe_load(f) or {})

    def related(self, term: str) -> tuple[str, ...]:
        return self._table.get(term.lower(), ())

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and term.lower() in self._table

    def __len__(self) -> int:
        return len(self._table)


# Loaded once, shared by every synthesizer that doesn't bring its own table.
DEFAULT_RELATED_TERMS = StaticRelatedTerms.from_yaml(BUNDLED_RELATED_TERMS)
