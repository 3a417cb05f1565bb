# src/study_kit/quiz/synthesizer.py

import hashlib
import logging
import random
import re
from collections.abc import Collection, Iterator

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from study_kit.chunking.boundaries import tokenize

from .models import OPTION_COUNT, Concept, Question
from .related_terms import DEFAULT_RELATED_TERMS, RelatedTermsProvider

logger = logging.getLogger(__name__)

MIN_CONCEPT_WORDS = 5
MIN_KEY_TERM_LENGTH = 5
BLANK = "_____"
FILLER_OPTIONS = ("None of the above", "All of the above")

_DEFINITION_CUE = re.compile(
    r"\b(is defined as|refers to|means|is known as|is called)\b", re.IGNORECASE
)
_INCLUSION_CUE = re.compile(
    r"\b(includes|consists of|contains|is composed of|such as)\b", re.IGNORECASE
)

_DEFINITION_LEAD_IN = "Which term matches this definition?"
_INCLUSION_LEAD_IN = "Which of the following is a key component named here?"
_DEFAULT_LEAD_IN = "Which of the following best completes this statement?"


class QuestionSynthesizer:
    """Turn one concept sentence into a fill-in-the-blank multiple-choice question.

    Output is a pure function of the concept: the option order is shuffled with
    a generator seeded from the stem, and the question id comes from the same
    digest.
    """

    def __init__(
        self,
        related_terms: RelatedTermsProvider = DEFAULT_RELATED_TERMS,
        stop_words: Collection[str] = ENGLISH_STOP_WORDS,
    ):
        self._related_terms = related_terms
        self._stop_words = stop_words

    def synthesize(self, concept: Concept) -> Question | None:
        sentence = concept.source_text.strip()
        words = tokenize(sentence)
        if len(words) < MIN_CONCEPT_WORDS:
            logger.debug("Rejected concept with %d words", len(words))
            return None

        key_terms = self.key_terms(words)
        if not key_terms:
            logger.debug("Rejected concept without key terms: %r", sentence[:60])
            return None

        answer = self._pick_answer(key_terms)
        stem = self._build_stem(sentence, answer)
        digest = hashlib.sha1(stem.encode("utf-8")).hexdigest()

        options = self._build_options(answer, key_terms)
        random.Random(digest).shuffle(options)

        return Question(
            id=f"q-{digest[:12]}",
            stem=stem,
            options=tuple(options),
            correct_answer=answer,
        )

    def key_terms(self, words: list[str]) -> list[str]:
        """Long content words in sentence order, first spelling kept."""
        terms: list[str] = []
        seen: set[str] = set()
        for word in words:
            folded = word.casefold()
            if (
                len(word) >= MIN_KEY_TERM_LENGTH
                and folded not in self._stop_words
                and not word.isdigit()
                and folded not in seen
            ):
                terms.append(word)
                seen.add(folded)
        return terms

    def _pick_answer(self, key_terms: list[str]) -> str:
        for term in key_terms:
            if self._related_terms.related(term):
                return term
        # max() keeps the first of equally long terms
        return max(key_terms, key=len)

    def _build_stem(self, sentence: str, answer: str) -> str:
        blanked = re.sub(
            rf"\b{re.escape(answer)}\b", BLANK, sentence, flags=re.IGNORECASE
        )
        if _DEFINITION_CUE.search(sentence):
            lead_in = _DEFINITION_LEAD_IN
        elif _INCLUSION_CUE.search(sentence):
            lead_in = _INCLUSION_LEAD_IN
        else:
            lead_in = _DEFAULT_LEAD_IN
        return f"{lead_in} {blanked}"

    def _build_options(self, answer: str, key_terms: list[str]) -> list[str]:
        options = [answer]
        seen = {answer.casefold()}

        candidates = [
            *self._related_terms.related(answer),
            *key_terms,
            *_morphological_variants(answer),
            *FILLER_OPTIONS,
        ]
        for candidate in candidates:
            if len(options) == OPTION_COUNT:
                break
            if candidate.casefold() not in seen:
                options.append(candidate)
                seen.add(candidate.casefold())
        return options


def _morphological_variants(term: str) -> Iterator[str]:
    lower = term.lower()
    if lower.endswith("ies"):
        yield term[:-3] + "y"
    elif lower.endswith("y"):
        yield term[:-1] + "ies"
    elif lower.endswith("s"):
        yield term[:-1]
    else:
        yield term + "s"
