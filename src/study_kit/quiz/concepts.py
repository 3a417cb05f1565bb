# src/study_kit/quiz/concepts.py

import logging

from sklearn.feature_extraction.text import TfidfVectorizer

from study_kit.chunking.boundaries import split_sentences, tokenize

from .config import DEFAULT_IMPORTANCE_THRESHOLD
from .models import Concept

logger = logging.getLogger(__name__)


class ConceptExtractor:
    """Rank the sentences of a text by how much quizzable content they carry.

    Term weights are TF-IDF over the sentences of the text being processed,
    without length normalisation. Only the part of a weight above the idf
    floor counts, so a term found in every sentence scores 0 and a lone
    sentence has nothing to stand out against. A sentence is scored by its
    most distinctive term and dropped unless that score clears ``threshold``.
    """

    def __init__(self, threshold: float = DEFAULT_IMPORTANCE_THRESHOLD):
        self.threshold = threshold

    def extract(self, text: str) -> list[Concept]:
        sentences = [s for s in split_sentences(text) if tokenize(s)]
        if not sentences:
            return []

        vectorizer = TfidfVectorizer(stop_words="english", norm=None)
        try:
            matrix = vectorizer.fit_transform(sentences)
        except ValueError:
            # Every token was a stop word
            logger.debug("No content terms in %d sentences", len(sentences))
            return []

        # tf * idf becomes tf * (idf - 1); idf_ is never below 1
        matrix.data *= 1.0 - 1.0 / vectorizer.idf_[matrix.indices]
        best = matrix.max(axis=1).toarray().ravel()
        concepts = [
            Concept(source_text=sentence, importance_score=float(score), position=i)
            for i, (sentence, score) in enumerate(zip(sentences, best))
            if score > self.threshold
        ]
        # sorted() is stable, so ties keep document order
        concepts = sorted(concepts, key=lambda c: c.importance_score, reverse=True)

        logger.debug(
            "Extracted %d of %d sentences as concepts", len(concepts), len(sentences)
        )
        return concepts
