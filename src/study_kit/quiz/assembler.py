# src/study_kit/quiz/assembler.py

import asyncio
import logging
from time import monotonic

from study_kit.errors import (
    DocumentTooLargeError,
    EmptyDocumentError,
    InsufficientContent,
)
from study_kit.observability import names
from study_kit.observability.base import MetricsHook, NoOpMetricsHook

from .concepts import ConceptExtractor
from .config import DEFAULT_MAX_DOCUMENT_CHARS, DEFAULT_TARGET_COUNT
from .models import Question, QuizSet
from .refiner import QuestionRefiner
from .synthesizer import QuestionSynthesizer

logger = logging.getLogger(__name__)


class QuizAssembler:
    """Build a de-duplicated question set from a text.

    A short set is a valid result; it is never padded.
    """

    def __init__(
        self,
        extractor: ConceptExtractor | None = None,
        synthesizer: QuestionSynthesizer | None = None,
        refiner: QuestionRefiner | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        max_document_chars: int = DEFAULT_MAX_DOCUMENT_CHARS,
    ):
        self.extractor = extractor or ConceptExtractor()
        self.synthesizer = synthesizer or QuestionSynthesizer()
        self.refiner = refiner
        self.metrics_hook = metrics_hook
        self.max_document_chars = max_document_chars

    def assemble(self, text: str, target_count: int = DEFAULT_TARGET_COUNT) -> QuizSet:
        """
        Raises:
            ValueError: If target_count < 1.
            EmptyDocumentError: If text is empty or whitespace.
            DocumentTooLargeError: If text exceeds max_document_chars.
            InsufficientContent: If no question could be built.
        """
        if target_count < 1:
            raise ValueError("target_count must be >= 1")
        if not text or not text.strip():
            raise EmptyDocumentError()
        if len(text) > self.max_document_chars:
            raise DocumentTooLargeError(len(text), self.max_document_chars)

        start = monotonic()
        concepts = self.extractor.extract(text)

        questions: list[Question] = []
        stems: set[str] = set()
        for concept in concepts:
            question = self.synthesizer.synthesize(concept)
            if question is None or question.stem in stems:
                continue
            questions.append(question)
            stems.add(question.stem)
            if len(questions) == target_count:
                break

        if not questions:
            logger.warning(
                "No questions from %d concepts (%d characters)", len(concepts), len(text)
            )
            raise InsufficientContent()

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.QUIZ_ASSEMBLY_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.QUIZ_QUESTIONS_CREATED, len(questions))
        logger.info(
            "Assembled %d/%d questions from %d concepts in %.0fms",
            len(questions),
            target_count,
            len(concepts),
            elapsed_ms,
        )
        return QuizSet(questions=tuple(questions))

    async def assemble_and_refine(
        self, text: str, target_count: int = DEFAULT_TARGET_COUNT
    ) -> QuizSet:
        """Assemble, then reword each question. Correct answers never change.

        Assembly is CPU-bound and runs in a worker thread.
        """
        quiz = await asyncio.to_thread(self.assemble, text, target_count)
        if self.refiner is None:
            return quiz

        refined = await asyncio.gather(
            *(self.refiner.refine(question) for question in quiz.questions)
        )

        questions: list[Question] = []
        for original, candidate in zip(quiz.questions, refined):
            if candidate is None:
                self.metrics_hook.increment(names.QUIZ_REFINEMENT_FALLBACKS)
                questions.append(original)
            else:
                self.metrics_hook.increment(names.QUIZ_REFINEMENTS_TOTAL)
                questions.append(candidate)
        return QuizSet(questions=tuple(questions))
