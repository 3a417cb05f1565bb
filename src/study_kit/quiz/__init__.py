from .assembler import QuizAssembler
from .concepts import ConceptExtractor
from .config import DEFAULT_TARGET_COUNT, QuizConfig
from .models import OPTION_COUNT, Concept, Question, QuizSet
from .refiner import QuestionRefiner, RefinedQuestion, parse_refined_question
from .related_terms import (
    DEFAULT_RELATED_TERMS,
    RelatedTermsProvider,
    StaticRelatedTerms,
)
from .synthesizer import QuestionSynthesizer

__all__ = [
    "Concept",
    "ConceptExtractor",
    "DEFAULT_RELATED_TERMS",
    "DEFAULT_TARGET_COUNT",
    "OPTION_COUNT",
    "Question",
    "QuestionRefiner",
    "QuestionSynthesizer",
    "QuizAssembler",
    "QuizConfig",
    "QuizSet",
    "RefinedQuestion",
    "RelatedTermsProvider",
    "StaticRelatedTerms",
    "parse_refined_question",
]
