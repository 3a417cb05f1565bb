# src/study_kit/quiz/models.py

from collections.abc import Iterator
from dataclasses import dataclass

OPTION_COUNT = 4


@dataclass(frozen=True)
class Concept:
    """A sentence judged to carry quizzable content."""

    source_text: str
    importance_score: float
    position: int


@dataclass(frozen=True)
class Question:
    """Multiple-choice question with exactly four distinct options.

    Raises:
        ValueError: On construction, if the option invariants do not hold.
    """

    id: str
    stem: str
    options: tuple[str, ...]
    correct_answer: str

    def __post_init__(self) -> None:
        if len(self.options) != OPTION_COUNT:
            raise ValueError(
                f"Question needs exactly {OPTION_COUNT} options, got {len(self.options)}"
            )
        if len(set(self.options)) != len(self.options):
            raise ValueError("Question options must be unique")
        if self.correct_answer not in self.options:
            raise ValueError("Correct answer must be one of the options")


@dataclass(frozen=True)
class QuizSet:
    questions: tuple[Question, ...]

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self.questions)
