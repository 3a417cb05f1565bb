# src/study_kit/quiz/refiner.py

import json
import logging
import re

from pydantic import BaseModel

from study_kit.errors import LLMError
from study_kit.llms.base import LLMClient, Message
from study_kit.prompts.prompt import Prompt
from study_kit.prompts.prompts_library import PromptsLibrary

from .models import OPTION_COUNT, Question

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class RefinedQuestion(BaseModel):
    """Shape the model is asked to reply with."""

    question: str
    options: list[str]
    correct: str | None = None


class QuestionRefiner:
    """Best-effort rewording of a generated question by a chat model.

    Returns None whenever the reply can't be trusted. The refined question
    always keeps the original correct answer and id.
    """

    def __init__(self, llm: LLMClient, prompt: Prompt | None = None):
        self._llm = llm
        self._prompt = prompt or PromptsLibrary().latest("refine_question")

    async def refine(self, question: Question) -> Question | None:
        content = self._prompt.render(
            question=question.stem,
            options="\n".join(f"- {option}" for option in question.options),
            correct=question.correct_answer,
        )
        try:
            response = await self._llm.complete(
                messages=[Message.user(content)],
                temperature=0.2,
            )
            refined = parse_refined_question(response.content or "")
            return self._apply(question, refined)
        except (LLMError, ValueError) as e:
            # json and pydantic errors are both ValueErrors
            logger.warning("Keeping original question %s: %s", question.id, e)
            return None

    def _apply(self, original: Question, refined: RefinedQuestion) -> Question:
        stem = refined.question.strip()
        options = tuple(option.strip() for option in refined.options)

        if not stem:
            raise ValueError("Refined question is empty")
        if len(options) != OPTION_COUNT or len(set(options)) != OPTION_COUNT:
            raise ValueError(f"Refined options are not {OPTION_COUNT} unique strings")
        if original.correct_answer not in options:
            raise ValueError("Refined options dropped the correct answer")

        return Question(
            id=original.id,
            stem=stem,
            options=options,
            correct_answer=original.correct_answer,
        )


def parse_refined_question(text: str) -> RefinedQuestion:
    """Parse a JSON reply, tolerating a surrounding markdown code fence.

    Raises:
        ValueError: If the text isn't JSON of the expected shape.
    """
    text = text.strip()
    match = _CODE_FENCE.match(text)
    if match:
        text = match.group(1)
    return RefinedQuestion.model_validate(json.loads(text))
