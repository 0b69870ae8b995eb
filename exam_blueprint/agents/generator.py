from __future__ import annotations
import logging
import random
import string
import time
from typing import Callable

from pydantic import ValidationError

from exam_blueprint.config import get_generation_delay
from exam_blueprint.exceptions import QuestionGenerationError
from exam_blueprint.schemas import BLOOM_LEVELS, QUESTION_TYPES, Question

log = logging.getLogger(__name__)

OBJECTIVE_OPTIONS = ("A", "B", "C", "D")
CO_BY_DIFFICULTY = {"Easy": "CO1", "Medium": "CO2", "Hard": "CO3"}
PO_BY_BLOOM = {level: f"PO{i}" for i, level in enumerate(BLOOM_LEVELS, start=1)}
ID_ALPHABET = string.digits + string.ascii_lowercase


def course_outcome_for(difficulty: str) -> str:
    return CO_BY_DIFFICULTY.get(difficulty, "CO1")


def program_outcome_for(bloom_level: str) -> str:
    return PO_BY_BLOOM.get(bloom_level, "PO1")


def _objective(topic: str, difficulty: str, bloom_level: str) -> str:
    content = f"Question about {topic} ({difficulty} difficulty, {bloom_level} level):\n\n"
    if bloom_level == "Remember":
        content += f"What is a key concept in {topic}?\n\n"
    elif bloom_level == "Understand":
        content += f"Explain how {topic} relates to engineering principles.\n\n"
    else:
        content += f"Analyze the implications of {topic} in a practical scenario.\n\n"
    content += "\n".join(f"{opt}) Sample option text for {topic}" for opt in OBJECTIVE_OPTIONS)
    return content


def _descriptive(topic: str, marks: int, difficulty: str, bloom_level: str) -> str:
    content = f"{difficulty} level {bloom_level} question about {topic}:\n\n"
    if marks == 1:
        content += f"Briefly define {topic}."
    elif marks == 2:
        content += f"Explain the concept of {topic} with a simple example."
    elif marks == 3:
        content += f"Explain {topic}, listing its key points and one application."
    else:
        content += (
            f"Provide a detailed analysis of {topic}, discussing its principles, applications, "
            "and limitations in engineering contexts. Illustrate with relevant examples and "
            "diagrams where appropriate."
        )
    return content


def question_content(topic: str, marks: int, difficulty: str, bloom_level: str, qtype: str) -> str:
    """Template text for a question; a real inference service can replace this."""
    if qtype == "Objective":
        return _objective(topic, difficulty, bloom_level)
    if qtype == "Fill-in-the-Blanks":
        return (
            f"Fill in the blank ({difficulty}, {bloom_level}):\n\n"
            f"The fundamental idea behind {topic} is ________."
        )
    if qtype == "True/False":
        return (
            f"State whether the following is True or False ({difficulty}, {bloom_level}):\n\n"
            f"{topic} is widely applied in engineering practice. (True/False)"
        )
    if qtype == "E-marks":
        if marks == 3:
            return (
                f"{difficulty} level {bloom_level} question about {topic} (3 marks):\n\n"
                f"(a) Define {topic}.\n"
                f"(b) Explain how {topic} works.\n"
                f"(c) Give one example of {topic}."
            )
        return (
            f"{difficulty} level {bloom_level} question about {topic} ({marks} marks):\n\n"
            f"Apply {topic} to a practical problem and justify each step."
        )
    return _descriptive(topic, marks, difficulty, bloom_level)


class QuestionGenerator:
    """
    Stand-in for an AI question service: waits a fixed delay, then returns a
    templated question. The delay is neither cancellable nor retried.
    """

    def __init__(
        self,
        delay: float | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.delay = get_generation_delay() if delay is None else delay
        self.rng = rng or random.Random()
        self.clock = clock
        self.sleep = sleep

    def new_id(self) -> str:
        millis = int(self.clock() * 1000)
        suffix = "".join(self.rng.choice(ID_ALPHABET) for _ in range(7))
        return f"q_{millis}_{suffix}"

    def generate(
        self,
        topic: str,
        marks: int,
        difficulty: str,
        bloom_level: str,
        qtype: str,
    ) -> Question:
        topic = (topic or "").strip()
        if not topic:
            raise QuestionGenerationError("A topic is required to generate a question.")
        if marks < 1:
            raise QuestionGenerationError(f"Marks must be positive, got {marks}.")
        if qtype not in QUESTION_TYPES:
            raise QuestionGenerationError(f"Unknown question type {qtype!r}.")

        if self.delay:
            self.sleep(self.delay)

        try:
            question = Question(
                id=self.new_id(),
                topic=topic,
                marks=marks,
                difficulty=difficulty,
                bloom_level=bloom_level,
                type=qtype,
                content=question_content(topic, marks, difficulty, bloom_level, qtype),
                course_outcome=course_outcome_for(difficulty),
                program_outcome=program_outcome_for(bloom_level),
            )
        except ValidationError as exc:
            raise QuestionGenerationError(f"Invalid question parameters: {exc}") from exc
        log.info("Generated %s (%s, %d marks) on %r", question.id, qtype, marks, topic)
        return question

    def regenerate(self, question: Question) -> Question:
        """Fresh question (new id and content) with the same parameters."""
        fresh = self.generate(
            question.topic,
            question.marks,
            question.difficulty,
            question.bloom_level,
            question.type,
        )
        if question.chapter:
            fresh = fresh.model_copy(update={"chapter": question.chapter})
        return fresh
