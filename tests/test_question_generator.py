import random
import re

import pytest

from exam_blueprint.agents.generator import (
    QuestionGenerator,
    course_outcome_for,
    program_outcome_for,
    question_content,
)
from exam_blueprint.exceptions import QuestionGenerationError


@pytest.fixture
def generator():
    sleeps = []
    gen = QuestionGenerator(delay=1.0, rng=random.Random(7), clock=lambda: 1700000000.123, sleep=sleeps.append)
    gen.sleeps = sleeps
    return gen


def test_generate_fills_outcomes_and_content(generator):
    q = generator.generate("Binary trees", 2, "Hard", "Apply", "Descriptive")

    assert re.fullmatch(r"q_1700000000123_[0-9a-z]{7}", q.id)
    assert q.topic == "Binary trees"
    assert q.course_outcome == "CO3"
    assert q.program_outcome == "PO3"
    assert q.chapter is None
    assert q.content == (
        "Hard level Apply question about Binary trees:\n\n"
        "Explain the concept of Binary trees with a simple example."
    )
    assert generator.sleeps == [1.0]


def test_ids_are_unique_within_a_session(generator):
    ids = {generator.generate("Graphs", 1, "Easy", "Remember", "Objective").id for _ in range(50)}
    assert len(ids) == 50


def test_zero_delay_does_not_sleep():
    sleeps = []
    gen = QuestionGenerator(delay=0, sleep=sleeps.append)
    gen.generate("Graphs", 1, "Easy", "Remember", "Objective")
    assert sleeps == []


@pytest.mark.parametrize(
    "topic,marks,qtype",
    [("", 1, "Objective"), ("   ", 2, "Descriptive"), ("Graphs", 0, "Descriptive"), ("Graphs", 2, "Essay")],
)
def test_rejects_bad_requests(generator, topic, marks, qtype):
    with pytest.raises(QuestionGenerationError):
        generator.generate(topic, marks, "Easy", "Remember", qtype)
    assert generator.sleeps == []


def test_rejects_unknown_difficulty(generator):
    with pytest.raises(QuestionGenerationError):
        generator.generate("Graphs", 1, "Extreme", "Remember", "Objective")


def test_regenerate_keeps_parameters(generator):
    first = generator.generate("Heaps and priority queues", 5, "Medium", "Analyze", "Descriptive")
    first = first.model_copy(update={"chapter": "UNIT 3"})
    second = generator.regenerate(first)

    assert second.id != first.id
    for field in ("topic", "marks", "difficulty", "bloom_level", "type", "chapter"):
        assert getattr(second, field) == getattr(first, field)


def test_objective_content_by_bloom_level():
    remember = question_content("Sorting", 1, "Easy", "Remember", "Objective")
    assert remember.startswith("Question about Sorting (Easy difficulty, Remember level):")
    assert "What is a key concept in Sorting?" in remember
    assert remember.rstrip().endswith("D) Sample option text for Sorting")

    understand = question_content("Sorting", 1, "Easy", "Understand", "Objective")
    assert "Explain how Sorting relates to engineering principles." in understand

    create = question_content("Sorting", 1, "Easy", "Create", "Objective")
    assert "Analyze the implications of Sorting in a practical scenario." in create


def test_descriptive_content_by_marks():
    assert question_content("Stacks", 1, "Easy", "Remember", "Descriptive").endswith("Briefly define Stacks.")
    assert "simple example" in question_content("Stacks", 2, "Easy", "Remember", "Descriptive")
    assert "key points" in question_content("Stacks", 3, "Easy", "Remember", "Descriptive")
    assert "detailed analysis of Stacks" in question_content("Stacks", 5, "Easy", "Remember", "Descriptive")


def test_other_question_types():
    assert "________" in question_content("Queues", 1, "Easy", "Remember", "Fill-in-the-Blanks")
    assert question_content("Queues", 1, "Easy", "Remember", "True/False").endswith("(True/False)")

    three = question_content("Queues", 3, "Medium", "Apply", "E-marks")
    assert "(a) Define Queues." in three and "(c) Give one example of Queues." in three
    other = question_content("Queues", 5, "Medium", "Apply", "E-marks")
    assert "(a)" not in other
    assert "Apply Queues to a practical problem" in other


def test_outcome_mapping():
    assert [course_outcome_for(d) for d in ("Easy", "Medium", "Hard")] == ["CO1", "CO2", "CO3"]
    assert program_outcome_for("Remember") == "PO1"
    assert program_outcome_for("Create") == "PO6"
    assert program_outcome_for("Unknown") == "PO1"
