import pytest

from exam_blueprint.schemas import BlueprintConfig
from exam_blueprint.syllabus.parser import parse_syllabus

SAMPLE_SYLLABUS = (
    "Data Structures\n"
    "CS301\n"
    "Core DS course\n"
    "UNIT 1: Arrays\n"
    "Linear arrays\n"
    "Multi-dim arrays\n"
    "UNIT 2: Trees\n"
    "Binary trees\n"
)

LONG_SYLLABUS = """Operating Systems
Course Code: CS402
Processes, memory and storage.

Module 1 - Processes
1. Process states and transitions
2. Context switching
3. Scheduling algorithms

Module 2 - Memory
- Paging and segmentation
- Virtual memory

Module 3 - Storage
Chapter notes
"""


@pytest.fixture
def sample_text():
    return SAMPLE_SYLLABUS


@pytest.fixture
def syllabus():
    return parse_syllabus(SAMPLE_SYLLABUS)


@pytest.fixture
def long_syllabus():
    return parse_syllabus(LONG_SYLLABUS)


def make_config(a_chapters=(), a_count=10, b_chapters=(), b_per_chapter=2, difficulty="Medium"):
    return BlueprintConfig.model_validate(
        {
            "paperTitle": "Mid Term",
            "maxMarks": 50,
            "time": 90,
            "difficulty": difficulty,
            "sections": {
                "a": {"oneMarkQuestionsCount": a_count, "chaptersToInclude": list(a_chapters)},
                "b": {"fiveMarkQuestionsPerChapter": b_per_chapter, "chaptersToInclude": list(b_chapters)},
            },
        }
    )


@pytest.fixture
def config_factory():
    return make_config
