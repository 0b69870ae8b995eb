"""
Blueprint assembly: turns a parsed syllabus and the paper settings into the
ordered question list of a two-section paper.

Section A holds one-mark objective items, up to two per included chapter,
numbered A1, A2, ... until the configured count is reached. Section B holds
five-mark descriptive items offered as either/or pairs (B1a / B1b, ...), with
the ``b`` choice drawn from the next topic of the same chapter.

Numbering restarts at 1 for Section B. No randomness is involved: the same
syllabus and settings always give the same paper.
"""

from __future__ import annotations
import logging
import re
from typing import Callable, Iterable

from exam_blueprint.schemas import BlueprintConfig, Chapter, Question, Syllabus

log = logging.getLogger(__name__)

SECTION_A_QUESTIONS_PER_CHAPTER = 2
SECTION_A_MARKS = 1
SECTION_B_MARKS = 5

SECTION_B_ID_RE = re.compile(r"^B(\d+)([ab])$")

ContentWriter = Callable[[str, str, str, int], str]


def blueprint_content(label: str, topic: str, difficulty: str, marks: int) -> str:
    """Default wording for blueprint items; ``label`` is the printed number (3, 2a, 2b)."""
    if marks == SECTION_A_MARKS:
        return f"[Question {label}] Sample objective question about {topic}?"
    if label.endswith("b"):
        return f"[Question {label}] Describe and analyze {topic}."
    return f"[Question {label}] Explain in detail about {topic}."


def _topic_at(chapter: Chapter, index: int) -> str:
    if not chapter.topics:
        return chapter.name
    return chapter.topics[min(index, len(chapter.topics) - 1)]


def _included(syllabus: Syllabus, names: Iterable[str], section: str) -> list[Chapter]:
    wanted = set(names)
    known = set(syllabus.chapter_names())
    stale = sorted(wanted - known)
    if stale:
        log.warning("Section %s: ignoring chapters not in syllabus: %s", section, stale)
    return [c for c in syllabus.chapters if c.name in wanted]


def _section_a(syllabus: Syllabus, config: BlueprintConfig, write: ContentWriter) -> list[Question]:
    limit = config.sections.a.one_mark_questions_count
    questions: list[Question] = []
    count = 1

    for chapter in _included(syllabus, config.sections.a.chapters_to_include, "A"):
        for i in range(SECTION_A_QUESTIONS_PER_CHAPTER):
            if count > limit:
                break
            topic = _topic_at(chapter, i)
            questions.append(
                Question(
                    id=f"A{count}",
                    topic=topic,
                    marks=SECTION_A_MARKS,
                    difficulty=config.difficulty,
                    bloom_level="Remember",
                    type="Objective",
                    content=write(str(count), topic, config.difficulty, SECTION_A_MARKS),
                    course_outcome="CO1",
                    program_outcome="PO1",
                    chapter=chapter.name,
                )
            )
            count += 1
        if count > limit:
            break

    return questions


def _section_b(syllabus: Syllabus, config: BlueprintConfig, write: ContentWriter) -> list[Question]:
    per_chapter = config.sections.b.five_mark_questions_per_chapter
    questions: list[Question] = []
    count = 1

    for chapter in _included(syllabus, config.sections.b.chapters_to_include, "B"):
        for i in range(per_chapter):
            topic = _topic_at(chapter, i)
            alternate = _topic_at(chapter, i + 1)
            questions.append(
                Question(
                    id=f"B{count}a",
                    topic=topic,
                    marks=SECTION_B_MARKS,
                    difficulty=config.difficulty,
                    bloom_level="Analyze",
                    type="Descriptive",
                    content=write(f"{count}a", topic, config.difficulty, SECTION_B_MARKS),
                    course_outcome="CO3",
                    program_outcome="PO2",
                    chapter=chapter.name,
                )
            )
            questions.append(
                Question(
                    id=f"B{count}b",
                    topic=alternate,
                    marks=SECTION_B_MARKS,
                    difficulty=config.difficulty,
                    bloom_level="Apply",
                    type="Descriptive",
                    content=write(f"{count}b", alternate, config.difficulty, SECTION_B_MARKS),
                    course_outcome="CO2",
                    program_outcome="PO3",
                    chapter=chapter.name,
                )
            )
            count += 1

    return questions


def assemble_blueprint(
    syllabus: Syllabus | None,
    config: BlueprintConfig,
    content_writer: ContentWriter = blueprint_content,
) -> list[Question]:
    if syllabus is None or not syllabus.chapters:
        log.info("No syllabus chapters; blueprint is empty")
        return []

    questions = _section_a(syllabus, config, content_writer)
    n_a = len(questions)
    questions += _section_b(syllabus, config, content_writer)
    log.info(
        "Assembled blueprint %r: %d section A items, %d section B pairs",
        config.paper_title, n_a, (len(questions) - n_a) // 2,
    )
    return questions


def section_a(questions: list[Question]) -> list[Question]:
    return [q for q in questions if q.marks == SECTION_A_MARKS]


def section_b_pairs(questions: list[Question]) -> list[tuple[int, Question | None, Question | None]]:
    """Group ``B<n>a`` / ``B<n>b`` items as ``(n, a, b)`` in numeric order."""
    pairs: dict[int, dict[str, Question]] = {}
    for q in questions:
        m = SECTION_B_ID_RE.match(q.id)
        if m:
            pairs.setdefault(int(m.group(1)), {})[m.group(2)] = q
    return [(n, pairs[n].get("a"), pairs[n].get("b")) for n in sorted(pairs)]


def total_marks(questions: list[Question]) -> int:
    """Marks a candidate can score: each either/or pair counts once."""
    paired = {q.id for _, a, b in section_b_pairs(questions) for q in (a, b) if q is not None}
    marks = sum(q.marks for q in questions if q.id not in paired)
    for _, a, b in section_b_pairs(questions):
        choice = a or b
        marks += choice.marks
    return marks
