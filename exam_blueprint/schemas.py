from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

BloomLevel = Literal["Remember", "Understand", "Apply", "Analyze", "Evaluate", "Create"]
Difficulty = Literal["Easy", "Medium", "Hard"]
QuestionType = Literal["Objective", "Descriptive", "Fill-in-the-Blanks", "True/False", "E-marks"]

BLOOM_LEVELS: tuple[str, ...] = ("Remember", "Understand", "Apply", "Analyze", "Evaluate", "Create")
DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")
QUESTION_TYPES: tuple[str, ...] = ("Objective", "Descriptive", "Fill-in-the-Blanks", "True/False", "E-marks")


class SyllabusMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    course: str
    code: str = ""
    description: str = ""


class Chapter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    topics: list[str] = Field(default_factory=list)


class Syllabus(BaseModel):
    model_config = ConfigDict(frozen=True)

    meta: SyllabusMeta
    chapters: list[Chapter] = Field(default_factory=list)

    def chapter_names(self) -> list[str]:
        return [c.name for c in self.chapters]

    def topic_count(self) -> int:
        return sum(len(c.topics) for c in self.chapters)


class SectionAConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    one_mark_questions_count: int = Field(10, ge=0, alias="oneMarkQuestionsCount")
    chapters_to_include: list[str] = Field(default_factory=list, alias="chaptersToInclude")


class SectionBConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    five_mark_questions_per_chapter: int = Field(2, ge=0, alias="fiveMarkQuestionsPerChapter")
    chapters_to_include: list[str] = Field(default_factory=list, alias="chaptersToInclude")


class BlueprintSections(BaseModel):
    a: SectionAConfig = Field(default_factory=SectionAConfig)
    b: SectionBConfig = Field(default_factory=SectionBConfig)


class BlueprintConfig(BaseModel):
    """
    Paper settings edited by the user. ``max_marks`` and ``time`` are shown on
    the paper header only; they are not checked against the assembled questions.
    """

    model_config = ConfigDict(populate_by_name=True)

    paper_title: str = Field("Question Paper", alias="paperTitle")
    max_marks: int = Field(50, ge=1, alias="maxMarks")
    time: int = Field(180, ge=1, description="Duration in minutes")
    difficulty: Difficulty = "Medium"
    sections: BlueprintSections = Field(default_factory=BlueprintSections)


class Question(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="q_<ms>_<rand> for generated items, A1 / B1a / B1b for blueprint items")
    topic: str
    marks: int = Field(..., ge=1, le=20)
    difficulty: Difficulty
    bloom_level: BloomLevel = Field(..., alias="bloomLevel")
    type: QuestionType
    content: str
    course_outcome: str = Field(..., alias="courseOutcome")
    program_outcome: str = Field(..., alias="programOutcome")
    chapter: str | None = None
