"""
Session state for one user of the Streamlit app.

``AppState`` is immutable: every action builds a new state and the UI swaps it
into ``st.session_state`` only after the action succeeded, so a failed upload
or generation leaves the previous syllabus and questions untouched.
"""

from __future__ import annotations
import logging

from pydantic import BaseModel, ConfigDict, Field

from exam_blueprint.schemas import BlueprintConfig, Question, Syllabus
from exam_blueprint.syllabus.ingest import read_syllabus_file
from exam_blueprint.syllabus.parser import parse_syllabus

log = logging.getLogger(__name__)


class AppState(BaseModel):
    model_config = ConfigDict(frozen=True)

    syllabus: Syllabus | None = None
    questions: tuple[Question, ...] = ()
    config: BlueprintConfig = Field(default_factory=BlueprintConfig)
    blueprint: tuple[Question, ...] = ()

    def with_syllabus(self, syllabus: Syllabus) -> "AppState":
        # Inclusion lists name chapters of the old syllabus; point them at the new one.
        names = syllabus.chapter_names()
        sections = self.config.sections.model_copy(
            update={
                "a": self.config.sections.a.model_copy(update={"chapters_to_include": list(names)}),
                "b": self.config.sections.b.model_copy(update={"chapters_to_include": list(names)}),
            }
        )
        config = self.config.model_copy(update={"sections": sections})
        return self.model_copy(update={"syllabus": syllabus, "config": config, "blueprint": ()})

    def with_config(self, config: BlueprintConfig) -> "AppState":
        return self.model_copy(update={"config": config})

    def with_blueprint(self, questions: list[Question]) -> "AppState":
        return self.model_copy(update={"blueprint": tuple(questions)})

    def add_question(self, question: Question) -> "AppState":
        return self.model_copy(update={"questions": self.questions + (question,)})

    def remove_question(self, question_id: str) -> "AppState":
        kept = tuple(q for q in self.questions if q.id != question_id)
        return self.model_copy(update={"questions": kept})

    def replace_question(self, old_id: str, question: Question) -> "AppState":
        """Regenerate: the old question is dropped and the new one appended."""
        return self.remove_question(old_id).add_question(question)

    def clear_questions(self) -> "AppState":
        return self.model_copy(update={"questions": ()})


def load_syllabus(state: AppState, filename: str, data: bytes) -> AppState:
    """
    Read and parse an uploaded syllabus. Raises SyllabusReadError when the file
    cannot be read; the caller then keeps ``state`` as it was.
    """
    text = read_syllabus_file(filename, data)
    syllabus = parse_syllabus(text)
    log.info("Loaded syllabus from %s", filename)
    return state.with_syllabus(syllabus)
