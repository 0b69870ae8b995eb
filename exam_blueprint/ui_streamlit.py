from pathlib import Path
import sys
import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from exam_blueprint.agents.generator import QuestionGenerator
from exam_blueprint.config import get_max_upload_bytes
from exam_blueprint.exceptions import ExamBlueprintError
from exam_blueprint.export import pdf_filename, questions_to_csv_bytes, questions_to_pdf_bytes
from exam_blueprint.logging_config import setup_logging
from exam_blueprint.paper.assembler import assemble_blueprint, section_a, section_b_pairs, total_marks
from exam_blueprint.reporting import compute_statistics
from exam_blueprint.schemas import BLOOM_LEVELS, DIFFICULTIES, QUESTION_TYPES, Question
from exam_blueprint.state import AppState, load_syllabus

log = setup_logging()

st.set_page_config(page_title="Exam Blueprint", layout="wide")

st.markdown(
    """
<style>
@import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;500;600&display=swap');
:root {
  --ink-2: #9aa7ba;
  --border: #1f2836;
}
html, body, [class*="css"] {
  font-family: "Manrope", Arial, sans-serif;
}
.block-container {
  max-width: 1100px;
  padding-top: 1.4rem;
}
.hero {
  border: 1px solid var(--border);
  border-radius: 14px;
  padding: 1.2rem 1.4rem;
}
.hero h1 {
  font-size: 1.9rem;
  margin: 0;
}
.hero p {
  margin: 0.35rem 0 0;
  color: var(--ink-2);
}
.hint {
  color: var(--ink-2);
  font-size: 0.92rem;
}
</style>
""",
    unsafe_allow_html=True,
)

st.markdown(
    """
<div class="hero">
  <h1>Exam Blueprint</h1>
  <p>Upload a syllabus, generate questions, and assemble a question paper.</p>
</div>
""",
    unsafe_allow_html=True,
)

# -------- State --------
st.session_state.setdefault("app", AppState())
st.session_state.setdefault("last_upload_sig", None)


def _state() -> AppState:
    return st.session_state.app


def _commit(state: AppState):
    st.session_state.app = state


def _generator() -> QuestionGenerator:
    if "generator" not in st.session_state:
        st.session_state.generator = QuestionGenerator()
    return st.session_state.generator


# -------- Shared widgets --------
def syllabus_upload(key: str):
    uploaded = st.file_uploader(
        "Syllabus (.txt, .docx or .pdf)",
        type=["txt", "docx", "pdf"],
        key=f"upload_{key}",
    )
    if uploaded is not None:
        sig = (uploaded.name, getattr(uploaded, "size", None))
        if st.session_state.last_upload_sig != sig:
            data = uploaded.getvalue()
            if len(data) > get_max_upload_bytes():
                st.error("File is too large.")
            else:
                with st.spinner(f"Processing {uploaded.name}..."):
                    try:
                        _commit(load_syllabus(_state(), uploaded.name, data))
                        st.session_state.last_upload_sig = sig
                    except ExamBlueprintError as exc:
                        log.error("Syllabus upload failed: %s", exc)
                        st.error(f"Failed to parse file. {exc}")

    syllabus = _state().syllabus
    if syllabus:
        st.success(
            f"{syllabus.meta.course or 'Untitled course'}: "
            f"{len(syllabus.chapters)} chapters, {syllabus.topic_count()} topics extracted"
        )


def question_card(q: Question, actions: bool = False, key: str = ""):
    st.markdown(f"**{q.id}** - {q.type} | {q.difficulty} | {q.bloom_level} | {q.marks} mark{'s' if q.marks > 1 else ''}")
    st.caption(f"{q.course_outcome} | {q.program_outcome} | Topic: {q.topic}" + (f" ({q.chapter})" if q.chapter else ""))
    st.text(q.content)
    if not actions:
        return
    col_r, col_d = st.columns(2)
    if col_r.button("Regenerate", key=f"regen_{key}{q.id}"):
        with st.spinner("Regenerating..."):
            try:
                fresh = _generator().regenerate(q)
                _commit(_state().replace_question(q.id, fresh))
                st.rerun()
            except ExamBlueprintError as exc:
                st.error(f"Failed to generate question. {exc}")
    if col_d.button("Delete", key=f"delete_{key}{q.id}"):
        _commit(_state().remove_question(q.id))
        st.rerun()


tab_generate, tab_blueprint, tab_dashboard = st.tabs(["Generate Questions", "Question Paper Blueprint", "Dashboard"])

# -------- Generate --------
with tab_generate:
    col_form, col_list = st.columns([1, 2], gap="large")
    with col_form:
        syllabus_upload("generate")
        st.subheader("Question Parameters")
        syllabus = _state().syllabus
        if syllabus and syllabus.topic_count():
            options = [t for c in syllabus.chapters for t in c.topics]
            topic = st.selectbox("Topic", options)
        else:
            topic = st.text_input("Topic", value="", placeholder="Enter topic")
        col_m, col_d = st.columns(2)
        marks = col_m.selectbox("Marks", [1, 2, 3, 5], index=0)
        difficulty = col_d.selectbox("Difficulty", DIFFICULTIES, index=1)
        bloom_level = st.selectbox("Bloom's Taxonomy Level", BLOOM_LEVELS, index=1)
        qtype = st.selectbox("Question Type", QUESTION_TYPES, index=0)

        if st.button("Generate Question", disabled=not topic):
            with st.spinner("Generating..."):
                try:
                    q = _generator().generate(topic, marks, difficulty, bloom_level, qtype)
                    _commit(_state().add_question(q))
                except ExamBlueprintError as exc:
                    log.error("Generation failed: %s", exc)
                    st.error(f"Failed to generate question. {exc}")

    with col_list:
        questions = list(_state().questions)
        st.subheader(f"Generated Questions ({len(questions)})")
        if not questions:
            st.markdown("<div class='hint'>Set parameters and click \"Generate Question\".</div>", unsafe_allow_html=True)
        else:
            st.download_button(
                "Export PDF",
                data=questions_to_pdf_bytes(questions, "Generated Questions"),
                file_name="generated_questions.pdf",
                key="pdf_generate",
            )
            for q in reversed(questions):
                question_card(q, actions=True, key="gen_")
                st.divider()

# -------- Blueprint --------
with tab_blueprint:
    col_cfg, col_paper = st.columns([1, 2], gap="large")
    state = _state()
    cfg = state.config
    with col_cfg:
        if not state.syllabus:
            syllabus_upload("blueprint")
            state = _state()
            cfg = state.config
        st.subheader("Paper Configuration")
        names = state.syllabus.chapter_names() if state.syllabus else []
        paper_title = st.text_input("Paper Title", value=cfg.paper_title)
        col_mm, col_t = st.columns(2)
        max_marks = col_mm.number_input("Max Marks", min_value=1, value=cfg.max_marks)
        minutes = col_t.number_input("Time (minutes)", min_value=1, value=cfg.time)
        difficulty = st.selectbox("Overall Difficulty", DIFFICULTIES, index=DIFFICULTIES.index(cfg.difficulty))

        st.markdown("**Section A: One-Mark Questions**")
        a_count = st.number_input("Number of Questions", min_value=0, value=cfg.sections.a.one_mark_questions_count)
        a_chapters = st.multiselect(
            "Chapters to Include (A)",
            names,
            default=[n for n in cfg.sections.a.chapters_to_include if n in names],
        )
        st.markdown("**Section B: Five-Mark Questions**")
        b_count = st.number_input(
            "Questions Per Chapter",
            min_value=0,
            value=cfg.sections.b.five_mark_questions_per_chapter,
            help="Each question will have two choices (a/b)",
        )
        b_chapters = st.multiselect(
            "Chapters to Include (B)",
            names,
            default=[n for n in cfg.sections.b.chapters_to_include if n in names],
        )

        new_cfg = cfg.model_copy(
            update={
                "paper_title": paper_title,
                "max_marks": int(max_marks),
                "time": int(minutes),
                "difficulty": difficulty,
                "sections": cfg.sections.model_copy(
                    update={
                        "a": cfg.sections.a.model_copy(
                            update={"one_mark_questions_count": int(a_count), "chapters_to_include": a_chapters}
                        ),
                        "b": cfg.sections.b.model_copy(
                            update={"five_mark_questions_per_chapter": int(b_count), "chapters_to_include": b_chapters}
                        ),
                    }
                ),
            }
        )
        if new_cfg != cfg:
            _commit(_state().with_config(new_cfg))

        if st.button("Generate Question Paper", disabled=not state.syllabus):
            with st.spinner("Generating Paper..."):
                current = _state()
                _commit(current.with_blueprint(assemble_blueprint(current.syllabus, current.config)))

    with col_paper:
        state = _state()
        blueprint = list(state.blueprint)
        st.subheader("Question Paper Preview")
        if not blueprint:
            st.markdown(
                "<div class='hint'>Configure your paper settings and click \"Generate Question Paper\".</div>",
                unsafe_allow_html=True,
            )
        else:
            cfg = state.config
            course = state.syllabus.meta.course if state.syllabus else None
            col_pdf, col_csv = st.columns(2)
            col_pdf.download_button(
                "Export PDF",
                data=questions_to_pdf_bytes(blueprint, cfg.paper_title, cfg.max_marks, cfg.time, course),
                file_name=pdf_filename(cfg.paper_title),
                key="pdf_blueprint",
            )
            col_csv.download_button(
                "Export CSV",
                data=questions_to_csv_bytes(blueprint),
                file_name="blueprint.csv",
                key="csv_blueprint",
            )
            st.markdown(f"### {cfg.paper_title}")
            st.caption(f"Time: {cfg.time} minutes | Max Marks: {cfg.max_marks} | Paper total: {total_marks(blueprint)}")
            if total_marks(blueprint) != cfg.max_marks:
                st.warning("Assembled marks differ from Max Marks.")

            one_mark = section_a(blueprint)
            if one_mark:
                st.markdown("#### Section A - One Mark Questions")
                for q in one_mark:
                    question_card(q)
            pairs = section_b_pairs(blueprint)
            if pairs:
                st.markdown("#### Section B - Descriptive Questions")
                for n, a, b in pairs:
                    st.markdown(f"**Question {n} (Choose any one)**")
                    col_a, col_b = st.columns(2)
                    with col_a:
                        if a:
                            question_card(a)
                    with col_b:
                        if b:
                            question_card(b)

# -------- Dashboard --------
with tab_dashboard:
    state = _state()
    questions = list(state.questions)
    view_q, view_s, view_stats = st.tabs(["Generated Questions", "Syllabus", "Statistics"])

    with view_q:
        st.markdown(f"**All Generated Questions ({len(questions)})**")
        if questions:
            col_e, col_c, col_x = st.columns(3)
            col_e.download_button(
                "Export",
                data=questions_to_pdf_bytes(questions, "All Questions"),
                file_name="all_questions.pdf",
                key="pdf_dashboard",
            )
            col_c.download_button(
                "Download CSV",
                data=questions_to_csv_bytes(questions),
                file_name="questions.csv",
                key="csv_dashboard",
            )
            if col_x.button("Clear All"):
                _commit(_state().clear_questions())
                st.rerun()
            for q in questions:
                question_card(q, actions=True, key="dash_")
                st.divider()
        else:
            st.markdown("<div class='hint'>No questions yet.</div>", unsafe_allow_html=True)

    with view_s:
        if not state.syllabus:
            syllabus_upload("dashboard")
        else:
            meta = state.syllabus.meta
            st.markdown(f"### {meta.course or 'Untitled course'}")
            if meta.code:
                st.caption(f"Code: {meta.code}")
            if meta.description:
                st.write(meta.description)
            for chapter in state.syllabus.chapters:
                with st.expander(f"{chapter.name} ({len(chapter.topics)} topics)"):
                    for t in chapter.topics:
                        st.markdown(f"- {t}")

    with view_stats:
        stats = compute_statistics(questions)
        st.metric("Total Questions", stats["total_questions"])
        col_1, col_2 = st.columns(2)
        with col_1:
            st.markdown("**By Difficulty**")
            st.json(stats["difficulty_distribution"])
        with col_2:
            st.markdown("**By Type**")
            st.json(stats["type_distribution"])
        st.markdown("**By Bloom's Taxonomy Level**")
        cols = st.columns(len(BLOOM_LEVELS))
        for col, level in zip(cols, BLOOM_LEVELS):
            col.metric(level, stats["bloom_distribution"][level])
        with st.expander("Outcome mapping"):
            st.json({"course_outcomes": stats["co_distribution"], "program_outcomes": stats["po_distribution"]})
