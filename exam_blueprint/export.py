from __future__ import annotations
import io
import logging
import re

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from exam_blueprint.exceptions import ExportError
from exam_blueprint.paper.assembler import section_b_pairs
from exam_blueprint.schemas import Question

log = logging.getLogger(__name__)

CSV_COLUMNS = [
    "id",
    "chapter",
    "topic",
    "marks",
    "difficulty",
    "bloom_level",
    "type",
    "course_outcome",
    "program_outcome",
    "content",
]

LINE_HEIGHT = 0.18 * inch
MARGIN = inch


def questions_to_dataframe(questions: list[Question]) -> pd.DataFrame:
    rows = [q.model_dump(include=set(CSV_COLUMNS)) for q in questions]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def questions_to_csv_bytes(questions: list[Question]) -> bytes:
    df = questions_to_dataframe(questions)
    return df.to_csv(index=False).encode("utf-8")


def pdf_filename(title: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", title or "").strip("_").lower()
    return f"{slug or 'question_paper'}.pdf"


class _PaperCanvas:
    """Writes lines top-down, starting a new page with the header when full."""

    def __init__(self, buffer: io.BytesIO, header: list[str]):
        self.c = canvas.Canvas(buffer, pagesize=A4)
        self.width, self.height = A4
        self.header = header
        self.page = 0
        self.y = 0.0
        self._new_page()

    def _new_page(self):
        if self.page:
            self._footer()
            self.c.showPage()
        self.page += 1
        self.y = self.height - MARGIN

        self.c.setFont("Helvetica-Bold", 14)
        self.c.drawCentredString(self.width / 2, self.y, self.header[0])
        self.y -= 0.3 * inch
        self.c.setFont("Helvetica", 9)
        for line in self.header[1:]:
            self.c.drawCentredString(self.width / 2, self.y, line)
            self.y -= 0.2 * inch
        self.c.line(MARGIN, self.y, self.width - MARGIN, self.y)
        self.y -= 0.3 * inch

    def _footer(self):
        self.c.setFont("Helvetica", 8)
        self.c.drawCentredString(self.width / 2, 0.5 * inch, f"Page {self.page}")

    def ensure_room(self, height: float):
        if self.y - height < MARGIN:
            self._new_page()

    def heading(self, text: str, size: int = 11):
        self.ensure_room(0.5 * inch)
        self.y -= 0.1 * inch
        self.c.setFont("Helvetica-Bold", size)
        self.c.drawString(MARGIN, self.y, text)
        self.y -= 0.3 * inch

    def paragraph(self, text: str, indent: float = 0.0, font: str = "Helvetica", size: int = 9):
        for raw in (text or "").split("\n"):
            chunks = _wrap_text(raw, self.width - 2 * MARGIN - indent) or [""]
            for chunk in chunks:
                self.ensure_room(LINE_HEIGHT)
                self.c.setFont(font, size)
                self.c.drawString(MARGIN + indent, self.y, chunk)
                self.y -= LINE_HEIGHT

    def gap(self, height: float = 0.15 * inch):
        self.y -= height
        if self.y < MARGIN:
            self._new_page()

    def save(self):
        self._footer()
        self.c.save()


def _question_label(q: Question) -> str:
    return f"[{q.marks} mark{'s' if q.marks > 1 else ''} | {q.course_outcome} | {q.bloom_level} | {q.difficulty}]"


def _header_lines(title: str, course: str | None, time: int | None, max_marks: int | None) -> list[str]:
    lines = [title or "Question Paper"]
    if course:
        lines.append(course)
    details = []
    if time:
        details.append(f"Time: {time} minutes")
    if max_marks:
        details.append(f"Max Marks: {max_marks}")
    if details:
        lines.append("    ".join(details))
    return lines


def questions_to_pdf_bytes(
    questions: list[Question],
    title: str,
    max_marks: int | None = None,
    time: int | None = None,
    course: str | None = None,
) -> bytes:
    """
    Render questions as a paper: one-mark items under Section A, everything
    else under Section B. Blueprint either/or pairs (B1a / B1b) are printed as
    a single numbered question with an OR between the choices.
    """
    if not questions:
        raise ExportError("There are no questions to export.")

    buffer = io.BytesIO()
    paper = _PaperCanvas(buffer, _header_lines(title, course, time, max_marks))

    one_mark = [q for q in questions if q.marks == 1]
    longer = [q for q in questions if q.marks > 1]

    if one_mark:
        paper.heading("Section A - One Mark Questions")
        for n, q in enumerate(one_mark, start=1):
            paper.paragraph(f"{n}. {q.content}  {_question_label(q)}")
            paper.gap()

    if longer:
        paper.heading("Section B - Descriptive Questions")
        pairs = section_b_pairs(longer)
        paired_ids = {q.id for _, a, b in pairs for q in (a, b) if q is not None}

        for n, a, b in pairs:
            paper.paragraph(f"Question {n} (Choose any one)", font="Helvetica-Bold")
            choices = [q for q in (a, b) if q is not None]
            for i, q in enumerate(choices):
                if i:
                    paper.paragraph("OR", indent=0.25 * inch, font="Helvetica-Oblique")
                paper.paragraph(f"{q.id[-1]}) {q.content}  {_question_label(q)}", indent=0.25 * inch)
            paper.gap()

        start = len(pairs) + 1
        for n, q in enumerate([q for q in longer if q.id not in paired_ids], start=start):
            paper.paragraph(f"{n}. {q.content}  {_question_label(q)}")
            paper.gap()

    paper.save()
    log.info("Rendered %d questions into %d PDF pages", len(questions), paper.page)
    return buffer.getvalue()


def _wrap_text(text: str, max_width: float) -> list[str]:
    # Approximate wrap by character count.
    max_chars = int(max_width / 5)
    words = text.split()
    lines = []
    line = ""
    for w in words:
        if line and len(line) + len(w) + 1 > max_chars:
            lines.append(line)
            line = w
        else:
            line = f"{line} {w}".strip()
    if line:
        lines.append(line)
    return lines
