from __future__ import annotations
import logging
import re

from exam_blueprint.schemas import Chapter, Syllabus, SyllabusMeta

log = logging.getLogger(__name__)

# Course name, course code and description come from the first lines.
METADATA_LINE_COUNT = 3
CHAPTER_KEYWORDS = ("UNIT", "MODULE", "CHAPTER")
# Cleaned topic lines must be longer than this to be kept.
MIN_TOPIC_LENGTH = 5

# At least two characters, so "Course Code: CS301" gives CS301 rather than "C".
COURSE_CODE_RE = re.compile(r"[A-Z0-9]{2,}")
LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
BULLET_RE = re.compile(
    r"^(?:"
    r"[-*•▪◦·>]+\s*"       # - * • ▪ ◦ · >
    r"|\(\d+(?:\.\d+)*\)\s*"                 # (3)
    r"|\d+(?:\.\d+)*[.)](?!\d)\s*"             # 1.  2)
    r"|\d{1,2}(?:\.\d{1,2})+(?![\d.])\s+"      # 1.2  3.4.1
    r"|\(?(?:[ivxIVX]+|[A-Za-z])[.)]\s+"        # a)  (b)  iv.
    r")+"
)
TRAILING_PUNCT_RE = re.compile(r"[\s.,;:]+$")


def is_chapter_heading(line: str) -> bool:
    upper = line.upper()
    return any(k in upper for k in CHAPTER_KEYWORDS)


def clean_topic(line: str) -> str:
    s = BULLET_RE.sub("", line.strip())
    s = TRAILING_PUNCT_RE.sub("", s)
    return s.strip()


def extract_course_code(line: str) -> str:
    m = COURSE_CODE_RE.search(line)
    return m.group(0) if m else ""


def _content_lines(raw_text: str | None) -> list[str]:
    if not raw_text:
        return []
    return [ln.strip() for ln in LINE_SPLIT_RE.split(raw_text) if ln.strip()]


def _metadata_block_size(lines: list[str]) -> int:
    """Leading lines that describe the course: at most METADATA_LINE_COUNT, ending
    early at the first chapter heading. Line 0 is always the course name."""
    size = min(1, len(lines))
    while size < min(METADATA_LINE_COUNT, len(lines)) and not is_chapter_heading(lines[size]):
        size += 1
    return size


def _parse_meta(head: list[str]) -> SyllabusMeta:
    return SyllabusMeta(
        course=head[0] if head else "",
        code=extract_course_code(head[1]) if len(head) > 1 else "",
        description=head[2] if len(head) > 2 else "",
    )


def parse_syllabus(raw_text: str | None) -> Syllabus:
    """
    Bucket syllabus text into chapters and topics.

    A line mentioning UNIT, MODULE or CHAPTER (any case) opens a chapter named
    after the whole line; following lines become its topics. Lines that appear
    before the first chapter, and topic lines too short once bullets are
    stripped, are dropped. Never raises: unusable input gives a syllabus
    with no chapters.
    """
    lines = _content_lines(raw_text)
    head_size = _metadata_block_size(lines)
    meta = _parse_meta(lines[:head_size])
    log.debug("Syllabus text: %d content lines, %d metadata lines", len(lines), head_size)

    chapters: list[Chapter] = []
    name: str | None = None
    topics: list[str] = []
    dropped = 0

    for line in lines[head_size:]:
        if is_chapter_heading(line):
            if name is not None:
                chapters.append(Chapter(name=name, topics=topics))
            name, topics = line, []
            continue

        topic = clean_topic(line)
        if name is not None and len(topic) > MIN_TOPIC_LENGTH:
            topics.append(topic)
        else:
            dropped += 1

    if name is not None:
        chapters.append(Chapter(name=name, topics=topics))

    syllabus = Syllabus(meta=meta, chapters=chapters)
    log.info(
        "Parsed syllabus %r: %d chapters, %d topics (%d lines dropped)",
        meta.course, len(chapters), syllabus.topic_count(), dropped,
    )
    return syllabus
