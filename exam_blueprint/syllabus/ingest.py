from __future__ import annotations
import io
import logging
from pathlib import PurePath

import docx
from PyPDF2 import PdfReader

from exam_blueprint.exceptions import SyllabusReadError

log = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"txt", "docx", "pdf"}


def file_extension(filename: str) -> str:
    return PurePath(filename or "").suffix.lower().lstrip(".")


def decode_text(data: bytes) -> str:
    # utf-8-sig drops a leading BOM written by Windows editors
    return data.decode("utf-8-sig", errors="replace")


def extract_text_from_docx(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    return "\n".join(p.text for p in document.paragraphs)


def extract_text_from_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    pages: list[str] = []
    for page in reader.pages:
        pages.append(page.extract_text() or "")
    return "\n".join(pages)


def read_syllabus_file(filename: str, data: bytes) -> str:
    """
    Turn an uploaded syllabus file into plain text for the parser.

    Raises SyllabusReadError for unsupported extensions and for documents the
    underlying reader cannot open.
    """
    ext = file_extension(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise SyllabusReadError(
            f"Unsupported file type '{ext or filename}'. Upload a .txt, .docx or .pdf file."
        )

    if ext == "txt":
        text = decode_text(data)
    else:
        reader = extract_text_from_docx if ext == "docx" else extract_text_from_pdf
        try:
            text = reader(data)
        except Exception as exc:
            raise SyllabusReadError(f"Could not read {filename}: {exc}") from exc

    log.info("Read %s (%d bytes, %d characters)", filename, len(data), len(text))
    if not text.strip():
        log.warning("%s contains no extractable text", filename)
    return text
