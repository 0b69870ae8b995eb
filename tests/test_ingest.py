import io

import docx
import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from exam_blueprint.exceptions import SyllabusReadError
from exam_blueprint.syllabus.ingest import file_extension, read_syllabus_file
from exam_blueprint.syllabus.parser import parse_syllabus


def test_reads_plain_text(sample_text):
    assert read_syllabus_file("ds.txt", sample_text.encode("utf-8")) == sample_text


def test_plain_text_with_bom_and_bad_bytes():
    text = read_syllabus_file("x.TXT", b"\xef\xbb\xbfCourse\n\xffUNIT 1\n")
    assert text.startswith("Course")
    assert "UNIT 1" in text


def test_reads_docx(sample_text):
    document = docx.Document()
    for line in sample_text.splitlines():
        document.add_paragraph(line)
    buffer = io.BytesIO()
    document.save(buffer)

    text = read_syllabus_file("ds.docx", buffer.getvalue())
    assert parse_syllabus(text) == parse_syllabus(sample_text)


def test_reads_pdf():
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.drawString(72, 760, "Networks")
    c.drawString(72, 740, "UNIT 1: Layers")
    c.save()

    text = read_syllabus_file("net.pdf", buffer.getvalue())
    assert "Networks" in text
    assert "UNIT 1: Layers" in text


def test_unsupported_extension():
    with pytest.raises(SyllabusReadError):
        read_syllabus_file("syllabus.xlsx", b"data")


def test_corrupt_document():
    with pytest.raises(SyllabusReadError):
        read_syllabus_file("broken.docx", b"not a zip file")


def test_file_extension():
    assert file_extension("a/b/Syllabus.PDF") == "pdf"
    assert file_extension("README") == ""
