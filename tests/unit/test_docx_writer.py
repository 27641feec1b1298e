"""Unit tests for the python-docx writer."""

from io import BytesIO

import pytest
from docx import Document
from docx.shared import Inches

from clarity.contexts.intake.document import RawDocument
from clarity.contexts.optimizing.optimizer import optimize_document
from clarity.contexts.rendering.assembler import assemble_document
from clarity.contexts.rendering.docx_writer import DocxWriter, WriterOutput
from clarity.contexts.rendering.templates import Template


def _write(text, template=None):
    assembled = assemble_document(optimize_document(RawDocument.from_text(text, "docx")), template)
    return DocxWriter().write(assembled.structured, "jane_doe", assembled.template)


@pytest.mark.unit
def test_output_is_a_docx_file():
    output = _write("Jane Doe\nSKILLS\n• Python\nEDUCATION\nBS CS")

    assert isinstance(output, WriterOutput)
    assert output.filename == "jane_doe_ATS_optimized.docx"
    # .docx is a zip container
    assert output.content[:2] == b"PK"


@pytest.mark.unit
def test_paragraph_styles():
    output = _write("Jane Doe\nSKILLS\n• Python\nStrong SQL\nEDUCATION\nBS CS")
    doc = Document(BytesIO(output.content))

    paragraphs = [(p.style.name, p.text) for p in doc.paragraphs]
    assert paragraphs == [
        ("Normal", "Jane Doe"),
        ("Heading 1", "SKILLS"),
        ("List Bullet", "Python"),
        ("Normal", "Strong SQL"),
        ("Heading 1", "EDUCATION"),
        ("Normal", "BS CS"),
    ]


@pytest.mark.unit
def test_dividers_and_margins():
    template = Template(dividers=True, margin_in=0.75, font="Arial")
    output = _write("SKILLS\nPython", template)
    doc = Document(BytesIO(output.content))

    assert [p.text for p in doc.paragraphs] == ["SKILLS", "──────", "Python"]
    assert doc.sections[0].left_margin == Inches(0.75)
    assert doc.styles["Normal"].font.name == "Arial"
