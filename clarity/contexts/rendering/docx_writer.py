"""
Rich-document writers for the Rendering context.

A writer turns the assembler's structured entries into a downloadable file.
The exporter calls writers through the RichDocumentWriter protocol under a
timeout, so any writer (including test doubles) can be substituted.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import Sequence

from docx import Document
from docx.shared import Inches, Pt
from typing_extensions import Protocol

from clarity.contexts.rendering.assembler import (
    BULLET_ENTRY,
    DIVIDER_CHAR,
    HEADING_ENTRY,
    StructuredEntry,
)
from clarity.contexts.rendering.templates import DEFAULT_TEMPLATE, Template

DOCX_SUFFIX = "_ATS_optimized.docx"

# Points per section_spacing_unit before a heading
POINTS_PER_SPACING_UNIT = 1


@dataclass(frozen=True)
class WriterOutput:
    """Bytes produced by a writer and the filename to offer them under."""

    content: bytes
    filename: str


class RichDocumentWriter(Protocol):
    def write(
        self, entries: Sequence[StructuredEntry], base_name: str, template: Template
    ) -> WriterOutput: ...


class DocxWriter:
    """
    Writes structured entries to a single-column .docx with python-docx.

    Headings use the built-in "Heading 1" style (ATS parsers read Word heading
    styles), bullets use "List Bullet", everything else is Normal.
    """

    def write(
        self,
        entries: Sequence[StructuredEntry],
        base_name: str,
        template: Template = DEFAULT_TEMPLATE,
    ) -> WriterOutput:
        doc = Document()
        self._setup_page(doc, template)

        for entry in entries:
            if entry.kind == HEADING_ENTRY:
                self._add_heading(doc, entry, template)
            elif entry.kind == BULLET_ENTRY:
                self._add_body(doc, entry, template, style="List Bullet")
            else:
                self._add_body(doc, entry, template)

        buffer = BytesIO()
        doc.save(buffer)
        return WriterOutput(content=buffer.getvalue(), filename=f"{base_name}{DOCX_SUFFIX}")

    def _setup_page(self, doc, template: Template) -> None:
        for section in doc.sections:
            margin = Inches(template.margin_in)
            section.left_margin = margin
            section.right_margin = margin
            section.top_margin = margin
            section.bottom_margin = margin

        normal = doc.styles["Normal"]
        normal.font.name = template.font
        normal.font.size = Pt(template.body_size_pt)
        normal.paragraph_format.line_spacing = template.line_spacing_multiplier

    def _add_heading(self, doc, entry: StructuredEntry, template: Template) -> None:
        hints = entry.styling_hints
        text = entry.text.upper() if hints.get("uppercase") else entry.text

        para = doc.add_paragraph(style="Heading 1")
        run = para.add_run(text)
        run.bold = bool(hints.get("bold", True))
        run.font.name = hints.get("font", template.font)
        run.font.size = Pt(hints.get("size_pt", template.heading_size_pt))
        para.paragraph_format.space_before = Pt(
            hints.get("space_before_units", 0) * POINTS_PER_SPACING_UNIT
        )

        if hints.get("divider"):
            rule = doc.add_paragraph()
            rule.add_run(DIVIDER_CHAR * len(entry.text))

    def _add_body(
        self, doc, entry: StructuredEntry, template: Template, style: str = "Normal"
    ) -> None:
        hints = entry.styling_hints
        para = doc.add_paragraph(style=style)
        run = para.add_run(entry.text)
        run.font.name = hints.get("font", template.font)
        run.font.size = Pt(hints.get("size_pt", template.body_size_pt))
