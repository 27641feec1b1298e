"""
Integration tests for the full pipeline: raw text in, optimized document,
assembled renderings and downloads out.
"""

from dataclasses import replace

import pytest

from clarity.contexts.intake.document import RawDocument
from clarity.contexts.optimizing.data_structures import OptimizationKind
from clarity.contexts.optimizing.optimizer import optimize_document, rebuild_from_sections
from clarity.contexts.rendering.assembler import HEADING_ENTRY, assemble_document
from clarity.contexts.rendering.exporter import process_document
from clarity.contexts.rendering.templates import Template, get_template, list_templates


@pytest.mark.integration
def test_heading_rename_end_to_end():
    raw = RawDocument.from_text("WORK HISTORY\nDid X\nEDUCATION\nBS CS", "pdf")
    document = optimize_document(raw)

    assert len(document.sections) == 2
    assert document.sections[0].original_title == "WORK HISTORY"
    assert document.sections[0].standard_title == "Work Experience"
    assert document.content == "Work Experience\nDid X\nEducation\nBS CS"

    entries = assemble_document(document).structured
    assert [(e.kind, e.text) for e in entries] == [
        ("heading", "Work Experience"),
        ("paragraph", "Did X"),
        ("heading", "Education"),
        ("paragraph", "BS CS"),
    ]


@pytest.mark.integration
def test_short_resume_warning():
    raw = RawDocument.from_text(" ".join(["word"] * 40), "docx")
    document = optimize_document(raw)

    assert document.warnings[0].startswith("Resume appears very short (40 words)")


@pytest.mark.integration
def test_tabular_layout_flattened():
    document = optimize_document(RawDocument.from_text("Name\tTitle\tDate", "pdf"))

    assert document.content == "Name Title Date"
    assert [r.kind for r in document.optimizations] == [OptimizationKind.STRUCTURE_IMPROVED]


@pytest.mark.integration
def test_pipeline_is_deterministic(sample_raw):
    template = get_template("executive-formal")
    first = process_document(sample_raw, template=template)
    second = process_document(sample_raw, template=template)

    assert first.optimized.content == second.optimized.content
    assert first.assembled.plain_text == second.assembled.plain_text
    assert first.optimized == second.optimized


@pytest.mark.integration
def test_optimized_content_is_a_fixed_point(sample_raw):
    """Feeding optimized content back through the pipeline changes nothing."""
    document = optimize_document(sample_raw)
    again = optimize_document(RawDocument.from_text(document.content, "pdf"))

    assert again.content == document.content
    assert again.optimizations == ()
    assert [s.confidence for s in again.sections] == [1.0] * len(again.sections)


@pytest.mark.integration
def test_standardization_completeness(sample_raw):
    document = optimize_document(sample_raw)
    lines = document.content.split("\n")

    for section in document.sections:
        assert section.standard_title in lines
        if section.original_title != section.standard_title:
            assert section.original_title not in lines


@pytest.mark.integration
def test_section_containment(sample_raw):
    document = optimize_document(sample_raw)
    headings = {s.standard_title for s in document.sections} | {s.original_title for s in document.sections}

    for section in document.sections:
        assert not headings & set(section.content.split("\n"))
        assert not headings & set(section.free_text.split("\n"))


@pytest.mark.integration
@pytest.mark.parametrize("template", list_templates(), ids=lambda t: t.template_id)
def test_every_preset_renders(sample_raw, template):
    result = process_document(sample_raw, template=template)
    plain_text = result.assembled.plain_text

    assert plain_text.startswith("Jane Doe")
    for title in result.assembled.section_titles():
        assert title.upper() in plain_text
    assert all(entry.text for entry in result.assembled.structured)
    assert result.docx_available


@pytest.mark.integration
def test_template_order_matches_when_all_sections_present(sample_raw):
    document = optimize_document(sample_raw)
    order = ("Skills", "Professional Summary", "Education", "Work Experience")

    assembled = assemble_document(document, Template(section_order=order))

    assert assembled.section_titles() == order
    assert [e.text for e in assembled.structured if e.kind == HEADING_ENTRY] == list(order)


@pytest.mark.integration
def test_edit_then_reassemble(sample_raw):
    """User edits re-enter at assembly without re-classifying."""
    document = optimize_document(sample_raw)
    summary = document.sections[0]
    edited = (replace(summary, content="Platform engineer."),) + document.sections[1:]

    rebuilt = rebuild_from_sections(document, edited)
    plain_text = assemble_document(rebuilt, get_template("classic-professional")).plain_text

    assert "PROFESSIONAL SUMMARY\nPlatform engineer." in plain_text
    assert "Backend engineer" not in plain_text
    assert rebuilt.sections[0].confidence == summary.confidence
