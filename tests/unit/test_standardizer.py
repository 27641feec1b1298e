"""Unit tests for heading standardization."""

import pytest

from clarity.contexts.optimizing.classifier import detect_sections
from clarity.contexts.optimizing.data_structures import DetectedSection, OptimizationKind
from clarity.contexts.optimizing.standardizer import standardize_headings


@pytest.mark.unit
def test_rewrites_non_canonical_headings():
    text = "WORK HISTORY\nDid X\nEDUCATION\nBS CS"
    standardized, records = standardize_headings(text, detect_sections(text))

    assert standardized == "Work Experience\nDid X\nEducation\nBS CS"
    assert len(records) == 2
    assert all(r.kind == OptimizationKind.HEADING_STANDARDIZED for r in records)


@pytest.mark.unit
def test_records_are_in_reverse_document_order():
    text = "WORK HISTORY\nDid X\nEDUCATION\nBS CS"
    _, records = standardize_headings(text, detect_sections(text))

    assert [(r.before_sample, r.after_sample) for r in records] == [
        ("EDUCATION", "Education"),
        ("WORK HISTORY", "Work Experience"),
    ]


@pytest.mark.unit
def test_canonical_headings_are_left_alone():
    text = "Skills\nPython\nEducation\nBS CS"
    standardized, records = standardize_headings(text, detect_sections(text))

    assert standardized == text
    assert records == ()


@pytest.mark.unit
def test_identical_headings_each_rewritten_once():
    """Two sections with the same heading text each get exactly one rewrite."""
    text = "EXPERIENCE\nFirst job\n\nEXPERIENCE\nSecond job"
    standardized, records = standardize_headings(text, detect_sections(text))

    assert standardized == "Work Experience\nFirst job\n\nWork Experience\nSecond job"
    assert len(records) == 2


@pytest.mark.unit
def test_body_text_matching_a_heading_is_untouched():
    text = "Summary\nSummary of qualifications follows.\nWORK HISTORY\nDid X"
    standardized, _ = standardize_headings(text, detect_sections(text))

    assert standardized.split("\n") == [
        "Professional Summary",
        "Summary of qualifications follows.",
        "Work Experience",
        "Did X",
    ]


@pytest.mark.unit
def test_out_of_range_sections_are_skipped():
    stray = DetectedSection(
        original_title="SKILLS",
        standard_title="Skills",
        content="",
        start_line=10,
        end_line=10,
        confidence=1.0,
    )
    standardized, records = standardize_headings("Jane Doe\nEngineer", [stray])

    assert standardized == "Jane Doe\nEngineer"
    assert records == ()
