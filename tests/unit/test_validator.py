"""Unit tests for ATS compliance validation."""

import pytest

from clarity.contexts.optimizing.classifier import detect_sections
from clarity.contexts.optimizing.section_patterns import SectionKind, SectionTaxonomy
from clarity.contexts.optimizing.validator import (
    MISSING_EMAIL_WARNING,
    check_essential_sections,
    check_word_count,
    extract_contact_info,
    validate_ats_compliance,
)

FILLER = " ".join(["word"] * 120)


@pytest.mark.unit
def test_short_content_warning():
    text = " ".join(["word"] * 40)
    assert check_word_count(text) == [
        "Resume appears very short (40 words). Consider adding more detail to improve ATS scoring."
    ]


@pytest.mark.unit
def test_word_count_at_threshold_passes():
    assert check_word_count(" ".join(["word"] * 100)) == []


@pytest.mark.unit
def test_missing_sections_reported_in_taxonomy_order():
    assert check_essential_sections(()) == [
        "Missing essential section: Professional Summary",
        "Missing essential section: Work Experience",
    ]


@pytest.mark.unit
def test_present_sections_not_reported():
    sections = detect_sections("Summary\nText\nExperience\nText")
    assert check_essential_sections(sections) == []


@pytest.mark.unit
def test_taxonomy_without_essential_kinds_reports_nothing():
    taxonomy = SectionTaxonomy(entries=(SectionKind("HOBBIES", "Hobbies", (r"^hobbies$",)),))
    assert check_essential_sections((), taxonomy) == []


@pytest.mark.unit
def test_warning_order():
    warnings = validate_ats_compliance("too short", ())
    assert warnings[0].startswith("Resume appears very short (2 words)")
    assert warnings[1:3] == (
        "Missing essential section: Professional Summary",
        "Missing essential section: Work Experience",
    )
    assert warnings[3] == MISSING_EMAIL_WARNING


@pytest.mark.unit
def test_complete_document_has_no_warnings():
    text = f"jane@example.com\nSummary\n{FILLER}\nExperience\n{FILLER}"
    assert validate_ats_compliance(text, detect_sections(text)) == ()


@pytest.mark.unit
def test_extract_contact_info():
    info = extract_contact_info(
        "Jane Doe | jane.doe@example.com | (555) 123-4567 | https://linkedin.com/in/janedoe"
    )
    assert info.emails == ("jane.doe@example.com",)
    assert info.phones == ("(555) 123-4567",)
    assert info.urls == ("https://linkedin.com/in/janedoe",)


@pytest.mark.unit
def test_extract_contact_info_empty():
    info = extract_contact_info("No contact details here")
    assert (info.emails, info.phones, info.urls) == ((), (), ())
