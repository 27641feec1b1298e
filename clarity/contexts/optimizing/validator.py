"""
ATS compliance validation for the Optimizing context.

Advisory checks only: every finding is a warning string returned next to a
successful result. The checks run in a fixed order (length, essential
sections, contact information) so warning lists are stable across runs.
"""

import re
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from clarity.contexts.optimizing.data_structures import DetectedSection
from clarity.contexts.optimizing.section_patterns import (
    DEFAULT_TAXONOMY,
    ESSENTIAL_SECTION_KINDS,
    SectionTaxonomy,
)
from clarity.utils.text_processing import count_words

MIN_WORD_COUNT = 100

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_PATTERN = re.compile(r"(?:\+?1[-.\s]?)?\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}\b")
URL_PATTERN = re.compile(r"https?://[^\s]+|www\.[^\s]+")

SHORT_CONTENT_WARNING = (
    "Resume appears very short ({word_count} words). "
    "Consider adding more detail to improve ATS scoring."
)
MISSING_SECTION_WARNING = "Missing essential section: {label}"
MISSING_EMAIL_WARNING = "No email address detected. Ensure contact information is included."


@dataclass(frozen=True)
class ContactInfo:
    """Contact details found in resume text, in order of appearance."""

    emails: Tuple[str, ...] = field(default_factory=tuple)
    phones: Tuple[str, ...] = field(default_factory=tuple)
    urls: Tuple[str, ...] = field(default_factory=tuple)


def extract_contact_info(text: str) -> ContactInfo:
    """
    Find email addresses, phone numbers and URLs in text.

    Example:
        >>> info = extract_contact_info("jane@example.com | (555) 123-4567")
        >>> info.emails
        ('jane@example.com',)
    """
    return ContactInfo(
        emails=tuple(EMAIL_PATTERN.findall(text)),
        phones=tuple(match.group(0) for match in PHONE_PATTERN.finditer(text)),
        urls=tuple(URL_PATTERN.findall(text)),
    )


def check_word_count(text: str) -> List[str]:
    word_count = count_words(text)
    if word_count < MIN_WORD_COUNT:
        return [SHORT_CONTENT_WARNING.format(word_count=word_count)]
    return []


def check_essential_sections(
    sections: Sequence[DetectedSection], taxonomy: SectionTaxonomy = DEFAULT_TAXONOMY
) -> List[str]:
    """
    Warn about each essential section kind that was not detected.

    Missing kinds are reported in taxonomy declaration order. Kinds the
    taxonomy does not define are not checked.
    """
    detected_kinds = {section.kind for section in sections}
    detected_titles = {section.standard_title for section in sections}

    warnings = []
    for entry in taxonomy:
        if entry.kind not in ESSENTIAL_SECTION_KINDS:
            continue
        if entry.kind in detected_kinds or entry.canonical_label in detected_titles:
            continue
        warnings.append(MISSING_SECTION_WARNING.format(label=entry.canonical_label))
    return warnings


def check_contact_info(text: str) -> List[str]:
    if not extract_contact_info(text).emails:
        return [MISSING_EMAIL_WARNING]
    return []


def validate_ats_compliance(
    text: str,
    sections: Sequence[DetectedSection],
    taxonomy: SectionTaxonomy = DEFAULT_TAXONOMY,
) -> Tuple[str, ...]:
    """
    Run all compliance checks on final content.

    Never raises for content problems; findings come back as warnings.

    Args:
        text: Final optimized content
        sections: Detected sections
        taxonomy: Taxonomy the sections were classified against

    Returns:
        Warnings, ordered: word count, missing sections, contact information
    """
    warnings: List[str] = []
    warnings.extend(check_word_count(text))
    warnings.extend(check_essential_sections(sections, taxonomy))
    warnings.extend(check_contact_info(text))
    return tuple(warnings)
