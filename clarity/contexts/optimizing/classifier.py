"""
Section classification for the Optimizing context.

Scans normalized resume text line by line, decides which lines look like
headings, and maps those headings onto the section taxonomy. The classifier
only reads; it returns DetectedSection records and leaves rewriting headings
to the standardizer.

Zero detected sections is a valid result. Nothing in here raises on odd input.
"""

import re
from typing import List, Tuple

from clarity.contexts.optimizing.data_structures import DetectedSection
from clarity.contexts.optimizing.section_patterns import (
    DEFAULT_TAXONOMY,
    HeadingPatterns,
    SectionKind,
    SectionTaxonomy,
)

EXACT_MATCH_CONFIDENCE = 1.0
VARIANT_MATCH_CONFIDENCE = 0.8


def is_all_caps(line: str) -> bool:
    """True if the line has cased characters and none of them are lowercase."""
    return line == line.upper() and line != line.lower()


def is_title_case(line: str) -> bool:
    """
    True if every space-separated word starts with a non-lowercase character.

    Words starting with digits or punctuation count as title case; so do the
    empty strings produced by consecutive spaces.
    """
    return all(not word or word[0] == word[0].upper() for word in line.split(" "))


def is_heading_candidate(line: str) -> bool:
    """
    Decide whether a line is structurally likely to be a section heading.

    A heading candidate is short (<= 50 chars), does not end like a sentence
    ('.' or ','), and is all caps, title case, or starts with a common heading
    word ("Professional", "Summary", "Awards", ...).

    Example:
        >>> is_heading_candidate("WORK HISTORY")
        True
        >>> is_heading_candidate("Led a team of four engineers.")
        False
    """
    line = line.strip()
    if not line:
        return False

    patterns = HeadingPatterns()
    if len(line) > patterns.MAX_HEADING_LENGTH:
        return False
    if line.endswith(patterns.SENTENCE_ENDINGS):
        return False

    if is_all_caps(line) or is_title_case(line):
        return True

    return any(re.search(pattern, line, re.IGNORECASE) for pattern in patterns.HEADING_PREFIXES)


def calculate_confidence(heading: str, section_kind: SectionKind) -> float:
    """
    Confidence that a heading maps to a section kind.

    1.0 when the heading is the canonical label (ignoring case), else 0.8.
    """
    if heading.strip().lower() == section_kind.canonical_label.lower():
        return EXACT_MATCH_CONFIDENCE
    return VARIANT_MATCH_CONFIDENCE


def find_section_headings(
    lines: List[str], taxonomy: SectionTaxonomy
) -> List[Tuple[int, SectionKind]]:
    """
    Locate lines that are both heading candidates and taxonomy matches.

    Each line is classified once; the first taxonomy entry that matches claims it.

    Args:
        lines: Lines of normalized text
        taxonomy: Section taxonomy to match against

    Returns:
        List of (line_index, section_kind) in document order
    """
    headings = []
    for index, line in enumerate(lines):
        stripped = line.strip()
        if not is_heading_candidate(stripped):
            continue
        section_kind = taxonomy.match(stripped)
        if section_kind is not None:
            headings.append((index, section_kind))
    return headings


def find_body_end(lines: List[str], start: int, stop: int) -> int:
    """Index of the first heading candidate in lines[start:stop], or stop if there is none."""
    for index in range(start, stop):
        if is_heading_candidate(lines[index]):
            return index
    return stop


def detect_sections(
    text: str, taxonomy: SectionTaxonomy = DEFAULT_TAXONOMY
) -> Tuple[DetectedSection, ...]:
    """
    Classify normalized text into ordered, non-overlapping sections.

    A section starts at a heading that matches the taxonomy. Its content runs
    until the next heading candidate of any kind, or the end of the document.
    Heading candidates that do not match the taxonomy ("Senior Engineer",
    "Acme Corp") do not start sections; they and the lines after them, up to
    the next section heading, are kept as the section's free_text.

    Args:
        text: Normalized resume text
        taxonomy: Section taxonomy (default: DEFAULT_TAXONOMY)

    Returns:
        Tuple of DetectedSection ordered by start_line (may be empty)

    Example:
        >>> (work,) = detect_sections("EXPERIENCE\\nAcme Corp\\nLed things")
        >>> work.content, work.free_text
        ('', 'Acme Corp\\nLed things')
    """
    lines = text.split("\n")
    headings = find_section_headings(lines, taxonomy)

    sections = []
    for position, (start, section_kind) in enumerate(headings):
        if position + 1 < len(headings):
            next_start = headings[position + 1][0]
        else:
            next_start = len(lines)
        body_end = find_body_end(lines, start + 1, next_start)

        heading = lines[start].strip()
        sections.append(
            DetectedSection(
                original_title=heading,
                standard_title=section_kind.canonical_label,
                content="\n".join(lines[start + 1 : body_end]).strip(),
                start_line=start,
                end_line=body_end - 1,
                confidence=calculate_confidence(heading, section_kind),
                kind=section_kind.kind,
                free_text="\n".join(lines[body_end:next_start]).strip(),
            )
        )

    return tuple(sections)


def extract_preamble(text: str, sections: Tuple[DetectedSection, ...]) -> str:
    """
    Text before the first detected section (typically name and contact lines).

    Returns the whole text when no sections were detected.
    """
    lines = text.split("\n")
    end = sections[0].start_line if sections else len(lines)
    return "\n".join(lines[:end]).strip()
