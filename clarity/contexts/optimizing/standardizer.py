"""
Heading standardization for the Optimizing context.

Rewrites each detected heading line to its canonical ATS label. Rewrites
target the exact line recorded by the classifier (start_line), never a text
search, so two sections with the same heading text each get exactly one
rewrite and body text that happens to repeat a heading is left alone.
"""

from typing import List, Sequence, Tuple

from clarity.contexts.optimizing.data_structures import (
    DetectedSection,
    OptimizationKind,
    OptimizationRecord,
)


def standardize_headings(
    text: str, sections: Sequence[DetectedSection]
) -> Tuple[str, Tuple[OptimizationRecord, ...]]:
    """
    Replace non-canonical headings with their standard titles.

    Sections are processed in reverse document order, so the optimization log
    lists the last heading first.

    Args:
        text: Normalized text the sections were detected in
        sections: Sections from detect_sections(), ordered by start_line

    Returns:
        Tuple of (standardized text, heading_standardized records)
    """
    lines = text.split("\n")
    records: List[OptimizationRecord] = []

    for section in reversed(sections):
        if not section.needs_standardization:
            continue
        if not 0 <= section.start_line < len(lines):
            # Section does not belong to this text
            continue

        lines[section.start_line] = section.standard_title
        records.append(
            OptimizationRecord(
                kind=OptimizationKind.HEADING_STANDARDIZED,
                description="Standardized section heading for better ATS recognition",
                before_sample=section.original_title,
                after_sample=section.standard_title,
            )
        )

    return "\n".join(lines), tuple(records)
