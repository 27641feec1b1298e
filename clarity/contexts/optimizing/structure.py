"""
Structural cleanup for the Optimizing context.

Extraction already yields linear, single-column text; these passes remove
the residue that survives it: stray bullet glyphs, tab-separated table
layouts, typographic punctuation that some ATS parsers mangle, and uneven
whitespace. Each pass records an OptimizationRecord only when it changed
something, so a second run over clean text records nothing.
"""

import re
from typing import Callable, List, Optional, Tuple

from clarity.contexts.intake.normalizer import (
    CANONICAL_BULLET,
    collapse_horizontal_whitespace,
    unify_line_endings,
)
from clarity.contexts.optimizing.data_structures import OptimizationKind, OptimizationRecord
from clarity.utils.text_processing import set_max_consecutive_blank_lines, trim_lines

LEADING_BULLET = re.compile(r"^[ \t]*[•·▪▫■□‣⁃○◦][ \t]*", re.MULTILINE)
TAB_RUN = re.compile(r"\t+")

# Typographic character -> ASCII equivalent
TYPOGRAPHIC_REPLACEMENTS = {
    "“": '"',  # left double quote
    "”": '"',  # right double quote
    "„": '"',  # low double quote
    "‘": "'",  # left single quote
    "’": "'",  # right single quote
    "‚": "'",  # low single quote
    "…": "...",  # ellipsis
    "–": "-",  # en dash
    "—": "-",  # em dash
}


def canonicalize_bullets(text: str) -> str:
    """Rewrite line-leading bullet glyphs as the canonical bullet plus one space."""
    return LEADING_BULLET.sub(f"{CANONICAL_BULLET} ", text)


def flatten_tabs(text: str) -> str:
    """
    Replace tab runs with a single space, flattening tabular layout.

    Example:
        >>> flatten_tabs("Name\\tTitle\\t\\tDate")
        'Name Title Date'
    """
    return TAB_RUN.sub(" ", text)


def replace_typographic_characters(text: str) -> str:
    """Replace curly quotes, ellipses and long dashes with ASCII."""
    for char, replacement in TYPOGRAPHIC_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text


def renormalize_whitespace(text: str) -> str:
    """
    Re-apply the normalizer's whitespace rules.

    Idempotent: renormalize_whitespace(renormalize_whitespace(x)) == renormalize_whitespace(x).
    """
    text = unify_line_endings(text)
    text = collapse_horizontal_whitespace(text)
    text = trim_lines(text)
    return set_max_consecutive_blank_lines(text, max_consecutive=1)


# (pass, record kind, description), in the order they run
STRUCTURAL_PASSES: List[Tuple[Callable[[str], str], OptimizationKind, str]] = [
    (
        canonicalize_bullets,
        OptimizationKind.FORMATTING_CLEANED,
        "Standardized bullet points to simple round bullets",
    ),
    (
        flatten_tabs,
        OptimizationKind.STRUCTURE_IMPROVED,
        "Converted table structures to linear text for ATS compatibility",
    ),
    (
        replace_typographic_characters,
        OptimizationKind.FORMATTING_CLEANED,
        "Replaced special characters with ATS-friendly alternatives",
    ),
    (
        renormalize_whitespace,
        OptimizationKind.FORMATTING_CLEANED,
        "Removed excessive whitespace and normalized line breaks",
    ),
]


def _first_changed_line(before: str, after: str) -> Optional[Tuple[str, str]]:
    """First (before, after) line pair that differs, for record samples."""
    for old, new in zip(before.split("\n"), after.split("\n")):
        if old != new:
            return old, new
    return None


def optimize_structure(text: str) -> Tuple[str, Tuple[OptimizationRecord, ...]]:
    """
    Run the structural passes in order, recording the ones that changed the text.

    Args:
        text: Heading-standardized text

    Returns:
        Tuple of (cleaned text, records)
    """
    records = []

    for structural_pass, kind, description in STRUCTURAL_PASSES:
        cleaned = structural_pass(text)
        if cleaned != text:
            sample = _first_changed_line(text, cleaned)
            records.append(
                OptimizationRecord(
                    kind=kind,
                    description=description,
                    before_sample=sample[0] if sample else None,
                    after_sample=sample[1] if sample else None,
                )
            )
        text = cleaned

    return text, tuple(records)


def clean_structure(text: str) -> str:
    """Apply the structural passes without recording anything."""
    for structural_pass, _, _ in STRUCTURAL_PASSES:
        text = structural_pass(text)
    return text
