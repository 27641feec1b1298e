"""
Extracted-text normalizer for the Intake context.

Cleans raw text from the PDF/DOCX extractor into canonical line-oriented form
before section classification. The rules run in a fixed order; later stages
(classification, standardization) index lines of the normalized text, so the
output must be deterministic for a given input.

Design principle: Normalize BEFORE classifying, so heading detection only ever
sees trimmed lines with canonical bullets and whitespace.
"""

import os
import re
from typing import Optional, Union

from dotenv import load_dotenv

from clarity.contexts.intake.document import RawDocument, SourceKind
from clarity.contexts.intake.exceptions import EmptyContentError
from clarity.utils.text_processing import trim_lines

load_dotenv()
STRIP_EXTRACTION_ARTIFACTS = (
    os.getenv("CLARITY_STRIP_EXTRACTION_ARTIFACTS", "false").lower() == "true"
)

CANONICAL_BULLET = "•"

# Glyphs mapped to the canonical bullet wherever they appear
INLINE_BULLET_GLYPHS = re.compile(r"[•·▪▫■□‣⁃]")

# Hollow circles are only bullets at the start of a line
LEADING_CIRCLE_BULLET = re.compile(r"^[ \t]*[○◦][ \t]*", re.MULTILINE)

# Three or more line breaks, counting whitespace-only lines as blank
BLANK_LINE_RUN = re.compile(r"\n(?:[ \t\f\v]*\n){2,}")

# C0/C1 controls except tab and newline (form feed and CR are handled earlier)
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")

# Extraction artifacts: words glued together across case or digit boundaries
CASE_BOUNDARIES = (
    re.compile(r"([a-z])([A-Z])"),  # "ledTeam" -> "led Team"
    re.compile(r"(\d)([A-Za-z])"),  # "2020Present" -> "2020 Present"
    re.compile(r"([A-Za-z])(\d)"),  # "Python3" -> "Python 3"
)

# Source-specific extraction artifacts (opt-in)
PDF_ARTIFACT_LINES = (
    re.compile(r"^[ \t]*Page[ \t]+\d+[ \t]*$", re.MULTILINE | re.IGNORECASE),
    re.compile(r"^[ \t]*\d+[ \t]*$", re.MULTILINE),  # bare page numbers
)
DOCX_ARTIFACT_LINES = (
    re.compile(r"^[ \t]*_+[ \t]*$", re.MULTILINE),  # underline-only rules
    re.compile(r"^[ \t]*-+[ \t]*$", re.MULTILINE),  # dash-only rules
)


def unify_line_endings(text: str) -> str:
    """Convert \\r\\n and lone \\r line endings to \\n."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def collapse_blank_lines(text: str) -> str:
    """
    Collapse 3+ consecutive newlines to exactly 2.

    Lines holding only spaces, tabs or form feeds count as blank.

    Example:
        >>> collapse_blank_lines("a\\n \\n\\t\\n\\nb")
        'a\\n\\nb'
    """
    return BLANK_LINE_RUN.sub("\n\n", text)


def collapse_horizontal_whitespace(text: str) -> str:
    """Collapse runs of 2+ spaces/tabs to a single space."""
    return re.sub(r"[ \t]{2,}", " ", text)


def canonicalize_bullet_glyphs(text: str) -> str:
    """
    Map known bullet glyph variants to the canonical bullet.

    Example:
        >>> canonicalize_bullet_glyphs("▪ Python\\n◦ Go")
        '• Python\\n• Go'
    """
    text = INLINE_BULLET_GLYPHS.sub(CANONICAL_BULLET, text)
    return LEADING_CIRCLE_BULLET.sub(f"{CANONICAL_BULLET} ", text)


def split_glued_words(text: str) -> str:
    """
    Insert a space at lower->upper and digit<->letter boundaries.

    Example:
        >>> split_glued_words("ManagerAcme2019Present")
        'Manager Acme 2019 Present'
    """
    for pattern in CASE_BOUNDARIES:
        text = pattern.sub(r"\1 \2", text)
    return text


def strip_extraction_artifacts(text: str, source_kind: Union[str, SourceKind]) -> str:
    """
    Remove lines that are layout residue of the source format.

    PDF extraction leaves page-number lines ("Page 2", "3"); DOCX extraction
    leaves horizontal rules drawn with underscores or dashes.

    Args:
        text: Raw extracted text
        source_kind: Format the text was extracted from

    Returns:
        Text with artifact lines blanked out
    """
    patterns = PDF_ARTIFACT_LINES if SourceKind.parse(source_kind) == SourceKind.PDF else DOCX_ARTIFACT_LINES
    for pattern in patterns:
        text = pattern.sub("", text)
    return text


def normalize_text(text: str, source_kind: Optional[Union[str, SourceKind]] = None) -> str:
    """
    Normalize raw extracted text into canonical line-oriented form.

    Rules, applied in order:
    1. Unify line endings to \\n
    2. Collapse 3+ consecutive newlines to 2
    3. Collapse runs of 2+ spaces/tabs to one space
    4. Convert form feeds to newlines
    5. Strip control characters (newline and tab survive)
    6. Map bullet glyph variants to the canonical bullet
    7. Split words glued across case/digit boundaries
    8. Trim each line, drop leading/trailing blank lines

    The result never contains 3+ consecutive newlines, and
    normalize_text(normalize_text(x)) == normalize_text(x).

    Args:
        text: Raw extracted text
        source_kind: Optional source kind, reported in the error on failure

    Returns:
        Normalized text

    Raises:
        EmptyContentError: If nothing but whitespace remains
    """
    normalized = unify_line_endings(text)
    normalized = collapse_blank_lines(normalized)
    normalized = collapse_horizontal_whitespace(normalized)
    normalized = normalized.replace("\f", "\n")
    normalized = CONTROL_CHARS.sub("", normalized)
    normalized = canonicalize_bullet_glyphs(normalized)
    normalized = split_glued_words(normalized)
    normalized = trim_lines(normalized)
    # Form feeds and stripped controls can open new blank runs after rule 2
    normalized = collapse_blank_lines(normalized)

    if not normalized.strip():
        raise EmptyContentError(
            source_kind=SourceKind.parse(source_kind).value if source_kind else None,
            raw_length=len(text),
        )

    return normalized


def normalize_document(raw: RawDocument, strip_artifacts: bool = STRIP_EXTRACTION_ARTIFACTS) -> str:
    """
    Normalize the text of a RawDocument.

    This is the main entry point for the Intake context.

    Args:
        raw: Document supplied by the extraction collaborator
        strip_artifacts: Also remove page-number / rule lines left by the
                         source format (default: CLARITY_STRIP_EXTRACTION_ARTIFACTS)

    Returns:
        Normalized text

    Raises:
        EmptyContentError: If the document has no usable text
    """
    text = raw.text
    if strip_artifacts:
        text = strip_extraction_artifacts(text, raw.source_kind)
    return normalize_text(text, source_kind=raw.source_kind)
