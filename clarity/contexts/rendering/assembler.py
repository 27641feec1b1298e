"""
Document assembly for the Rendering context.

Applies a Template to an OptimizedDocument and produces the two renderings
users download: plain text and a structured entry list for rich-document
writers. Both renderings are derived from the same tuple of AssembledSection
values, so section order, headings and bullet text always agree between them.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from clarity.contexts.optimizing.data_structures import DetectedSection, OptimizedDocument
from clarity.contexts.rendering.templates import DEFAULT_TEMPLATE, Template
from clarity.utils.text_processing import count_words, set_max_consecutive_blank_lines

BULLET_MARKER = re.compile(r"^[•\-\*]\s")
DIVIDER_CHAR = "─"

HEADING_ENTRY = "heading"
PARAGRAPH_ENTRY = "paragraph"
BULLET_ENTRY = "bullet"


@dataclass(frozen=True)
class AssembledSection:
    """
    One re-flowed section, shared by both renderings.

    Attributes:
        heading: Canonical title, or None for the preamble
        lines: Body lines, then any free text lines, after bullet substitution
               (may include blank lines)
        kind: Taxonomy key of the source section ("" for the preamble)
    """

    heading: Optional[str]
    lines: Tuple[str, ...]
    kind: str = ""

    @property
    def body(self) -> str:
        return "\n".join(self.lines).strip()


@dataclass(frozen=True)
class StructuredEntry:
    """
    One paragraph-level entry for a rich-document writer.

    Attributes:
        heading: Title of the section the entry belongs to (None in the preamble)
        kind: "heading", "paragraph" or "bullet"
        text: Entry text (bullet entries exclude the glyph)
        styling_hints: Font, size, spacing and glyph hints from the template
    """

    heading: Optional[str]
    kind: str
    text: str
    styling_hints: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class AssembledDocument:
    """Template-applied document; both renderings derive from `sections`."""

    sections: Tuple[AssembledSection, ...]
    template: Template

    @property
    def plain_text(self) -> str:
        return render_plain_text(self.sections, self.template)

    @property
    def structured(self) -> Tuple[StructuredEntry, ...]:
        return render_structured(self.sections, self.template)

    @property
    def word_count(self) -> int:
        return count_words(self.plain_text)

    def section_titles(self) -> Tuple[str, ...]:
        return tuple(section.heading for section in self.sections if section.heading is not None)


# =============================================================================
# TEMPLATE APPLICATION
# =============================================================================


def _slot_matches(section: DetectedSection, slot: str) -> bool:
    return section.standard_title == slot or slot.lower() in section.original_title.lower()


def _match_slots(
    sections: Sequence[DetectedSection], section_order: Sequence[str]
) -> Tuple[List[DetectedSection], List[str]]:
    """Place sections into template slots. Returns (placed sections, unmatched slots)."""
    remaining = list(sections)
    placed = []
    unmatched = []

    for slot in section_order:
        match = next((section for section in remaining if _slot_matches(section, slot)), None)
        if match is None:
            unmatched.append(slot)
            continue
        placed.append(match)
        remaining.remove(match)

    return placed + remaining, unmatched


def reorder_sections(
    sections: Sequence[DetectedSection], section_order: Sequence[str]
) -> Tuple[DetectedSection, ...]:
    """
    Reorder sections to follow a template's section order.

    Each slot takes the first unplaced section whose standard_title equals the
    slot or whose original_title contains it (case-insensitive). Slots with no
    match are skipped; sections no slot claimed follow in their original order.

    Example:
        >>> ordered = reorder_sections(sections, ["Skills", "Work Experience"])
        >>> [s.standard_title for s in ordered]
        ['Skills', 'Work Experience', 'Education']
    """
    ordered, _ = _match_slots(sections, section_order)
    return tuple(ordered)


def reflow_lines(content: str, bullet_glyph: str) -> Tuple[str, ...]:
    """Split section content into lines, substituting the template's bullet glyph."""
    replacement = f"{bullet_glyph} "
    return tuple(BULLET_MARKER.sub(replacement, line) for line in content.split("\n"))


def apply_template(document: OptimizedDocument, template: Template) -> Tuple[AssembledSection, ...]:
    assembled = []
    if document.preamble:
        assembled.append(
            AssembledSection(heading=None, lines=reflow_lines(document.preamble, template.bullet_glyph))
        )

    for section in reorder_sections(document.sections, template.section_order):
        assembled.append(
            AssembledSection(
                heading=section.standard_title,
                lines=reflow_lines(section.full_text, template.bullet_glyph) if section.full_text else (),
                kind=section.kind,
            )
        )

    return tuple(assembled)


def check_template_compatibility(document: OptimizedDocument, template: Template) -> Tuple[str, ...]:
    """
    Advisory warnings for template slots that no detected section fills.

    Unfilled slots are skipped during assembly; these warnings only explain
    why a section the template lists is absent from the output.
    """
    _, unmatched = _match_slots(document.sections, template.section_order)
    return tuple(
        f"Template '{template.name}' lists a '{slot}' section, but none was detected"
        for slot in unmatched
    )


# =============================================================================
# RENDERING
# =============================================================================


def render_plain_text(sections: Sequence[AssembledSection], template: Template) -> str:
    """
    Render assembled sections as ATS-friendly plain text.

    Headings are upper-cased and optionally underlined with a divider rule.
    Body lines are joined with the template's line gap and sections are
    separated by its spacer lines.
    """
    line_gap = "\n" * template.line_gap
    blocks = []

    for section in sections:
        block_lines = []
        if section.heading is not None:
            block_lines.append(section.heading.upper())
            if template.dividers:
                block_lines.append(DIVIDER_CHAR * len(section.heading))

        body = set_max_consecutive_blank_lines(line_gap.join(section.lines).strip(), max_consecutive=1)
        if body:
            block_lines.append(body)

        if block_lines:
            blocks.append("\n".join(block_lines))

    separator = "\n" * (template.spacer_lines + 1)
    return separator.join(blocks).strip()


def render_structured(
    sections: Sequence[AssembledSection], template: Template
) -> Tuple[StructuredEntry, ...]:
    """
    Render assembled sections as ordered entries for a rich-document writer.

    Blank lines are dropped; paragraph spacing is the writer's concern.
    """
    bullet_prefix = f"{template.bullet_glyph} "
    body_hints = {
        "font": template.font,
        "size_pt": template.body_size_pt,
        "line_spacing": template.line_spacing_multiplier,
    }

    entries = []
    for index, section in enumerate(sections):
        if section.heading is not None:
            entries.append(
                StructuredEntry(
                    heading=section.heading,
                    kind=HEADING_ENTRY,
                    text=section.heading,
                    styling_hints={
                        "font": template.font,
                        "size_pt": template.heading_size_pt,
                        "bold": True,
                        "uppercase": True,
                        "divider": template.dividers,
                        "space_before_units": template.section_spacing_units if index else 0,
                    },
                )
            )

        for line in section.lines:
            if not line.strip():
                continue
            if line.startswith(bullet_prefix):
                entries.append(
                    StructuredEntry(
                        heading=section.heading,
                        kind=BULLET_ENTRY,
                        text=line[len(bullet_prefix) :].strip(),
                        styling_hints={**body_hints, "bullet_glyph": template.bullet_glyph},
                    )
                )
            else:
                entries.append(
                    StructuredEntry(
                        heading=section.heading,
                        kind=PARAGRAPH_ENTRY,
                        text=line.strip(),
                        styling_hints=dict(body_hints),
                    )
                )

    return tuple(entries)


def assemble_document(
    document: OptimizedDocument, template: Optional[Template] = None
) -> AssembledDocument:
    """
    Apply a template to an optimized document.

    Args:
        document: OptimizedDocument from optimize_document()
        template: Template to apply (default: DEFAULT_TEMPLATE, original order)

    Returns:
        AssembledDocument exposing plain_text and structured renderings
    """
    template = template or DEFAULT_TEMPLATE
    return AssembledDocument(sections=apply_template(document, template), template=template)
