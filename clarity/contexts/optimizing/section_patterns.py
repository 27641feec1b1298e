"""
Pattern matching for resume section identification.

This module defines the closed section taxonomy (canonical ATS headings and
the heading variants that map to them) and the generic patterns used to decide
whether a line looks like a heading at all.

Pattern classes follow the frozen-dataclass convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns

The taxonomy is a value passed to the classifier, never module state the
classifier reaches for, so tests can swap in alternate taxonomies.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple

from omegaconf import OmegaConf

# =============================================================================
# HEADING SHAPE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class HeadingPatterns:
    """
    Lexical cues for heading candidates.

    A line shorter than MAX_HEADING_LENGTH that is neither all caps nor title
    case can still be a heading if it starts with one of these words.
    """

    MAX_HEADING_LENGTH: int = 50

    # Lines ending in these read as sentences, not headings
    SENTENCE_ENDINGS: Tuple[str, ...] = (".", ",")

    HEADING_PREFIXES: Tuple[str, ...] = (
        r"^(?:professional|work|career|education|skills|experience|projects|certifications)",
        r"^(?:summary|objective|profile|background|history|qualifications)",
        r"^(?:awards|honors|achievements|publications|languages|interests)",
    )


# =============================================================================
# SECTION VARIANT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SectionVariantPatterns:
    """
    Regex patterns mapping heading variants to canonical sections.

    Patterns are matched against the lowercased, whitespace-normalized heading
    and are anchored, so "Experience" matches but "Experience at Acme" does not.
    Several variants deliberately route to one label ("Summary" and "Profile"
    both become Professional Summary).
    """

    CONTACT_INFORMATION: tuple = (
        r"^contact(?:\s+(?:information|details))?$",
        r"^personal\s+(?:information|details)$",
    )

    PROFESSIONAL_SUMMARY: tuple = (
        r"^(?:professional\s+)?summary$",
        r"^profile$",
        r"^(?:career\s+)?objective$",
        r"^personal\s+statement$",
        r"^about\s+me$",
        r"^overview$",
    )

    WORK_EXPERIENCE: tuple = (
        r"^(?:work|professional)\s+experience$",
        r"^experience$",
        r"^employment$",
        r"^(?:career|work)\s+history$",
        r"^professional\s+background$",
        r"^my\s+professional\s+journey$",
    )

    EDUCATION: tuple = (
        r"^education$",
        r"^(?:academic|educational)\s+background$",
        r"^(?:academic\s+)?qualifications$",
    )

    SKILLS: tuple = (
        r"^(?:technical\s+|key\s+)?skills$",
        r"^(?:core\s+)?competencies$",
        r"^expertise$",
        r"^abilities$",
        r"^proficiencies$",
    )

    CERTIFICATIONS: tuple = (
        r"^(?:professional\s+)?certifications$",
        r"^certificates$",
        r"^licenses$",
        r"^credentials$",
    )

    PROJECTS: tuple = (
        r"^(?:key\s+|notable\s+)?projects$",
        r"^project\s+experience$",
        r"^portfolio$",
    )

    VOLUNTEER: tuple = (
        r"^volunteer(?:\s+(?:experience|work))?$",
        r"^community\s+(?:service|involvement)$",
    )

    AWARDS: tuple = (
        r"^awards(?:\s+and\s+honors)?$",
        r"^honors$",
        r"^achievements$",
        r"^recognition$",
        r"^accomplishments$",
    )

    PUBLICATIONS: tuple = (
        r"^publications$",
        r"^research$",
        r"^papers$",
        r"^articles$",
        r"^published\s+work$",
    )

    LANGUAGES: tuple = (
        r"^languages$",
        r"^language\s+skills$",
        r"^linguistic\s+abilities$",
    )

    ADDITIONAL_INFORMATION: tuple = (
        r"^(?:personal\s+)?interests$",
        r"^hobbies$",
        r"^additional\s+information$",
        r"^other$",
        r"^miscellaneous$",
    )


# =============================================================================
# TAXONOMY
# =============================================================================


@dataclass(frozen=True)
class SectionKind:
    """
    One entry of the section taxonomy.

    Attributes:
        kind: Stable key (e.g., "WORK_EXPERIENCE")
        canonical_label: ATS-standard heading (e.g., "Work Experience")
        patterns: Regexes for heading variants, tried in order
    """

    kind: str
    canonical_label: str
    patterns: Tuple[str, ...]

    def matches(self, heading: str) -> bool:
        normalized = normalize_section_name(heading)
        return any(re.search(pattern, normalized, re.IGNORECASE) for pattern in self.patterns)


@dataclass(frozen=True)
class SectionTaxonomy:
    """
    Ordered, closed list of section kinds.

    Declaration order matters twice: the first kind whose pattern matches a
    heading claims it, and the validator reports missing sections in this order.
    """

    entries: Tuple[SectionKind, ...]

    def __post_init__(self):
        kinds = [entry.kind for entry in self.entries]
        duplicates = sorted({kind for kind in kinds if kinds.count(kind) > 1})
        if duplicates:
            raise ValueError(f"Duplicate section kinds in taxonomy: {duplicates}")

    def __iter__(self) -> Iterator[SectionKind]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def match(self, heading: str) -> Optional[SectionKind]:
        """
        Find the first taxonomy entry whose patterns match the heading.

        Args:
            heading: Candidate heading line

        Returns:
            Matching SectionKind, or None if no entry matches
        """
        for entry in self.entries:
            if entry.matches(heading):
                return entry
        return None

    def get(self, kind: str) -> Optional[SectionKind]:
        for entry in self.entries:
            if entry.kind == kind:
                return entry
        return None

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(entry.canonical_label for entry in self.entries)


def _build_default_taxonomy() -> SectionTaxonomy:
    variants = SectionVariantPatterns()
    return SectionTaxonomy(
        entries=(
            SectionKind("CONTACT_INFORMATION", "Contact Information", variants.CONTACT_INFORMATION),
            SectionKind("PROFESSIONAL_SUMMARY", "Professional Summary", variants.PROFESSIONAL_SUMMARY),
            SectionKind("WORK_EXPERIENCE", "Work Experience", variants.WORK_EXPERIENCE),
            SectionKind("EDUCATION", "Education", variants.EDUCATION),
            SectionKind("SKILLS", "Skills", variants.SKILLS),
            SectionKind("CERTIFICATIONS", "Certifications", variants.CERTIFICATIONS),
            SectionKind("PROJECTS", "Projects", variants.PROJECTS),
            SectionKind("VOLUNTEER", "Volunteer Experience", variants.VOLUNTEER),
            SectionKind("AWARDS", "Awards and Honors", variants.AWARDS),
            SectionKind("PUBLICATIONS", "Publications", variants.PUBLICATIONS),
            SectionKind("LANGUAGES", "Languages", variants.LANGUAGES),
            SectionKind(
                "ADDITIONAL_INFORMATION", "Additional Information", variants.ADDITIONAL_INFORMATION
            ),
        )
    )


DEFAULT_TAXONOMY = _build_default_taxonomy()

# Sections whose absence the compliance validator reports
ESSENTIAL_SECTION_KINDS = ("WORK_EXPERIENCE", "PROFESSIONAL_SUMMARY")


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def normalize_section_name(name: str) -> str:
    """
    Normalize section name for matching.

    Args:
        name: Raw heading text

    Returns:
        Normalized heading (lowercase, stripped, whitespace normalized)
    """
    return re.sub(r"\s+", " ", name.lower().strip())


def load_taxonomy(config_path: Path) -> SectionTaxonomy:
    """
    Load an alternate taxonomy from a YAML file.

    Expected structure (entries keep file order):

        sections:
          - kind: WORK_EXPERIENCE
            label: Work Experience
            patterns: ["^experience$", "^employment$"]

    Args:
        config_path: Path to taxonomy YAML

    Returns:
        SectionTaxonomy built from the file

    Raises:
        ValueError: If the YAML is missing required keys
    """
    data = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    if not isinstance(data, dict) or "sections" not in data:
        raise ValueError(f"Taxonomy YAML must contain a 'sections' list: {config_path}")

    entries = []
    for index, entry in enumerate(data["sections"]):
        missing = [key for key in ("kind", "label", "patterns") if key not in entry]
        if missing:
            raise ValueError(f"Taxonomy entry {index} in {config_path} is missing {missing}")
        entries.append(
            SectionKind(
                kind=str(entry["kind"]),
                canonical_label=str(entry["label"]),
                patterns=tuple(str(pattern) for pattern in entry["patterns"]),
            )
        )

    return SectionTaxonomy(entries=tuple(entries))
