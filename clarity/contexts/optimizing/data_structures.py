"""
Optimizing Data Structures

Immutable records passed between the optimizing stages and handed to the
rendering context. Every stage returns fresh values; nothing here is mutated
after construction.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

from clarity.contexts.intake.document import SourceKind
from clarity.utils.text_processing import count_words


class PipelineStage(str, Enum):
    """Per-document processing stages, in order. ASSEMBLED is terminal."""

    RAW = "raw"
    NORMALIZED = "normalized"
    CLASSIFIED = "classified"
    STANDARDIZED = "standardized"
    STRUCTURED = "structured"
    VALIDATED = "validated"
    ASSEMBLED = "assembled"


class OptimizationKind(str, Enum):
    """Kinds of change recorded in the optimization log."""

    HEADING_STANDARDIZED = "heading_standardized"
    FORMATTING_CLEANED = "formatting_cleaned"
    STRUCTURE_IMPROVED = "structure_improved"
    CONTENT_ENHANCED = "content_enhanced"


@dataclass(frozen=True)
class DetectedSection:
    """
    A resume section found by the classifier.

    Attributes:
        original_title: Heading line as it appeared in the normalized text
        standard_title: Canonical label from the taxonomy
        content: Body text under the heading (never includes the heading line)
        start_line: Zero-based index of the heading line
        end_line: Zero-based index of the last body line (start_line when
                  the body is empty)
        confidence: 1.0 for an exact canonical heading, 0.8 for a variant
        kind: Taxonomy key (e.g., "WORK_EXPERIENCE")
        free_text: Lines from the first unmatched heading candidate after the
                   body up to the next section heading ("Acme Corp", a job
                   title line and what follows it). Not part of content.
    """

    original_title: str
    standard_title: str
    content: str
    start_line: int
    end_line: int
    confidence: float
    kind: str = ""
    free_text: str = ""

    @property
    def full_text(self) -> str:
        """Body followed by the free text that precedes the next section."""
        return "\n".join(part for part in (self.content, self.free_text) if part)

    @property
    def needs_standardization(self) -> bool:
        return self.original_title != self.standard_title


@dataclass(frozen=True)
class OptimizationRecord:
    """One entry in the append-only optimization log."""

    kind: OptimizationKind
    description: str
    before_sample: Optional[str] = None
    after_sample: Optional[str] = None


@dataclass(frozen=True)
class DocumentStatistics:
    """Word counts and change counts for an optimized document."""

    original_word_count: int
    optimized_word_count: int
    sections_standardized: int
    issues_fixed: int

    @classmethod
    def compute(
        cls, original_word_count: int, content: str, optimizations: Sequence[OptimizationRecord]
    ) -> "DocumentStatistics":
        """
        Derive statistics from final content and the optimization log.

        Args:
            original_word_count: Word count reported for the raw document
            content: Final optimized content
            optimizations: All records appended during stages 3-4
        """
        return cls(
            original_word_count=original_word_count,
            optimized_word_count=count_words(content),
            sections_standardized=sum(
                1 for record in optimizations if record.kind == OptimizationKind.HEADING_STANDARDIZED
            ),
            issues_fixed=len(optimizations),
        )


@dataclass(frozen=True)
class OptimizedDocument:
    """
    Snapshot returned to callers after stages 1-5.

    Attributes:
        content: Final flowing text (standardized and structurally cleaned)
        sections: Detected sections, ordered by start_line
        optimizations: Records from standardization and structural cleanup
        statistics: Word and change counts
        warnings: Advisory compliance warnings
        preamble: Text before the first detected section (name, contact lines)
        source_kind: Format the original text was extracted from
    """

    content: str
    sections: Tuple[DetectedSection, ...]
    optimizations: Tuple[OptimizationRecord, ...]
    statistics: DocumentStatistics
    warnings: Tuple[str, ...] = field(default_factory=tuple)
    preamble: str = ""
    source_kind: Optional[SourceKind] = None

    def section_titles(self) -> Tuple[str, ...]:
        return tuple(section.standard_title for section in self.sections)
