"""
Optimizing Context

Responsibilities:
- Classifies normalized text into sections against an explicit taxonomy
- Rewrites section headings to their canonical ATS labels
- Cleans residual layout (bullets, tables, typographic punctuation, whitespace)
- Reports advisory compliance warnings and document statistics
- Re-derives a document from user-edited sections

Owns: Section taxonomy, optimization log, OptimizedDocument
Never: Applies templates or produces downloadable artifacts
"""

from clarity.contexts.optimizing.classifier import detect_sections
from clarity.contexts.optimizing.data_structures import (
    DetectedSection,
    DocumentStatistics,
    OptimizationKind,
    OptimizationRecord,
    OptimizedDocument,
    PipelineStage,
)
from clarity.contexts.optimizing.optimizer import (
    OptimizationCache,
    optimize_document,
    rebuild_from_sections,
)
from clarity.contexts.optimizing.report import generate_optimization_summary
from clarity.contexts.optimizing.section_patterns import (
    DEFAULT_TAXONOMY,
    SectionKind,
    SectionTaxonomy,
    load_taxonomy,
)
from clarity.contexts.optimizing.standardizer import standardize_headings
from clarity.contexts.optimizing.structure import optimize_structure
from clarity.contexts.optimizing.validator import validate_ats_compliance

__all__ = [
    "DEFAULT_TAXONOMY",
    "DetectedSection",
    "DocumentStatistics",
    "OptimizationCache",
    "OptimizationKind",
    "OptimizationRecord",
    "OptimizedDocument",
    "PipelineStage",
    "SectionKind",
    "SectionTaxonomy",
    "detect_sections",
    "generate_optimization_summary",
    "load_taxonomy",
    "optimize_document",
    "optimize_structure",
    "rebuild_from_sections",
    "standardize_headings",
    "validate_ats_compliance",
]
