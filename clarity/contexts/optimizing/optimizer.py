"""
Optimization pipeline for the Optimizing context.

Chains the pure stages (normalize, classify, standardize, restructure,
validate) into a single OptimizedDocument, and re-enters the pipeline after
user edits without re-classifying. Each stage takes a value and returns a new
one; the only state kept across calls lives in OptimizationCache.
"""

import hashlib
import time
from collections import OrderedDict
from dataclasses import replace
from typing import Callable, Hashable, Optional, Sequence

from clarity.contexts.intake.document import RawDocument
from clarity.contexts.intake.normalizer import STRIP_EXTRACTION_ARTIFACTS, normalize_document
from clarity.contexts.optimizing.classifier import detect_sections, extract_preamble
from clarity.contexts.optimizing.data_structures import (
    DetectedSection,
    DocumentStatistics,
    OptimizedDocument,
    PipelineStage,
)
from clarity.contexts.optimizing.logger import _log_debug, log_optimization_result, log_stage
from clarity.contexts.optimizing.section_patterns import DEFAULT_TAXONOMY, SectionTaxonomy
from clarity.contexts.optimizing.standardizer import standardize_headings
from clarity.contexts.optimizing.structure import clean_structure, optimize_structure
from clarity.contexts.optimizing.validator import validate_ats_compliance

DEFAULT_CACHE_ENTRIES = 64


def optimize_document(
    raw: RawDocument,
    taxonomy: SectionTaxonomy = DEFAULT_TAXONOMY,
    strip_artifacts: bool = STRIP_EXTRACTION_ARTIFACTS,
    verbose: bool = False,
) -> OptimizedDocument:
    """
    Run stages 1-5 over a raw document.

    Args:
        raw: Document supplied by the text extractor
        taxonomy: Section taxonomy for classification (default: DEFAULT_TAXONOMY)
        strip_artifacts: Remove page numbers and rule lines before normalizing
        verbose: Log every optimization record and warning

    Returns:
        OptimizedDocument with content, sections, optimization log, statistics
        and warnings

    Raises:
        EmptyContentError: If normalization leaves nothing
    """
    start_time = time.time()

    normalized = normalize_document(raw, strip_artifacts=strip_artifacts)
    log_stage(PipelineStage.NORMALIZED, f"{len(normalized)} chars")

    sections = detect_sections(normalized, taxonomy)
    log_stage(PipelineStage.CLASSIFIED, f"{len(sections)} sections")

    standardized, heading_records = standardize_headings(normalized, sections)
    log_stage(PipelineStage.STANDARDIZED, f"{len(heading_records)} headings rewritten")

    content, structure_records = optimize_structure(standardized)
    log_stage(PipelineStage.STRUCTURED, f"{len(structure_records)} passes applied")

    # Section bodies and preamble go through the same passes as the flowing content
    sections = tuple(
        replace(
            section,
            content=clean_structure(section.content),
            free_text=clean_structure(section.free_text),
        )
        for section in sections
    )
    preamble = clean_structure(extract_preamble(normalized, sections))

    warnings = validate_ats_compliance(content, sections, taxonomy)
    log_stage(PipelineStage.VALIDATED, f"{len(warnings)} warnings")

    optimizations = heading_records + structure_records
    document = OptimizedDocument(
        content=content,
        sections=sections,
        optimizations=optimizations,
        statistics=DocumentStatistics.compute(raw.word_count, content, optimizations),
        warnings=warnings,
        preamble=preamble,
        source_kind=raw.source_kind,
    )

    log_optimization_result(document, time.time() - start_time, verbose=verbose)
    return document


def rebuild_from_sections(
    document: OptimizedDocument,
    sections: Sequence[DetectedSection],
    taxonomy: SectionTaxonomy = DEFAULT_TAXONOMY,
    preamble: Optional[str] = None,
) -> OptimizedDocument:
    """
    Rebuild an optimized document from user-edited sections.

    Classification is skipped: the edited sections are taken as given, in the
    order supplied. Content is re-joined as the preamble followed by one
    "title + body + free text" block per section, separated by blank lines, and line
    ranges, statistics and warnings are recomputed from the new content. The
    optimization log is carried over unchanged.

    Args:
        document: Document the sections were edited from
        sections: Edited sections
        taxonomy: Taxonomy used for the essential-section check
        preamble: Replacement preamble (default: keep document.preamble)

    Returns:
        New OptimizedDocument (the input document is not modified)
    """
    preamble = document.preamble if preamble is None else preamble.strip()

    blocks = [preamble] if preamble else []
    line_offset = len(preamble.split("\n")) + 1 if preamble else 0

    rebuilt = []
    for section in sections:
        body = section.content.strip()
        free_text = section.free_text.strip()
        block = "\n".join(part for part in (section.standard_title, body, free_text) if part)
        block_lines = block.count("\n") + 1

        rebuilt.append(
            replace(
                section,
                content=body,
                free_text=free_text,
                start_line=line_offset,
                end_line=line_offset + (body.count("\n") + 1 if body else 0),
            )
        )
        blocks.append(block)
        # Blank separator line between blocks
        line_offset += block_lines + 1

    content = "\n\n".join(blocks)
    rebuilt_sections = tuple(rebuilt)

    return replace(
        document,
        content=content,
        sections=rebuilt_sections,
        statistics=DocumentStatistics.compute(
            document.statistics.original_word_count, content, document.optimizations
        ),
        warnings=validate_ats_compliance(content, rebuilt_sections, taxonomy),
        preamble=preamble,
    )


def content_fingerprint(raw: RawDocument, *extras: object) -> str:
    """
    SHA-256 hex digest over raw text, source kind and any extra key parts.

    Example:
        >>> doc = RawDocument.from_text("Jane Doe", "pdf")
        >>> content_fingerprint(doc) == content_fingerprint(doc)
        True
    """
    digest = hashlib.sha256()
    digest.update(raw.text.encode("utf-8"))
    digest.update(b"\x00")
    digest.update(raw.source_kind.value.encode("utf-8"))
    for extra in extras:
        digest.update(b"\x00")
        digest.update(str(extra).encode("utf-8"))
    return digest.hexdigest()


class OptimizationCache:
    """
    Bounded least-recently-used memo for pipeline results.

    Keys are content fingerprints; values are whatever the caller stores
    (OptimizedDocument, ProcessingResult). Stored values are immutable
    snapshots, so handing the same object to several callers is safe.
    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_ENTRIES):
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._entries: "OrderedDict[Hashable, object]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable):
        if key not in self._entries:
            self.misses += 1
            return None
        self.hits += 1
        self._entries.move_to_end(key)
        return self._entries[key]

    def put(self, key: Hashable, value) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            _log_debug(f"Cache evicted {str(evicted)[:12]}")

    def get_or_compute(self, key: Hashable, compute: Callable[[], object]):
        """Return the cached value for key, computing and storing it on a miss."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = compute()
        self.put(key, value)
        return value

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
