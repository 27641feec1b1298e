"""
Optimizing context logger.

Provides logging interface for the optimizing context with automatic [optimize] prefix.
All optimizing modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[optimize]"


# Wrapper functions with automatic [optimize] prefix


def _log_success(message: str) -> None:
    """Log success message with [optimize] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [optimize] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [optimize] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level optimizing-specific logging helpers


def log_stage(stage, detail: str = "") -> None:
    """Log a pipeline stage transition (stage is a PipelineStage)."""
    suffix = f": {detail}" if detail else ""
    _log_debug(f"-> {stage.value.upper()}{suffix}")


def log_optimization_result(document, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log an optimized document summary.

    Args:
        document: OptimizedDocument from optimize_document()
        elapsed_time: Time taken to optimize
        verbose: Log every optimization record and warning (default: False)
    """
    stats = document.statistics
    _log_success(
        f"Optimized {len(document.sections)} sections, "
        f"{stats.sections_standardized} headings standardized, "
        f"{stats.issues_fixed} issues fixed ({elapsed_time:.3f}s)"
    )
    _log_debug(f"  Words: {stats.original_word_count} -> {stats.optimized_word_count}")

    for section in document.sections:
        _log_debug(
            f"  [{section.start_line}-{section.end_line}] "
            f"'{section.original_title}' -> '{section.standard_title}' "
            f"(confidence {section.confidence:.1f})"
        )

    if verbose:
        for record in document.optimizations:
            _log_debug(f"  {record.kind.value}: {record.description}")

    if document.warnings:
        _log_warning(f"{len(document.warnings)} compliance warnings")
        warning_limit = len(document.warnings) if verbose else 3
        for i, warning in enumerate(document.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warning}")
        if len(document.warnings) > warning_limit:
            _log_debug(f"  ... and {len(document.warnings) - warning_limit} more warnings")
