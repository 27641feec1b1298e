"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from clarity.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, template_id: str = "") -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this export session
        template_id: Template applied during assembly (for provenance)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Template": template_id or "default"},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(base_name: str, template_id: str, output_dir: Path) -> None:
    """Log start of an export with context."""
    _log_info(f"Starting export: {base_name}")
    _log_info(f"Writing to {output_dir}")
    _log_debug(f"  Template: {template_id}")


def log_export_result(
    base_name: str,
    result,  # ProcessingResult
    verbose: bool = False,
) -> None:
    """
    Log export result with download options.

    Args:
        base_name: Output base name
        result: ProcessingResult from process_document()
        verbose: Show every compliance warning (default: False)
    """
    formats = ", ".join(option.filename for option in result.download_options)
    _log_success(f"{base_name}: {len(result.download_options)} downloads ({result.processing_time_s:.2f}s)")
    _log_debug(f"  Files: {formats}")

    warnings = result.optimized.warnings
    if warnings:
        _log_warning(f"{len(warnings)} compliance warnings")
        warning_limit = len(warnings) if verbose else 3
        for i, warning in enumerate(warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warning}")
        if len(warnings) > warning_limit:
            _log_debug(f"  ... and {len(warnings) - warning_limit} more warnings")

    # Use opt(raw=True) so the multi-line summary keeps its own formatting
    if verbose and result.summary:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nOPTIMIZATION SUMMARY:\n{'=' * 80}\n{result.summary}\n")
