"""
Session logging for clarity.

Each export session writes a DEBUG log file into its own directory and echoes
INFO and above to the console. The first lines of every log file record where
the run came from (script, command line, interpreter, package version) so a
result in outs/results/ can be traced back to the run that produced it.

Context-specific wrappers with message prefixes live in
contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

import clarity

load_dotenv()

CONSOLE_LOG_LEVEL = os.getenv("CLARITY_CONSOLE_LOG_LEVEL", "INFO").upper()

FILE_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_LOG_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Console colors; warnings stay readable on dark terminals
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    console_level: str = CONSOLE_LOG_LEVEL,
) -> Path:
    """
    Route loguru output for one session: file sink plus console sink.

    Any previously configured sinks are removed, so calling this again for a
    new export session starts a fresh log file.

    Args:
        context_name: Context identifier, used as the log file stem
                      (e.g., "optimize", "render")
        log_dir: Directory for this session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum console level (default: CLARITY_CONSOLE_LOG_LEVEL or INFO)

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/export_20251114_123456"),
            extra_provenance={"Template": "classic-professional"}
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_LOG_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_LOG_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[Dict[str, object]] = None) -> None:
    """Write the provenance header (script, command, cwd, Python, clarity version)."""
    logger.info("=" * 80)
    logger.info(f"Script: {sys.argv[0]}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")
    logger.info(f"clarity: {clarity.__version__}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
