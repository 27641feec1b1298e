"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """
    Current local time formatted for directory names.

    Returns:
        Timestamp like "20251114_123456"
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today() -> str:
    """
    Current local date formatted for dated result directories.

    Returns:
        Date like "2025-11-14"
    """
    return datetime.now().strftime("%Y-%m-%d")
