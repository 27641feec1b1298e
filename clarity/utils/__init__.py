"""
Shared utilities for Clarity.

Common functionality used across contexts:
- Text processing
- Logging setup
- Timestamps for log and result directories
"""

from clarity.utils.text_processing import count_words
from clarity.utils.timestamp import now, today

__all__ = ["count_words", "now", "today"]
