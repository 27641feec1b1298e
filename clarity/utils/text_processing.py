"""
Text processing utilities shared by the pipeline stages.
"""

import re

WHITESPACE_RUN = re.compile(r"\s+")


def count_words(text: str) -> int:
    """
    Count whitespace-separated, non-empty tokens.

    Example:
        >>> count_words("  Led a team\\n of 4  ")
        4
        >>> count_words("")
        0
    """
    if not text or not text.strip():
        return 0
    return len([word for word in WHITESPACE_RUN.split(text.strip()) if word])


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Only lines that are completely empty count as blank; callers trim lines
    first when whitespace-only lines should count too.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines (default: 1)

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    # max_consecutive blank lines means max_consecutive + 1 newlines in a row
    pattern = r"\n{%d,}" % (max_consecutive + 2)
    return re.sub(pattern, "\n" * (max_consecutive + 1), content)


def trim_lines(text: str) -> str:
    """
    Trim every line and drop leading/trailing blank lines.

    Example:
        >>> trim_lines("\\n  Skills  \\n Python \\n\\n")
        'Skills\\nPython'
    """
    return "\n".join(line.strip() for line in text.split("\n")).strip("\n")
