"""
Raw document contract for the Intake context.

RawDocument is what the upstream extraction collaborator hands over: the
extracted text plus a little metadata about where it came from. It is
created once per upload and never modified.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from clarity.contexts.intake.exceptions import UnrecognizedSourceError
from clarity.utils.text_processing import count_words

# Conservative estimate for resume content
WORDS_PER_PAGE = 250


class SourceKind(str, Enum):
    """File formats the extraction collaborator can produce text from."""

    PDF = "pdf"
    DOCX = "docx"

    @classmethod
    def parse(cls, value: Union[str, "SourceKind"]) -> "SourceKind":
        """
        Resolve a source kind from a string, case-insensitively.

        Raises:
            UnrecognizedSourceError: If value is not a supported kind
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnrecognizedSourceError(value, supported=[kind.value for kind in cls])


def estimate_page_count(word_count: int) -> int:
    """Estimate page count from word count (at least one page)."""
    return max(1, math.ceil(word_count / WORDS_PER_PAGE))


@dataclass(frozen=True)
class RawDocument:
    """
    Text extracted from an uploaded resume.

    Attributes:
        text: Extracted text, not yet normalized
        source_kind: Format the text was extracted from
        word_count: Word count reported by the extractor
        page_count: Page count reported by the extractor (>= 1)
    """

    text: str
    source_kind: SourceKind
    word_count: int
    page_count: int = 1

    def __post_init__(self):
        # Frozen dataclass: coerce strings like "pdf" through object.__setattr__
        object.__setattr__(self, "source_kind", SourceKind.parse(self.source_kind))
        if self.word_count < 0:
            raise ValueError(f"RawDocument word_count must be >= 0, got {self.word_count}")
        if self.page_count < 1:
            raise ValueError(f"RawDocument page_count must be >= 1, got {self.page_count}")

    @classmethod
    def from_text(cls, text: str, source_kind: Union[str, SourceKind]) -> "RawDocument":
        """
        Build a RawDocument from extracted text, deriving word and page counts.

        Args:
            text: Extracted text
            source_kind: "pdf" or "docx"

        Returns:
            RawDocument instance

        Raises:
            UnrecognizedSourceError: If source_kind is not supported
        """
        word_count = count_words(text)
        return cls(
            text=text,
            source_kind=SourceKind.parse(source_kind),
            word_count=word_count,
            page_count=estimate_page_count(word_count),
        )
