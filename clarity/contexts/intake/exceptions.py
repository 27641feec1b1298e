"""Custom exceptions for the intake context."""

from typing import Iterable, Optional


class EmptyContentError(ValueError):
    """
    Raised when normalized resume text is empty or whitespace-only.

    Attributes:
        message: Error description
        source_kind: Source kind of the document, if known
        raw_length: Length of the raw text before normalization
    """

    def __init__(
        self,
        message: str = "Resume text is empty after normalization",
        source_kind: Optional[str] = None,
        raw_length: Optional[int] = None,
    ):
        self.message = message
        self.source_kind = source_kind
        self.raw_length = raw_length

        parts = [message]
        if source_kind:
            parts.append(f"Source: {source_kind}")
        if raw_length is not None:
            parts.append(f"Raw text length: {raw_length} chars")

        super().__init__("\n".join(parts))


class UnrecognizedSourceError(ValueError):
    """
    Raised when a document's source kind is outside the supported set.

    Attributes:
        source_kind: The rejected source kind
        supported: Source kinds that are accepted
    """

    def __init__(self, source_kind: object, supported: Iterable[str] = ()):
        self.source_kind = source_kind
        self.supported = tuple(supported)

        message = f"Unrecognized source kind: {source_kind!r}"
        if self.supported:
            message += f". Supported kinds: {', '.join(self.supported)}"

        super().__init__(message)
