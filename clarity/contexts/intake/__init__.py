"""
Intake Context

Responsibilities:
- Defines the RawDocument contract supplied by the upstream text extractor
- Normalizes raw extracted text into canonical line-oriented form
- Raises the fatal input errors (empty content, unrecognized source)

Owns: Raw document contract, text normalization
Never: Decodes binary PDF/DOCX files or classifies sections
"""

from clarity.contexts.intake.document import RawDocument, SourceKind
from clarity.contexts.intake.exceptions import EmptyContentError, UnrecognizedSourceError
from clarity.contexts.intake.normalizer import normalize_document, normalize_text

__all__ = [
    "RawDocument",
    "SourceKind",
    "EmptyContentError",
    "UnrecognizedSourceError",
    "normalize_document",
    "normalize_text",
]
