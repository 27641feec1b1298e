"""
Rendering Context

Responsibilities:
- Applies templates (section order, bullets, spacing) to optimized documents
- Produces plain-text and structured renderings from one shared section list
- Writes .docx files through a swappable rich-document writer
- Packages downloads, degrading to text when the writer fails or times out

Owns: Templates, assembled documents, download options
Never: Classifies sections or changes section content
"""

from clarity.contexts.rendering.assembler import (
    AssembledDocument,
    AssembledSection,
    StructuredEntry,
    assemble_document,
    check_template_compatibility,
    reorder_sections,
)
from clarity.contexts.rendering.docx_writer import DocxWriter, RichDocumentWriter, WriterOutput
from clarity.contexts.rendering.exporter import (
    DownloadOption,
    ProcessingResult,
    export_resume,
    process_document,
)
from clarity.contexts.rendering.templates import (
    DEFAULT_TEMPLATE,
    Template,
    get_template,
    list_templates,
)

__all__ = [
    "AssembledDocument",
    "AssembledSection",
    "DEFAULT_TEMPLATE",
    "DocxWriter",
    "DownloadOption",
    "ProcessingResult",
    "RichDocumentWriter",
    "StructuredEntry",
    "Template",
    "WriterOutput",
    "assemble_document",
    "check_template_compatibility",
    "export_resume",
    "get_template",
    "list_templates",
    "process_document",
    "reorder_sections",
]
