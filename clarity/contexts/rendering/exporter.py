"""
Export orchestration for the Rendering context.

process_document() runs the whole pipeline for one document and packages the
downloads: plain text always, plus a .docx from the rich-document writer. The
writer runs in a daemon thread under a timeout; if it times out or fails the
.docx option is replaced by a "Word-ready" text file and the rest of the
result is unaffected.

export_resume() wraps process_document() with session logging and writes the
downloads to disk.
"""

import os
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from dotenv import load_dotenv

from clarity.contexts.intake.document import RawDocument, SourceKind
from clarity.contexts.optimizing.data_structures import OptimizedDocument, PipelineStage
from clarity.contexts.optimizing.optimizer import (
    OptimizationCache,
    content_fingerprint,
    optimize_document,
)
from clarity.contexts.optimizing.report import generate_optimization_summary
from clarity.contexts.optimizing.section_patterns import DEFAULT_TAXONOMY, SectionTaxonomy
from clarity.contexts.rendering.assembler import (
    AssembledDocument,
    StructuredEntry,
    assemble_document,
    check_template_compatibility,
)
from clarity.contexts.rendering.docx_writer import DocxWriter, RichDocumentWriter, WriterOutput
from clarity.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    _log_warning,
    log_export_result,
    log_export_start,
    setup_rendering_logger,
)
from clarity.contexts.rendering.templates import DEFAULT_TEMPLATE, Template
from clarity.utils.timestamp import now, today

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))
WRITER_TIMEOUT_S = float(os.getenv("CLARITY_WRITER_TIMEOUT_S", "10"))

TXT_SUFFIX = "_ATS_optimized.txt"
WORD_READY_SUFFIX = "_Word_ready.txt"
SUMMARY_SUFFIX = "_summary.txt"

TEXT_MIME_TYPE = "text/plain"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

WORD_FORMATTING_INSTRUCTIONS = """=== WORD FORMATTING INSTRUCTIONS ===
1. Copy and paste this content into Microsoft Word
2. Select section headings and make them bold
3. Use Arial or Calibri font, size 11-12
4. Set margins to 0.5-1 inch on all sides
5. Save as .docx format

=== YOUR ATS-OPTIMIZED RESUME ===

"""

# Processing slower than this is reported by validate_processing_result()
SLOW_PROCESSING_S = 10.0
MIN_CONTENT_CHARS = 100


@dataclass(frozen=True)
class DownloadOption:
    """
    One downloadable artifact.

    Attributes:
        format: "txt" or "docx" (the Word-ready fallback keeps "docx")
        label: Display label
        description: One-line description for the download list
        content: Text for .txt files, bytes for .docx
        filename: Suggested filename
        mime_type: MIME type to serve the file with
    """

    format: str
    label: str
    description: str
    content: Union[str, bytes]
    filename: str
    mime_type: str = TEXT_MIME_TYPE

    @property
    def data(self) -> bytes:
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ProcessingResult:
    """
    Everything produced for one document.

    Attributes:
        raw_document: Input document
        optimized: Output of stages 1-5
        assembled: Template-applied document (both renderings)
        summary: Human-readable optimization report
        download_options: Plain text first, then .docx or its Word-ready fallback
        processing_time_s: Wall time for the whole pipeline
        stage: Last stage reached (ASSEMBLED for a finished result)
        template_warnings: Template slots no detected section filled
    """

    raw_document: RawDocument
    optimized: OptimizedDocument
    assembled: AssembledDocument
    summary: str
    download_options: Tuple[DownloadOption, ...]
    processing_time_s: float
    stage: PipelineStage = PipelineStage.ASSEMBLED
    template_warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def docx_available(self) -> bool:
        return any(option.mime_type == DOCX_MIME_TYPE for option in self.download_options)


@dataclass
class ExportResult:
    """
    Result of export_resume().

    Attributes:
        result: ProcessingResult for the document
        files: Paths written (downloads, then the summary)
        log_dir: Session log directory
    """

    result: ProcessingResult
    files: List[Path] = field(default_factory=list)
    log_dir: Optional[Path] = None


def base_name_from_filename(filename: str) -> str:
    """
    Strip directories and the final extension from a filename.

    Example:
        >>> base_name_from_filename("uploads/Jane_Doe.resume.pdf")
        'Jane_Doe.resume'
    """
    name = Path(filename).name
    stem = Path(name).stem
    return stem or "resume"


def format_for_word(plain_text: str, headings: Sequence[str] = ()) -> str:
    """
    Prefix plain text with instructions for pasting it into Word.

    Lines that are section headings (as given or upper-cased) get an extra
    blank line above and below, so they are easy to select and bold.

    Example:
        >>> format_for_word("SKILLS\\nPython", ["Skills"]).endswith("\\n\\nSKILLS\\n\\nPython")
        True
    """
    heading_lines = set(headings) | {heading.upper() for heading in headings}
    lines = [f"\n{line}\n" if line in heading_lines else line for line in plain_text.split("\n")]
    return WORD_FORMATTING_INSTRUCTIONS + "\n".join(lines)


def format_file_size(num_bytes: int) -> str:
    """
    Human-readable file size.

    Example:
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if num_bytes == 0:
        return "0 Bytes"

    size = float(num_bytes)
    for unit in ["Bytes", "KB", "MB"]:
        if size < 1024:
            return f"{size:.2f}".rstrip("0").rstrip(".") + f" {unit}"
        size /= 1024
    return f"{size:.2f}".rstrip("0").rstrip(".") + " GB"


def write_rich_document(
    writer: RichDocumentWriter,
    entries: Sequence[StructuredEntry],
    base_name: str,
    template: Template,
    timeout_s: float = WRITER_TIMEOUT_S,
) -> Optional[WriterOutput]:
    """
    Call a writer in a daemon thread, giving up after timeout_s.

    A writer that never returns is abandoned: the thread is a daemon, so it
    does not keep the interpreter alive once the caller exits.

    Returns:
        WriterOutput, or None if the writer timed out or raised
    """
    outcome = {}

    def run() -> None:
        try:
            outcome["output"] = writer.write(entries, base_name, template)
        except Exception as e:
            # Writer is an external collaborator; any failure degrades to text output
            outcome["error"] = e

    worker = threading.Thread(target=run, name=f"writer-{base_name}", daemon=True)
    worker.start()
    worker.join(timeout_s)

    if worker.is_alive():
        _log_warning(f"Rich document writer timed out after {timeout_s:.1f}s, using text fallback")
        return None
    if "error" in outcome:
        e = outcome["error"]
        _log_warning(f"Rich document writer failed ({type(e).__name__}: {e}), using text fallback")
        return None
    return outcome["output"]


def generate_download_options(
    assembled: AssembledDocument,
    base_name: str,
    writer: Optional[RichDocumentWriter] = None,
    writer_timeout_s: float = WRITER_TIMEOUT_S,
) -> Tuple[DownloadOption, ...]:
    """
    Build the download list for an assembled document.

    Args:
        assembled: Template-applied document
        base_name: Filename stem for every option
        writer: Rich-document writer (default: DocxWriter)
        writer_timeout_s: Seconds to wait for the writer

    Returns:
        Plain text option, then the .docx option or the Word-ready fallback
    """
    writer = writer or DocxWriter()
    plain_text = assembled.plain_text

    options = [
        DownloadOption(
            format="txt",
            label="Plain Text (.txt)",
            description="Universal format compatible with all ATS systems",
            content=plain_text,
            filename=f"{base_name}{TXT_SUFFIX}",
        )
    ]

    output = write_rich_document(
        writer, assembled.structured, base_name, assembled.template, timeout_s=writer_timeout_s
    )
    if output is not None:
        options.append(
            DownloadOption(
                format="docx",
                label="Microsoft Word (.docx)",
                description="Professional DOCX file ready for any application",
                content=output.content,
                filename=output.filename,
                mime_type=DOCX_MIME_TYPE,
            )
        )
    else:
        options.append(
            DownloadOption(
                format="docx",
                label="Word-ready Text (.txt)",
                description="Formatted text ready to copy into Microsoft Word",
                content=format_for_word(plain_text, assembled.section_titles()),
                filename=f"{base_name}{WORD_READY_SUFFIX}",
            )
        )

    return tuple(options)


def process_document(
    raw: RawDocument,
    template: Optional[Template] = None,
    base_name: str = "resume",
    writer: Optional[RichDocumentWriter] = None,
    writer_timeout_s: float = WRITER_TIMEOUT_S,
    cache: Optional[OptimizationCache] = None,
    taxonomy: SectionTaxonomy = DEFAULT_TAXONOMY,
    verbose: bool = False,
) -> ProcessingResult:
    """
    Run the full pipeline for one document: optimize, assemble, package.

    Args:
        raw: Document supplied by the text extractor
        template: Template to apply (default: DEFAULT_TEMPLATE)
        base_name: Filename stem for downloads
        writer: Rich-document writer (default: DocxWriter)
        writer_timeout_s: Seconds to wait for the writer
        cache: Optional cache; identical text, source kind, template,
               base name and taxonomy return the stored result
        taxonomy: Section taxonomy for classification
        verbose: Log every optimization record and warning

    Returns:
        ProcessingResult

    Raises:
        EmptyContentError: If the document has no usable text
    """
    template = template or DEFAULT_TEMPLATE

    def compute() -> ProcessingResult:
        start_time = time.time()

        optimized = optimize_document(raw, taxonomy=taxonomy, verbose=verbose)
        assembled = assemble_document(optimized, template)
        download_options = generate_download_options(
            assembled, base_name, writer=writer, writer_timeout_s=writer_timeout_s
        )

        return ProcessingResult(
            raw_document=raw,
            optimized=optimized,
            assembled=assembled,
            summary=generate_optimization_summary(optimized),
            download_options=download_options,
            processing_time_s=time.time() - start_time,
            template_warnings=check_template_compatibility(optimized, template),
        )

    if cache is None:
        return compute()

    key = content_fingerprint(
        raw, template, base_name, *((entry.kind, entry.patterns) for entry in taxonomy)
    )
    hit = key in cache
    result = cache.get_or_compute(key, compute)
    if hit:
        _log_debug(f"Cache hit for {base_name} ({key[:12]})")
    return result


def validate_processing_result(result: ProcessingResult) -> List[str]:
    """
    Quality checks over a finished result.

    Returns:
        Issue descriptions (empty if the result looks sound)
    """
    issues = []

    if len(result.optimized.content) < MIN_CONTENT_CHARS:
        issues.append("Optimized content is very short")

    titles = result.optimized.section_titles()
    if "Work Experience" not in titles and "Professional Summary" not in titles:
        issues.append("Missing essential resume sections")

    if not result.download_options:
        issues.append("No download options generated")

    if result.processing_time_s > SLOW_PROCESSING_S:
        issues.append(f"Processing took too long (over {SLOW_PROCESSING_S:.0f} seconds)")

    return issues


def export_resume(
    text_file: Path,
    source_kind: Union[str, SourceKind] = SourceKind.PDF,
    template: Optional[Template] = None,
    output_dir: Optional[Path] = None,
    writer: Optional[RichDocumentWriter] = None,
    verbose: bool = False,
) -> ExportResult:
    """
    Optimize an extracted-text file and write its downloads to disk.

    Orchestration function that wraps process_document() with session
    logging. Downloads and the optimization summary go to
    outs/results/YYYY-MM-DD/ unless output_dir is given; the session log goes
    to outs/logs/export_<timestamp>/.

    Args:
        text_file: UTF-8 text produced by the extraction collaborator
        source_kind: Format the text was extracted from ("pdf" or "docx")
        template: Template to apply (default: DEFAULT_TEMPLATE)
        output_dir: Directory for downloads (default: dated results directory)
        writer: Rich-document writer (default: DocxWriter)
        verbose: Log every optimization record and the full summary

    Returns:
        ExportResult with the ProcessingResult and written paths

    Raises:
        FileNotFoundError: If text_file does not exist
        EmptyContentError: If the file has no usable text
        UnrecognizedSourceError: If source_kind is not supported
    """
    text_file = Path(text_file).resolve()
    if not text_file.exists():
        raise FileNotFoundError(f"Text file not found: {text_file}")

    template = template or DEFAULT_TEMPLATE
    base_name = base_name_from_filename(text_file.name)

    # Create timestamped log directory for this export
    log_dir = LOGS_PATH / f"export_{now()}"
    log_dir.mkdir(parents=True, exist_ok=True)
    setup_rendering_logger(log_dir, template_id=template.template_id)

    if output_dir is None:
        output_dir = RESULTS_PATH / today()
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    log_export_start(base_name, template.template_id, output_dir)

    raw = RawDocument.from_text(text_file.read_text(encoding="utf-8"), source_kind)
    _log_debug(f"  Source: {text_file} ({raw.source_kind.value}, {raw.word_count} words)")

    result = process_document(raw, template=template, base_name=base_name, writer=writer, verbose=verbose)

    files = []
    for option in result.download_options:
        path = output_dir / option.filename
        path.write_bytes(option.data)
        files.append(path)
        _log_debug(f"  Wrote {path.name} ({format_file_size(option.size)})")

    summary_path = output_dir / f"{base_name}{SUMMARY_SUFFIX}"
    summary_path.write_text(result.summary, encoding="utf-8")
    files.append(summary_path)

    for warning in result.template_warnings:
        _log_info(warning)
    for issue in validate_processing_result(result):
        _log_warning(issue)

    log_export_result(base_name, result, verbose=verbose)

    return ExportResult(result=result, files=files, log_dir=log_dir)
