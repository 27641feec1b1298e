#!/usr/bin/env python3
"""
Section inspection CLI

Runs the optimizing stages over extracted resume text and prints what was
found: sections with line ranges and confidence, applied optimizations and
compliance warnings. Writes nothing.

Examples:\n

    inspect_sections.py data/jane_doe.txt                    # Sections and warnings

    inspect_sections.py data/jane_doe.txt --content          # Include section bodies

    inspect_sections.py data/jane_doe.txt --summary          # Full optimization summary

    inspect_sections.py data/cv.txt --taxonomy taxonomy.yaml # Alternate taxonomy
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from clarity.contexts.intake import EmptyContentError, RawDocument, UnrecognizedSourceError
from clarity.contexts.optimizing import (
    DEFAULT_TAXONOMY,
    generate_optimization_summary,
    load_taxonomy,
    optimize_document,
)
from clarity.utils.text_processing import truncate_display

app = typer.Typer(
    help="Inspect section detection for extracted resume text",
    add_completion=False,
)


@app.command()
def main(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="UTF-8 text file produced by PDF/DOCX extraction",
            exists=True,
            dir_okay=False,
        ),
    ],
    source_kind: Annotated[
        str,
        typer.Option("--source", "-s", help="Format the text was extracted from (pdf or docx)"),
    ] = "pdf",
    taxonomy_path: Annotated[
        Optional[Path],
        typer.Option("--taxonomy", help="YAML section taxonomy (default: built-in)", exists=True),
    ] = None,
    show_content: Annotated[
        bool,
        typer.Option("--content", "-c", help="Print section bodies and free text"),
    ] = False,
    show_summary: Annotated[
        bool,
        typer.Option("--summary", help="Print the full optimization summary"),
    ] = False,
):
    """Print detected sections, optimizations and warnings."""
    taxonomy = load_taxonomy(taxonomy_path) if taxonomy_path else DEFAULT_TAXONOMY

    try:
        raw = RawDocument.from_text(input_file.read_text(encoding="utf-8"), source_kind)
        document = optimize_document(raw, taxonomy=taxonomy)
    except (EmptyContentError, UnrecognizedSourceError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n{input_file.name}: {len(document.sections)} sections", fg=typer.colors.BLUE, bold=True)

    if document.preamble:
        first_line = document.preamble.split("\n")[0]
        typer.echo(f"  Preamble: {truncate_display(first_line, 60)}")

    for section in document.sections:
        marker = "*" if section.needs_standardization else " "
        typer.echo(
            f" {marker}[{section.start_line:>3}-{section.end_line:>3}] "
            f"{section.standard_title:<24} {section.confidence:.1f}  "
            f"(was '{section.original_title}')"
        )
        if show_content:
            for line in section.content.split("\n") if section.content else []:
                typer.echo(f"        {line}")
            # Free text follows the body; shown with a leading bar
            for line in section.free_text.split("\n") if section.free_text else []:
                typer.echo(f"      | {line}")

    typer.echo(f"\nOptimizations ({len(document.optimizations)}):")
    for record in document.optimizations:
        typer.echo(f"  - {record.kind.value}: {record.description}")

    if document.warnings:
        typer.echo(f"\nWarnings ({len(document.warnings)}):")
        for warning in document.warnings:
            typer.secho(f"  - {warning}", fg=typer.colors.YELLOW)

    if show_summary:
        typer.echo("")
        typer.echo(generate_optimization_summary(document))
    typer.echo("")


if __name__ == "__main__":
    app()
