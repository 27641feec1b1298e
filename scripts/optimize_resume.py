#!/usr/bin/env python3
"""
Resume Optimization CLI

Optimizes extracted resume text for ATS parsing and writes the downloads
(plain text, .docx or Word-ready text, optimization summary).

Examples:\n

    optimize_resume.py data/jane_doe.txt                          # Default template

    optimize_resume.py data/jane_doe.txt --template tech-focused  # Apply a preset

    optimize_resume.py data/jane_doe.txt --source docx -o outs/   # Text extracted from .docx

    optimize_resume.py --list-templates                           # Show presets
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from clarity.contexts.intake import EmptyContentError, UnrecognizedSourceError
from clarity.contexts.rendering import export_resume, get_template, list_templates

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", "."))


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(PROJECT_ROOT.resolve()))
    except ValueError:
        return str(path)


app = typer.Typer(
    help="Optimize extracted resume text for ATS parsing",
    add_completion=False,
)


def _print_templates() -> None:
    typer.secho("\nAvailable templates:", fg=typer.colors.BLUE, bold=True)
    for template in list_templates():
        order = " > ".join(template.section_order)
        typer.echo(f"  {template.template_id:<22} {template.name}")
        typer.echo(f"  {'':<22} {order}")
    typer.echo("")


@app.command()
def main(
    input_file: Annotated[
        Optional[Path],
        typer.Argument(
            help="UTF-8 text file produced by PDF/DOCX extraction",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    source_kind: Annotated[
        str,
        typer.Option(
            "--source",
            "-s",
            help="Format the text was extracted from (pdf or docx)",
        ),
    ] = "pdf",
    template_id: Annotated[
        Optional[str],
        typer.Option(
            "--template",
            "-t",
            help="Template preset id (see --list-templates)",
        ),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for downloads (default: outs/results/YYYY-MM-DD)",
        ),
    ] = None,
    list_templates_flag: Annotated[
        bool,
        typer.Option(
            "--list-templates",
            help="List template presets and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every optimization and the full summary",
        ),
    ] = False,
):
    """
    Optimize a resume and write its downloads.

    Examples:\n

        $ optimize_resume.py resume.txt                        # Optimize with default template

        $ optimize_resume.py resume.txt -t minimalist-ats -v   # Preset, verbose logging
    """
    if list_templates_flag:
        _print_templates()
        raise typer.Exit()

    if input_file is None:
        typer.echo("Error: Must specify input_file (or --list-templates)", err=True)
        raise typer.Exit(code=1)

    try:
        template = get_template(template_id)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nOptimizing: {input_file.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {template.name}")
    typer.echo("")

    try:
        export = export_resume(
            text_file=input_file,
            source_kind=source_kind,
            template=template,
            output_dir=output_dir,
            verbose=verbose,
        )
    except (EmptyContentError, UnrecognizedSourceError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    result = export.result
    stats = result.optimized.statistics

    typer.echo("")
    typer.secho("✓ Optimization complete", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Sections: {len(result.optimized.sections)}")
    typer.echo(f"  Headings standardized: {stats.sections_standardized}")
    typer.echo(f"  Issues fixed: {stats.issues_fixed}")
    typer.echo(f"  Words: {stats.original_word_count} -> {stats.optimized_word_count}")

    if not result.docx_available:
        typer.secho("  .docx generation failed; wrote Word-ready text instead", fg=typer.colors.YELLOW)

    if result.optimized.warnings:
        typer.echo("\nWarnings:")
        for warning in result.optimized.warnings:
            typer.secho(f"  - {warning}", fg=typer.colors.YELLOW)

    typer.echo("\nFiles:")
    for path in export.files:
        typer.echo(f"  {display_path(path)}")
    if export.log_dir:
        typer.echo(f"  Log: {display_path(export.log_dir / 'render.log')}")
    typer.echo("")


if __name__ == "__main__":
    app()
