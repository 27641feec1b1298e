"""
Optimization summary report.

Renders a human-readable summary of an OptimizedDocument (statistics,
applied optimizations, recommendations) from a Jinja2 template stored next
to this module.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from clarity.utils.text_processing import truncate_display

REPORT_TEMPLATES_PATH = Path(__file__).parent / "templates"
SUMMARY_TEMPLATE = "summary.txt.jinja"


def _build_environment(templates_path: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_path)),
        # Catches silent failures
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["truncate_display"] = truncate_display
    return env


def generate_optimization_summary(document, templates_path: Path = REPORT_TEMPLATES_PATH) -> str:
    """
    Render the optimization summary for a document.

    Args:
        document: OptimizedDocument from optimize_document()
        templates_path: Directory holding summary.txt.jinja

    Returns:
        Summary text
    """
    template = _build_environment(templates_path).get_template(SUMMARY_TEMPLATE)
    return template.render(
        statistics=document.statistics,
        sections=document.sections,
        optimizations=document.optimizations,
        warnings=document.warnings,
    )
