"""Unit tests for the optimization summary report."""

import pytest
from jinja2 import TemplateNotFound

from clarity.contexts.intake.document import RawDocument
from clarity.contexts.optimizing.optimizer import optimize_document
from clarity.contexts.optimizing.report import generate_optimization_summary


@pytest.mark.unit
def test_summary_statistics(sample_raw):
    document = optimize_document(sample_raw)
    summary = generate_optimization_summary(document)

    assert summary.startswith("ATS Optimization Complete!")
    assert f"• Word count: {sample_raw.word_count} → 132" in summary
    assert "• Sections detected: 4" in summary
    assert "• Sections standardized: 3" in summary
    assert f"• Issues fixed: {len(document.optimizations)}" in summary


@pytest.mark.unit
def test_summary_lists_optimizations_with_samples(sample_raw):
    summary = generate_optimization_summary(optimize_document(sample_raw))

    assert "Optimizations Applied:" in summary
    assert "(WORK HISTORY → Work Experience)" in summary
    assert "Converted table structures to linear text" in summary


@pytest.mark.unit
def test_summary_recommendations_only_with_warnings(sample_raw):
    assert "Recommendations:" not in generate_optimization_summary(optimize_document(sample_raw))

    short = optimize_document(RawDocument.from_text("Jane Doe\nEngineer", "pdf"))
    summary = generate_optimization_summary(short)

    assert "Recommendations:" in summary
    assert "• Resume appears very short (3 words)." in summary
    assert "Optimizations Applied:" not in summary


@pytest.mark.unit
def test_missing_template_directory(sample_raw, tmp_path):
    with pytest.raises(TemplateNotFound):
        generate_optimization_summary(optimize_document(sample_raw), templates_path=tmp_path)
