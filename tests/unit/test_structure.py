"""Unit tests for structural cleanup passes."""

import pytest

from clarity.contexts.optimizing.data_structures import OptimizationKind
from clarity.contexts.optimizing.structure import (
    canonicalize_bullets,
    clean_structure,
    flatten_tabs,
    optimize_structure,
    renormalize_whitespace,
    replace_typographic_characters,
)


@pytest.mark.unit
class TestPasses:
    def test_canonicalize_bullets(self):
        assert canonicalize_bullets("▪Python\n  •   Go\n◦ SQL") == "• Python\n• Go\n• SQL"

    def test_canonicalize_bullets_ignores_mid_line_glyphs(self):
        assert canonicalize_bullets("Python • Go") == "Python • Go"

    def test_flatten_tabs(self):
        assert flatten_tabs("Name\tTitle\t\tDate") == "Name Title Date"

    def test_replace_typographic_characters(self):
        text = "“Quoted” — it’s done… 2019–2021"
        assert replace_typographic_characters(text) == "\"Quoted\" - it's done... 2019-2021"

    def test_renormalize_whitespace(self):
        assert renormalize_whitespace("a  b \r\n\n\n\n c ") == "a b\n\nc"

    def test_renormalize_whitespace_is_idempotent(self):
        once = renormalize_whitespace("  x \n\n\n\ny  z\n")
        assert renormalize_whitespace(once) == once


@pytest.mark.unit
class TestOptimizeStructure:
    def test_tab_layout_becomes_linear_text(self):
        text, records = optimize_structure("Name\tTitle\tDate")

        assert text == "Name Title Date"
        assert len(records) == 1
        assert records[0].kind == OptimizationKind.STRUCTURE_IMPROVED
        assert records[0].before_sample == "Name\tTitle\tDate"
        assert records[0].after_sample == "Name Title Date"

    def test_clean_text_records_nothing(self):
        text = "Skills\n• Python\n• Go"
        assert optimize_structure(text) == (text, ())

    def test_only_changing_passes_record(self):
        _, records = optimize_structure("•Python\n“Go”")

        assert [r.kind for r in records] == [
            OptimizationKind.FORMATTING_CLEANED,
            OptimizationKind.FORMATTING_CLEANED,
        ]
        assert "bullet" in records[0].description
        assert "special characters" in records[1].description

    def test_second_run_is_a_no_op(self, sample_resume_text):
        once, first_records = optimize_structure(sample_resume_text)
        twice, second_records = optimize_structure(once)

        assert first_records
        assert twice == once
        assert second_records == ()


@pytest.mark.unit
def test_clean_structure_matches_optimize_structure(sample_resume_text):
    text, _ = optimize_structure(sample_resume_text)
    assert clean_structure(sample_resume_text) == text
