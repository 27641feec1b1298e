"""Unit tests for template presets."""

import pytest

from clarity.contexts.rendering.templates import (
    DEFAULT_TEMPLATE,
    Template,
    get_template,
    list_templates,
    load_template_presets,
)


@pytest.mark.unit
def test_bundled_presets():
    assert [t.template_id for t in list_templates()] == [
        "classic-professional",
        "modern-clean",
        "executive-formal",
        "tech-focused",
        "minimalist-ats",
    ]


@pytest.mark.unit
def test_get_template():
    template = get_template("tech-focused")

    assert template.name == "Tech Focused"
    assert template.bullet_glyph == "→"
    assert template.dividers is True
    assert template.section_order[:3] == ("Contact Information", "Professional Summary", "Skills")


@pytest.mark.unit
def test_get_template_none_is_default():
    assert get_template(None) is DEFAULT_TEMPLATE


@pytest.mark.unit
def test_unknown_template_lists_available_ids():
    with pytest.raises(ValueError) as exc_info:
        get_template("two-column-fancy")

    message = str(exc_info.value)
    assert "two-column-fancy" in message
    assert "classic-professional" in message
    assert "minimalist-ats" in message


@pytest.mark.unit
@pytest.mark.parametrize(
    "multiplier, expected_gap", [(1.0, 1), (1.15, 1), (1.2, 1), (1.25, 2), (2.0, 2)]
)
def test_line_gap(multiplier, expected_gap):
    assert Template(line_spacing_multiplier=multiplier).line_gap == expected_gap


@pytest.mark.unit
@pytest.mark.parametrize("units, expected_lines", [(0, 1), (6, 1), (8, 1), (12, 2), (16, 2), (18, 3)])
def test_spacer_lines(units, expected_lines):
    assert Template(section_spacing_units=units).spacer_lines == expected_lines


@pytest.mark.unit
def test_default_template():
    assert DEFAULT_TEMPLATE.section_order == ()
    assert DEFAULT_TEMPLATE.bullet_glyph == "•"
    assert DEFAULT_TEMPLATE.line_spacing_multiplier == 1.0
    assert DEFAULT_TEMPLATE.section_spacing_units == 6
    assert DEFAULT_TEMPLATE.dividers is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "kwargs", [{"bullet_glyph": ""}, {"line_spacing_multiplier": 0}, {"section_spacing_units": -1}]
)
def test_invalid_template_values(kwargs):
    with pytest.raises(ValueError):
        Template(**kwargs)


@pytest.mark.unit
def test_load_custom_presets(tmp_path):
    config = tmp_path / "presets.yaml"
    config.write_text(
        "default: plain\n"
        "templates:\n"
        "  - template_id: plain\n"
        "    name: Plain\n"
        "    section_order: [Skills, Work Experience]\n"
        "    bullet_glyph: '*'\n"
    )

    presets = load_template_presets(config)

    assert list(presets) == ["plain"]
    assert presets["plain"].section_order == ("Skills", "Work Experience")
    assert presets["plain"].bullet_glyph == "*"
    assert presets["plain"].section_spacing_units == 6


@pytest.mark.unit
def test_load_presets_rejects_unknown_fields(tmp_path):
    config = tmp_path / "presets.yaml"
    config.write_text("templates:\n  - template_id: plain\n    columns: 2\n")

    with pytest.raises(ValueError, match="unknown fields"):
        load_template_presets(config)


@pytest.mark.unit
def test_load_presets_rejects_duplicate_ids(tmp_path):
    config = tmp_path / "presets.yaml"
    config.write_text("templates:\n  - template_id: plain\n  - template_id: plain\n")

    with pytest.raises(ValueError, match="Duplicate template id"):
        load_template_presets(config)


@pytest.mark.unit
def test_load_presets_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_template_presets(tmp_path / "missing.yaml")
