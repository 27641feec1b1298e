"""
Integration tests for export_resume(): files on disk and session logs.
"""

import pytest
from docx import Document

from clarity.contexts.intake.exceptions import EmptyContentError
from clarity.contexts.rendering import exporter
from clarity.contexts.rendering.templates import get_template


@pytest.fixture
def logs_path(tmp_path, monkeypatch):
    path = tmp_path / "logs"
    monkeypatch.setattr(exporter, "LOGS_PATH", path)
    return path


@pytest.mark.integration
def test_export_writes_downloads_and_summary(tmp_path, logs_path, sample_resume_text):
    text_file = tmp_path / "Jane_Doe.txt"
    text_file.write_text(sample_resume_text, encoding="utf-8")
    output_dir = tmp_path / "out"

    export = exporter.export_resume(
        text_file, source_kind="pdf", template=get_template("modern-clean"), output_dir=output_dir
    )

    assert [path.name for path in export.files] == [
        "Jane_Doe_ATS_optimized.txt",
        "Jane_Doe_ATS_optimized.docx",
        "Jane_Doe_summary.txt",
    ]
    assert all(path.exists() for path in export.files)

    plain_text = (output_dir / "Jane_Doe_ATS_optimized.txt").read_text(encoding="utf-8")
    assert plain_text == export.result.assembled.plain_text
    assert "SKILLS\n───" in plain_text

    doc = Document(str(output_dir / "Jane_Doe_ATS_optimized.docx"))
    assert "PROFESSIONAL SUMMARY" in [p.text for p in doc.paragraphs]

    summary = (output_dir / "Jane_Doe_summary.txt").read_text(encoding="utf-8")
    assert summary.startswith("ATS Optimization Complete!")


@pytest.mark.integration
def test_export_creates_session_log(tmp_path, logs_path, sample_resume_text):
    text_file = tmp_path / "cv.txt"
    text_file.write_text(sample_resume_text, encoding="utf-8")

    export = exporter.export_resume(text_file, output_dir=tmp_path / "out")

    assert export.log_dir.parent == logs_path
    assert export.log_dir.name.startswith("export_")
    log_text = (export.log_dir / "render.log").read_text(encoding="utf-8")
    assert "[render] Starting export: cv" in log_text
    assert "Template: default" in log_text
    assert "clarity: 0.1.0" in log_text


@pytest.mark.integration
def test_export_missing_file(tmp_path, logs_path):
    with pytest.raises(FileNotFoundError):
        exporter.export_resume(tmp_path / "missing.txt")


@pytest.mark.integration
def test_export_empty_file(tmp_path, logs_path):
    text_file = tmp_path / "blank.txt"
    text_file.write_text("   \n\n", encoding="utf-8")

    with pytest.raises(EmptyContentError):
        exporter.export_resume(text_file, output_dir=tmp_path / "out")
