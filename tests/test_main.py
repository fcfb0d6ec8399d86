"""Command-line entry point."""

import json
import logging

import frontmatter
import pytest

import main


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_main_extracts_files(tmp_path, monkeypatch, resume_pdf, restore_logging):
    monkeypatch.setenv("PIPELINE_LOG_DIR", str(tmp_path / "logs"))
    source = tmp_path / "jane_doe.pdf"
    source.write_bytes(resume_pdf)
    out = tmp_path / "out"

    exit_code = main.main([str(source), "--output-dir", str(out)])

    assert exit_code == 0
    post = frontmatter.load(out / "jane_doe.md")
    assert post.metadata["extraction_method"] == "structured"

    log_lines = (tmp_path / "logs" / "extraction.log").read_text().splitlines()
    records = [json.loads(line) for line in log_lines]
    assert any(record["component"] == "resume_extract.extractor.service" for record in records)
    assert all("timestamp" in record and "level" in record for record in records)


def test_main_fails_when_no_file_is_readable(tmp_path, monkeypatch, restore_logging):
    monkeypatch.setenv("PIPELINE_LOG_DIR", str(tmp_path / "logs"))
    exit_code = main.main([str(tmp_path / "absent.pdf"), "--output-dir", str(tmp_path)])
    assert exit_code == 1
