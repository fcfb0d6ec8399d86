"""Batch runner and markdown output: per-file isolation and idempotency."""

import frontmatter

from resume_extract.extractor import extract_files
from resume_extract.extractor.markdown import build_post, should_extract
from resume_extract.extractor.service import extract_resume_text
from tests.conftest import BYTE_SOUP, CONTROL_NOISE


def test_should_extract(tmp_path):
    md_path = tmp_path / "resume.md"
    assert should_extract(md_path) is True
    md_path.write_text("")
    assert should_extract(md_path) is True
    md_path.write_text("content")
    assert should_extract(md_path) is False


def test_post_metadata(resume_pdf, settings):
    result = extract_resume_text(resume_pdf, "jane.pdf", settings)
    post = build_post(result, "jane.pdf")
    assert post.content == result.cleaned_text
    assert post.metadata["source_file"] == "jane.pdf"
    assert post.metadata["extraction_method"] == "structured"
    assert post.metadata["text_quality"] == result.quality.value
    assert post.metadata["word_count"] == result.metrics.word_count
    assert post.metadata["needs_better_file"] is False
    assert "error_details" not in post.metadata


def test_batch_extracts_and_isolates_failures(tmp_path, resume_pdf, settings):
    inputs = tmp_path / "in"
    inputs.mkdir()
    (inputs / "jane.pdf").write_bytes(resume_pdf)
    (inputs / "soup.pdf").write_bytes(BYTE_SOUP)
    (inputs / "noise.pdf").write_bytes(CONTROL_NOISE)
    (inputs / "notes.txt").write_bytes(b"plain text notes")
    out = tmp_path / "out"

    paths = [
        inputs / "jane.pdf",
        inputs / "missing.pdf",
        inputs / "soup.pdf",
        inputs / "noise.pdf",
        inputs / "notes.txt",
    ]
    batch = extract_files(paths, settings, out)

    assert batch.files_attempted == 5
    assert batch.files_extracted == 3
    assert batch.files_rejected == 1
    assert batch.files_failed == 1
    assert batch.methods == {
        "structured": 1,
        "byte_scan_fallback": 1,
        "filename_fallback": 1,
    }
    assert batch.files_needing_review >= 1
    assert len(batch.errors) == 2

    post = frontmatter.load(out / "jane.md")
    assert post.metadata["extraction_method"] == "structured"
    assert "Kubernetes" in post.content

    noise = frontmatter.load(out / "noise.md")
    assert noise.metadata["extraction_method"] == "filename_fallback"
    assert noise.metadata["needs_better_file"] is True
    assert noise.metadata["error_details"]

    assert not (out / "notes.md").exists()


def test_batch_skips_existing_output(tmp_path, resume_pdf, settings):
    source = tmp_path / "jane.pdf"
    source.write_bytes(resume_pdf)
    out = tmp_path / "out"

    first = extract_files([source], settings, out)
    second = extract_files([source], settings, out)

    assert first.files_extracted == 1
    assert second.files_extracted == 0
    assert second.files_skipped == 1


def test_empty_batch(tmp_path, settings):
    batch = extract_files([], settings, tmp_path)
    assert batch.files_attempted == 0
    assert batch.errors == []
