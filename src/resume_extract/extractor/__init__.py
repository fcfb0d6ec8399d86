"""Batch résumé extraction with per-file error tolerance.

Reads each file from disk, applies the upload gate, extracts text using the
tiered extraction service, and writes a markdown file with YAML frontmatter
to the output directory.  One file's failure never blocks the others -- a
rejected or unreadable file is counted and the batch moves on.  Results that
only carry synthetic or poor-quality text are still written, but counted as
needing review.

Public API:
    extract_files(paths, settings, output_dir)
        -> ExtractionBatchResult
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from resume_extract.config.settings import ExtractionSettings
from resume_extract.extractor.markdown import should_extract, write_markdown_file
from resume_extract.extractor.service import extract_resume_text
from resume_extract.extractor.upload import UploadRejected, validate_upload

logger = logging.getLogger(__name__)

__all__ = ["extract_files", "ExtractionBatchResult"]


@dataclass
class ExtractionBatchResult:
    """Aggregated outcome of extracting text for multiple files."""

    files_attempted: int = 0
    files_extracted: int = 0
    files_needing_review: int = 0
    files_rejected: int = 0
    files_skipped: int = 0
    files_failed: int = 0
    methods: dict[str, int] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


def _extract_file(
    path: Path,
    settings: ExtractionSettings,
    output_dir: Path,
    batch: ExtractionBatchResult,
) -> None:
    """Extract a single file and fold its outcome into *batch*."""
    md_path = output_dir / f"{path.stem}.md"

    # Idempotency: skip if markdown already exists with content
    if not should_extract(md_path):
        logger.info("Skipping %s: already extracted (%s)", path.name, md_path.name)
        batch.files_skipped += 1
        return

    data = path.read_bytes()

    try:
        validate_upload(data, path.name, settings)
    except UploadRejected as e:
        logger.warning("Rejected %s: %s", path.name, e)
        batch.files_rejected += 1
        batch.errors.append(f"{path.name}: {e}")
        return

    result = extract_resume_text(data, path.name, settings)
    write_markdown_file(md_path, result, path.name)

    batch.files_extracted += 1
    batch.methods[result.method.value] = batch.methods.get(result.method.value, 0) + 1
    if result.needs_better_file:
        batch.files_needing_review += 1
        logger.warning(
            "%s needs a better file: %s via %s",
            path.name,
            result.quality.value,
            result.method.value,
        )


def extract_files(
    paths: list[Path],
    settings: ExtractionSettings,
    output_dir: Path,
) -> ExtractionBatchResult:
    """Extract text from each file in *paths* into *output_dir*.

    Args:
        paths: Résumé files to process.
        settings: Extraction configuration.
        output_dir: Directory receiving one markdown file per source file.

    Returns:
        ExtractionBatchResult with aggregated statistics.
    """
    batch = ExtractionBatchResult()

    if not paths:
        logger.info("No files to extract")
        return batch

    logger.info("Extracting %d file(s) into %s", len(paths), output_dir)

    for path in paths:
        batch.files_attempted += 1
        try:
            _extract_file(Path(path), settings, output_dir, batch)
        except OSError as e:
            logger.exception("Cannot read or write files for %s", path)
            batch.files_failed += 1
            batch.errors.append(f"{Path(path).name}: {e}")

    logger.info(
        "Extraction batch complete: %d attempted, %d extracted, %d need review, "
        "%d rejected, %d skipped, %d failed",
        batch.files_attempted,
        batch.files_extracted,
        batch.files_needing_review,
        batch.files_rejected,
        batch.files_skipped,
        batch.files_failed,
    )

    return batch
