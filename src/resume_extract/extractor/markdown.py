"""Markdown output writer with YAML frontmatter for extracted résumé text.

Handles the filesystem side of batch extraction: writing one markdown file
per source document with structured YAML frontmatter describing how the text
was obtained and how far it can be trusted. Provides idempotency via
``should_extract`` -- if a markdown file already exists and has content, the
document is skipped on re-run.

Public API:
    should_extract(md_path)  -> bool
    write_markdown_file(...)  -> None
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

import frontmatter

from resume_extract.extractor.types import ExtractionResult

logger = logging.getLogger(__name__)


def should_extract(md_path: Path) -> bool:
    """Check whether a markdown extraction file needs to be created.

    Returns False (skip) if *md_path* already exists and has content.
    Returns True (proceed) if the file is missing or empty.
    """
    if md_path.exists() and md_path.stat().st_size > 0:
        return False
    return True


def build_post(result: ExtractionResult, source_name: str) -> frontmatter.Post:
    """Wrap the cleaned text of *result* in a frontmatter post with metadata."""
    metrics = result.metrics
    post = frontmatter.Post(result.cleaned_text)
    post.metadata["source_file"] = source_name
    post.metadata["extraction_method"] = result.method.value
    post.metadata["text_quality"] = result.quality.value
    post.metadata["extraction_date"] = (
        datetime.datetime.now(datetime.UTC).isoformat()
    )
    post.metadata["word_count"] = metrics.word_count
    post.metadata["readable_percentage"] = metrics.readable_percentage
    post.metadata["word_diversity"] = metrics.word_diversity
    post.metadata["structure_indicators"] = metrics.structure_indicators
    post.metadata["processing_time_ms"] = metrics.processing_time_ms
    post.metadata["needs_better_file"] = result.needs_better_file
    if metrics.diagnostics.error_details:
        post.metadata["error_details"] = metrics.diagnostics.error_details
    return post


def write_markdown_file(
    md_path: Path,
    result: ExtractionResult,
    source_name: str,
) -> None:
    """Write extracted text to disk with YAML frontmatter metadata.

    Args:
        md_path: Destination path for the markdown file.
        result: Extraction result whose cleaned text becomes the body.
        source_name: Source document filename (not full path).
    """
    post = build_post(result, source_name)

    # Ensure parent directory exists
    md_path.parent.mkdir(parents=True, exist_ok=True)

    with open(md_path, "w", encoding="utf-8") as f:
        f.write(frontmatter.dumps(post))

    logger.info(
        "Wrote extraction to %s (%s, %s, %d words)",
        md_path.name,
        result.method.value,
        result.quality.value,
        result.metrics.word_count,
    )
