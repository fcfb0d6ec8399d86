"""Résumé text extraction -- command-line entry point.

Startup sequence:
    1. Load pipeline configuration (needed for log_dir and output_dir)
    2. Setup logging (must happen before any code that logs)
    3. Load extraction configuration
    4. Extract every file named on the command line
    5. Report the batch summary

Usage:
    python main.py resume.pdf [other.pdf ...] [--output-dir DIR]
"""

import argparse
import logging
import sys
from pathlib import Path

from resume_extract.config import ExtractionSettings, PipelineSettings
from resume_extract.extractor import extract_files
from resume_extract.logging import setup_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract text from résumé PDFs into markdown files."
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF files to extract")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for markdown output (default: pipeline output_dir)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run extraction for the files given on the command line."""
    args = _parse_args(argv)

    # 1. Load pipeline config first -- needed for logging and output paths
    pipeline = PipelineSettings()

    # 2. Setup logging BEFORE anything else logs
    setup_logging(
        log_dir=pipeline.log_dir,
        max_bytes=pipeline.log_max_bytes,
        backup_count=pipeline.log_backup_count,
    )

    logger.info("Résumé text extraction starting")

    # 3. Load extraction configuration
    extraction = ExtractionSettings()
    logger.info(
        "Config loaded -- extraction: timeout=%ss, max_pages=%s, min_text_length=%s",
        extraction.structured_timeout_seconds,
        extraction.max_pages,
        extraction.min_text_length,
    )

    # 4. Extract
    output_dir = args.output_dir or Path(pipeline.output_dir)
    batch = extract_files(args.files, extraction, output_dir)

    # 5. Report
    for error in batch.errors:
        logger.warning("Batch error: %s", error)
    logger.info(
        "Run complete -- %d extracted (%s), %d need review",
        batch.files_extracted,
        ", ".join(f"{method}={count}" for method, count in sorted(batch.methods.items()))
        or "none",
        batch.files_needing_review,
    )

    if batch.files_attempted and batch.files_failed == batch.files_attempted:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
