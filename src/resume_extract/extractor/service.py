"""Per-upload résumé text extraction service with tiered fallback.

Orchestrates the extraction pipeline for a single in-memory upload:

1. **Structured** -- pdfplumber page text, raced against a fixed timeout.
2. **Byte scan** -- heuristic recovery of printable runs from raw bytes.
3. **Filename** -- a short synthetic sentence built from the filename.

Each tier either returns text long enough to accept or raises an
``ExtractionError``; a failure falls through to the next tier and its
message is recorded in the result's diagnostics. An unexpected exception
outside the tiers ends in the emergency path. ``extract_resume_text``
never raises: every call returns a fully populated ``ExtractionResult``.
"""

from __future__ import annotations

import logging
import queue
import re
import threading
import time
from dataclasses import dataclass, field
from pathlib import PurePath

from resume_extract.config.settings import ExtractionSettings
from resume_extract.extractor.byte_scan import try_byte_scan
from resume_extract.extractor.normalize import normalize_text
from resume_extract.extractor.quality import assess_quality, classify_quality
from resume_extract.extractor.structured import try_structured
from resume_extract.extractor.types import (
    Diagnostics,
    ErrorKind,
    ExtractionError,
    ExtractionMethod,
    ExtractionResult,
    ParserOptions,
    ScanOptions,
    StageResult,
    TextQuality,
)

logger = logging.getLogger(__name__)

# Re-export shared types so consumers can import from service
__all__ = [
    "ExtractionMethod",
    "ExtractionResult",
    "TextQuality",
    "extract_resume_text",
]

_SEPARATOR_PATTERN = re.compile(r"[_\-.+]+")
_UNNAMED = "unnamed document"


def describe_filename(filename: str) -> str:
    """Turn a filename into readable words: no directory, no extension, no separators."""
    name = PurePath(str(filename or "").replace("\\", "/")).name
    stem = name.rsplit(".", 1)[0] if "." in name.strip(".") else name
    words = normalize_text(_SEPARATOR_PATTERN.sub(" ", stem))
    return words or _UNNAMED


def filename_fallback_text(filename: str) -> str:
    """Synthetic text used when no strategy recovered document content."""
    return (
        f"Resume document: {describe_filename(filename)}. Automatic text "
        "extraction was not possible, manual extraction may be needed."
    )


def emergency_text(filename: str) -> str:
    """Synthetic text used when extraction hit an unexpected error."""
    return (
        f"Resume document: {describe_filename(filename)}. An error occurred "
        "while extracting text from this file."
    )


def _elapsed_ms(started: float) -> int:
    return max(0, int((time.perf_counter() - started) * 1000))


def _build_result(
    stage: StageResult,
    method: ExtractionMethod,
    started: float,
    diagnostics: Diagnostics,
) -> ExtractionResult:
    metrics = assess_quality(stage.cleaned_text, _elapsed_ms(started), diagnostics)
    if method in (ExtractionMethod.FILENAME_FALLBACK, ExtractionMethod.EMERGENCY):
        # Synthetic text carries no document content
        quality = TextQuality.POOR
    else:
        quality = classify_quality(metrics)
    return ExtractionResult(
        raw_text=stage.raw_text,
        cleaned_text=stage.cleaned_text,
        method=method,
        quality=quality,
        metrics=metrics,
    )


def run_structured_with_timeout(
    data: bytes,
    options: ParserOptions,
    timeout_seconds: float,
) -> StageResult:
    """Run the structured extractor, giving up after *timeout_seconds*.

    The extractor runs on a daemon thread owned by this call, and its outcome
    comes back through a one-slot queue. On timeout the thread is abandoned:
    it never holds up interpreter exit, and it still releases its page and
    document handles on its own exit path.

    Raises:
        ExtractionError: ``TIMEOUT`` if the deadline passes, otherwise
            whatever the structured extractor raised.
    """
    outcome: queue.Queue[tuple[StageResult | None, Exception | None]] = queue.Queue(
        maxsize=1
    )

    def run() -> None:
        try:
            outcome.put((try_structured(data, options), None))
        except Exception as e:
            outcome.put((None, e))

    worker = threading.Thread(target=run, name="structured-extract", daemon=True)
    worker.start()
    try:
        stage, error = outcome.get(timeout=timeout_seconds)
    except queue.Empty:
        logger.warning(
            "Structured extraction still running after %gs, abandoning thread %s",
            timeout_seconds,
            worker.name,
        )
        raise ExtractionError(
            ErrorKind.TIMEOUT,
            f"Structured extraction timed out after {timeout_seconds:g}s",
        ) from None
    if error is not None:
        raise error
    return stage


@dataclass
class _Attempt:
    """Progress of one extraction call, readable by the emergency path."""

    filename: str
    started: float
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def _extract(
    data: bytes,
    settings: ExtractionSettings,
    attempt: _Attempt,
) -> ExtractionResult:
    filename = attempt.filename

    # --- Tier 1: structured extraction (timeout-guarded) ---

    logger.info("Tier 1 (structured): attempting extraction for %s", filename)
    attempt.diagnostics = attempt.diagnostics.with_flags(structured_attempted=True)
    try:
        stage = run_structured_with_timeout(
            data,
            ParserOptions.from_settings(settings),
            settings.structured_timeout_seconds,
        )
    except ExtractionError as e:
        logger.warning(
            "Structured extraction failed for %s: %s, falling back to byte scan",
            filename,
            e,
        )
        attempt.diagnostics = attempt.diagnostics.with_error(e)
    except Exception as e:
        logger.exception("Structured extraction crashed for %s", filename)
        attempt.diagnostics = attempt.diagnostics.with_error(
            ExtractionError(ErrorKind.UNEXPECTED, f"Structured extraction error: {e}")
        )
    else:
        attempt.diagnostics = attempt.diagnostics.with_flags(
            structured_succeeded=True
        )
        for page_error in stage.page_errors:
            attempt.diagnostics = attempt.diagnostics.with_error(page_error)
        result = _build_result(
            stage, ExtractionMethod.STRUCTURED, attempt.started, attempt.diagnostics
        )
        logger.info(
            "Extraction succeeded via structured parser: %s (%d chars, %d/%d pages, %s)",
            filename,
            len(result.cleaned_text),
            stage.pages_read,
            stage.page_count,
            result.quality.value,
        )
        return result

    # --- Tier 2: byte scan ---

    logger.info("Tier 2 (byte scan): attempting extraction for %s", filename)
    attempt.diagnostics = attempt.diagnostics.with_flags(fallback_attempted=True)
    try:
        stage = try_byte_scan(data, ScanOptions.from_settings(settings))
    except ExtractionError as e:
        logger.warning(
            "Byte scan failed for %s: %s, falling back to filename", filename, e
        )
        attempt.diagnostics = attempt.diagnostics.with_error(e)
    except Exception as e:
        logger.exception("Byte scan crashed for %s", filename)
        attempt.diagnostics = attempt.diagnostics.with_error(
            ExtractionError(ErrorKind.UNEXPECTED, f"Byte scan error: {e}")
        )
    else:
        attempt.diagnostics = attempt.diagnostics.with_flags(fallback_succeeded=True)
        result = _build_result(
            stage,
            ExtractionMethod.BYTE_SCAN_FALLBACK,
            attempt.started,
            attempt.diagnostics,
        )
        logger.info(
            "Extraction succeeded via byte scan: %s (%d chars, %s)",
            filename,
            len(result.cleaned_text),
            result.quality.value,
        )
        return result

    # --- Tier 3: filename (always succeeds) ---

    text = filename_fallback_text(filename)
    logger.warning("All content strategies failed for %s, using filename", filename)
    return _build_result(
        StageResult(raw_text=text, cleaned_text=text),
        ExtractionMethod.FILENAME_FALLBACK,
        attempt.started,
        attempt.diagnostics,
    )


def extract_resume_text(
    data: bytes,
    filename: str,
    settings: ExtractionSettings | None = None,
) -> ExtractionResult:
    """Extract text from one uploaded résumé using tiered fallback.

    Args:
        data: Raw bytes of the uploaded file.
        filename: Declared filename of the upload.
        settings: Extraction configuration; loaded from config/env if omitted.

    Returns:
        ExtractionResult from the first strategy that succeeded. Never raises.
    """
    attempt = _Attempt(filename=filename, started=time.perf_counter())
    try:
        if settings is None:
            settings = ExtractionSettings()
        return _extract(bytes(data), settings, attempt)
    except Exception as e:
        logger.exception("Unexpected error extracting %s", filename)
        error = ExtractionError(ErrorKind.UNEXPECTED, f"Unexpected error: {e}")
        text = emergency_text(filename)
        metrics = assess_quality(
            text,
            _elapsed_ms(attempt.started),
            attempt.diagnostics.with_error(error),
        )
        return ExtractionResult(
            raw_text=text,
            cleaned_text=text,
            method=ExtractionMethod.EMERGENCY,
            quality=TextQuality.POOR,
            metrics=metrics,
        )
