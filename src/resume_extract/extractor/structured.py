"""Primary résumé text extraction using the PDF's page structure.

This is the first tier in the extraction fallback chain. The buffer is
probed with PyMuPDF (open check, encryption, page count) and then read page
by page with pdfplumber, which yields the words of each page in content
order. Pages are capped at ``ParserOptions.max_pages`` so pathological
multi-hundred-page uploads cost no more than a normal résumé.

Everything runs synchronously inside the call from an in-memory stream: no
background workers, no streaming reads, no external resource fetching, and
no script execution. A page that fails is logged and skipped; page caches
are released in a ``finally`` block on every exit path, so even a call
abandoned by the orchestrator's timeout cleans up after itself.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

import pdfplumber
import pymupdf

from resume_extract.extractor.normalize import normalize_text
from resume_extract.extractor.types import (
    ErrorKind,
    ExtractionError,
    ParserOptions,
    StageResult,
)

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class DocumentProbe:
    """What the PDF probe learned before any text is read."""

    page_count: int
    encrypted: bool


def probe_document(data: bytes, password: str = "") -> DocumentProbe:
    """Open *data* as a PDF and report its page count and encryption state.

    Raises:
        ExtractionError: ``OPEN_FAILED`` if the buffer is not a readable PDF,
            ``ENCRYPTED`` if it requires a password that was not supplied.
    """
    try:
        doc = pymupdf.open(stream=data, filetype="pdf")
    except Exception as e:
        raise ExtractionError(
            ErrorKind.OPEN_FAILED, f"Cannot open document: {e}"
        ) from e

    with doc:
        encrypted = bool(doc.needs_pass or doc.is_encrypted)
        if doc.needs_pass and not (password and doc.authenticate(password)):
            raise ExtractionError(
                ErrorKind.ENCRYPTED, "Document is encrypted and requires a password"
            )
        return DocumentProbe(page_count=doc.page_count, encrypted=encrypted)


def _page_text(page, options: ParserOptions) -> str:
    """Join a page's words, in content order, with single spaces."""
    words = page.extract_words(
        use_text_flow=options.use_text_flow,
        keep_blank_chars=False,
    )
    return " ".join(
        word["text"] for word in words if word.get("text", "").strip()
    )


def _read_pages(
    pdf, page_limit: int, options: ParserOptions
) -> tuple[list[str], list[ExtractionError]]:
    """Collect the text of the first *page_limit* pages, isolating failures.

    Each page is closed in a ``finally`` block whatever happened to it; a
    close failure is only logged.
    """
    page_texts: list[str] = []
    page_errors: list[ExtractionError] = []

    for page_num in range(1, page_limit + 1):
        page = None
        try:
            page = pdf.pages[page_num - 1]
            text = _page_text(page, options)
            if len(text.strip()) > options.min_page_chars:
                page_texts.append(text)
                logger.debug("Page %d: extracted %d characters", page_num, len(text))
        except Exception as e:
            logger.warning("Failed to extract page %d: %s", page_num, e)
            page_errors.append(
                ExtractionError(ErrorKind.PAGE_FAILED, f"Page {page_num} failed: {e}")
            )
        finally:
            if page is not None:
                try:
                    page.close()
                except Exception as e:
                    logger.warning("Failed to release page %d: %s", page_num, e)

    return page_texts, page_errors


def try_structured(data: bytes, options: ParserOptions | None = None) -> StageResult:
    """Extract text from a PDF buffer page by page.

    Args:
        data: Raw bytes of the upload.
        options: Per-call parser configuration; defaults apply when omitted.

    Returns:
        StageResult with the concatenated page text on success.

    Raises:
        ExtractionError: ``OPEN_FAILED`` or ``ENCRYPTED`` from the probe,
            ``INSUFFICIENT_TEXT`` when the normalized text is shorter than
            ``options.min_text_length``.
    """
    options = options or ParserOptions()

    probe = probe_document(data, options.password)
    if probe.encrypted:
        logger.info("Document is encrypted, opened with the supplied password")
    page_limit = min(probe.page_count, options.max_pages)
    if probe.page_count > options.max_pages:
        logger.info(
            "Document has %d pages, reading the first %d",
            probe.page_count,
            options.max_pages,
        )

    page_texts: list[str] = []
    page_errors: list[ExtractionError] = []

    if page_limit > 0:
        try:
            pdf = pdfplumber.open(
                io.BytesIO(data),
                pages=list(range(1, page_limit + 1)),
                password=options.password or None,
                repair=options.repair,
            )
        except Exception as e:
            raise ExtractionError(
                ErrorKind.OPEN_FAILED, f"Cannot parse document pages: {e}"
            ) from e

        try:
            page_texts, page_errors = _read_pages(pdf, page_limit, options)
        finally:
            try:
                pdf.close()
            except Exception as e:
                logger.warning("Failed to release document: %s", e)

    raw_text = "".join(text + PAGE_SEPARATOR for text in page_texts)
    cleaned_text = normalize_text(raw_text)

    logger.info(
        "Structured extraction read %d/%d pages: %d chars (%d page errors)",
        page_limit,
        probe.page_count,
        len(cleaned_text),
        len(page_errors),
    )

    if len(cleaned_text) < options.min_text_length:
        message = (
            f"Document contains no readable text ({len(cleaned_text)} chars), "
            "it may be image-based or corrupted"
        )
        if page_errors:
            message += f"; {len(page_errors)} page(s) failed"
        raise ExtractionError(ErrorKind.INSUFFICIENT_TEXT, message)

    return StageResult(
        raw_text=raw_text,
        cleaned_text=cleaned_text,
        page_count=probe.page_count,
        pages_read=page_limit,
        page_errors=tuple(page_errors),
    )
