"""Byte-level heuristic text recovery.

Last content-bearing tier in the extraction fallback chain, used when the PDF
parser cannot open the document, times out, or finds too little text. PDF
containers interleave binary structure with literal text, so scanning raw
bytes for printable runs recovers readable prose even from documents whose
object structure is broken. Garbage fragments slip through occasionally;
the quality assessor labels such output instead of trusting it.

The scan knows nothing about document structure:

1. Printable ASCII (0x20-0x7E) and extended ASCII (0x80-0xFF, read as
   Latin-1) accumulate into a running chunk; tab, LF and CR become spaces.
2. Structural punctuation common in PDF syntax (``% < > { } [ ] ( )``) is
   skipped without ending the chunk.
3. Any other byte closes the chunk. Closed chunks are split into tokens;
   short, letterless, and format-artifact tokens are dropped. A chunk is
   kept only if two or more tokens survive and at least half of them are
   recognised: words in any Latin-1 script, or technical terms such as
   ``C++``, ``Node.js`` and e-mail addresses.
"""

from __future__ import annotations

import logging
import re

from resume_extract.extractor.normalize import normalize_text
from resume_extract.extractor.types import (
    ErrorKind,
    ExtractionError,
    ScanOptions,
    StageResult,
)

logger = logging.getLogger(__name__)

# Whitespace, printable ASCII, and extended ASCII; anything else ends a run
_TEXT_RUN_PATTERN = re.compile(rb"[\t\n\r\x20-\x7e\x80-\xff]+")
_STRUCTURAL_PUNCTUATION = b"%<>{}[]()"
_WHITESPACE_TO_SPACE = bytes.maketrans(b"\t\n\r", b"   ")

# PDF syntax keywords and content-stream operators that show up as words
ARTIFACT_TOKENS = frozenset(
    {
        "obj",
        "endobj",
        "stream",
        "endstream",
        "xref",
        "trailer",
        "startxref",
        "eof",
        "bt",
        "et",
        "tj",
        "td",
        "tf",
        "tm",
        "tz",
        "tl",
        "cm",
        "re",
        "rg",
        "gs",
        "bdc",
        "emc",
        "null",
    }
)
_VERSION_HEADER = re.compile(r"^pdf-\d\.\d$", re.IGNORECASE)

_LETTER_PATTERN = re.compile(r"[^\W\d_]")
# Letters joined by apostrophes or hyphens, then optional trailing punctuation
_WORD_PATTERN = re.compile(r"^[^\W\d_]+(?:['\-][^\W\d_]+)*[.,;:!?]?$")
# ASCII identifiers, versions, addresses: C++, Node.js, jane@example.com
_TECH_TERM_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9.@/+#&_\-]*[.,;:]?$")


def _is_artifact(token: str) -> bool:
    """Whether *token* is PDF syntax rather than prose."""
    if token.startswith("/"):
        # PDF name object, e.g. /Type or /FlateDecode
        return True
    if _VERSION_HEADER.match(token):
        return True
    return token.lower().strip(".,;:") in ARTIFACT_TOKENS


def _filter_tokens(chunk: str) -> list[str]:
    """Keep tokens that look like words: length >= 2, a letter, not syntax."""
    return [
        token
        for token in chunk.split()
        if len(token) >= 2
        and _LETTER_PATTERN.search(token) is not None
        and not _is_artifact(token)
    ]


def _is_recognised(token: str) -> bool:
    """Whether *token* reads as a word or a technical term."""
    if _WORD_PATTERN.match(token):
        # Mixed case inside a word (``aBcD``) is noise unless it is ASCII jargon
        word = token.rstrip(".,;:!?")
        if word.islower() or word.isupper() or word.istitle():
            return True
    return _TECH_TERM_PATTERN.match(token) is not None


def _looks_like_prose(tokens: list[str]) -> bool:
    """At least two tokens survive, and at least half are recognised."""
    if len(tokens) < 2:
        return False
    recognised = sum(1 for token in tokens if _is_recognised(token))
    return recognised >= 2 and recognised * 2 >= len(tokens)


def scan_chunks(data: bytes, min_chunk_chars: int = 3) -> list[str]:
    """Return the filtered text chunks found in a raw byte buffer.

    Args:
        data: Raw bytes of the upload.
        min_chunk_chars: A chunk must be longer than this (after stripping)
            before it is tokenized.

    Returns:
        Chunks in buffer order, each a space-joined run of surviving tokens.
    """
    chunks: list[str] = []

    for match in _TEXT_RUN_PATTERN.finditer(data):
        run = match.group().translate(None, _STRUCTURAL_PUNCTUATION)
        candidate = run.translate(_WHITESPACE_TO_SPACE).decode("latin-1").strip()
        if len(candidate) <= min_chunk_chars:
            continue
        tokens = _filter_tokens(candidate)
        if _looks_like_prose(tokens):
            chunks.append(" ".join(tokens))

    return chunks


def try_byte_scan(data: bytes, options: ScanOptions | None = None) -> StageResult:
    """Recover text from *data* by scanning bytes for printable runs.

    Args:
        data: Raw bytes of the upload.
        options: Scan thresholds; defaults apply when omitted.

    Returns:
        StageResult with the joined chunks as raw text.

    Raises:
        ExtractionError: ``BYTE_SCAN_INSUFFICIENT`` when the scan recovers
            too little text or too few chunks.
    """
    options = options or ScanOptions()

    chunks = scan_chunks(data, options.min_chunk_chars)
    raw_text = " ".join(chunks)
    cleaned_text = normalize_text(raw_text)

    logger.info(
        "Byte scan recovered %d chunks, %d chars from %d bytes",
        len(chunks),
        len(cleaned_text),
        len(data),
    )

    if len(cleaned_text) <= options.min_text_length or len(chunks) < options.min_chunks:
        raise ExtractionError(
            ErrorKind.BYTE_SCAN_INSUFFICIENT,
            f"Byte scan found insufficient text ({len(cleaned_text)} chars "
            f"in {len(chunks)} chunks)",
        )

    return StageResult(raw_text=raw_text, cleaned_text=cleaned_text)
