"""Shared types for the extraction pipeline.

Defines the result, metrics, and diagnostics values returned to callers, the
closed error taxonomy raised by extraction stages, and the per-call parser
configuration used by the structured extractor.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class ExtractionMethod(Enum):
    """Strategy that ultimately produced the returned text."""

    STRUCTURED = "structured"
    BYTE_SCAN_FALLBACK = "byte_scan_fallback"
    FILENAME_FALLBACK = "filename_fallback"
    EMERGENCY = "emergency"


class TextQuality(Enum):
    """Coarse confidence tier derived from extraction statistics."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ErrorKind(Enum):
    """Failure taxonomy for extraction stages."""

    PAGE_FAILED = "page_failed"
    OPEN_FAILED = "open_failed"
    ENCRYPTED = "encrypted"
    INSUFFICIENT_TEXT = "insufficient_text"
    TIMEOUT = "timeout"
    BYTE_SCAN_INSUFFICIENT = "byte_scan_insufficient"
    UNEXPECTED = "unexpected"


class ExtractionError(Exception):
    """A classified extraction failure.

    Stages raise this; only the orchestrator decides whether it falls
    through to the next strategy or ends in the emergency path.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"

    def __repr__(self) -> str:
        return f"ExtractionError({self.kind.name}, {self.message!r})"


@dataclass(frozen=True)
class ParserOptions:
    """Per-call configuration for the structured PDF extractor.

    Attributes:
        max_pages: Upper bound on pages read from a single document.
        min_page_chars: A page's text must be longer than this to be kept.
        min_text_length: Normalized text shorter than this fails the stage.
        password: Password handed to the parser (empty for none).
        repair: Whether to let the parser attempt document repair.
        use_text_flow: Emit words in content-stream order rather than
            re-sorting them by position.
    """

    max_pages: int = 10
    min_page_chars: int = 0
    min_text_length: int = 100
    password: str = ""
    repair: bool = False
    use_text_flow: bool = True

    @classmethod
    def from_settings(cls, settings) -> ParserOptions:
        """Build options from an ``ExtractionSettings`` instance."""
        return cls(
            max_pages=settings.max_pages,
            min_page_chars=settings.min_page_chars,
            min_text_length=settings.min_text_length,
            password=settings.pdf_password,
            repair=settings.repair_documents,
            use_text_flow=settings.use_text_flow,
        )


@dataclass(frozen=True)
class ScanOptions:
    """Per-call thresholds for the byte-scan extractor."""

    min_text_length: int = 50
    min_chunk_chars: int = 3
    min_chunks: int = 2

    @classmethod
    def from_settings(cls, settings) -> ScanOptions:
        """Build options from an ``ExtractionSettings`` instance."""
        return cls(
            min_text_length=settings.byte_scan_min_text_length,
            min_chunk_chars=settings.byte_scan_min_chunk_chars,
            min_chunks=settings.byte_scan_min_chunks,
        )


@dataclass(frozen=True)
class StageResult:
    """Successful output of one extraction strategy.

    Attributes:
        raw_text: Unprocessed text as the strategy produced it.
        cleaned_text: Normalized text.
        page_count: Pages in the document (0 when not known).
        pages_read: Pages the strategy actually visited.
        page_errors: Recoverable per-page failures encountered on the way.
    """

    raw_text: str
    cleaned_text: str
    page_count: int = 0
    pages_read: int = 0
    page_errors: tuple[ExtractionError, ...] = ()


@dataclass(frozen=True)
class Diagnostics:
    """Append-only trail of the stages attempted during one extraction.

    Each ``with_*`` method returns a new instance; nothing is mutated.
    """

    structured_attempted: bool = False
    structured_succeeded: bool = False
    fallback_attempted: bool = False
    fallback_succeeded: bool = False
    errors: tuple[ExtractionError, ...] = ()

    @property
    def error_details(self) -> str:
        """Pipe-separated messages of every recorded failure."""
        return " | ".join(error.message for error in self.errors)

    def with_flags(self, **flags: bool) -> Diagnostics:
        return replace(self, **flags)

    def with_error(self, error: ExtractionError) -> Diagnostics:
        return replace(self, errors=self.errors + (error,))


@dataclass(frozen=True)
class ExtractionMetrics:
    """Text statistics computed once per result.

    Attributes:
        word_count: Whitespace-delimited tokens in the text.
        readable_percentage: Share of tokens holding a letter and longer
            than one character, 0-100.
        has_structured_content: Whether any résumé section keyword occurs.
        structure_indicators: Number of distinct section keywords found.
        word_diversity: Distinct lower-cased readable words over readable
            words, 0-100.
        processing_time_ms: Wall-clock duration of the extraction call.
        diagnostics: Trail of attempted stages.
    """

    word_count: int = 0
    readable_percentage: int = 0
    has_structured_content: bool = False
    structure_indicators: int = 0
    word_diversity: int = 0
    processing_time_ms: int = 0
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of extracting text from one uploaded résumé.

    Attributes:
        raw_text: Unprocessed text from whichever strategy produced it.
        cleaned_text: Normalized text; the field downstream consumers use.
        method: Strategy that ultimately succeeded.
        quality: Derived quality label.
        metrics: Statistics and diagnostics behind the label.
    """

    raw_text: str
    cleaned_text: str
    method: ExtractionMethod
    quality: TextQuality
    metrics: ExtractionMetrics

    @property
    def needs_better_file(self) -> bool:
        """Whether the text is too weak to send on for paid analysis."""
        return self.quality is TextQuality.POOR or self.method in (
            ExtractionMethod.FILENAME_FALLBACK,
            ExtractionMethod.EMERGENCY,
        )
