"""Quality assessment for extracted résumé text.

Turns a piece of text into ``ExtractionMetrics`` and maps those metrics to a
coarse ``TextQuality`` label. Nothing here compares against ground truth;
the label is synthesized purely from token statistics:

1. Readability: share of tokens that contain a letter and are longer than
   one character.
2. Structure: whole-word, case-insensitive hits on résumé section keywords.
3. Diversity: distinct lower-cased readable words over all readable words.
"""

from __future__ import annotations

import logging
import re

from resume_extract.extractor.types import Diagnostics, ExtractionMetrics, TextQuality

logger = logging.getLogger(__name__)

STRUCTURE_KEYWORDS: tuple[str, ...] = (
    "experience",
    "education",
    "skills",
    "summary",
    "work",
    "job",
    "objective",
    "employment",
    "qualifications",
    "accomplishments",
)

_KEYWORD_PATTERNS = {
    keyword: re.compile(rf"\b{keyword}\b", re.IGNORECASE)
    for keyword in STRUCTURE_KEYWORDS
}
_LETTER_PATTERN = re.compile(r"[^\W\d_]")

# Threshold ladder, evaluated top to bottom; first match wins.
EXCELLENT_MIN_READABLE = 90
GOOD_MIN_READABLE = 75
FAIR_MIN_READABLE = 50


def _percent(part: int, whole: int) -> int:
    """Half-up rounded percentage clamped to [0, 100]; 0 when whole is 0."""
    if whole <= 0:
        return 0
    value = int(part * 100 / whole + 0.5)
    return max(0, min(100, value))


def is_readable(token: str) -> bool:
    """A token is readable if it holds at least one letter and is longer than 1."""
    return len(token) > 1 and _LETTER_PATTERN.search(token) is not None


def find_structure_keywords(text: str) -> list[str]:
    """Return the section keywords that occur in *text* as whole words."""
    return [
        keyword
        for keyword, pattern in _KEYWORD_PATTERNS.items()
        if pattern.search(text)
    ]


def assess_quality(
    text: str,
    processing_time_ms: int = 0,
    diagnostics: Diagnostics | None = None,
) -> ExtractionMetrics:
    """Compute extraction metrics for *text*.

    Args:
        text: Final text (normally the cleaned text of a result).
        processing_time_ms: Wall-clock duration of the extraction call.
        diagnostics: Stage trail accumulated so far.

    Returns:
        A fully populated ExtractionMetrics value.
    """
    words = text.split()
    readable = [word for word in words if is_readable(word)]
    distinct = {word.lower() for word in readable}
    keywords = find_structure_keywords(text)

    metrics = ExtractionMetrics(
        word_count=len(words),
        readable_percentage=_percent(len(readable), len(words)),
        has_structured_content=bool(keywords),
        structure_indicators=len(keywords),
        word_diversity=_percent(len(distinct), len(readable)),
        processing_time_ms=max(0, int(processing_time_ms)),
        diagnostics=diagnostics or Diagnostics(),
    )

    logger.debug(
        "Assessed text: %d words, %d%% readable, %d%% diverse, %d structure keywords",
        metrics.word_count,
        metrics.readable_percentage,
        metrics.word_diversity,
        metrics.structure_indicators,
    )
    return metrics


def classify_quality(metrics: ExtractionMetrics) -> TextQuality:
    """Map metrics to a quality label using the readability threshold ladder."""
    if (
        metrics.readable_percentage >= EXCELLENT_MIN_READABLE
        and metrics.has_structured_content
    ):
        return TextQuality.EXCELLENT
    if metrics.readable_percentage >= GOOD_MIN_READABLE:
        return TextQuality.GOOD
    if metrics.readable_percentage >= FAIR_MIN_READABLE:
        return TextQuality.FAIR
    return TextQuality.POOR
