"""Quality assessor: metrics bounds, keyword matching, threshold ladder."""

import pytest

from resume_extract.extractor.quality import (
    STRUCTURE_KEYWORDS,
    assess_quality,
    classify_quality,
    find_structure_keywords,
    is_readable,
)
from resume_extract.extractor.types import Diagnostics, TextQuality

FILLER = [
    "alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf", "hotel",
    "india", "juliet", "kilo", "lima", "mike", "november", "oscar", "papa",
    "quebec", "romeo", "sierra", "tango",
]


def _text(readable: int, unreadable: int, keyword: str | None = None) -> str:
    words = FILLER[:readable]
    if keyword:
        words = words[:-1] + [keyword]
    return " ".join(words + ["7"] * unreadable)


def test_readable_token_rules():
    assert is_readable("ab")
    assert is_readable("C++")
    assert is_readable("é2")
    assert not is_readable("a")
    assert not is_readable("2024")
    assert not is_readable("--")


def test_empty_text_metrics():
    metrics = assess_quality("")
    assert metrics.word_count == 0
    assert metrics.readable_percentage == 0
    assert metrics.word_diversity == 0
    assert metrics.has_structured_content is False
    assert metrics.structure_indicators == 0
    assert classify_quality(metrics) is TextQuality.POOR


def test_keywords_match_whole_words_case_insensitively():
    found = find_structure_keywords("WORK history, Experience and skills; workflow jobs")
    assert found == ["experience", "skills", "work"]
    assert find_structure_keywords("workflow jobs educational") == []


def test_structure_indicators_count_distinct_keywords():
    metrics = assess_quality("Experience experience EXPERIENCE Education")
    assert metrics.has_structured_content is True
    assert metrics.structure_indicators == 2


def test_word_diversity():
    metrics = assess_quality("python python python java")
    assert metrics.word_count == 4
    assert metrics.readable_percentage == 100
    assert metrics.word_diversity == 50


def test_diversity_is_case_insensitive():
    assert assess_quality("Python PYTHON python").word_diversity == 33


def test_percentages_round_half_up():
    # 1 readable of 8 tokens is 12.5%
    metrics = assess_quality("word 1 2 3 4 5 6 7")
    assert metrics.readable_percentage == 13


def test_metrics_carry_time_and_diagnostics():
    diagnostics = Diagnostics(structured_attempted=True)
    metrics = assess_quality("some text", 42, diagnostics)
    assert metrics.processing_time_ms == 42
    assert metrics.diagnostics is diagnostics


@pytest.mark.parametrize(
    "text",
    [
        "",
        "x",
        "1 2 3",
        "Experience Education Skills Summary Work Job Objective Employment "
        "Qualifications Accomplishments",
        "a " * 50,
        "Résumé naïve café ☃ ☃ ☃",
    ],
)
def test_metrics_within_bounds(text):
    metrics = assess_quality(text)
    assert 0 <= metrics.readable_percentage <= 100
    assert 0 <= metrics.word_diversity <= 100
    assert 0 <= metrics.structure_indicators <= len(STRUCTURE_KEYWORDS)
    assert metrics.word_count >= 0


def test_excellent_needs_high_readability_and_structure():
    metrics = assess_quality(_text(19, 1, keyword="experience"))
    assert metrics.readable_percentage == 95
    assert classify_quality(metrics) is TextQuality.EXCELLENT


def test_high_readability_without_structure_is_good():
    metrics = assess_quality(_text(19, 1))
    assert metrics.readable_percentage == 95
    assert classify_quality(metrics) is TextQuality.GOOD


def test_good_band():
    metrics = assess_quality(_text(16, 4))
    assert metrics.readable_percentage == 80
    assert classify_quality(metrics) is TextQuality.GOOD


def test_fair_band():
    metrics = assess_quality(_text(6, 4))
    assert metrics.readable_percentage == 60
    assert classify_quality(metrics) is TextQuality.FAIR


def test_poor_band():
    metrics = assess_quality(_text(2, 8))
    assert metrics.readable_percentage == 20
    assert classify_quality(metrics) is TextQuality.POOR
