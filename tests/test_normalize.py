"""Text normalizer: control characters out, whitespace collapsed, idempotent."""

import pytest

from resume_extract.extractor.normalize import normalize_text

SAMPLES = [
    "",
    "   ",
    "plain text",
    "  leading and trailing  ",
    "line one\nline two\r\nline three",
    "tabs\tand\t\tmore\ttabs",
    "nul\x00byte and bell\x07 and escape\x1b",
    "del\x7f and next-line\x85 and nbsp\xa0 here",
    "Résumé — naïve café",
    "\x00\x01\x02",
]


def test_collapses_whitespace_and_trims():
    assert normalize_text("  hello   world  ") == "hello world"
    assert normalize_text("a\nb\tc\r\nd") == "a b c d"


def test_control_characters_become_spaces():
    assert normalize_text("John\x00Smith\x1f\x07Engineer") == "John Smith Engineer"


def test_none_and_empty_give_empty_string():
    assert normalize_text(None) == ""
    assert normalize_text("") == ""
    assert normalize_text("\x00\x01\n\t ") == ""


def test_keeps_non_ascii_letters():
    assert normalize_text("Résumé  naïve") == "Résumé naïve"


@pytest.mark.parametrize("text", SAMPLES)
def test_idempotent(text):
    once = normalize_text(text)
    assert normalize_text(once) == once
