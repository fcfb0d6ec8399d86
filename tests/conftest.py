"""Shared fixtures: in-memory PDFs built with PyMuPDF, sample buffers, settings."""

from __future__ import annotations

import pymupdf
import pytest

from resume_extract.config.settings import ExtractionSettings

RESUME_TEXT = (
    "Jane Doe\n"
    "Senior Software Engineer\n"
    "Summary\n"
    "Backend engineer with eight years of experience building data platforms.\n"
    "Experience\n"
    "Acme Corporation, Lead Engineer. Designed streaming ingestion services in Python.\n"
    "Globex, Software Engineer. Maintained billing systems and reporting pipelines.\n"
    "Education\n"
    "Bachelor of Science in Computer Science, State University\n"
    "Skills\n"
    "Python, PostgreSQL, Kubernetes, Terraform, distributed systems\n"
)

# Non-PDF buffer: readable runs separated by binary bytes
BYTE_SOUP = (
    b"\x00\x01\x02John Smith Senior Software Engineer\x00\xff\x10"
    b"Experience: Python developer at Acme Corp since\x03\x04"
    b"Education BSc Computer Science University of Texas\x00\x1b\x1c"
)

# No byte in this buffer is printable or extended ASCII
CONTROL_NOISE = (bytes(range(0, 9)) + bytes(range(14, 32))) * 64


def build_pdf(pages: list[str]) -> bytes:
    """Return the bytes of a PDF with one page per entry of *pages*."""
    doc = pymupdf.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_textbox(pymupdf.Rect(50, 50, 560, 800), text, fontsize=10)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def resume_pdf() -> bytes:
    return build_pdf([RESUME_TEXT])


@pytest.fixture
def blank_pdf() -> bytes:
    return build_pdf(["", ""])


@pytest.fixture
def settings() -> ExtractionSettings:
    return ExtractionSettings(structured_timeout_seconds=10.0)
