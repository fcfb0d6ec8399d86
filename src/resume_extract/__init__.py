"""Resilient text extraction from uploaded résumé PDFs."""
