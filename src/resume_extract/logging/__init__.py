"""Logging package -- JSON file + console handler setup."""

from .setup import setup_logging

__all__ = ["setup_logging"]
