"""Markdown rendering for study-companion chat messages."""

__version__ = "0.1.0"
