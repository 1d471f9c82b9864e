"""Utility functions for git-set-mtime."""

from .helpers import format_timestamp, summarize_paths

__all__ = ["format_timestamp", "summarize_paths"]
