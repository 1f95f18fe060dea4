"""Module for writing snippets into existing files.

This module provides the insertion engine: marker-based duplicate
protection, the five insertion modes, and backup-then-atomic-write.
"""

from .snippet_writer import SnippetWriter

__all__ = ["SnippetWriter"]
