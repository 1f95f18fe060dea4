"""Data models for edit requests, results, and snippet markers."""

from .edit_request import CommentStyle, EditMode, EditRequest, EditResult, EditStatus
from .markers import end_marker, is_already_applied, start_marker, wrap_snippet

__all__ = [
    "CommentStyle",
    "EditMode",
    "EditRequest",
    "EditResult",
    "EditStatus",
    "end_marker",
    "is_already_applied",
    "start_marker",
    "wrap_snippet",
]
