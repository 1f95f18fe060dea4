"""Marker lines that bracket an inserted snippet.

A marked snippet looks like this in the target file (block comment style)::

    /* AUTOEDIT: tz_set START */
    date_default_timezone_set('Asia/Colombo');
    /* AUTOEDIT: tz_set END */

The start marker doubles as the "already applied" fingerprint.
"""

from typing import Optional

from .edit_request import CommentStyle, EditRequest

MARKER_PREFIX = "AUTOEDIT:"


def start_marker(marker_id: str, style: CommentStyle = CommentStyle.BLOCK) -> str:
    return style.wrap(f"{MARKER_PREFIX} {marker_id} START")


def end_marker(marker_id: str, style: CommentStyle = CommentStyle.BLOCK) -> str:
    return style.wrap(f"{MARKER_PREFIX} {marker_id} END")


def wrap_snippet(
    snippet: str,
    marker_id: Optional[str],
    style: CommentStyle = CommentStyle.BLOCK,
) -> str:
    """Return the snippet as it will be inserted.

    Args:
        snippet: Raw snippet text.
        marker_id: Marker identifier, or None for an unmarked insertion.
        style: Comment style for the marker lines.

    Returns:
        The snippet framed by start and end marker lines when marker_id is
        set, otherwise the snippet unchanged.
    """
    if not marker_id:
        return snippet
    return "\n".join(
        [start_marker(marker_id, style), snippet, end_marker(marker_id, style)]
    )


def wrapped_snippet_for(request: EditRequest) -> str:
    return wrap_snippet(request.snippet, request.marker_id, request.comment_style)


def is_already_applied(content: str, request: EditRequest) -> bool:
    """Check whether the request's start marker is present in content.

    Only the start marker is compared. An orphaned start marker without its
    END line still counts as applied.
    """
    if not request.marker_id:
        return False
    return start_marker(request.marker_id, request.comment_style) in content
