"""Data models describing a single edit and its outcome."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import UnsupportedModeError


class EditMode(Enum):
    """Where the snippet goes relative to the file content or the anchor."""

    APPEND = "append"
    PREPEND = "prepend"
    AFTER = "after"
    BEFORE = "before"
    REPLACE = "replace"

    @classmethod
    def parse(cls, value: str) -> "EditMode":
        """Parse a mode name case-insensitively.

        Raises:
            UnsupportedModeError: If the name is not a known mode.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnsupportedModeError(value) from None

    @property
    def requires_pattern(self) -> bool:
        return self in (EditMode.AFTER, EditMode.BEFORE, EditMode.REPLACE)


class CommentStyle(Enum):
    """Comment delimiters that marker lines are rendered in."""

    BLOCK = "block"  # /* ... */
    HASH = "hash"  # # ...
    SLASH = "slash"  # // ...
    HTML = "html"  # <!-- ... -->
    NONE = "none"

    @classmethod
    def parse(cls, value: str) -> "CommentStyle":
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(style.value for style in cls)
            raise ValueError(
                f"Unknown comment style '{value}' (expected one of: {choices})"
            ) from None

    def wrap(self, text: str) -> str:
        """Render text as a single-line comment in this style."""
        if self is CommentStyle.BLOCK:
            return f"/* {text} */"
        if self is CommentStyle.HASH:
            return f"# {text}"
        if self is CommentStyle.SLASH:
            return f"// {text}"
        if self is CommentStyle.HTML:
            return f"<!-- {text} -->"
        return text


@dataclass(frozen=True)
class EditRequest:
    """Configuration for one invocation of the insertion engine.

    Attributes:
        file_path: Path to the file being edited.
        mode: Insertion mode.
        snippet: Text to insert, already stripped of surrounding whitespace.
        pattern: Anchor regular expression, required for after/before/replace.
        marker_id: Identifier used to bracket the snippet with marker lines
            and to detect that the edit was already applied.
        force: Insert even if the start marker is already present.
        skip_backup: Do not create a timestamped backup before writing.
        comment_style: Delimiters for the marker lines.
        dry_run: Compute the result without creating a backup or writing.
    """

    file_path: str
    mode: EditMode
    snippet: str
    pattern: Optional[str] = None
    marker_id: Optional[str] = None
    force: bool = False
    skip_backup: bool = False
    comment_style: CommentStyle = CommentStyle.BLOCK
    dry_run: bool = False


class EditStatus(Enum):
    """How an edit request was resolved."""

    APPLIED = "applied"
    SKIPPED = "skipped"
    DRY_RUN = "dry_run"


@dataclass
class EditResult:
    """Outcome of applying an EditRequest.

    Attributes:
        status: Whether the file was written, left alone, or only previewed.
        file_path: Path of the edited file.
        backup_path: Path of the backup copy, if one was created.
        diff: Unified diff of the change (populated for dry runs).
    """

    status: EditStatus
    file_path: str
    backup_path: Optional[str] = None
    diff: str = ""

    @property
    def changed(self) -> bool:
        return self.status is EditStatus.APPLIED
