"""Writer for inserting snippets into existing text files.

This module applies a single EditRequest to a file: it checks for an
existing marker, renders the new content in memory, takes a timestamped
backup and atomically replaces the original.
"""

import difflib
import logging
import os
import tempfile
from pathlib import Path

from ..config import EditorConfig
from ..errors import (
    MissingPatternError,
    PatternNotFoundError,
    PreconditionError,
    ReadError,
    WriteError,
)
from ..models.edit_request import EditMode, EditRequest, EditResult, EditStatus
from ..models.markers import is_already_applied, wrapped_snippet_for
from ..utils.backup import create_backup
from ..utils.pattern import compile_pattern

logger = logging.getLogger(__name__)


class SnippetWriter:
    """Applies edit requests to files with duplicate protection and backups.

    The file is treated as opaque text. Anchors are located only through the
    request's regular expression.

    Ensures:
    - Idempotent operations when a marker id is given (no duplicate snippets)
    - Backup creation before modification
    - No partial writes: content is rendered fully in memory, written to a
      temp file, validated, then renamed over the original

    Concurrency Limitation
    ----------------------
    The file is read at the beginning and replaced at the end. If another
    process modifies it in between, those changes are overwritten (last
    writer wins).
    """

    def __init__(self, config: EditorConfig | None = None):
        """Initialize the snippet writer.

        Parameters
        ----------
        config : EditorConfig, optional
            Encoding, backup naming and closing tag settings. Defaults to
            EditorConfig().
        """
        self.config = config or EditorConfig()
        self._transforms = {
            EditMode.APPEND: self._append,
            EditMode.PREPEND: self._prepend,
            EditMode.AFTER: self._after,
            EditMode.BEFORE: self._before,
            EditMode.REPLACE: self._replace,
        }

    def _validate_path(self, filepath: str) -> Path:
        """Resolve filepath and make sure it names an existing regular file.

        Raises
        ------
        PreconditionError
            If the file does not exist or is not a regular file
        """
        file_path = Path(filepath).resolve()

        if not file_path.exists():
            raise PreconditionError(f"file not found: {filepath}")
        if not file_path.is_file():
            raise PreconditionError(f"not a regular file: {filepath}")

        return file_path

    def _read(self, file_path: Path) -> str:
        """Read file_path as text, keeping line endings and undecodable bytes.

        Raises
        ------
        ReadError
            If the file cannot be opened or read
        """
        try:
            # newline="" keeps CRLF line endings intact on the round trip
            with file_path.open(
                encoding=self.config.encoding, errors="surrogateescape", newline=""
            ) as f:
                return f.read()
        except OSError as e:
            raise ReadError(f"Failed to read '{file_path}': {e.strerror or e}") from e

    def _validate_write(self, file_path: Path, expected_content: str) -> None:
        """Validate that file was written correctly by reading it back.

        Raises
        ------
        WriteError
            If the file cannot be read or its content doesn't match
        """
        try:
            actual_content = self._read(file_path)
        except OSError as e:
            raise WriteError(f"Failed to read back written file '{file_path}': {e}") from e

        if actual_content != expected_content:
            raise WriteError(
                f"Write validation failed for '{file_path}'. "
                f"Expected {len(expected_content)} characters, "
                f"got {len(actual_content)}."
            )

    def _write_atomic(self, file_path: Path, content: str) -> None:
        """Replace file_path with content via a validated temp file.

        Raises
        ------
        WriteError
            If any step fails. The original file is left as it was.
        """
        temp_path = None

        try:
            # Temp file must be in same directory for atomic rename to work
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
            )
            temp_path = Path(temp_path_str)

            with os.fdopen(
                temp_fd,
                "w",
                encoding=self.config.encoding,
                errors="surrogateescape",
                newline="",
            ) as f:
                f.write(content)

            self._validate_write(temp_path, content)

            # Keep the original's permission bits on the replacement
            os.chmod(temp_path, file_path.stat().st_mode & 0o7777)

            temp_path.replace(file_path)
        except WriteError:
            raise
        except OSError as e:
            raise WriteError(f"Failed to write '{file_path}': {e}") from e
        finally:
            if temp_path and temp_path.exists():
                temp_path.unlink()

    def apply(self, request: EditRequest) -> EditResult:
        """Apply an edit request to its file.

        Steps, in order: duplicate guard, in-memory render, backup, commit.
        Nothing touches the disk until rendering has succeeded.

        Parameters
        ----------
        request : EditRequest
            The edit to apply

        Returns
        -------
        EditResult
            APPLIED with the backup path, SKIPPED when the marker is already
            present, or DRY_RUN with a unified diff

        Raises
        ------
        PreconditionError
            If the file is missing or the snippet is empty
        EngineError
            If the pattern is missing, invalid, or does not match
        ReadError
            If the file cannot be read
        WriteError
            If the backup or the write fails
        """
        if not request.snippet.strip():
            raise PreconditionError("snippet is empty")

        file_path = self._validate_path(request.file_path)
        content = self._read(file_path)

        if not request.force and is_already_applied(content, request):
            logger.debug(f"Start marker for '{request.marker_id}' found in {file_path}")
            return EditResult(status=EditStatus.SKIPPED, file_path=request.file_path)

        new_content = self.render(content, request)

        if request.dry_run:
            return EditResult(
                status=EditStatus.DRY_RUN,
                file_path=request.file_path,
                diff=self.diff(content, new_content, request.file_path),
            )

        backup_path = None
        if not request.skip_backup:
            backup_path = create_backup(
                file_path, timestamp_format=self.config.backup_timestamp_format
            )

        self._write_atomic(file_path, new_content)
        logger.debug(f"Wrote {len(new_content)} characters to {file_path}")

        return EditResult(
            status=EditStatus.APPLIED,
            file_path=request.file_path,
            backup_path=str(backup_path) if backup_path else None,
        )

    def render(self, content: str, request: EditRequest) -> str:
        """Compute the new file content without touching the disk.

        Parameters
        ----------
        content : str
            Current file content
        request : EditRequest
            The edit to apply

        Returns
        -------
        str
            Content with the (possibly marker-wrapped) snippet inserted

        Raises
        ------
        EngineError
            If the mode needs a pattern and none was given, the pattern is
            invalid, or it does not match
        """
        if request.mode.requires_pattern and not request.pattern:
            raise MissingPatternError(request.mode.value)

        wrapped = wrapped_snippet_for(request)
        logger.debug(f"Applying {request.mode.value} edit to {request.file_path}")
        return self._transforms[request.mode](content, wrapped, request.pattern)

    @staticmethod
    def diff(old_content: str, new_content: str, filepath: str) -> str:
        return "".join(
            difflib.unified_diff(
                old_content.splitlines(keepends=True),
                new_content.splitlines(keepends=True),
                fromfile=filepath,
                tofile=filepath,
            )
        )

    def _append(self, content: str, wrapped: str, pattern: str | None) -> str:
        closing_tag = self.config.closing_tag
        if closing_tag and content.endswith(closing_tag):
            head = content[: -len(closing_tag)]
            return head + "\n" + wrapped + "\n" + closing_tag
        return content + "\n" + wrapped + "\n"

    def _prepend(self, content: str, wrapped: str, pattern: str | None) -> str:
        return wrapped + "\n" + content

    def _after(self, content: str, wrapped: str, pattern: str | None) -> str:
        match = self._find(content, pattern)
        pos = match.end()
        return content[:pos] + "\n" + wrapped + content[pos:]

    def _before(self, content: str, wrapped: str, pattern: str | None) -> str:
        match = self._find(content, pattern)
        pos = match.start()
        return content[:pos] + wrapped + "\n" + content[pos:]

    def _replace(self, content: str, wrapped: str, pattern: str | None) -> str:
        match = self._find(content, pattern)
        # Spliced in literally so backslashes in the snippet stay as written
        return content[: match.start()] + wrapped + content[match.end() :]

    def _find(self, content: str, pattern: str):
        match = compile_pattern(pattern).search(content)
        if match is None:
            raise PatternNotFoundError(pattern)
        logger.debug(f"Pattern {pattern!r} matched at {match.start()}-{match.end()}")
        return match
