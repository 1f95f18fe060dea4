"""Timestamped backup copies of files about to be edited."""

import logging
import shutil
from datetime import datetime
from pathlib import Path

from ..errors import WriteError

logger = logging.getLogger(__name__)

DEFAULT_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def backup_path_for(
    file_path: Path,
    now: datetime | None = None,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> Path:
    """Choose a backup path of the form ``<file>.bak.<timestamp>``.

    Two backups taken within the same second would share a name, so a
    numeric suffix (``.1``, ``.2``, ...) is added until the path is free.

    Args:
        file_path: File that will be backed up.
        now: Time to stamp the backup with (defaults to local now).
        timestamp_format: strftime format for the timestamp.

    Returns:
        A path that does not exist yet.
    """
    timestamp = (now or datetime.now()).strftime(timestamp_format)
    candidate = file_path.with_name(f"{file_path.name}.bak.{timestamp}")

    counter = 0
    while candidate.exists():
        counter += 1
        logger.warning(f"Backup path collision on {candidate}, trying suffix .{counter}")
        candidate = file_path.with_name(f"{file_path.name}.bak.{timestamp}.{counter}")
    return candidate


def create_backup(
    file_path: Path,
    now: datetime | None = None,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> Path:
    """Copy file_path to a fresh timestamped backup.

    The copy is byte-exact and keeps the original's metadata (copy2).

    Returns:
        Path of the backup.

    Raises:
        WriteError: If the copy fails. Nothing has been written to the
            original at that point.
    """
    backup_path = backup_path_for(file_path, now, timestamp_format)
    try:
        shutil.copy2(file_path, backup_path)
    except OSError as e:
        raise WriteError(
            f"Failed to create backup '{backup_path}' of '{file_path}': {e}"
        ) from e

    logger.debug(f"Backed up {file_path} to {backup_path}")
    return backup_path
