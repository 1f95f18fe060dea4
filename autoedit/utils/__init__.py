"""Utility modules for pattern compilation and file backups."""

from .backup import backup_path_for, create_backup
from .pattern import compile_pattern, split_delimited

__all__ = ["backup_path_for", "compile_pattern", "create_backup", "split_delimited"]
