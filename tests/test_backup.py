"""Tests for timestamped backup creation."""

import sys
import tempfile
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from autoedit.errors import WriteError
from autoedit.utils.backup import backup_path_for, create_backup

FIXED_TIME = datetime(2024, 3, 5, 14, 7, 9)


def test_backup_path_uses_timestamp():
    """Test that backup names follow <file>.bak.<YYYYMMDDHHMMSS>."""
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "index.php"
        target.write_text("<?php\n")

        backup = backup_path_for(target, now=FIXED_TIME)

        assert backup == Path(tmpdir) / "index.php.bak.20240305140709"


def test_backup_path_avoids_collisions():
    """Test that an existing backup with the same timestamp is not reused."""
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "index.php"
        target.write_text("<?php\n")
        (Path(tmpdir) / "index.php.bak.20240305140709").write_text("older")
        (Path(tmpdir) / "index.php.bak.20240305140709.1").write_text("older")

        backup = backup_path_for(target, now=FIXED_TIME)

        assert backup.name == "index.php.bak.20240305140709.2"
        assert not backup.exists()


def test_create_backup_is_byte_exact():
    """Test that the backup holds the exact original bytes."""
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "legacy.php"
        original = b"<?php\r\necho '\xe9t\xe9';\r\n?>"
        target.write_bytes(original)

        backup = create_backup(target, now=FIXED_TIME)

        assert backup.read_bytes() == original
        assert target.read_bytes() == original


def test_create_backup_failure_raises_write_error():
    """Test that copy failures surface as WriteError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "index.php"
        target.write_text("<?php\n")

        with patch("shutil.copy2", side_effect=PermissionError("denied")):
            with pytest.raises(WriteError, match="Failed to create backup"):
                create_backup(target, now=FIXED_TIME)

        assert target.read_text() == "<?php\n"
