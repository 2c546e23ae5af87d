"""Filesystem helpers for the pairtree storage layer."""

import logging
import os
import tempfile
from pathlib import Path

from ..core.messages import format_message
from ..errors import StorageError

logger = logging.getLogger(__name__)


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) unless it already exists.

    Raises:
        StorageError: If the directory cannot be created
    """
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(format_message("pt.cant_mkdirs", path)) from e
    return path


def atomic_write_text(path: str | Path, content: str) -> None:
    """Write a small text file atomically using temp file + rename."""
    path = Path(path)
    ensure_dir(path.parent)

    with tempfile.NamedTemporaryFile(
        "w", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp",
        delete=False, encoding="utf-8",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
            tmp_path.replace(path)
            logger.debug(f"Atomically wrote {len(content)} chars to {path}")
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
