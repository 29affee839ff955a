"""Shared utilities for csvseal."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional


class CsvSealError(Exception):
    """Base exception for csvseal errors."""


class ConfigError(CsvSealError):
    """Raised when configuration is invalid."""


class ValidationError(CsvSealError):
    """Raised when a password fails the length or confirmation checks."""


class FileAccessError(CsvSealError):
    """Raised when an input cannot be read or an output cannot be written."""


class EncryptionError(CsvSealError):
    """Raised when sealing a payload fails."""


class MalformedContainerError(CsvSealError):
    """Raised when an encrypted blob is structurally invalid."""


class AuthenticationError(CsvSealError):
    """Raised when the authentication tag does not verify."""


def setup_logging(log_level: int = logging.WARNING) -> None:
    """
    Configure global logging.

    Args:
        log_level: Logging verbosity level.
    """
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


def format_bytes(size: int) -> str:
    """
    Convert bytes to a human-readable string.

    Args:
        size: Size in bytes.

    Returns:
        Human-readable size string.
    """
    if size < 0:
        raise ValueError("Size must be non-negative.")

    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(size)
    for unit in units:
        if value < 1024 or unit == units[-1]:
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} TB"


def _umask_mode() -> int:
    current = os.umask(0)
    os.umask(current)
    return 0o666 & ~current


def atomic_write_bytes(path: Path, data: bytes, mode: Optional[int] = None) -> None:
    """
    Write bytes atomically to a file.

    The temporary file is created owner-only with a unique name next to the
    destination, and gets its final permissions before any data is written.

    Args:
        path: Destination path.
        data: Data to write.
        mode: Permission bits for the written file (default: 0666 minus umask).
    """
    if mode is None:
        mode = _umask_mode()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(
        dir=path.parent, prefix=path.name + ".", suffix=".tmp")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as file_handle:
            os.chmod(temp_path, mode)
            file_handle.write(data)
            file_handle.flush()
            os.fsync(file_handle.fileno())
        temp_path.replace(path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
