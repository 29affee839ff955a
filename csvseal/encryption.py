"""File-level encrypt and decrypt workflow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import ENCRYPTED_SUFFIX
from .core import open_blob, seal
from .core.kdf import Password
from .utils import FileAccessError, atomic_write_bytes

logger = logging.getLogger(__name__)

DECRYPTED_SUFFIX = ".dec"


@dataclass(frozen=True)
class FileResult:
    """Outcome of a file operation."""

    input_path: Path
    output_path: Path
    input_size: int
    output_size: int


def default_decrypt_output(input_path: Path) -> Path:
    """
    Pick the plaintext path for an encrypted file.

    Args:
        input_path: Encrypted file path.

    Returns:
        Path without the .enc suffix, or with .dec appended otherwise.
    """
    if input_path.suffix == ENCRYPTED_SUFFIX:
        return input_path.with_suffix("")
    return input_path.with_name(input_path.name + DECRYPTED_SUFFIX)


def input_size(path: Path) -> int:
    """
    Check that an input file exists and return its size.

    Args:
        path: File to check.

    Returns:
        Size in bytes.
    """
    if not path.is_file():
        raise FileAccessError(
            f"{path} not found! Make sure it is in the current directory "
            "or pass its path explicitly."
        )
    return path.stat().st_size


def read_input(path: Path) -> bytes:
    """
    Read a whole input file.

    Args:
        path: File to read.

    Returns:
        File contents.
    """
    input_size(path)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileAccessError(f"Cannot read {path}: {exc.strerror}") from exc


def check_output(input_path: Path, output_path: Path, overwrite: bool = True) -> None:
    """
    Reject an output path that would clobber the input or an existing file.

    Args:
        input_path: File being read.
        output_path: File about to be written.
        overwrite: Allow replacing an existing output file.
    """
    if input_path.resolve() == output_path.resolve():
        raise FileAccessError(
            f"Output {output_path} is the same file as the input. "
            "Choose a different output path.")
    if output_path.exists() and not overwrite:
        raise FileAccessError(
            f"{output_path} already exists. Use --force to overwrite it.")


def _write_output(path: Path, data: bytes, mode: Optional[int]) -> None:
    try:
        atomic_write_bytes(path, data, mode=mode)
    except OSError as exc:
        raise FileAccessError(f"Cannot write {path}: {exc.strerror}") from exc


def encrypt_file(input_path: Path, output_path: Path, password: Password) -> FileResult:
    """
    Encrypt a file into a password-sealed sibling.

    Args:
        input_path: Plaintext file path.
        output_path: Encrypted file path.
        password: Encryption password.

    Returns:
        Sizes of the input and written output.
    """
    check_output(input_path, output_path)
    plaintext = read_input(input_path)
    blob = seal(plaintext, password)
    _write_output(output_path, blob, None)
    logger.info("Encrypted %s -> %s (%d bytes)", input_path, output_path, len(blob))
    return FileResult(input_path, output_path, len(plaintext), len(blob))


def decrypt_file(
    input_path: Path, output_path: Path, password: Password, overwrite: bool = False
) -> FileResult:
    """
    Decrypt a file created by encrypt_file.

    Args:
        input_path: Encrypted file path.
        output_path: Plaintext file path.
        password: Decryption password.
        overwrite: Replace an existing output file.

    Returns:
        Sizes of the input and written output.
    """
    check_output(input_path, output_path, overwrite)
    blob = read_input(input_path)
    plaintext = open_blob(blob, password)
    # Plaintext stays owner-only
    _write_output(output_path, plaintext, 0o600)
    logger.info("Decrypted %s -> %s (%d bytes)", input_path, output_path, len(plaintext))
    return FileResult(input_path, output_path, len(blob), len(plaintext))


def verify_file(input_path: Path, password: Password) -> int:
    """
    Check that a password opens an encrypted file without writing anything.

    Args:
        input_path: Encrypted file path.
        password: Password to check.

    Returns:
        Plaintext length in bytes.
    """
    blob = read_input(input_path)
    plaintext = open_blob(blob, password)
    logger.info("Verified %s", input_path)
    return len(plaintext)

