"""PBKDF2 key derivation for password-sealed files."""

from __future__ import annotations

from typing import Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

# Changing any of these breaks every existing .enc file.
SALT_LENGTH = 32
KEY_LENGTH = 32
ITERATIONS = 100_000

Password = Union[str, bytes]


def password_bytes(password: Password) -> bytes:
    """
    Normalize a password to bytes.

    Args:
        password: Password as text (UTF-8 encoded) or raw bytes.

    Returns:
        Password bytes.

    Raises:
        ValueError: If the password is empty.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    if not password:
        raise ValueError("Password must not be empty.")
    return password


def derive_key(password: Password, salt: bytes) -> bytes:
    """
    Derive a 256-bit encryption key from a password using PBKDF2-HMAC-SHA256.

    Args:
        password: User password.
        salt: 32-byte salt stored alongside the ciphertext.

    Returns:
        32-byte encryption key.

    Raises:
        ValueError: If the password is empty or the salt has the wrong size.
    """
    if len(salt) != SALT_LENGTH:
        raise ValueError(f"Salt must be {SALT_LENGTH} bytes, got {len(salt)}.")
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=ITERATIONS,
    )
    return kdf.derive(password_bytes(password))
