"""AES-256-GCM sealing and the salt/nonce/tag/ciphertext container layout."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..utils import AuthenticationError, EncryptionError, MalformedContainerError
from .kdf import SALT_LENGTH, Password, derive_key, password_bytes

NONCE_LENGTH = 16
TAG_LENGTH = 16
HEADER_LENGTH = SALT_LENGTH + NONCE_LENGTH + TAG_LENGTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    """Parsed fields of an encrypted blob."""

    salt: bytes
    nonce: bytes
    tag: bytes
    ciphertext: bytes

    def __post_init__(self) -> None:
        expected = (
            ("salt", self.salt, SALT_LENGTH),
            ("nonce", self.nonce, NONCE_LENGTH),
            ("tag", self.tag, TAG_LENGTH),
        )
        for name, value, length in expected:
            if len(value) != length:
                raise MalformedContainerError(
                    f"Container {name} must be {length} bytes, got {len(value)}."
                )

    def to_bytes(self) -> bytes:
        """Serialize as salt + nonce + tag + ciphertext."""
        return self.salt + self.nonce + self.tag + self.ciphertext

    @classmethod
    def from_bytes(cls, blob: bytes) -> "Container":
        """
        Split a blob into its fixed-size header fields and ciphertext.

        Args:
            blob: Encrypted file contents.

        Returns:
            Parsed container.

        Raises:
            MalformedContainerError: If the blob cannot hold the header.
        """
        if len(blob) < HEADER_LENGTH:
            raise MalformedContainerError(
                f"Encrypted data is {len(blob)} bytes; at least "
                f"{HEADER_LENGTH} bytes are required."
            )
        nonce_end = SALT_LENGTH + NONCE_LENGTH
        return cls(
            salt=bytes(blob[:SALT_LENGTH]),
            nonce=bytes(blob[SALT_LENGTH:nonce_end]),
            tag=bytes(blob[nonce_end:HEADER_LENGTH]),
            ciphertext=bytes(blob[HEADER_LENGTH:]),
        )


def seal(plaintext: bytes, password: Password) -> bytes:
    """
    Encrypt data using AES-256-GCM under a password-derived key.

    Args:
        plaintext: Data to encrypt.
        password: User password.

    Returns:
        Encrypted data: salt (32 bytes) + nonce (16 bytes) + tag (16 bytes)
        + ciphertext.

    Raises:
        EncryptionError: If the random source or the cipher fails.
    """
    password = password_bytes(password)
    try:
        salt = os.urandom(SALT_LENGTH)
        nonce = os.urandom(NONCE_LENGTH)
    except (OSError, NotImplementedError) as exc:
        raise EncryptionError("Secure random source is unavailable.") from exc

    key = derive_key(password, salt)
    try:
        sealed = AESGCM(key).encrypt(nonce, bytes(plaintext), None)
    except (ValueError, OverflowError) as exc:
        raise EncryptionError("Failed to encrypt data.") from exc

    # AESGCM appends the tag to the ciphertext
    container = Container(
        salt=salt,
        nonce=nonce,
        tag=sealed[-TAG_LENGTH:],
        ciphertext=sealed[:-TAG_LENGTH],
    )
    logger.debug("Sealed %d bytes", len(plaintext))
    return container.to_bytes()


def open_blob(blob: bytes, password: Password) -> bytes:
    """
    Decrypt a blob produced by seal.

    Args:
        blob: Encrypted data (salt + nonce + tag + ciphertext).
        password: User password.

    Returns:
        Decrypted data.

    Raises:
        MalformedContainerError: If the blob is too short.
        AuthenticationError: If the password is wrong or the data was altered.
    """
    container = Container.from_bytes(blob)
    key = derive_key(password, container.salt)
    try:
        plaintext = AESGCM(key).decrypt(
            container.nonce, container.ciphertext + container.tag, None
        )
    except InvalidTag as exc:
        raise AuthenticationError(
            "Decryption failed. Wrong password or corrupted data."
        ) from exc
    logger.debug("Opened %d bytes", len(plaintext))
    return plaintext


# Counterpart name to seal; shadows the builtin only inside this module.
open = open_blob
