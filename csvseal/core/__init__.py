"""Core encryption logic (pure, no file or terminal I/O)."""

from .container import HEADER_LENGTH, Container, open_blob, seal
from .kdf import ITERATIONS, KEY_LENGTH, SALT_LENGTH, derive_key

__all__ = [
    "HEADER_LENGTH",
    "ITERATIONS",
    "KEY_LENGTH",
    "SALT_LENGTH",
    "Container",
    "derive_key",
    "open_blob",
    "seal",
]
