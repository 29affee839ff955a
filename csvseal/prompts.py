"""Interactive password prompts."""

from __future__ import annotations

import getpass
from typing import Callable, Optional

from .config import DEFAULT_MIN_PASSWORD_LENGTH
from .utils import ValidationError

Reader = Callable[[str], str]


def prompt_new_password(
    min_length: int = DEFAULT_MIN_PASSWORD_LENGTH, reader: Optional[Reader] = None
) -> str:
    """
    Prompt for a new encryption password with confirmation.

    Args:
        min_length: Minimum accepted password length.
        reader: Prompt function (default: getpass.getpass).

    Returns:
        Confirmed password.

    Raises:
        ValidationError: If the password is too short or the confirmation differs.
    """
    reader = reader or getpass.getpass
    password = reader("Enter encryption password: ")
    if len(password) < min_length:
        raise ValidationError(
            f"Password must be at least {min_length} characters long!")
    confirm = reader("Confirm password: ")
    if password != confirm:
        raise ValidationError("Passwords do not match!")
    return password


def prompt_password(reader: Optional[Reader] = None) -> str:
    """
    Prompt once for the password of an existing encrypted file.

    Args:
        reader: Prompt function (default: getpass.getpass).

    Returns:
        Password as entered.
    """
    reader = reader or getpass.getpass
    password = reader("Enter decryption password: ")
    if not password:
        raise ValidationError("Password must not be empty!")
    return password
