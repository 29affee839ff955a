"""Configuration management for csvseal."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .utils import ConfigError

ENV_INPUT = "CSVSEAL_INPUT_FILE"
ENV_OUTPUT = "CSVSEAL_OUTPUT_FILE"
ENV_MIN_PASSWORD = "CSVSEAL_MIN_PASSWORD_LENGTH"
ENV_LOG_LEVEL = "CSVSEAL_LOG_LEVEL"

DEFAULT_INPUT_FILE = "contacts.csv"
ENCRYPTED_SUFFIX = ".enc"
DEFAULT_MIN_PASSWORD_LENGTH = 8
DEFAULT_LOG_LEVEL = "WARNING"


def _env_path() -> Path:
    return Path.cwd() / ".env"


@dataclass(frozen=True)
class Config:
    """Runtime settings for the command-line tool."""

    input_file: Path
    output_file: Path
    min_password_length: int
    log_level: int


def _parse_int(value: str, name: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid integer for {name}.") from exc
    if parsed <= 0:
        raise ConfigError(f"{name} must be greater than 0.")
    return parsed


def _parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log level for {ENV_LOG_LEVEL}: {value}")
    return level


def load_config(env_file: Optional[Path] = None) -> Config:
    """
    Load and validate configuration from the environment and a .env file.

    Variables already set in the environment take precedence over .env.

    Args:
        env_file: Optional path to a .env file (default: ./.env).

    Returns:
        Config instance.
    """
    env_file = env_file or _env_path()
    if env_file.exists():
        load_dotenv(env_file)

    input_file = os.getenv(ENV_INPUT, DEFAULT_INPUT_FILE).strip()
    if not input_file:
        raise ConfigError(f"{ENV_INPUT} must not be empty.")
    output_file = os.getenv(ENV_OUTPUT, input_file + ENCRYPTED_SUFFIX).strip()
    if not output_file:
        raise ConfigError(f"{ENV_OUTPUT} must not be empty.")
    min_password = os.getenv(
        ENV_MIN_PASSWORD, str(DEFAULT_MIN_PASSWORD_LENGTH)).strip()
    log_level = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip()

    return Config(
        input_file=Path(input_file),
        output_file=Path(output_file),
        min_password_length=_parse_int(min_password, ENV_MIN_PASSWORD),
        log_level=_parse_log_level(log_level),
    )
