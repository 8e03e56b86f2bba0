"""
ABOUTME: Process-wide default reader and free-function wrappers for environment lookups
ABOUTME: Also provides the fatal-check helper used to enforce required configuration at startup
"""

import logging
from datetime import timedelta
from typing import Optional
from urllib.parse import SplitResult

from .reader import Address, EnvReader

DEFAULT_READER = EnvReader()


def required(error: Optional[BaseException]) -> None:
    """
    Abort the process if error is not None.

    Intended for startup code where running without a required value is unsafe.
    Lookups never call this themselves; the caller decides whether an error is fatal.

    Raises:
        SystemExit: Carrying "Fatal error: <error text>", which the interpreter
            prints to stderr before exiting with status 1.
    """
    if error is None:
        return
    message = f"Fatal error: {error}"
    logging.critical(message)
    raise SystemExit(message)


def require_bool(key: str) -> bool:
    """Get required boolean environment variable."""
    return DEFAULT_READER.require_bool(key)


def require_bytes(key: str) -> bytes:
    """Get required environment variable as bytes."""
    return DEFAULT_READER.require_bytes(key)


def require_float(key: str) -> float:
    """Get required float environment variable."""
    return DEFAULT_READER.require_float(key)


def require_duration(key: str) -> timedelta:
    """Get required duration environment variable."""
    return DEFAULT_READER.require_duration(key)


def require_int(key: str) -> int:
    """Get required integer environment variable."""
    return DEFAULT_READER.require_int(key)


def require_string(key: str) -> str:
    """Get required string environment variable."""
    return DEFAULT_READER.require_string(key)


def require_strings(key: str, sep: str = ",") -> list[str]:
    """Get required list environment variable, split on sep."""
    return DEFAULT_READER.require_strings(key, sep)


def require_url(key: str) -> Optional[SplitResult]:
    """Get required URL environment variable (None if present but malformed)."""
    return DEFAULT_READER.require_url(key)


def require_addr(key: str) -> Address:
    """Get required IP address environment variable."""
    return DEFAULT_READER.require_addr(key)


def get_bool(key: str, fallback: bool = False) -> bool:
    return DEFAULT_READER.get_bool(key, fallback)


def get_bytes(key: str, fallback: bytes = b"") -> bytes:
    return DEFAULT_READER.get_bytes(key, fallback)


def get_float(key: str, fallback: float = 0.0) -> float:
    return DEFAULT_READER.get_float(key, fallback)


def get_duration(key: str, fallback: timedelta = timedelta(0)) -> timedelta:
    return DEFAULT_READER.get_duration(key, fallback)


def get_int(key: str, fallback: int = 0) -> int:
    return DEFAULT_READER.get_int(key, fallback)


def get_string(key: str, fallback: str = "") -> str:
    return DEFAULT_READER.get_string(key, fallback)


def get_strings(
    key: str, fallback: Optional[list[str]] = None, sep: str = ","
) -> list[str]:
    return DEFAULT_READER.get_strings(key, fallback, sep)


def get_url(key: str, fallback: Optional[SplitResult] = None) -> Optional[SplitResult]:
    return DEFAULT_READER.get_url(key, fallback)


def get_addr(key: str, fallback: Optional[Address] = None) -> Optional[Address]:
    return DEFAULT_READER.get_addr(key, fallback)
