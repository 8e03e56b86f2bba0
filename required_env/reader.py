"""
ABOUTME: Typed environment reader that resolves a key and parses it into a requested type
ABOUTME: Required lookups raise on absent, empty, or unparsable values; fallback lookups never raise
"""

import logging
import os
from datetime import timedelta
from ipaddress import IPv4Address, IPv6Address
from typing import Any, Callable, Mapping, NamedTuple, Optional, Union
from urllib.parse import SplitResult

from . import parsers
from .exceptions import ConfigError, InvalidAddressError, MissingKeyError

Address = Union[IPv4Address, IPv6Address]

# Value handed back alongside the error when a tagged lookup fails
_ZERO_VALUES: dict[str, Callable[[], Any]] = {
    "bool": lambda: False,
    "bytes": lambda: b"",
    "float": lambda: 0.0,
    "duration": timedelta,
    "int": lambda: 0,
    "string": str,
    "strings": list,
    "url": lambda: None,
    "addr": lambda: None,
}


class Lookup(NamedTuple):
    """Outcome of a tagged lookup: a parsed value, or the zero value and its error."""

    value: Any
    error: Optional[ConfigError]

    @property
    def ok(self) -> bool:
        return self.error is None


class EnvReader:
    """Reads environment keys and parses them into typed values."""

    __slots__ = ("_getenv",)

    def __init__(self, getenv: Optional[Callable[[str], Optional[str]]] = None):
        """
        Initialize the reader with the strategy used to resolve a key to its raw string.

        Parameters:
            getenv (Callable[[str], Optional[str]], optional): Returns the raw value for a key, or None
                when the key is unset. Defaults to reading the process environment.
        """
        object.__setattr__(self, "_getenv", getenv if getenv is not None else os.environ.get)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(getenv={self._getenv!r})"

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "EnvReader":
        """Build a reader over a plain mapping, typically for test isolation."""
        return cls(mapping.get)

    @staticmethod
    def kinds() -> list[str]:
        """Return the names accepted by lookup()."""
        return list(_ZERO_VALUES)

    def getenv(self, key: str) -> str:
        """Return the raw value for key, with an unset key reading as the empty string."""
        return self._getenv(key) or ""

    def _raw(self, key: str) -> str:
        raw = self.getenv(key)
        if raw == "":
            raise MissingKeyError(key)
        return raw

    def _parse(self, key: str, parser: Callable[[str], Any]) -> Any:
        raw = self._raw(key)
        try:
            return parser(raw)
        except ValueError as exc:
            # Unparsable values share the error kind of absent ones
            raise MissingKeyError(key) from exc

    # Required lookups

    def require_bool(self, key: str) -> bool:
        return self._parse(key, parsers.parse_bool)

    def require_bytes(self, key: str) -> bytes:
        return parsers.parse_bytes(self._raw(key))

    def require_float(self, key: str) -> float:
        return self._parse(key, parsers.parse_float)

    def require_duration(self, key: str) -> timedelta:
        return self._parse(key, parsers.parse_duration)

    def require_int(self, key: str) -> int:
        return self._parse(key, parsers.parse_int)

    def require_string(self, key: str) -> str:
        return self._raw(key)

    def require_strings(self, key: str, sep: str = ",") -> list[str]:
        """Return the value split on sep (comma by default)."""
        return parsers.parse_strings(self._raw(key), sep)

    def require_url(self, key: str) -> Optional[SplitResult]:
        """
        Return the value parsed as a URL.

        A present value that fails to parse yields None rather than an error;
        only an absent or empty key raises MissingKeyError.
        """
        raw = self._raw(key)
        try:
            return parsers.parse_url(raw)
        except ValueError as exc:
            logging.debug(f"Discarding URL parse error for {key}: {exc}")
            return None

    def require_addr(self, key: str) -> Address:
        """
        Return the value parsed as an IPv4 or IPv6 address.

        Raises:
            MissingKeyError: If the key is absent or empty.
            InvalidAddressError: If the value is present but not an address literal.
        """
        raw = self._raw(key)
        try:
            return parsers.parse_addr(raw)
        except ValueError as exc:
            raise InvalidAddressError(key) from exc

    # Fallback lookups

    def _fallback(self, lookup: Callable[[], Any], fallback: Any) -> Any:
        try:
            return lookup()
        except ConfigError:
            return fallback

    def get_bool(self, key: str, fallback: bool = False) -> bool:
        return self._fallback(lambda: self.require_bool(key), fallback)

    def get_bytes(self, key: str, fallback: bytes = b"") -> bytes:
        return self._fallback(lambda: self.require_bytes(key), fallback)

    def get_float(self, key: str, fallback: float = 0.0) -> float:
        return self._fallback(lambda: self.require_float(key), fallback)

    def get_duration(self, key: str, fallback: timedelta = timedelta(0)) -> timedelta:
        return self._fallback(lambda: self.require_duration(key), fallback)

    def get_int(self, key: str, fallback: int = 0) -> int:
        return self._fallback(lambda: self.require_int(key), fallback)

    def get_string(self, key: str, fallback: str = "") -> str:
        return self._fallback(lambda: self.require_string(key), fallback)

    def get_strings(
        self, key: str, fallback: Optional[list[str]] = None, sep: str = ","
    ) -> list[str]:
        """Return the value split on sep, or fallback (an empty list if None) when unset."""
        default = fallback if fallback is not None else []
        return self._fallback(lambda: self.require_strings(key, sep), default)

    def get_url(
        self, key: str, fallback: Optional[SplitResult] = None
    ) -> Optional[SplitResult]:
        """Return the value parsed as a URL, or fallback when it is missing or invalid."""
        url = self._fallback(lambda: self.require_url(key), None)
        return url if url is not None else fallback

    def get_addr(self, key: str, fallback: Optional[Address] = None) -> Optional[Address]:
        return self._fallback(lambda: self.require_addr(key), fallback)

    # Tagged lookups

    def lookup(self, kind: str, key: str, **kwargs: Any) -> Lookup:
        """
        Run the required lookup for kind and capture its outcome instead of raising.

        Parameters:
            kind (str): One of kinds(), e.g. "int" or "strings".
            key (str): Environment key to resolve.
            **kwargs: Extra arguments for the lookup, such as sep for "strings".

        Returns:
            Lookup: The parsed value with no error, or the zero value for kind paired with the error.

        Raises:
            ValueError: If kind is not a supported lookup kind.
        """
        if kind not in _ZERO_VALUES:
            raise ValueError(f"Unknown lookup kind '{kind}'. Available kinds: {self.kinds()}")
        method = getattr(self, f"require_{kind}")
        try:
            return Lookup(method(key, **kwargs), None)
        except ConfigError as exc:
            return Lookup(_ZERO_VALUES[kind](), exc)
