"""
ABOUTME: Canonical textual parsers for each supported environment value type
ABOUTME: Every parser takes the raw string and raises ValueError when it does not parse
"""

import ipaddress
import math
import re
from datetime import timedelta
from fractions import Fraction
from typing import Union
from urllib.parse import SplitResult, urlsplit

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

_TRUE_LITERALS = {"1", "t", "true"}
_FALSE_LITERALS = {"0", "f", "false"}

_INT_RE = re.compile(r"[+-]?[0-9]+")
_HEX_FLOAT_RE = re.compile(r"[+-]?0x[0-9a-f]*\.?[0-9a-f]*p[+-]?[0-9]+", re.IGNORECASE)
_INFINITY_LITERALS = {"inf", "infinity"}
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Nanoseconds per unit
_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC Greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}
_DURATION_TERM = r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"[+-]?(?:{_DURATION_TERM})+")
_DURATION_TERM_RE = re.compile(
    r"(?P<number>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?P<unit>ns|us|µs|μs|ms|s|m|h)"
)


def parse_bool(raw: str) -> bool:
    """Parse 1/t/true or 0/f/false, ignoring case."""
    lowered = raw.lower()
    if lowered in _TRUE_LITERALS:
        return True
    if lowered in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal: {raw!r}")


def parse_bytes(raw: str) -> bytes:
    """Return the byte representation of the raw value, without decoding it."""
    # surrogateescape restores the original bytes of undecodable os.environ values
    return raw.encode("utf-8", "surrogateescape")


def parse_float(raw: str) -> float:
    """
    Parse a decimal, scientific, or hexadecimal float literal.

    inf, infinity and nan are accepted in any case, with an optional sign.
    Surrounding whitespace and digit separators are rejected, as are finite
    literals too large to represent.
    """
    if not raw.isascii() or raw != raw.strip() or "_" in raw:
        raise ValueError(f"invalid float literal: {raw!r}")
    try:
        if _HEX_FLOAT_RE.fullmatch(raw):
            value = float.fromhex(raw)
        else:
            value = float(raw)
    except OverflowError as exc:
        raise ValueError(f"float out of range: {raw!r}") from exc
    if math.isinf(value) and raw.lstrip("+-").lower() not in _INFINITY_LITERALS:
        raise ValueError(f"float out of range: {raw!r}")
    return value


def parse_int(raw: str) -> int:
    """Parse a signed base-10 integer that fits in 64 bits."""
    if not _INT_RE.fullmatch(raw):
        raise ValueError(f"invalid integer literal: {raw!r}")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer out of range: {raw!r}")
    return value


def parse_duration(raw: str) -> timedelta:
    """
    Parse a duration literal such as "300ms", "-1.5h" or "2h45m".

    Parameters:
        raw (str): A possibly signed sequence of decimal numbers, each with an
            optional fraction and a unit suffix (ns, us, µs, μs, ms, s, m, h).
            A bare "0" is also accepted.

    Returns:
        timedelta: The parsed duration, rounded to the nearest microsecond.

    Raises:
        ValueError: If the text is not a duration literal or overflows the
            signed 64-bit nanosecond range.
    """
    if raw in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION_RE.fullmatch(raw):
        raise ValueError(f"invalid duration: {raw!r}")

    negative = raw.startswith("-")
    total = Fraction(0)
    for term in _DURATION_TERM_RE.finditer(raw):
        total += Fraction(term.group("number")) * _DURATION_UNITS[term.group("unit")]

    nanoseconds = int(total)
    limit = -INT64_MIN if negative else INT64_MAX
    if nanoseconds > limit:
        raise ValueError(f"invalid duration: {raw!r}")
    if negative:
        nanoseconds = -nanoseconds
    return timedelta(microseconds=round(Fraction(nanoseconds, 1000)))


def parse_strings(raw: str, sep: str = ",") -> list[str]:
    """Split the raw value on sep, keeping empty fields. An empty sep splits into characters."""
    if sep == "":
        return list(raw)
    return raw.split(sep)


def parse_url(raw: str) -> SplitResult:
    """
    Parse a URL into its components.

    Raises:
        ValueError: If the text contains ASCII control characters or a malformed
            percent-escape, starts with a colon (missing scheme), has a
            non-numeric or out-of-range port, or is rejected by urlsplit.
    """
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in raw):
        raise ValueError(f"invalid control character in URL: {raw!r}")
    if raw.startswith(":"):
        raise ValueError(f"missing protocol scheme: {raw!r}")
    if _BAD_PERCENT_RE.search(raw):
        raise ValueError(f"invalid URL escape: {raw!r}")
    url = urlsplit(raw)
    url.port  # raises ValueError for a malformed port
    return url


def parse_addr(raw: str) -> Union[ipaddress.IPv4Address, ipaddress.IPv6Address]:
    """Parse an IPv4 or IPv6 address literal. Scoped addresses are rejected."""
    if "%" in raw:
        raise ValueError(f"zone identifiers are not accepted: {raw!r}")
    return ipaddress.ip_address(raw)
