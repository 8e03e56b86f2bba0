"""
ABOUTME: Typed accessor layer over process environment variables
ABOUTME: Parses required configuration into bools, numbers, durations, lists, URLs, and addresses
"""

__version__ = "0.1.0"

from .config import (
    DEFAULT_READER,
    get_addr,
    get_bool,
    get_bytes,
    get_duration,
    get_float,
    get_int,
    get_string,
    get_strings,
    get_url,
    require_addr,
    require_bool,
    require_bytes,
    require_duration,
    require_float,
    require_int,
    require_string,
    require_strings,
    require_url,
    required,
)
from .exceptions import ConfigError, InvalidAddressError, MissingKeyError
from .reader import EnvReader, Lookup

__all__ = [
    "EnvReader",
    "Lookup",
    "DEFAULT_READER",
    "required",
    "ConfigError",
    "MissingKeyError",
    "InvalidAddressError",
    "require_bool",
    "require_bytes",
    "require_float",
    "require_duration",
    "require_int",
    "require_string",
    "require_strings",
    "require_url",
    "require_addr",
    "get_bool",
    "get_bytes",
    "get_float",
    "get_duration",
    "get_int",
    "get_string",
    "get_strings",
    "get_url",
    "get_addr",
]
