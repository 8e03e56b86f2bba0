"""
ABOUTME: Custom exception classes for required environment lookups
ABOUTME: Provides the error kinds raised when a key is missing, empty, or unparsable
"""


class ConfigError(Exception):
    """Configuration validation error."""

    pass


class MissingKeyError(ConfigError):
    """Key is absent, empty, or its value does not parse as the requested type."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"{key} is a required environment variable.")


class InvalidAddressError(ConfigError):
    """Key is present but its value is not an IP address literal."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"{key} is not a valid address")
