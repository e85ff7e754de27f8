"""Error taxonomy for configuration sources."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Base class for configuration loading failures."""


class DecodeError(ConfigurationError):
    """Bytes from a source could not be decoded into a configuration."""


class SchemaInvariantViolation(DecodeError):
    """Decoded payload is well-formed but misses or breaks a required entry."""


class TransientRemoteError(ConfigurationError):
    """Remote store unreachable, timed out or answered with an error."""
