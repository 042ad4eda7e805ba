"""
Error types raised while decoding and rendering lines files.

I/O problems are not wrapped: short reads raise EOFError and stream
errors surface as the OSError the stream raised.
"""

from __future__ import annotations


class LinesError(Exception):
    """Base class for all rmlines errors."""


class FormatError(LinesError, ValueError):
    """Header is unrecognized or belongs to an unsupported format version."""

    def __init__(self, header: str, reason: str = "Unrecognized header"):
        self.header = header
        self.reason = reason
        super().__init__(f"{reason}: {header!r}")


class UnknownCodeError(LinesError, ValueError):
    """A brush type or color code has no known enum variant."""

    def __init__(self, kind: str, code: int):
        self.kind = kind
        self.code = code
        super().__init__(f"Unknown {kind} code: {code}")


class VersionError(LinesError):
    """Pages of one document disagree on the format version."""


class BundleError(LinesError):
    """A document bundle's .content JSON has an unexpected structure."""


class ConfigError(LinesError, ValueError):
    """Color or TOML configuration is malformed."""
