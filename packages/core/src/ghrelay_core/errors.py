"""Error taxonomy for the relay pipeline.

Every stage raises a subclass of RelayError so the CLI can treat all of them
the same way: print the message and exit 1. The original cause is always
chained with ``raise ... from exc``.
"""

from __future__ import annotations


class RelayError(Exception):
    """Base class for every failure the relay reports to the user."""


class ConfigurationError(RelayError):
    """A required input (path, repository, token, channel) is missing."""


class EventReadError(RelayError):
    """The event file exists but could not be read."""


class DecodeError(RelayError):
    """Malformed JSON or base64 at any decoding point."""


class NetworkError(RelayError):
    """The request could not be sent or the transport failed."""


class RemoteError(RelayError):
    """A remote API answered with a non-success status."""

    def __init__(self, message: str, status: int, reason: str | None = None):
        super().__init__(message)
        self.status = status
        self.reason = reason
