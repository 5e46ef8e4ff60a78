"""Custom exception hierarchy for pyruntimeconfig."""

from __future__ import annotations


class RuntimeConfigError(Exception):
    """Base exception for all pyruntimeconfig errors."""


class RuntimeConfigSettingsError(RuntimeConfigError):
    """Invalid or missing client settings."""


class TokenAcquisitionError(RuntimeConfigError):
    """The credential provider could not supply an access token."""


class TransportError(RuntimeConfigError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class MalformedPayloadError(RuntimeConfigError):
    """A JSON document embedded in a response ``text`` field could not be decoded.

    The variable fetcher downgrades this to "no custom configuration";
    on the watch endpoint it fails the cycle.
    """

    def __init__(self, message: str, *, text: str | None = None) -> None:
        self.text = text
        super().__init__(message)


class NotReadyError(RuntimeConfigError):
    """Configuration was accessed before the first fetch completed.

    Await :meth:`RuntimeConfigEnv.ready` before reading ``data``.
    """
