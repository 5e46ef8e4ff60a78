"""Credential provider interface.

The engine never mints or caches tokens itself; it asks the configured
credential for a fresh token before every request.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field


class AccessToken(BaseModel):
    """Bearer token returned by a credential provider.

    Parameters
    ----------
    access_token : str
        Opaque OAuth2 bearer token.
    expires_in : float or None
        Lifetime in seconds, when the provider reports one.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    access_token: str = Field(min_length=1)
    expires_in: float | None = None


class Credential(Protocol):
    """Structural interface for token providers.

    Implementations may return an :class:`AccessToken` or a mapping with
    at least an ``access_token`` key (the shape returned by Google auth
    libraries).
    """

    async def get_access_token(self) -> AccessToken | Mapping[str, Any]:
        ...


class StaticCredential:
    """Credential that always hands out the same token.

    Useful for local development against an emulator and in tests.
    """

    def __init__(self, token: str) -> None:
        self._token = AccessToken(access_token=token)

    async def get_access_token(self) -> AccessToken:
        return self._token

    def __repr__(self) -> str:
        return "StaticCredential(<redacted>)"
