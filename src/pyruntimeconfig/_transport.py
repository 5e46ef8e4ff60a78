"""Authenticated HTTP transport for the Runtime Config API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from pyruntimeconfig._constants import USER_AGENT
from pyruntimeconfig._redact import redact_for_log
from pyruntimeconfig.credential import AccessToken, Credential
from pyruntimeconfig.exceptions import RuntimeConfigError, TokenAcquisitionError, TransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`AuthorizedTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        ...


class AuthorizedTransport:
    """HTTP transport that attaches a fresh bearer token to every request."""

    def __init__(
        self,
        credential: Credential,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._credential = credential
        self._http = http_session

    async def _authorization_header(self) -> str:
        """Ask the credential for a token and build the header value."""
        try:
            raw = await self._credential.get_access_token()
        except RuntimeConfigError:
            raise
        except Exception as exc:
            raise TokenAcquisitionError(f"Credential failed to supply an access token: {exc}") from exc

        try:
            token = raw if isinstance(raw, AccessToken) else AccessToken.model_validate(raw)
        except ValidationError as exc:
            raise TokenAcquisitionError("Credential returned an invalid access token") from exc

        return f"Bearer {token.access_token}"

    async def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Send an authenticated JSON request and return the decoded body.

        Raises
        ------
        TokenAcquisitionError
            The credential could not provide a token.
        TransportError
            Network failure, timeout, non-2xx status or a non-JSON body.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "authorization": await self._authorization_header(),
            "user-agent": USER_AGENT,
        }

        client_timeout = aiohttp.ClientTimeout(total=timeout) if timeout is not None else None

        _logger.debug("%s %s body=%s", method, url, redact_for_log(json_body))

        try:
            async with self._http.request(
                method,
                url,
                json=dict(json_body) if json_body is not None else None,
                headers=headers,
                timeout=client_timeout,
            ) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise TransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                    )
        except TransportError:
            raise
        except TimeoutError as exc:
            raise TransportError(f"Request to {url} timed out after {timeout}s", endpoint=url) from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"Request to {url} failed: {exc}", endpoint=url) from exc

        if not text.strip():
            return {}

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TransportError(f"Invalid JSON from {url}: {text[:200]}", endpoint=url) from exc

        if not isinstance(body, dict):
            raise TransportError(f"Expected a JSON object from {url}", endpoint=url)

        _logger.debug("%s %s -> %s", method, url, redact_for_log(body))
        return body
