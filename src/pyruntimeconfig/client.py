"""Async engine that mirrors the remote runtime configuration."""

from __future__ import annotations

import asyncio
import contextlib
import copy
import dataclasses
import logging
import re
from datetime import UTC, datetime
from typing import Any

import aiohttp

from pyruntimeconfig._api.variables import fetch_variable
from pyruntimeconfig._api.watch import watch_once
from pyruntimeconfig._cache import Snapshot, SnapshotCache
from pyruntimeconfig._constants import EPOCH_TIMESTAMP
from pyruntimeconfig._transport import AuthorizedTransport, Transport
from pyruntimeconfig.config import RuntimeConfigSettings
from pyruntimeconfig.credential import Credential
from pyruntimeconfig.exceptions import NotReadyError, RuntimeConfigError
from pyruntimeconfig.models.variables import Metadata, WatchResponse
from pyruntimeconfig.state.events import WatchState
from pyruntimeconfig.state.hub import Observer, ReadinessHub

_logger = logging.getLogger(__name__)


_TIMESTAMP_RE = re.compile(
    r"^(?P<base>[^.]+?)(?:\.(?P<fraction>\d+))?(?P<offset>Z|[+-]\d{2}:?\d{2})?$"
)


def _parse_timestamp(value: str) -> tuple[datetime, int] | None:
    """Split an RFC 3339 timestamp into whole seconds and nanoseconds.

    ``datetime`` keeps only microseconds; server timestamps carry up to
    nine fractional digits, so the fraction is compared separately.
    """
    match = _TIMESTAMP_RE.match(value.strip())
    if match is None:
        return None
    try:
        seconds = datetime.fromisoformat(match["base"] + (match["offset"] or ""))
    except ValueError:
        return None
    if seconds.tzinfo is None:
        seconds = seconds.replace(tzinfo=UTC)
    fraction = (match["fraction"] or "")[:9]
    return seconds, int(fraction.ljust(9, "0"))


def _is_newer(candidate: str, current: str) -> bool:
    """Whether *candidate* is strictly later than *current*.

    An unparseable value on either side counts as newer when it differs.
    """
    new_ts = _parse_timestamp(candidate)
    old_ts = _parse_timestamp(current)
    if new_ts is None or old_ts is None:
        return candidate != current
    return new_ts > old_ts


class RuntimeConfigEnv:
    """Locally cached, continuously refreshed runtime configuration.

    Usage::

        async with RuntimeConfigEnv(credential, "my-project") as env:
            await env.ready()
            env.observe(lambda custom: print("changed", custom))
            api_key = env.data["service"]["key"]

    The watch loop runs on one background task for as long as the engine
    is open. Keep a single engine per process and pass it around.
    """

    def __init__(
        self,
        credential: Credential | None,
        project_id: str | None = None,
        *,
        settings: RuntimeConfigSettings | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        if settings is None:
            settings = RuntimeConfigSettings(project_id=project_id)
        elif project_id is not None:
            settings = dataclasses.replace(settings, project_id=project_id)

        self.credential = credential
        self._settings = settings
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._cache = SnapshotCache(credential)
        self._hub = ReadinessHub()
        self._watch_task: asyncio.Task[None] | None = None
        self._failures = 0

        self.version: str | None = None
        self.last_updated: str = EPOCH_TIMESTAMP

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RuntimeConfigEnv:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    @property
    def settings(self) -> RuntimeConfigSettings:
        return self._settings

    @property
    def project_id(self) -> str | None:
        return self._settings.project_id

    @property
    def can_watch(self) -> bool:
        """Both a credential and a project id are configured."""
        return self.credential is not None and bool(self._settings.project_id)

    @property
    def watching(self) -> bool:
        """A watch loop task is alive."""
        return self._watch_task is not None and not self._watch_task.done()

    def start(self) -> bool:
        """Start the watch loop on the running event loop.

        No-op while a loop is already running, and when no credential or
        project id is configured. Returns whether a loop is running.
        """
        if self.watching:
            return True
        if not self.can_watch:
            _logger.debug("Runtime config watch disabled: credential or project id missing")
            return False
        self._require_transport()
        self._watch_task = asyncio.get_running_loop().create_task(
            self._watch_loop(),
            name=f"runtimeconfig-watch-{self._settings.project_id}",
        )
        return True

    async def aclose(self) -> None:
        """Stop watching and release the HTTP session if this engine owns it."""
        task = self._watch_task
        self._watch_task = None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._hub.cancel_waiters()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------

    async def ready(self) -> None:
        """Wait until the first fetch completed; raises its error if it failed."""
        await self._hub.ready()

    def observe(self, callback: Observer) -> None:
        """Call *callback* with the custom configuration on every change."""
        self._hub.observe(callback)

    @property
    def is_ready(self) -> bool:
        return self._hub.is_ready

    @property
    def ready_error(self) -> BaseException | None:
        return self._hub.ready_error

    @property
    def data(self) -> Snapshot:
        """Merged read-only configuration snapshot.

        Raises :class:`NotReadyError` before the first fetch completed.
        """
        if not self._hub.is_ready:
            raise NotReadyError("Runtime config cannot be accessed before it is ready")
        return self._cache.get()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            if self.credential is None:
                raise RuntimeConfigError("A credential is required to talk to the runtime config API")
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = AuthorizedTransport(self.credential, self._http_session)
        return self._transport

    def _retry_delay(self) -> float:
        if self._failures == 0 or self._settings.retry_delay <= 0:
            return 0.0
        delay = self._settings.retry_delay * (2 ** (self._failures - 1))
        return min(delay, self._settings.retry_max_delay)

    def _advance(self, update_time: str | None) -> None:
        if update_time and _is_newer(update_time, self.last_updated):
            self.last_updated = update_time

    # ------------------------------------------------------------------
    # Watch loop
    # ------------------------------------------------------------------

    async def _watch_loop(self) -> None:
        while True:
            if await self._watch_cycle():
                self._failures = 0
            else:
                self._failures += 1
            await asyncio.sleep(self._retry_delay())

    async def _watch_cycle(self) -> bool:
        """Run one watch cycle. Returns ``False`` when the cycle failed."""
        transport = self._require_transport()
        try:
            response = await watch_once(self._settings, transport, self.last_updated)
            if response is None:
                return True
            if response.update_time and not _is_newer(response.update_time, self.last_updated):
                _logger.debug("Ignoring stale %s from %s", response.state, response.update_time)
                return True
            if response.state == WatchState.UPDATED:
                return await self._handle_updated(response)
            if response.state == WatchState.DELETED:
                self._handle_deleted(response)
            return True
        except Exception as exc:
            self._handle_failure(exc)
            return False

    async def _handle_updated(self, response: WatchResponse) -> bool:
        meta = response.metadata()
        _logger.info("Detected environment version %s, activating...", meta.version)

        if meta.latest is not None:
            custom: dict[str, Any] | None = meta.latest
        else:
            custom = await fetch_variable(self._settings, self._require_transport(), meta.version)

        self._reconcile(meta, custom, response.update_time)
        return True

    def _handle_deleted(self, response: WatchResponse) -> None:
        _logger.info("Environment configuration deleted")
        self._cache.set_custom({})
        self.version = None
        self._advance(response.update_time)
        # An absent config is a valid first state; ready() resolves with it.
        self._hub.notify_ready()
        self._hub.notify_observers({})

    def _reconcile(self, meta: Metadata, custom: dict[str, Any] | None, update_time: str | None) -> None:
        """Swap in a fetched version and fan out the change."""
        self._cache.replace(custom=custom, reserved=meta.reserved)
        self.version = meta.version
        self._advance(update_time)
        _logger.info("Activated environment configuration %s", self.version)

        self._hub.notify_ready()
        self._hub.notify_observers(copy.deepcopy(self._cache.custom))

    def _handle_failure(self, exc: Exception) -> None:
        if self._hub.is_ready:
            _logger.warning("Error watching environment configuration: %s", exc)
            _logger.debug("Watch cycle failure", exc_info=exc)
            return

        _logger.warning("Error fetching environment configuration", exc_info=exc)
        self._cache.set_custom({})
        self._hub.notify_ready(exc)
