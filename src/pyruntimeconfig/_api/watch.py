"""Metadata long-poll.

Endpoint:
  - POST projects/{project}/configs/{config}/variables/meta:watch
"""

from __future__ import annotations

import logging

from pyruntimeconfig._api._common import variable_url
from pyruntimeconfig._constants import BENIGN_WATCH_STATUS, META_VARIABLE
from pyruntimeconfig._transport import Transport
from pyruntimeconfig.config import RuntimeConfigSettings
from pyruntimeconfig.exceptions import TransportError
from pyruntimeconfig.models.variables import WatchResponse

_logger = logging.getLogger(__name__)


def watch_url(settings: RuntimeConfigSettings) -> str:
    return f"{variable_url(settings, META_VARIABLE)}:watch"


async def watch_once(
    settings: RuntimeConfigSettings,
    transport: Transport,
    newer_than: str,
) -> WatchResponse | None:
    """Run one watch cycle.

    Returns ``None`` when the server closed the long-poll with a 502,
    which it does when nothing changed before its internal timeout.
    Every other failure propagates.
    """
    try:
        response = await transport.request(
            "POST",
            watch_url(settings),
            json_body={"newerThan": newer_than},
            timeout=settings.watch_timeout,
        )
    except TransportError as exc:
        if exc.status_code == BENIGN_WATCH_STATUS:
            _logger.debug("Watch returned %d, no change since %s", BENIGN_WATCH_STATUS, newer_than)
            return None
        raise

    return WatchResponse.model_validate(response)
