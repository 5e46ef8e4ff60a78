"""Custom configuration fetch.

Endpoint:
  - GET projects/{project}/configs/{config}/variables/{version}
"""

from __future__ import annotations

import logging
from typing import Any

from pyruntimeconfig._api._common import variable_url
from pyruntimeconfig._constants import EMPTY_VERSION
from pyruntimeconfig._redact import redact_text
from pyruntimeconfig._transport import Transport
from pyruntimeconfig.config import RuntimeConfigSettings
from pyruntimeconfig.exceptions import MalformedPayloadError
from pyruntimeconfig.models.variables import VariableResponse

_logger = logging.getLogger(__name__)


async def fetch_variable(
    settings: RuntimeConfigSettings,
    transport: Transport,
    name: str,
) -> dict[str, Any] | None:
    """Fetch the custom configuration stored under version *name*.

    ``"v0"`` means nothing was ever published and resolves to ``{}``
    without a request. A stored document that is not a JSON object
    resolves to ``None``; transport errors propagate.
    """
    if name == EMPTY_VERSION:
        return {}

    response = await transport.request(
        "GET",
        variable_url(settings, name),
        timeout=settings.request_timeout,
    )
    variable = VariableResponse.model_validate(response)
    try:
        return variable.document()
    except MalformedPayloadError:
        # TODO: surface this through a strict mode instead of dropping the version's content.
        _logger.warning(
            "Invalid stored environment config content for %s: %s",
            name,
            redact_text(variable.text),
        )
        return None
