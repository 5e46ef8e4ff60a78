"""Base model for Runtime Config API envelopes.

Every response model inherits from :class:`ApiModel` which provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``raw`` dict that captures the original payload.
* :meth:`ApiModel.decode_text`, shared handling of the JSON document
  the API embeds as a string in a ``text`` field.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from pyruntimeconfig.exceptions import MalformedPayloadError


class ApiModel(BaseModel):
    """Base for Runtime Config API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "raw" in values:
            return values
        return {**values, "raw": dict(values)}

    @staticmethod
    def decode_text(text: str | None) -> dict[str, Any]:
        """Decode a JSON object embedded as a string.

        Raises :class:`MalformedPayloadError` when *text* is missing, is
        not valid JSON or does not hold a JSON object.
        """
        if text is None:
            raise MalformedPayloadError("Response has no 'text' field")
        try:
            document = json.loads(text)
        except (TypeError, json.JSONDecodeError) as exc:
            raise MalformedPayloadError(f"Embedded JSON is invalid: {exc}", text=text) from exc
        if not isinstance(document, dict):
            raise MalformedPayloadError(
                f"Embedded JSON must be an object, got {type(document).__name__}",
                text=text,
            )
        return document
