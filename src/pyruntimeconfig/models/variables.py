"""Runtime Config variable envelopes and the metadata document."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyruntimeconfig._constants import EMPTY_VERSION
from pyruntimeconfig.models._base import ApiModel
from pyruntimeconfig.state.events import WatchState


class VariableResponse(ApiModel):
    """``GET .../variables/{name}`` response.

    The variable value is a JSON document carried as a string in ``text``.
    """

    name: str | None = None
    text: str | None = None
    update_time: str | None = None

    def document(self) -> dict[str, Any]:
        return self.decode_text(self.text)


class WatchResponse(ApiModel):
    """``POST .../variables/meta:watch`` response."""

    state: WatchState = WatchState.UNSPECIFIED
    text: str | None = None
    update_time: str | None = None

    @field_validator("state", mode="before")
    @classmethod
    def _coerce_state(cls, value: Any) -> Any:
        if isinstance(value, WatchState):
            return value
        return WatchState.parse(value)

    def metadata(self) -> Metadata:
        return Metadata.model_validate(self.decode_text(self.text))


class Metadata(BaseModel):
    """Decoded content of the ``meta`` variable.

    Parameters
    ----------
    version : str
        Name of the variable holding the current custom configuration.
        Empty or missing values mean nothing was ever published (``"v0"``).
    reserved : dict
        System-provided configuration; wins over custom keys when merged.
    latest : dict or None
        Custom configuration inlined to save a round-trip.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str = EMPTY_VERSION
    reserved: dict[str, Any] = Field(default_factory=dict)
    latest: dict[str, Any] | None = None

    @field_validator("version", mode="before")
    @classmethod
    def _default_version(cls, value: Any) -> Any:
        if value is None or value == "":
            return EMPTY_VERSION
        return value

    @field_validator("reserved", mode="before")
    @classmethod
    def _default_reserved(cls, value: Any) -> Any:
        return value or {}
