from __future__ import annotations

import pytest

from pyruntimeconfig.exceptions import MalformedPayloadError
from pyruntimeconfig.models import Metadata, VariableResponse, WatchResponse
from pyruntimeconfig.state.events import WatchState


def test_watch_response_maps_camel_case_and_keeps_raw() -> None:
    payload = {"state": "DELETED", "updateTime": "2026-01-01T00:00:00Z", "extra": 1}
    response = WatchResponse.model_validate(payload)

    assert response.state == WatchState.DELETED
    assert response.update_time == "2026-01-01T00:00:00Z"
    assert response.raw == payload


@pytest.mark.parametrize("state", ["VARIABLE_STATE_UNSPECIFIED", "SOMETHING_NEW", None, 3])
def test_unknown_watch_states_are_unspecified(state: object) -> None:
    assert WatchResponse.model_validate({"state": state}).state == WatchState.UNSPECIFIED


def test_metadata_defaults() -> None:
    meta = Metadata.model_validate({"version": "", "reserved": None})

    assert meta.version == "v0"
    assert meta.reserved == {}
    assert meta.latest is None


def test_metadata_keeps_empty_inlined_latest() -> None:
    meta = Metadata.model_validate({"version": "v5", "latest": {}})
    assert meta.latest == {}


def test_malformed_metadata_text_raises() -> None:
    response = WatchResponse.model_validate({"state": "UPDATED", "text": "{broken"})
    with pytest.raises(MalformedPayloadError) as exc_info:
        response.metadata()
    assert exc_info.value.text == "{broken"


def test_variable_document() -> None:
    assert VariableResponse.model_validate({"text": '{"a": {"b": 1}}'}).document() == {"a": {"b": 1}}
