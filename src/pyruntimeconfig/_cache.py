"""Merged snapshot of reserved and custom configuration."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pyruntimeconfig._constants import CREDENTIAL_PATH

Snapshot = Mapping[str, Any]


def _set_path(target: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set *value* at a nested *path*, replacing non-dict intermediates."""
    node = target
    for key in path[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[path[-1]] = value


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def merge_snapshot(
    custom: Mapping[str, Any] | None,
    reserved: Mapping[str, Any] | None,
    credential: Any = None,
) -> Snapshot:
    """Build a read-only snapshot.

    Top-level ``reserved`` keys replace ``custom`` keys. When a credential
    is given it is placed at ``firebase.credential``. Inputs are copied,
    never mutated.
    """
    merged: dict[str, Any] = copy.deepcopy(dict(custom or {}))
    merged.update(copy.deepcopy(dict(reserved or {})))
    if credential is not None:
        _set_path(merged, CREDENTIAL_PATH, credential)
    return _freeze(merged)


class SnapshotCache:
    """Holds both halves of the merge and the lazily computed snapshot.

    Replacing either half drops the cached snapshot; the next :meth:`get`
    builds a new one and every later read returns that same object.
    """

    def __init__(self, credential: Any = None) -> None:
        self._credential = credential
        self._custom: dict[str, Any] = {}
        self._reserved: dict[str, Any] = {}
        self._merged: Snapshot | None = None

    @property
    def custom(self) -> dict[str, Any]:
        return self._custom

    @property
    def reserved(self) -> dict[str, Any]:
        return self._reserved

    def set_custom(self, custom: dict[str, Any] | None) -> None:
        self._custom = custom or {}
        self.invalidate()

    def replace(self, *, custom: dict[str, Any] | None, reserved: dict[str, Any] | None) -> None:
        """Replace both halves at once so no reader sees a mixed pair."""
        self._custom = custom or {}
        self._reserved = reserved or {}
        self.invalidate()

    def invalidate(self) -> None:
        self._merged = None

    def get(self) -> Snapshot:
        merged = self._merged
        if merged is None:
            merged = merge_snapshot(self._custom, self._reserved, self._credential)
            self._merged = merged
        return merged
