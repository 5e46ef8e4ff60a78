"""Watch outcomes reported by the metadata ``:watch`` endpoint."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class WatchState(StrEnum):
    UPDATED = "UPDATED"
    DELETED = "DELETED"
    UNSPECIFIED = "VARIABLE_STATE_UNSPECIFIED"

    @classmethod
    def parse(cls, value: Any) -> WatchState:
        """Map a raw ``state`` value to a member; unknown values are ``UNSPECIFIED``."""
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        return cls.UNSPECIFIED
