"""Data models for Runtime Config API responses."""

from pyruntimeconfig.models._base import ApiModel
from pyruntimeconfig.models.variables import Metadata, VariableResponse, WatchResponse

__all__ = [
    "ApiModel",
    "Metadata",
    "VariableResponse",
    "WatchResponse",
]
