"""pyruntimeconfig - Async mirror of remote runtime configuration."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyruntimeconfig")
except PackageNotFoundError:
    __version__ = "0+local"
from pyruntimeconfig._cache import Snapshot, merge_snapshot
from pyruntimeconfig.client import RuntimeConfigEnv
from pyruntimeconfig.config import RuntimeConfigSettings
from pyruntimeconfig.credential import AccessToken, Credential, StaticCredential
from pyruntimeconfig.exceptions import (
    MalformedPayloadError,
    NotReadyError,
    RuntimeConfigError,
    RuntimeConfigSettingsError,
    TokenAcquisitionError,
    TransportError,
)
from pyruntimeconfig.models import Metadata, VariableResponse, WatchResponse
from pyruntimeconfig.state.events import WatchState

__all__ = [
    "__version__",
    "AccessToken",
    "Credential",
    "MalformedPayloadError",
    "Metadata",
    "NotReadyError",
    "RuntimeConfigEnv",
    "RuntimeConfigError",
    "RuntimeConfigSettings",
    "RuntimeConfigSettingsError",
    "Snapshot",
    "StaticCredential",
    "TokenAcquisitionError",
    "TransportError",
    "VariableResponse",
    "WatchResponse",
    "WatchState",
    "merge_snapshot",
]
