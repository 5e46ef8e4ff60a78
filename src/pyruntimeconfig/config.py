"""Client configuration for pyruntimeconfig."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyruntimeconfig._constants import (
    BASE_URL,
    CONFIG_NAME,
    REQUEST_TIMEOUT_S,
    RETRY_DELAY_S,
    RETRY_MAX_DELAY_S,
    WATCH_TIMEOUT_S,
)
from pyruntimeconfig.exceptions import RuntimeConfigSettingsError

_PROJECT_ENV_KEYS = ("GCLOUD_PROJECT", "GOOGLE_CLOUD_PROJECT")


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise RuntimeConfigSettingsError(f"{key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class RuntimeConfigSettings:
    """Client configuration.

    Parameters
    ----------
    project_id : str or None
        Cloud project that owns the runtime config. When ``None`` the
        engine never starts watching.
    base_url : str
        Runtime Config API base URL, without trailing slash.
    config_name : str
        Name of the runtime config resource under the project.
    watch_timeout : float
        Client-side timeout in seconds for one long-poll watch request.
        Must exceed the server's own 60 second watch timeout.
    request_timeout : float
        Timeout in seconds for variable fetches.
    retry_delay : float
        Initial delay in seconds before re-arming the watch after a
        failed cycle. Doubles on each consecutive failure. ``0`` re-arms
        immediately.
    retry_max_delay : float
        Upper bound for the retry delay.
    """

    project_id: str | None = None
    base_url: str = BASE_URL
    config_name: str = CONFIG_NAME
    watch_timeout: float = WATCH_TIMEOUT_S
    request_timeout: float = REQUEST_TIMEOUT_S
    retry_delay: float = RETRY_DELAY_S
    retry_max_delay: float = RETRY_MAX_DELAY_S

    def __post_init__(self) -> None:
        if self.watch_timeout <= 0:
            raise RuntimeConfigSettingsError("watch_timeout must be positive")
        if self.request_timeout <= 0:
            raise RuntimeConfigSettingsError("request_timeout must be positive")
        if self.retry_delay < 0 or self.retry_max_delay < 0:
            raise RuntimeConfigSettingsError("retry delays must not be negative")
        if not self.config_name.strip():
            raise RuntimeConfigSettingsError("config_name must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> RuntimeConfigSettings:
        """Create settings from environment variables.

        Reads the project id from ``GCLOUD_PROJECT`` (falling back to
        ``GOOGLE_CLOUD_PROJECT``) and optional ``RUNTIMECONFIG_*``
        variables. Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        RuntimeConfigSettings
            Populated settings.
        """
        env = os.environ
        kwargs: dict[str, Any] = {}

        for key in _PROJECT_ENV_KEYS:
            project = env.get(key)
            if project:
                kwargs["project_id"] = project
                break

        _ENV_STR_MAP = {
            "RUNTIMECONFIG_BASE_URL": "base_url",
            "RUNTIMECONFIG_CONFIG_NAME": "config_name",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val:
                kwargs[field_name] = val.rstrip("/") if field_name == "base_url" else val

        _ENV_FLOAT_MAP = {
            "RUNTIMECONFIG_WATCH_TIMEOUT": "watch_timeout",
            "RUNTIMECONFIG_REQUEST_TIMEOUT": "request_timeout",
            "RUNTIMECONFIG_RETRY_DELAY": "retry_delay",
            "RUNTIMECONFIG_RETRY_MAX_DELAY": "retry_max_delay",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            if field_name in overrides:
                continue
            number = _env_float(env, env_key)
            if number is not None:
                kwargs[field_name] = number

        kwargs.update(overrides)

        return cls(**kwargs)
