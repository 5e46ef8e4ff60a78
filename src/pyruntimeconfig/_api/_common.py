"""Resource naming shared by the endpoint modules."""

from __future__ import annotations

from pyruntimeconfig.config import RuntimeConfigSettings
from pyruntimeconfig.exceptions import RuntimeConfigSettingsError


def variable_name(settings: RuntimeConfigSettings, name: str) -> str:
    """Resource name of a variable, e.g. ``projects/p/configs/firebase/variables/v3``."""
    if not settings.project_id:
        raise RuntimeConfigSettingsError("project_id is required to address runtime config variables")
    return f"projects/{settings.project_id}/configs/{settings.config_name}/variables/{name}"


def variable_url(settings: RuntimeConfigSettings, name: str) -> str:
    return f"{settings.base_url.rstrip('/')}/{variable_name(settings, name)}"
