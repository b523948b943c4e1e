"""Turn the merged desired state into installs and removals.

- ``compute_plugin_diff`` -- desired vs. installed plugin keys.
- ``apply_plugin_preferences`` -- per-machine unsubscribe/personal overrides.
- ``compute_settings_diff`` -- desired settings the host does not match.

All functions are pure.  Output lists are sorted for stable presentation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

from claude_sync.base_config import UserPreferences


class PluginDiff(BaseModel):
    """Difference between desired and installed plugin keys.

    Attributes:
        synced: In both desired and installed.
        to_install: Desired but not installed.
        untracked: Installed but not desired.
        to_remove: Same as ``untracked`` in exact mode, empty in union mode.
    """

    synced: list[str] = Field(default_factory=list)
    to_install: list[str] = Field(default_factory=list)
    untracked: list[str] = Field(default_factory=list)
    to_remove: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def in_sync(self) -> bool:
        return not (self.to_install or self.to_remove)


class SettingChange(BaseModel):
    """A desired setting the host does not currently match."""

    desired: Any = None
    current: Any = None

    model_config = {"frozen": True}


class SettingsDiff(BaseModel):
    changed: dict[str, SettingChange] = Field(default_factory=dict)

    model_config = {"frozen": True}


def compute_plugin_diff(
    desired: Iterable[str],
    installed: Iterable[str],
    sync_mode: Literal["union", "exact"] = "union",
) -> PluginDiff:
    """Classify every key as synced, to-install or untracked.

    Args:
        desired: Plugin keys that should be installed.
        installed: Plugin keys reported installed by the host.
        sync_mode: ``"exact"`` also schedules untracked keys for removal.

    Returns:
        A ``PluginDiff`` with sorted lists.
    """
    desired_set = set(desired)
    installed_set = set(installed)
    untracked = sorted(installed_set - desired_set)

    return PluginDiff(
        synced=sorted(desired_set & installed_set),
        to_install=sorted(desired_set - installed_set),
        untracked=untracked,
        to_remove=untracked if sync_mode == "exact" else [],
    )


def apply_plugin_preferences(
    desired: Iterable[str], preferences: UserPreferences
) -> list[str]:
    """Drop unsubscribed plugins and append personal ones, keeping order."""
    unsubscribed = set(preferences.plugins.unsubscribe)
    result = [p for p in desired if p not in unsubscribed]
    present = set(result)
    for plugin in preferences.plugins.personal:
        if plugin not in present:
            present.add(plugin)
            result.append(plugin)
    return result


def compute_settings_diff(
    desired: Mapping[str, Any], current: Mapping[str, Any]
) -> SettingsDiff:
    """Keys in *desired* that are missing from, or differ in, *current*."""
    changed: dict[str, SettingChange] = {}
    for key, desired_value in desired.items():
        if key not in current or current[key] != desired_value:
            changed[key] = SettingChange(
                desired=desired_value, current=current.get(key)
            )
    return SettingsDiff(changed=changed)
