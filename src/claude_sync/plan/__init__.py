"""Desired-vs-installed planning.

Modules:

- ``diff``     -- ``compute_plugin_diff``, ``apply_plugin_preferences``,
  ``compute_settings_diff`` and their result models.
- ``reporter`` -- human-readable formatting of the diffs.
"""

from .diff import (
    PluginDiff,
    SettingChange,
    SettingsDiff,
    apply_plugin_preferences,
    compute_plugin_diff,
    compute_settings_diff,
)
from .reporter import format_plugin_diff, format_settings_diff

__all__ = [
    "PluginDiff",
    "SettingChange",
    "SettingsDiff",
    "apply_plugin_preferences",
    "compute_plugin_diff",
    "compute_settings_diff",
    "format_plugin_diff",
    "format_settings_diff",
]
