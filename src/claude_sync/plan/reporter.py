"""Plugin and settings diff formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .diff import PluginDiff, SettingsDiff


def format_plugin_diff(diff: PluginDiff) -> str:
    """Format a plugin diff as human-readable text.

    Synced plugins are summarised by count only.
    """
    lines: list[str] = [
        f"Plugins: {len(diff.synced)} synced, "
        f"{len(diff.to_install)} to install, "
        f"{len(diff.untracked)} untracked"
    ]

    if diff.to_install:
        lines.append("")
        lines.append("To install:")
        for key in diff.to_install:
            lines.append(f"  + {key}")

    if diff.to_remove:
        lines.append("")
        lines.append("To remove:")
        for key in diff.to_remove:
            lines.append(f"  - {key}")
    elif diff.untracked:
        lines.append("")
        lines.append("Untracked (installed locally, not in config):")
        for key in diff.untracked:
            lines.append(f"  ? {key}")

    return "\n".join(lines)


def format_settings_diff(diff: SettingsDiff) -> str:
    """Format settings drift, one ``key: current -> desired`` line each."""
    if not diff.changed:
        return "Settings: in sync"
    lines = [f"Settings: {len(diff.changed)} changed"]
    for key in sorted(diff.changed):
        change = diff.changed[key]
        lines.append(f"  {key}: {change.current!r} -> {change.desired!r}")
    return "\n".join(lines)
