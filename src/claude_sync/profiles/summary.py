"""One-line, human-readable summary of what a profile changes."""

from __future__ import annotations

from .models import Profile


def _pluralize(word: str, count: int) -> str:
    return word if count == 1 else word + "s"


def _count(parts: list[str], sign: str, items, word: str) -> None:
    n = len(items)
    if n:
        parts.append(f"{sign}{n} {_pluralize(word, n)}")


def profile_summary(profile: Profile) -> str:
    """Summarise *profile*, e.g. ``"+2 plugins, -1 plugin, model → opus"``.

    Settings are listed key by key in sorted order; every other domain is
    counted.  Returns ``"no changes"`` for an empty profile.
    """
    parts: list[str] = []

    _count(parts, "+", profile.plugins.add, "plugin")
    _count(parts, "-", profile.plugins.remove, "plugin")

    for key in sorted(profile.settings):
        parts.append(f"{key} → {profile.settings[key]}")

    _count(parts, "+", profile.hooks.add, "hook")
    _count(parts, "-", profile.hooks.remove, "hook")
    _count(parts, "+", profile.permissions.add_allow, "allow permission")
    _count(parts, "+", profile.permissions.add_deny, "deny permission")
    _count(parts, "+", profile.claude_md.add, "claude_md include")
    _count(parts, "-", profile.claude_md.remove, "claude_md include")
    _count(parts, "+", profile.mcp.add, "mcp server")
    _count(parts, "-", profile.mcp.remove, "mcp server")
    _count(parts, "", profile.keybindings.override, "keybinding override")

    if not parts:
        return "no changes"
    return ", ".join(parts)
