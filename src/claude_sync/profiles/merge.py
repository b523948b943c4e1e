"""Overlay a profile on the base configuration, one domain at a time.

Every function takes ``(base, profile)`` and returns a new value:

* ``base`` is never mutated, and the result never aliases it.
* A profile with no directives for the domain yields a copy of ``base``.
* ``None`` for ``base`` is treated as empty.

Domain semantics:

* **List domains** (plugins, CLAUDE.md includes): base deduplicated, then
  ``add`` entries not yet present, then every ``remove`` entry filtered out.
  Survivors keep their order.
* **Map domains with add/remove** (hooks, MCP servers): copy of base,
  ``add`` entries inserted or overwritten, then ``remove`` keys deleted.
* **Override maps** (settings, keybindings): copy of base with the profile's
  keys overwriting.
* **Permissions**: additions appended to allow/deny, skipping values
  already present.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from claude_sync.base_config import Permissions

from .models import Profile

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _merge_list(
    base: Iterable[str] | None,
    add: Iterable[str],
    remove: Iterable[str],
) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in [*(base or []), *add]:
        if item not in seen:
            seen.add(item)
            result.append(item)

    removed = set(remove)
    if removed:
        result = [item for item in result if item not in removed]
    return result


def _merge_mapping(
    base: Mapping[str, Any] | None,
    add: Mapping[str, Any],
    remove: Iterable[str] = (),
) -> dict[str, Any]:
    result = copy.deepcopy(dict(base or {}))
    for key, value in add.items():
        result[key] = copy.deepcopy(value)
    for key in remove:
        result.pop(key, None)
    return result


def _append_unique(base: Iterable[str], add: Iterable[str]) -> list[str]:
    result = list(base)
    seen = set(result)
    for item in add:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


# ---------------------------------------------------------------------------
# Per-domain merges
# ---------------------------------------------------------------------------


def merge_plugins(base: Iterable[str] | None, profile: Profile) -> list[str]:
    """Base plugins plus ``plugins.add``, minus ``plugins.remove``."""
    return _merge_list(base, profile.plugins.add, profile.plugins.remove)


def merge_settings(
    base: Mapping[str, Any] | None, profile: Profile
) -> dict[str, Any]:
    """Base settings with ``settings`` from the profile overwriting."""
    return _merge_mapping(base, profile.settings)


def merge_hooks(
    base: Mapping[str, Any] | None, profile: Profile
) -> dict[str, Any]:
    """Base hooks with ``hooks.add`` inserted, then ``hooks.remove`` deleted."""
    return _merge_mapping(base, profile.hooks.add, profile.hooks.remove)


def merge_permissions(
    base: Permissions | None, profile: Profile
) -> Permissions:
    """Base allow/deny with the profile's additions appended."""
    base = base or Permissions()
    return Permissions(
        allow=_append_unique(base.allow, profile.permissions.add_allow),
        deny=_append_unique(base.deny, profile.permissions.add_deny),
    )


def merge_claude_md(base: Iterable[str] | None, profile: Profile) -> list[str]:
    """Base fragment includes plus ``claude_md.add``, minus ``claude_md.remove``."""
    return _merge_list(base, profile.claude_md.add, profile.claude_md.remove)


def merge_mcp(
    base: Mapping[str, Any] | None, profile: Profile
) -> dict[str, Any]:
    """Base MCP servers with ``mcp.add`` inserted, then ``mcp.remove`` deleted."""
    return _merge_mapping(base, profile.mcp.add, profile.mcp.remove)


def merge_keybindings(
    base: Mapping[str, Any] | None, profile: Profile
) -> dict[str, Any]:
    """Base key bindings with ``keybindings.override`` overwriting."""
    return _merge_mapping(base, profile.keybindings.override)
