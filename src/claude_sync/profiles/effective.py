"""Effective configuration: the base config with the active profile applied.

Computed on demand and never persisted.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from claude_sync.base_config import BaseConfig, Permissions

from .merge import (
    merge_claude_md,
    merge_hooks,
    merge_keybindings,
    merge_mcp,
    merge_permissions,
    merge_plugins,
    merge_settings,
)
from .models import Profile

logger = logging.getLogger(__name__)


class EffectiveConfig(BaseModel):
    """Merged configuration for every domain.

    Attributes:
        profile_name: Name of the profile applied, or ``None`` for base only.
        plugins: Desired plugin keys.
        settings: Host application settings.
        hooks: Hook event name -> definition.
        permissions: Allow/deny lists.
        claude_md_includes: Fragment names to assemble, in order.
        mcp: MCP server name -> definition.
        keybindings: Key binding map.
    """

    profile_name: str | None = None
    plugins: list[str] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)
    hooks: dict[str, Any] = Field(default_factory=dict)
    permissions: Permissions = Field(default_factory=Permissions)
    claude_md_includes: list[str] = Field(default_factory=list)
    mcp: dict[str, Any] = Field(default_factory=dict)
    keybindings: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


def build_effective_config(
    base: BaseConfig,
    profile: Profile | None = None,
    profile_name: str | None = None,
) -> EffectiveConfig:
    """Merge *profile* (if any) over *base* in every domain.

    Args:
        base: The parsed base configuration.
        profile: The active profile, or ``None`` to use the base alone.
        profile_name: Name recorded on the result for reporting.

    Returns:
        The effective configuration.
    """
    overlay = profile or Profile()
    if profile is not None:
        logger.debug("Applying profile %s", profile_name or "<unnamed>")

    return EffectiveConfig(
        profile_name=profile_name if profile is not None else None,
        plugins=merge_plugins(base.all_plugin_keys(), overlay),
        settings=merge_settings(base.settings, overlay),
        hooks=merge_hooks(base.hooks, overlay),
        permissions=merge_permissions(base.permissions, overlay),
        claude_md_includes=merge_claude_md(base.claude_md.include, overlay),
        mcp=merge_mcp(base.mcp, overlay),
        keybindings=merge_keybindings(base.keybindings, overlay),
    )
