"""Named profiles layered on the shared base configuration.

Modules:

- ``models``    -- ``Profile`` and its section models, YAML parse/marshal.
- ``store``     -- ``ProfileStore``: profile files and the active marker.
- ``merge``     -- per-domain overlay merges (plugins, settings, hooks,
  permissions, CLAUDE.md includes, MCP servers, key bindings).
- ``effective`` -- ``build_effective_config``: all merges at once.
- ``summary``   -- ``profile_summary``: one-line description of a profile.
"""

from .effective import EffectiveConfig, build_effective_config
from .merge import (
    merge_claude_md,
    merge_hooks,
    merge_keybindings,
    merge_mcp,
    merge_permissions,
    merge_plugins,
    merge_settings,
)
from .models import (
    Profile,
    ProfileClaudeMD,
    ProfileHooks,
    ProfileKeybindings,
    ProfileMCP,
    ProfilePermissions,
    ProfilePlugins,
    marshal_profile,
    parse_profile,
)
from .store import ProfileStore
from .summary import profile_summary

__all__ = [
    "EffectiveConfig",
    "Profile",
    "ProfileClaudeMD",
    "ProfileHooks",
    "ProfileKeybindings",
    "ProfileMCP",
    "ProfilePermissions",
    "ProfilePlugins",
    "ProfileStore",
    "build_effective_config",
    "marshal_profile",
    "merge_claude_md",
    "merge_hooks",
    "merge_keybindings",
    "merge_mcp",
    "merge_permissions",
    "merge_plugins",
    "merge_settings",
    "parse_profile",
    "profile_summary",
]
