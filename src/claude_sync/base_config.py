"""Base configuration mirrored in the sync directory (``config.yaml``).

The base config is the shared layer every profile overlays.  Its YAML
layout::

    version: "2.0.0"
    plugins:
      upstream: [name@marketplace, ...]
      pinned:
        - name@marketplace: "1.2.0"
      forked: [...]
      excluded: [...]
    settings: {key: value}
    hooks:
      PreCompact: '[{"matcher":"","hooks":[{"type":"command","command":"..."}]}]'
    permissions: {allow: [...], deny: [...]}
    claude_md: {include: [fragment-name, ...]}
    mcp: {server-name: {command: ..., args: [...]}}
    keybindings: {key: value}

A flat ``plugins:`` list (the v1 layout) is read as ``upstream``.

Hook values are stored as JSON strings.  A string that starts with ``[``
and parses as JSON is kept as-is; any other string is a bare command and is
expanded with ``expand_hook_command()``.

``user-preferences.yaml`` holds per-machine plugin preferences and the sync
mode; see ``UserPreferences``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from claude_sync.errors import MalformedConfigError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Permissions(BaseModel):
    """Tool-permission allow/deny lists."""

    allow: list[str] = Field(default_factory=list)
    deny: list[str] = Field(default_factory=list)


class ClaudeMDConfig(BaseModel):
    """Fragment names assembled into CLAUDE.md, in order."""

    include: list[str] = Field(default_factory=list)


class BaseConfig(BaseModel):
    """Parsed ``config.yaml``.

    Attributes:
        version: Config format version string.
        upstream: Plugins tracked at their latest version.
        pinned: Plugin key -> pinned version.
        forked: Plugins maintained as local forks.
        excluded: Plugins the user excluded during setup.
        settings: Host application settings.
        hooks: Hook event name -> hook definition (decoded JSON).
        permissions: Allow/deny lists.
        claude_md: Fragment include list.
        mcp: MCP server name -> server definition.
        keybindings: Key binding overrides.
    """

    version: str = ""
    upstream: list[str] = Field(default_factory=list)
    pinned: dict[str, str] = Field(default_factory=dict)
    forked: list[str] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)
    hooks: dict[str, Any] = Field(default_factory=dict)
    permissions: Permissions = Field(default_factory=Permissions)
    claude_md: ClaudeMDConfig = Field(default_factory=ClaudeMDConfig)
    mcp: dict[str, Any] = Field(default_factory=dict)
    keybindings: dict[str, Any] = Field(default_factory=dict)

    def all_plugin_keys(self) -> list[str]:
        """All plugin keys across upstream, pinned and forked, sorted."""
        keys = set(self.upstream) | set(self.pinned) | set(self.forked)
        return sorted(keys)


class UserPluginPrefs(BaseModel):
    unsubscribe: list[str] = Field(default_factory=list)
    personal: list[str] = Field(default_factory=list)


class UserPreferences(BaseModel):
    """Per-machine preferences (``user-preferences.yaml``).

    Attributes:
        sync_mode: ``"union"`` keeps plugins installed outside the config;
            ``"exact"`` schedules them for removal.
        settings: Local settings that win over the synced ones.
        plugins: Plugins to drop from, or add to, the desired set.
    """

    sync_mode: Literal["union", "exact"] = "union"
    settings: dict[str, Any] = Field(default_factory=dict)
    plugins: UserPluginPrefs = Field(default_factory=UserPluginPrefs)


# ---------------------------------------------------------------------------
# Hook encoding
# ---------------------------------------------------------------------------


def expand_hook_command(command: str) -> list[dict[str, Any]]:
    """Convert a bare command string to the full hook definition."""
    return [
        {
            "matcher": "",
            "hooks": [{"type": "command", "command": command}],
        }
    ]


def decode_hook_value(value: Any) -> Any:
    """Decode a stored hook value.

    JSON strings starting with ``[`` are parsed; other strings are treated
    as bare commands.  Already-structured values pass through unchanged.
    """
    if not isinstance(value, str):
        return value
    if value.startswith("["):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass
    return expand_hook_command(value)


def encode_hook_value(value: Any) -> str:
    """Encode a hook definition as the compact JSON string stored in YAML."""
    return json.dumps(value, separators=(",", ":"))


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _load_mapping(text: str, what: str, allow_empty: bool) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MalformedConfigError(f"parsing {what}: {exc}") from exc

    if data is None:
        if allow_empty:
            return {}
        raise MalformedConfigError(f"parsing {what}: empty document")
    if not isinstance(data, dict):
        raise MalformedConfigError(
            f"parsing {what}: expected mapping at top level"
        )
    return data


def _expect(value: Any, kind: type, what: str) -> Any:
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise MalformedConfigError(
            f"parsing {what}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _string_list(value: Any, what: str) -> list[str]:
    return [str(v) for v in _expect(value, list, what)]


def _parse_pinned(value: Any) -> dict[str, str]:
    pinned: dict[str, str] = {}
    for item in _expect(value, list, "plugins.pinned"):
        if not isinstance(item, dict):
            raise MalformedConfigError(
                "parsing plugins.pinned: expected mapping in pinned entry"
            )
        for key, version in item.items():
            pinned[str(key)] = str(version)
            break
    return pinned


def _parse_plugins(value: Any, data: dict[str, Any]) -> None:
    if value is None:
        return
    if isinstance(value, list):
        # v1: flat list of plugin keys
        data["upstream"] = _string_list(value, "plugins")
        return
    if not isinstance(value, dict):
        raise MalformedConfigError(
            f"parsing plugins: unexpected {type(value).__name__}"
        )
    data["upstream"] = _string_list(value.get("upstream"), "plugins.upstream")
    data["pinned"] = _parse_pinned(value.get("pinned"))
    data["forked"] = _string_list(value.get("forked"), "plugins.forked")
    data["excluded"] = _string_list(value.get("excluded"), "plugins.excluded")


# ---------------------------------------------------------------------------
# Base config
# ---------------------------------------------------------------------------


def parse_base_config(text: str) -> BaseConfig:
    """Parse ``config.yaml`` text into a ``BaseConfig``.

    Raises:
        MalformedConfigError: On invalid YAML, an empty document, a
            non-mapping root, or a section of the wrong shape.
    """
    raw = _load_mapping(text, "config", allow_empty=False)
    data: dict[str, Any] = {}

    if raw.get("version") is not None:
        data["version"] = str(raw["version"])
    _parse_plugins(raw.get("plugins"), data)

    data["settings"] = _expect(raw.get("settings"), dict, "settings")
    hooks = _expect(raw.get("hooks"), dict, "hooks")
    data["hooks"] = {str(k): decode_hook_value(v) for k, v in hooks.items()}
    data["mcp"] = _expect(raw.get("mcp"), dict, "mcp")
    data["keybindings"] = _expect(raw.get("keybindings"), dict, "keybindings")

    try:
        data["permissions"] = Permissions.model_validate(
            _expect(raw.get("permissions"), dict, "permissions")
        )
        data["claude_md"] = ClaudeMDConfig.model_validate(
            _expect(raw.get("claude_md"), dict, "claude_md")
        )
        return BaseConfig.model_validate(data)
    except ValidationError as exc:
        raise MalformedConfigError(f"parsing config: {exc}") from exc


def marshal_base_config(cfg: BaseConfig) -> str:
    """Serialize *cfg* to the v2 YAML layout.

    Empty sections are omitted.  Pinned plugins are written sorted by key;
    every other section keeps insertion order.
    """
    doc: dict[str, Any] = {"version": cfg.version}

    plugins: dict[str, Any] = {}
    if cfg.upstream:
        plugins["upstream"] = list(cfg.upstream)
    if cfg.pinned:
        plugins["pinned"] = [{k: cfg.pinned[k]} for k in sorted(cfg.pinned)]
    if cfg.forked:
        plugins["forked"] = list(cfg.forked)
    if cfg.excluded:
        plugins["excluded"] = list(cfg.excluded)
    if plugins:
        doc["plugins"] = plugins

    if cfg.settings:
        doc["settings"] = dict(cfg.settings)
    if cfg.hooks:
        doc["hooks"] = {k: encode_hook_value(v) for k, v in cfg.hooks.items()}
    if cfg.permissions.allow or cfg.permissions.deny:
        doc["permissions"] = cfg.permissions.model_dump(exclude_defaults=True)
    if cfg.claude_md.include:
        doc["claude_md"] = {"include": list(cfg.claude_md.include)}
    if cfg.mcp:
        doc["mcp"] = dict(cfg.mcp)
    if cfg.keybindings:
        doc["keybindings"] = dict(cfg.keybindings)

    return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True)


# ---------------------------------------------------------------------------
# User preferences
# ---------------------------------------------------------------------------


def parse_user_preferences(text: str) -> UserPreferences:
    """Parse ``user-preferences.yaml``; an empty document gives defaults."""
    raw = _load_mapping(text, "user preferences", allow_empty=True)
    raw = {k: v for k, v in raw.items() if v is not None}
    try:
        return UserPreferences.model_validate(raw)
    except ValidationError as exc:
        raise MalformedConfigError(f"parsing user preferences: {exc}") from exc
