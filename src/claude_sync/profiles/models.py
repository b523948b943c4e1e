"""Profile models and their YAML encoding.

A profile is a named overlay on the base configuration.  Every section is
optional; an empty profile changes nothing.  Profile YAML layout::

    plugins:
      add: [name@marketplace]
      remove: [other@marketplace]
    settings: {model: opus}
    hooks:
      add: {PreCompact: "lint --fix"}
      remove: [SessionStart]
    permissions:
      add_allow: ["Bash(git:*)"]
      add_deny: []
    claude_md:
      add: [work-conventions]
      remove: [personal-notes]
    mcp:
      add: {jira: {command: jira-mcp, args: []}}
      remove: [slack]
    keybindings:
      override: {ctrl+k: clear}

``hooks.add`` values follow the base config convention: JSON strings, or
bare commands that get expanded.
"""

from __future__ import annotations

from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from claude_sync.base_config import decode_hook_value, encode_hook_value
from claude_sync.errors import MalformedProfileError

# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class ProfilePlugins(BaseModel):
    add: list[str] = Field(default_factory=list)
    remove: list[str] = Field(default_factory=list)


class ProfileHooks(BaseModel):
    add: dict[str, Any] = Field(default_factory=dict)
    remove: list[str] = Field(default_factory=list)


class ProfilePermissions(BaseModel):
    add_allow: list[str] = Field(default_factory=list)
    add_deny: list[str] = Field(default_factory=list)


class ProfileClaudeMD(BaseModel):
    add: list[str] = Field(default_factory=list)
    remove: list[str] = Field(default_factory=list)


class ProfileMCP(BaseModel):
    add: dict[str, Any] = Field(default_factory=dict)
    remove: list[str] = Field(default_factory=list)


class ProfileKeybindings(BaseModel):
    override: dict[str, Any] = Field(default_factory=dict)


class Profile(BaseModel):
    """A named overlay on the base configuration."""

    plugins: ProfilePlugins = Field(default_factory=ProfilePlugins)
    settings: dict[str, Any] = Field(default_factory=dict)
    hooks: ProfileHooks = Field(default_factory=ProfileHooks)
    permissions: ProfilePermissions = Field(default_factory=ProfilePermissions)
    claude_md: ProfileClaudeMD = Field(default_factory=ProfileClaudeMD)
    mcp: ProfileMCP = Field(default_factory=ProfileMCP)
    keybindings: ProfileKeybindings = Field(default_factory=ProfileKeybindings)

    def is_empty(self) -> bool:
        """True when the profile carries no directives for any domain."""
        return self == Profile()


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

_SECTIONS = (
    "plugins",
    "settings",
    "hooks",
    "permissions",
    "claude_md",
    "mcp",
    "keybindings",
)


def parse_profile(text: str) -> Profile:
    """Parse profile YAML into a ``Profile``.

    An empty document is a valid empty profile.  Unknown top-level keys are
    ignored.

    Raises:
        MalformedProfileError: On invalid YAML, a non-mapping root, or a
            section with the wrong shape.
    """
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MalformedProfileError(f"parsing profile: {exc}") from exc

    if raw is None:
        return Profile()
    if not isinstance(raw, dict):
        raise MalformedProfileError(
            "parsing profile: expected mapping at top level"
        )

    data: dict[str, Any] = {}
    for key in _SECTIONS:
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, dict):
            raise MalformedProfileError(
                f"parsing profile {key}: expected mapping"
            )
        if key == "settings":
            data[key] = {str(k): v for k, v in value.items()}
        else:
            # "add:" with nothing under it is the same as no directive
            data[key] = {k: v for k, v in value.items() if v is not None}

    hooks_add = data.get("hooks", {}).get("add")
    if isinstance(hooks_add, dict):
        data["hooks"]["add"] = {
            str(k): decode_hook_value(v) for k, v in hooks_add.items()
        }

    try:
        return Profile.model_validate(data)
    except ValidationError as exc:
        raise MalformedProfileError(f"parsing profile: {exc}") from exc


def marshal_profile(profile: Profile) -> str:
    """Serialize *profile* to YAML, omitting empty sections and fields."""
    doc: dict[str, Any] = {}

    def put(section: str, fields: dict[str, Any]) -> None:
        kept = {k: v for k, v in fields.items() if v}
        if kept:
            doc[section] = kept

    put("plugins", {"add": profile.plugins.add, "remove": profile.plugins.remove})
    if profile.settings:
        doc["settings"] = dict(profile.settings)
    put(
        "hooks",
        {
            "add": {
                k: encode_hook_value(v) for k, v in profile.hooks.add.items()
            },
            "remove": profile.hooks.remove,
        },
    )
    put(
        "permissions",
        {
            "add_allow": profile.permissions.add_allow,
            "add_deny": profile.permissions.add_deny,
        },
    )
    put(
        "claude_md",
        {"add": profile.claude_md.add, "remove": profile.claude_md.remove},
    )
    put("mcp", {"add": dict(profile.mcp.add), "remove": profile.mcp.remove})
    put("keybindings", {"override": dict(profile.keybindings.override)})

    if not doc:
        return ""
    return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True)
