"""Tests for profiles.merge: per-domain overlay of a profile on the base.

Covers:
- List domains: dedup, add, remove, order preservation
- Map domains: add/overwrite then remove, insertion order
- Override maps: settings and key bindings
- Permissions: append-unique
- Empty profile yields an equal copy; base is never mutated or aliased
"""

from __future__ import annotations

import copy

from claude_sync.base_config import Permissions
from claude_sync.profiles.merge import (
    merge_claude_md,
    merge_hooks,
    merge_keybindings,
    merge_mcp,
    merge_permissions,
    merge_plugins,
    merge_settings,
)
from claude_sync.profiles.models import (
    Profile,
    ProfileClaudeMD,
    ProfileHooks,
    ProfileKeybindings,
    ProfileMCP,
    ProfilePermissions,
    ProfilePlugins,
)

# ---------------------------------------------------------------------------
# List domains
# ---------------------------------------------------------------------------


class TestMergePlugins:
    """Tests for merge_plugins()."""

    def test_add_and_remove(self):
        profile = Profile(
            plugins=ProfilePlugins(add=["c@m"], remove=["a@m"])
        )
        assert merge_plugins(["a@m", "b@m"], profile) == ["b@m", "c@m"]

    def test_add_existing_not_duplicated(self):
        profile = Profile(plugins=ProfilePlugins(add=["a@m"]))
        assert merge_plugins(["a@m", "b@m"], profile) == ["a@m", "b@m"]

    def test_base_duplicates_collapsed(self):
        assert merge_plugins(["a@m", "a@m", "b@m"], Profile()) == ["a@m", "b@m"]

    def test_remove_wins_over_add(self):
        profile = Profile(
            plugins=ProfilePlugins(add=["x@m"], remove=["x@m"])
        )
        assert merge_plugins(["a@m"], profile) == ["a@m"]

    def test_remove_absent_is_noop(self):
        profile = Profile(plugins=ProfilePlugins(remove=["ghost@m"]))
        assert merge_plugins(["a@m"], profile) == ["a@m"]

    def test_none_base(self):
        profile = Profile(plugins=ProfilePlugins(add=["a@m"]))
        assert merge_plugins(None, profile) == ["a@m"]

    def test_base_not_mutated_or_aliased(self):
        base = ["a@m", "b@m"]
        result = merge_plugins(base, Profile())
        assert result == base
        assert result is not base
        result.append("z@m")
        assert base == ["a@m", "b@m"]


class TestMergeClaudeMD:
    """Tests for merge_claude_md()."""

    def test_add_remove(self):
        profile = Profile(
            claude_md=ProfileClaudeMD(add=["work"], remove=["personal"])
        )
        result = merge_claude_md(["base", "personal"], profile)
        assert result == ["base", "work"]

    def test_order_preserved(self):
        profile = Profile(claude_md=ProfileClaudeMD(add=["z", "a"]))
        assert merge_claude_md(["m"], profile) == ["m", "z", "a"]


# ---------------------------------------------------------------------------
# Map domains with add/remove
# ---------------------------------------------------------------------------


class TestMergeHooks:
    """Tests for merge_hooks()."""

    def test_add_new_event(self):
        hook = [{"matcher": "", "hooks": [{"type": "command", "command": "x"}]}]
        profile = Profile(hooks=ProfileHooks(add={"PreCompact": hook}))
        result = merge_hooks({"SessionStart": "s"}, profile)
        assert result == {"SessionStart": "s", "PreCompact": hook}
        assert list(result) == ["SessionStart", "PreCompact"]

    def test_add_overwrites_in_place(self):
        profile = Profile(hooks=ProfileHooks(add={"A": "new"}))
        result = merge_hooks({"A": "old", "B": "b"}, profile)
        assert result == {"A": "new", "B": "b"}
        assert list(result) == ["A", "B"]

    def test_remove(self):
        profile = Profile(hooks=ProfileHooks(remove=["A", "missing"]))
        assert merge_hooks({"A": 1, "B": 2}, profile) == {"B": 2}

    def test_remove_after_add(self):
        profile = Profile(hooks=ProfileHooks(add={"A": 1}, remove=["A"]))
        assert merge_hooks({}, profile) == {}

    def test_deep_copy(self):
        base = {"A": [{"hooks": [{"command": "x"}]}]}
        snapshot = copy.deepcopy(base)
        result = merge_hooks(base, Profile())
        result["A"][0]["hooks"][0]["command"] = "changed"
        assert base == snapshot


class TestMergeMCP:
    """Tests for merge_mcp()."""

    def test_add_and_remove(self):
        profile = Profile(
            mcp=ProfileMCP(
                add={"jira": {"command": "jira-mcp", "args": []}},
                remove=["slack"],
            )
        )
        base = {"slack": {"command": "slack-mcp"}, "fs": {"command": "fs"}}
        result = merge_mcp(base, profile)
        assert result == {
            "fs": {"command": "fs"},
            "jira": {"command": "jira-mcp", "args": []},
        }
        assert "slack" in base

    def test_none_base(self):
        profile = Profile(mcp=ProfileMCP(add={"a": {}}))
        assert merge_mcp(None, profile) == {"a": {}}

    def test_added_value_not_aliased(self):
        server = {"command": "x", "args": ["--flag"]}
        profile = Profile(mcp=ProfileMCP(add={"a": server}))
        result = merge_mcp({}, profile)
        result["a"]["args"].append("--other")
        assert profile.mcp.add["a"]["args"] == ["--flag"]


# ---------------------------------------------------------------------------
# Override maps
# ---------------------------------------------------------------------------


class TestMergeSettings:
    """Tests for merge_settings()."""

    def test_profile_overrides(self):
        profile = Profile(settings={"model": "opus", "newKey": True})
        result = merge_settings({"model": "sonnet", "theme": "dark"}, profile)
        assert result == {"model": "opus", "theme": "dark", "newKey": True}

    def test_empty_profile_copies(self):
        base = {"model": "sonnet"}
        result = merge_settings(base, Profile())
        assert result == base
        assert result is not base

    def test_none_value_overrides(self):
        profile = Profile(settings={"model": None})
        assert merge_settings({"model": "sonnet"}, profile) == {"model": None}


class TestMergeKeybindings:
    """Tests for merge_keybindings()."""

    def test_override(self):
        profile = Profile(
            keybindings=ProfileKeybindings(override={"ctrl+k": "clear"})
        )
        result = merge_keybindings({"ctrl+k": "kill", "ctrl+j": "jump"}, profile)
        assert result == {"ctrl+k": "clear", "ctrl+j": "jump"}


# ---------------------------------------------------------------------------
# Permissions
# ---------------------------------------------------------------------------


class TestMergePermissions:
    """Tests for merge_permissions()."""

    def test_append_unique(self):
        base = Permissions(allow=["Read"], deny=["Bash(rm:*)"])
        profile = Profile(
            permissions=ProfilePermissions(
                add_allow=["Read", "Bash(git:*)"], add_deny=["WebFetch"]
            )
        )
        result = merge_permissions(base, profile)
        assert result.allow == ["Read", "Bash(git:*)"]
        assert result.deny == ["Bash(rm:*)", "WebFetch"]

    def test_base_not_mutated(self):
        base = Permissions(allow=["Read"])
        profile = Profile(permissions=ProfilePermissions(add_allow=["Write"]))
        merge_permissions(base, profile)
        assert base.allow == ["Read"]

    def test_none_base(self):
        profile = Profile(permissions=ProfilePermissions(add_deny=["X"]))
        result = merge_permissions(None, profile)
        assert result == Permissions(allow=[], deny=["X"])

    def test_empty_profile_equal_copy(self):
        base = Permissions(allow=["a"], deny=["b"])
        result = merge_permissions(base, Profile())
        assert result == base
        assert result is not base
