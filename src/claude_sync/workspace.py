"""Workspace: the stores and merges of one sync directory, wired together.

The ``Workspace`` follows the control flow a caller runs end to end:

1. Reconcile the host's ``CLAUDE.md`` against the fragment store.
2. Read the base config and the active profile (if any).
3. Merge them into an ``EffectiveConfig``.
4. Apply per-machine plugin preferences and diff against what is installed.

Nothing is cached: every call re-reads the files it needs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from claude_sync.base_config import (
    BaseConfig,
    UserPreferences,
    parse_base_config,
    parse_user_preferences,
)
from claude_sync.config import Config
from claude_sync.file_handler import read_text, write_file
from claude_sync.fragments import FragmentStore, Reconciler, ReconcileResult
from claude_sync.plan import (
    PluginDiff,
    SettingsDiff,
    apply_plugin_preferences,
    compute_plugin_diff,
    compute_settings_diff,
)
from claude_sync.profiles import (
    EffectiveConfig,
    ProfileStore,
    build_effective_config,
)

logger = logging.getLogger(__name__)


class Workspace:
    """Operations over the sync directory described by *config*.

    Args:
        config: Resolved runtime configuration.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.fragment_store = FragmentStore(config.claude_md_dir)
        self.profile_store = ProfileStore(config.sync_dir)
        self.reconciler = Reconciler(
            self.fragment_store, threshold=config.similarity_threshold
        )

    # ------------------------------------------------------------------
    # Stored configuration
    # ------------------------------------------------------------------

    def load_base_config(self) -> BaseConfig:
        """Parse ``config.yaml``; an absent file is an empty base config.

        Raises:
            MalformedConfigError: If the file exists but does not parse.
        """
        path = self.config.config_file
        if not path.is_file():
            logger.debug("No base config at %s", path)
            return BaseConfig()
        return parse_base_config(read_text(path))

    def load_user_preferences(self) -> UserPreferences:
        """Parse ``user-preferences.yaml``; an absent file gives defaults."""
        path = self.config.user_preferences_file
        if not path.is_file():
            return UserPreferences()
        return parse_user_preferences(read_text(path))

    def effective_config(self) -> EffectiveConfig:
        """Base config with the active profile, if one is set, merged over it.

        Raises:
            ProfileNotFoundError: If the active marker names a missing profile.
        """
        base = self.load_base_config()
        active = self.profile_store.load_active_profile()
        if active is None:
            return build_effective_config(base)
        name, profile = active
        return build_effective_config(base, profile, profile_name=name)

    # ------------------------------------------------------------------
    # Plans
    # ------------------------------------------------------------------

    def plugin_plan(self, installed: Iterable[str]) -> PluginDiff:
        """Diff the effective plugin set, after preferences, against *installed*."""
        preferences = self.load_user_preferences()
        desired = apply_plugin_preferences(
            self.effective_config().plugins, preferences
        )
        return compute_plugin_diff(desired, installed, preferences.sync_mode)

    def settings_plan(self, current: Mapping[str, Any]) -> SettingsDiff:
        """Diff the effective settings against the host's *current* settings.

        Local settings from ``user-preferences.yaml`` win over synced ones.
        """
        desired = dict(self.effective_config().settings)
        desired.update(self.load_user_preferences().settings)
        return compute_settings_diff(desired, current)

    # ------------------------------------------------------------------
    # CLAUDE.md
    # ------------------------------------------------------------------

    def reconcile_claude_md(self) -> ReconcileResult:
        """Reconcile the host's ``CLAUDE.md`` into the fragment store.

        Raises:
            FileNotFoundError: If the host has no ``CLAUDE.md``.
        """
        path = self.config.claude_md_file
        if not path.is_file():
            raise FileNotFoundError(f"No CLAUDE.md at {path}")
        return self.reconciler.reconcile(read_text(path))

    def assemble_claude_md(self) -> str:
        """Assemble ``CLAUDE.md`` from the effective include list.

        An empty include list falls back to the whole manifest in order.

        Raises:
            FragmentNotFoundError: If an included fragment is missing.
        """
        includes = self.effective_config().claude_md_includes
        if not includes:
            return self.fragment_store.assemble_manifest()
        return self.fragment_store.assemble_from_names(includes)

    def write_claude_md(self) -> str:
        """Assemble ``CLAUDE.md`` and write it into the host directory."""
        document = self.assemble_claude_md()
        write_file(self.config.claude_md_file, document)
        logger.info("Wrote %s", self.config.claude_md_file)
        return document
