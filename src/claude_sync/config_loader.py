"""
Discovery and loading of claude_sync's own YAML config.

This is the tool's configuration (where the sync mirror and the host
directory live, the rename threshold, logging), not the synced
``config.yaml`` that ``claude_sync.base_config`` parses.

Files, highest precedence first:

1. ``$CLAUDE_SYNC_CONFIG`` (an explicit path)
2. ``./.claude_sync/config.yml`` or ``config.yaml`` (project)
3. ``$XDG_CONFIG_HOME/claude_sync/config.yml`` or ``config.yaml`` (user;
   ``~/.config`` when ``XDG_CONFIG_HOME`` is unset)

A section in a higher-precedence file replaces the same section of a lower
one whole; sections are not deep-merged.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from claude_sync.errors import MalformedConfigError
from claude_sync.file_handler import read_text

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CLAUDE_SYNC_CONFIG"
PROJECT_DIR_NAME = ".claude_sync"
USER_DIR_NAME = "claude_sync"
CONFIG_FILE_NAMES = ("config.yml", "config.yaml")


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def user_config_dir() -> Path:
    """Directory of the per-user config file."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / USER_DIR_NAME


def _config_file_in(directory: Path) -> Path | None:
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate.resolve()
    return None


def discover_config_files() -> list[Path]:
    """Existing config files, highest precedence first.

    A ``CLAUDE_SYNC_CONFIG`` naming a missing file is logged and skipped.
    At most one file is taken from each directory; ``config.yml`` wins
    over ``config.yaml``.
    """
    found: list[Path] = []

    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit).expanduser().resolve()
        if path.is_file():
            found.append(path)
        else:
            logger.warning(
                "%s points at %s, which does not exist", CONFIG_ENV_VAR, path
            )

    for directory in (Path.cwd() / PROJECT_DIR_NAME, user_config_dir()):
        path = _config_file_in(directory)
        if path is not None and path not in found:
            found.append(path)

    return found


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_config_file(path: Path) -> dict[str, Any]:
    """Parse one config file; an empty file is an empty mapping.

    Raises:
        MalformedConfigError: If the file is not valid YAML or its root is
            not a mapping.
    """
    try:
        data = yaml.safe_load(read_text(path))
    except yaml.YAMLError as exc:
        raise MalformedConfigError(
            f"Config file {path} is not valid YAML: {exc}"
        ) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedConfigError(
            f"Config file {path} must be a mapping, got {type(data).__name__}"
        )
    return data


def load_hierarchical_config(
    paths: list[Path] | None = None,
) -> dict[str, Any]:
    """Merge config files section by section.

    Args:
        paths: Files in precedence order, highest first.  Discovered with
            ``discover_config_files()`` when omitted.

    Returns:
        The merged raw mapping; ``{}`` when there are no files.
    """
    if paths is None:
        paths = discover_config_files()
    if not paths:
        logger.debug("No config files found, using built-in defaults")
        return {}

    merged: dict[str, Any] = {}
    for path in reversed(paths):
        logger.debug("Loading config: %s", path)
        merged.update(load_config_file(path))
    return merged
