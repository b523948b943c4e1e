"""Startup sequence for one claude_sync invocation.

Callers (a command-line front end, a session hook) run ``open_workspace()``
once per process, before anything touches the sync directory:

1. Load ``.env`` so its values count as environment variables.
2. Discover and merge the tool's YAML config files.
3. Resolve the runtime ``Config``:
   CLI overrides > env vars > YAML config > built-in defaults.
4. Configure logging from the resolved debug flag and the ``logging``
   section.
5. Return a ``Workspace`` over the resolved directories.
"""

from __future__ import annotations

import logging
from typing import Any

from dotenv import load_dotenv

from .config_loader import discover_config_files, load_hierarchical_config
from .config_schema import build_config, to_runtime_config
from .logger import setup_logging
from .workspace import Workspace

logger = logging.getLogger(__name__)


def open_workspace(
    cli_overrides: dict[str, Any] | None = None,
    log_mode: str = "cli",
) -> Workspace:
    """Resolve configuration, set up logging and open the workspace.

    Args:
        cli_overrides: Values given on the command line.  Keys:
            sync_dir, claude_dir, similarity_threshold, debug, log_file.
        log_mode: ``"cli"`` (stderr) or ``"quiet"`` (file only); see
            ``setup_logging``.

    Returns:
        A ``Workspace`` bound to the resolved ``Config``.

    Raises:
        MalformedConfigError: If a discovered config file does not parse.
        pydantic.ValidationError: If a config section has the wrong shape.
        ValueError: If a resolved value is out of range.
    """
    overrides = cli_overrides or {}

    load_dotenv()

    config_files = discover_config_files()
    unified = build_config(load_hierarchical_config(config_files))
    config = to_runtime_config(unified, cli_overrides=overrides)

    setup_logging(
        mode=log_mode,
        debug=config.debug,
        log_file=overrides.get("log_file") or unified.logging.file,
        level=unified.logging.level,
    )

    sources = [f"config file: {p}" for p in config_files]
    if overrides:
        sources.append("CLI arguments")
    sources.append("environment variables")
    logger.info("Configuration loaded from: %s", ", ".join(sources))
    logger.info(
        "Sync directory: %s, Claude directory: %s",
        config.sync_dir,
        config.claude_dir,
    )

    return Workspace(config)
