"""Runtime configuration for claude_sync.

Resolves where the sync mirror and the host application's config live,
plus reconciliation tuning, from CLI args, environment variables, .env
files, and YAML config file fallbacks.

Precedence (highest to lowest):
    CLI args > Environment variables > .env file > YAML config > Built-in defaults

Environment variables:
    CLAUDE_SYNC_DIR: Sync mirror directory (default: ~/.claude-sync)
    CLAUDE_DIR: Host application config directory (default: ~/.claude)
    CLAUDE_SYNC_SIMILARITY_THRESHOLD: Rename threshold in [0, 1] (default: 0.8)
    CLAUDE_SYNC_DEBUG: Enable debug logging (optional, default: false)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.8


@dataclass
class Config:
    sync_dir: Path
    claude_dir: Path
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    debug: bool = False

    @property
    def claude_md_dir(self) -> Path:
        return self.sync_dir / "claude-md"

    @property
    def profiles_dir(self) -> Path:
        return self.sync_dir / "profiles"

    @property
    def config_file(self) -> Path:
        return self.sync_dir / "config.yaml"

    @property
    def user_preferences_file(self) -> Path:
        return self.sync_dir / "user-preferences.yaml"

    @property
    def claude_md_file(self) -> Path:
        return self.claude_dir / "CLAUDE.md"


def validate_config(config: Config) -> None:
    """Validate configuration values and raise ValueError if invalid.

    Args:
        config: Config instance to validate.

    Raises:
        ValueError: If the threshold is out of range or both directories
            resolve to the same path.
    """
    if not 0.0 <= config.similarity_threshold <= 1.0:
        raise ValueError(
            f"Invalid similarity threshold {config.similarity_threshold}: "
            "must be between 0 and 1"
        )

    if config.sync_dir.resolve() == config.claude_dir.resolve():
        raise ValueError(
            f"Sync directory and Claude directory must differ: {config.sync_dir}"
        )

    if config.similarity_threshold != DEFAULT_SIMILARITY_THRESHOLD:
        logger.warning(
            "Using non-default rename similarity threshold %.2f",
            config.similarity_threshold,
        )


def _get_bool_env(key: str) -> bool | None:
    """Return True/False from env var, or None if unset."""
    val = os.getenv(key)
    if val is None:
        return None
    return val.lower() in ("true", "1", "yes", "on")


def load_config(
    sync_dir: str | None = None,
    claude_dir: str | None = None,
    similarity_threshold: float | None = None,
    debug: bool = False,
    yaml_fallbacks: dict | None = None,
) -> Config:
    """Load configuration with unified precedence.

    Resolution order for each field (highest to lowest):
        CLI arg > env var / .env > yaml_fallbacks > built-in default

    The caller is responsible for calling ``load_dotenv()`` before this
    function so that .env values are available via ``os.getenv()``.

    Args:
        sync_dir: Override sync mirror directory.
        claude_dir: Override host application directory.
        similarity_threshold: Override rename threshold.
        debug: Enable debug logging (CLI flag).
        yaml_fallbacks: Values from the YAML config (``sync_dir``,
            ``claude_dir``, ``similarity_threshold``).

    Returns:
        Validated Config instance.

    Raises:
        ValueError: If a value is malformed or out of range.
    """
    fb = yaml_fallbacks or {}
    home = Path.home()

    # --- Paths: CLI > env > YAML > default ---

    final_sync_dir = (
        sync_dir
        or os.getenv("CLAUDE_SYNC_DIR")
        or fb.get("sync_dir")
        or str(home / ".claude-sync")
    )
    final_claude_dir = (
        claude_dir
        or os.getenv("CLAUDE_DIR")
        or fb.get("claude_dir")
        or str(home / ".claude")
    )

    # --- Numeric: CLI > env > YAML > default ---

    if similarity_threshold is not None:
        final_threshold = float(similarity_threshold)
    else:
        raw = os.getenv("CLAUDE_SYNC_SIMILARITY_THRESHOLD")
        if raw is not None:
            try:
                final_threshold = float(raw)
            except ValueError:
                raise ValueError(
                    f"Invalid CLAUDE_SYNC_SIMILARITY_THRESHOLD '{raw}': must be a number between 0 and 1"
                ) from None
        elif "similarity_threshold" in fb:
            final_threshold = float(fb["similarity_threshold"])
        else:
            final_threshold = DEFAULT_SIMILARITY_THRESHOLD

    # --- Boolean: CLI > env > default ---

    if debug:
        final_debug = True
    else:
        final_debug = bool(_get_bool_env("CLAUDE_SYNC_DEBUG"))

    config = Config(
        sync_dir=Path(final_sync_dir).expanduser(),
        claude_dir=Path(final_claude_dir).expanduser(),
        similarity_threshold=final_threshold,
        debug=final_debug,
    )

    validate_config(config)

    return config
