"""Unified configuration schema for claude_sync.

Defines Pydantic models for the tool's YAML config with dedicated sections
for paths, reconciliation, and logging, plus an adapter to the runtime
``Config`` dataclass.  ``claude_sync.startup.open_workspace()`` runs the
whole chain.

Usage:
    from claude_sync.config_schema import build_config, to_runtime_config

    raw = load_hierarchical_config()
    unified = build_config(raw)
    config = to_runtime_config(unified, cli_overrides={"sync_dir": "/tmp/s"})
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from .config import Config, load_config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class PathsConfig(BaseModel):
    """Filesystem locations.

    All fields are optional to support zero-config: env vars and built-in
    defaults supply them at runtime instead.
    """

    sync_dir: str | None = Field(
        default=None, description="Version-controlled config mirror"
    )
    claude_dir: str | None = Field(
        default=None, description="Host application config directory"
    )

    model_config = {"frozen": True}


class ReconcileConfig(BaseModel):
    """Fragment reconciliation tuning."""

    similarity_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Similarity a section/fragment pair must exceed to count as a rename",
    )

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), or
            None for the default of the logging mode.
        file: Optional log file path.
    """

    level: str | None = Field(
        default=None, description="Log level; the mode default when unset"
    )
    file: str | None = Field(default=None, description="Log file path")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level unified config
# ---------------------------------------------------------------------------


class UnifiedConfig(BaseModel):
    """Top-level unified configuration.

    Every section has sensible defaults, so ``UnifiedConfig()`` (zero-config)
    is always valid.
    """

    paths: PathsConfig = Field(default_factory=PathsConfig)
    reconcile: ReconcileConfig = Field(default_factory=ReconcileConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the raw dict returned by
    ``load_hierarchical_config()``.

    Handles missing sections gracefully: anything absent gets defaults.
    """
    if not raw_data:
        return UnifiedConfig()

    return UnifiedConfig(**raw_data)


# ---------------------------------------------------------------------------
# Adapter: UnifiedConfig -> runtime Config dataclass
# ---------------------------------------------------------------------------


def to_runtime_config(
    unified: UnifiedConfig,
    cli_overrides: dict | None = None,
) -> Config:
    """Resolve a runtime ``Config`` from *unified* plus CLI overrides.

    Precedence per field: CLI override > env var > unified config value >
    built-in default (see ``load_config``).

    CLI overrides dict keys: sync_dir, claude_dir, similarity_threshold,
    debug.
    """
    overrides = cli_overrides or {}
    fallbacks = {
        "sync_dir": unified.paths.sync_dir,
        "claude_dir": unified.paths.claude_dir,
        "similarity_threshold": unified.reconcile.similarity_threshold,
    }
    return load_config(
        sync_dir=overrides.get("sync_dir"),
        claude_dir=overrides.get("claude_dir"),
        similarity_threshold=overrides.get("similarity_threshold"),
        debug=overrides.get("debug", False),
        yaml_fallbacks={k: v for k, v in fallbacks.items() if v is not None},
    )
