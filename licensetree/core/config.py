"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

import structlog

log = structlog.get_logger("licensetree.config")

DEFAULT_MANIFEST_CONCURRENCY = 16
DEFAULT_NODE_LINKER = "node-modules"


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_format: str = "console"
    manifest_concurrency: int = DEFAULT_MANIFEST_CONCURRENCY
    node_linker: str = DEFAULT_NODE_LINKER


def _parse_concurrency(raw: str | None) -> int:
    """Parse LICENSETREE_MANIFEST_CONCURRENCY, falling back to the default."""
    if raw is None or not raw.strip():
        return DEFAULT_MANIFEST_CONCURRENCY
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        log.warning("config.invalid_concurrency", value=raw, default=DEFAULT_MANIFEST_CONCURRENCY)
        return DEFAULT_MANIFEST_CONCURRENCY
    return value


def load_settings() -> Settings:
    """Build :class:`Settings` from environment variables.

    Reads:
        LICENSETREE_LOG_LEVEL            — log level (default: INFO)
        LICENSETREE_LOG_FORMAT           — console | json (default: console)
        LICENSETREE_MANIFEST_CONCURRENCY — parallel manifest reads (default: 16)
        LICENSETREE_NODE_LINKER          — linker name (default: node-modules)
    """
    return Settings(
        log_level=os.environ.get("LICENSETREE_LOG_LEVEL", "INFO").upper(),
        log_format=os.environ.get("LICENSETREE_LOG_FORMAT", "console").lower(),
        manifest_concurrency=_parse_concurrency(
            os.environ.get("LICENSETREE_MANIFEST_CONCURRENCY")
        ),
        node_linker=os.environ.get("LICENSETREE_NODE_LINKER", DEFAULT_NODE_LINKER),
    )
