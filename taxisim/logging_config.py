"""Process-wide logging setup driven by ObservabilityConfig."""

from __future__ import annotations

import logging
from typing import Optional

from .config import ObservabilityConfig, get_config

_CONFIGURED = False


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Configure the root logger once per process."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    config = config or get_config().observability
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(level=level, format=config.format)
    _CONFIGURED = True
