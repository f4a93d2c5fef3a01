from __future__ import annotations

import os
import sys
from typing import Optional

from loguru import logger

DEFAULT_LOG_LEVEL = os.getenv("GRIDBOARD_LOG_LEVEL", "WARNING")


def configure_logging(level: Optional[str] = None) -> None:
    """Replaces loguru's default sink with a stderr sink and turns on board diagnostics."""
    logger.remove()
    logger.add(sys.stderr, level=(level or DEFAULT_LOG_LEVEL).upper())
    logger.enable("gridboard_core")
