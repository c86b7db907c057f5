# tubely/common/logging.py
from __future__ import annotations

import logging
from typing import Optional


def _resolve_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        # late import: settings must stay importable without logging side effects
        from tubely.common.settings import get_settings
        level = get_settings().log_level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str = "uvicorn.error", level: Optional[int | str] = None) -> logging.Logger:
    """
    Return a logger that shares Uvicorn's handlers when served by it.
    Outside Uvicorn (tests, scripts) a basicConfig is installed once.
    The level defaults to LOG_LEVEL from settings.
    """
    lvl = _resolve_level(level)
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=lvl, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(lvl)
    return logger
