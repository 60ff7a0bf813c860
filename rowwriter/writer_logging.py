"""
Purpose: Provide structured logging helpers for the row writer.
Description: JSON-style log lines for writer events. Logs go to stderr because stdout
             is the console sink and must carry nothing but CSV.
Key Functions: get_logger, log_event

AIDEV-NOTE: Centralize logging; prefer structured fields for easy parsing.
"""

from __future__ import annotations
import json
import logging
import os
import sys
from typing import Any, Dict

from .constants import ENV_LOG_LEVEL


def _level_from_env() -> int:
    level = logging.getLevelName(os.getenv(ENV_LOG_LEVEL, "WARNING").strip().upper())
    # Unknown names come back as "Level X" strings.
    return level if isinstance(level, int) else logging.WARNING


# AIDEV-NOTE: Avoid reconfiguring root logger elsewhere; use this factory.

def get_logger(name: str = "rowwriter") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("%(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())
        logger.propagate = False
    return logger


def _to_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, default=str)


def log_event(logger: logging.Logger, event: str, *, level: int = logging.DEBUG,
              **details: Any) -> None:
    if not logger.isEnabledFor(level):
        return
    logger.log(level, _to_json({
        "type": "event",
        "event": event,
        "details": details,
    }))
