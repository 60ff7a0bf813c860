"""
Purpose: Centralized configuration for the row writer.
Description: Header and destination policies, the immutable Config model, and helpers that load
             defaults from environment variables (optionally via a .env file).
Key Functions/Classes: `HeaderPolicy`, `DestinationPolicy`, `Config`, `load_config`, `get_float_precision`.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, model_validator

from .constants import (
    DEFAULT_FILE_PATH,
    DEFAULT_FLOAT_PRECISION,
    ENV_DESTINATION,
    ENV_FILE,
    ENV_FLOAT_PRECISION,
    ENV_HEADER,
)


class HeaderPolicy(str, Enum):
    ALWAYS = "always"
    ONCE = "once"
    NEVER = "never"


class DestinationPolicy(str, Enum):
    FILE = "file"
    CONSOLE = "console"
    BOTH = "both"

    @property
    def writes_file(self) -> bool:
        return self in (DestinationPolicy.FILE, DestinationPolicy.BOTH)

    @property
    def writes_console(self) -> bool:
        return self in (DestinationPolicy.CONSOLE, DestinationPolicy.BOTH)


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    header_policy: HeaderPolicy = HeaderPolicy.ONCE
    destination_policy: DestinationPolicy = DestinationPolicy.BOTH
    file_path: str = DEFAULT_FILE_PATH

    @model_validator(mode="after")
    def _require_path_for_file_sink(self) -> "Config":
        if self.destination_policy.writes_file and not self.file_path:
            raise ValueError("file_path must be set when writing to a file")
        return self


def load_config(**overrides: Any) -> Config:
    """Build a Config from ROWWRITER_* environment variables; keyword overrides win.

    Overrides set to None are ignored so CLI options can be passed through directly.
    """
    # AIDEV-NOTE: Load env from .env if present to ease local dev.
    load_dotenv()
    values = {
        "header_policy": os.getenv(ENV_HEADER),
        "destination_policy": os.getenv(ENV_DESTINATION),
        "file_path": os.getenv(ENV_FILE),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Config(**{k: v for k, v in values.items() if v is not None})


def get_float_precision(default: Optional[int] = None) -> int:
    """Get the float precision from the environment, falling back to 2 decimals."""
    load_dotenv()
    raw = os.getenv(ENV_FLOAT_PRECISION)
    if raw is None or not raw.strip():
        return DEFAULT_FLOAT_PRECISION if default is None else default
    return int(raw)
