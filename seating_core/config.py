# seating_core/config.py
from __future__ import annotations
import logging
import os
from typing import Optional
import numpy as np
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_COLS, DEFAULT_MAX_RETRIES, DEFAULT_ROWS, MAX_LAYOUT_DIM, REVEAL_TICK_SECONDS,
)

# ===== App defaults =====
DEFAULT_CONFIG = {
    "max_retries": DEFAULT_MAX_RETRIES,
    "random_seed": None,             # None -> fresh entropy on every run
    "default_rows": DEFAULT_ROWS,
    "default_cols": DEFAULT_COLS,
    "max_layout_dim": MAX_LAYOUT_DIM,
    "reveal_tick_seconds": REVEAL_TICK_SECONDS,
    "log_level": "INFO",
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    random_seed: Optional[int] = None
    default_rows: int = Field(default=DEFAULT_ROWS, gt=0)
    default_cols: int = Field(default=DEFAULT_COLS, gt=0)
    max_layout_dim: int = Field(default=MAX_LAYOUT_DIM, gt=0)
    reveal_tick_seconds: float = Field(default=REVEAL_TICK_SECONDS, gt=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v):
        v = str(v).upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return v


def load_config(path: Optional[str] = None) -> AppConfig:
    """Defaults, overlaid with the YAML mapping at `path` when it exists."""
    values = dict(DEFAULT_CONFIG)
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            obj = yaml.safe_load(f) or {}
        if not isinstance(obj, dict):
            raise ValueError(f"Config file {path} must contain a mapping.")
        values.update(obj)
    return AppConfig(**values)


def make_rng(config: AppConfig) -> np.random.Generator:
    return np.random.default_rng(config.random_seed)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
