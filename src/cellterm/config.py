"""Renderer settings and environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


ENV_PREFIX = "CELLTERM_"


class ConfigError(ValueError):
    """An environment override could not be parsed."""


@dataclass
class RendererConfig:
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    fps: float = 20.0
    fallback_width: int = 80
    fallback_height: int = 24


def _parse_level(raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL: unknown level {raw!r}")
    return level


def _parse_fps(raw: str) -> float:
    try:
        fps = float(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}FPS: not a number: {raw!r}") from e
    if fps <= 0:
        raise ConfigError(f"{ENV_PREFIX}FPS: must be positive, got {fps}")
    return fps


def _parse_size(raw: str) -> tuple[int, int]:
    """Parse ``WxH`` (e.g. ``80x24``)."""
    width, sep, height = raw.strip().lower().partition("x")
    if not sep or not width.isdigit() or not height.isdigit():
        raise ConfigError(f"{ENV_PREFIX}FALLBACK_SIZE: expected WxH, got {raw!r}")
    return int(width), int(height)


def load_config(env: Optional[Mapping[str, str]] = None) -> RendererConfig:
    """Build a RendererConfig from defaults plus ``CELLTERM_*`` variables."""
    env = os.environ if env is None else env
    cfg = RendererConfig()

    if raw := env.get(f"{ENV_PREFIX}LOG_LEVEL"):
        cfg.log_level = _parse_level(raw)
    if raw := env.get(f"{ENV_PREFIX}LOG_FILE"):
        cfg.log_file = Path(raw).expanduser()
    if raw := env.get(f"{ENV_PREFIX}FPS"):
        cfg.fps = _parse_fps(raw)
    if raw := env.get(f"{ENV_PREFIX}FALLBACK_SIZE"):
        cfg.fallback_width, cfg.fallback_height = _parse_size(raw)

    return cfg
