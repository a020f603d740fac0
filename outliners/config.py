from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict, dataclass
from pathlib import Path

from PyQt6.QtGui import QColor

from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ARROW_COLOR,
    DEFAULT_FADED_OPACITY,
    DEFAULT_HOVER_COLOR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SHAKE_DURATION_MS,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ViewerConfig:
    arrow_color: str = DEFAULT_ARROW_COLOR
    hover_color: str = DEFAULT_HOVER_COLOR
    faded_opacity: float = DEFAULT_FADED_OPACITY
    shake_duration_ms: int = DEFAULT_SHAKE_DURATION_MS
    log_level: str = DEFAULT_LOG_LEVEL
    path: Path | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("path")
        return data


def load_config(config_path: Path | None = None) -> tuple[ViewerConfig, bool]:
    if config_path is None:
        config_path = app_dir() / CONFIG_FILE_NAME
    created = False
    if not config_path.exists():
        try:
            config_path.write_text(
                json.dumps(ViewerConfig().to_dict(), indent=2), encoding="utf-8"
            )
            created = True
            logger.info("Created %s with default settings", config_path)
        except OSError as exc:
            logger.warning("Could not write %s: %s", config_path, exc)
        return ViewerConfig(path=config_path), created
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("%s is malformed, using defaults: %s", config_path, exc)
        return ViewerConfig(path=config_path), created
    if not isinstance(raw, dict):
        logger.warning("%s does not hold an object, using defaults", config_path)
        return ViewerConfig(path=config_path), created

    arrow_color = _color(raw.get("arrow_color"), DEFAULT_ARROW_COLOR, "arrow_color")
    hover_color = _color(raw.get("hover_color"), DEFAULT_HOVER_COLOR, "hover_color")
    faded_opacity = raw.get("faded_opacity", DEFAULT_FADED_OPACITY)
    try:
        faded_opacity = float(faded_opacity)
    except (TypeError, ValueError):
        logger.warning("Invalid faded_opacity %r, using default", faded_opacity)
        faded_opacity = DEFAULT_FADED_OPACITY
    faded_opacity = max(0.0, min(1.0, faded_opacity))
    shake_duration = raw.get("shake_duration_ms", DEFAULT_SHAKE_DURATION_MS)
    try:
        shake_duration = int(shake_duration)
    except (TypeError, ValueError):
        logger.warning("Invalid shake_duration_ms %r, using default", shake_duration)
        shake_duration = DEFAULT_SHAKE_DURATION_MS
    if shake_duration < 0:
        shake_duration = DEFAULT_SHAKE_DURATION_MS
    log_level = str(raw.get("log_level", DEFAULT_LOG_LEVEL) or "").strip().upper()
    if log_level not in LOG_LEVELS:
        logger.warning("Invalid log_level %r, using default", raw.get("log_level"))
        log_level = DEFAULT_LOG_LEVEL
    config = ViewerConfig(
        arrow_color=arrow_color,
        hover_color=hover_color,
        faded_opacity=faded_opacity,
        shake_duration_ms=shake_duration,
        log_level=log_level,
        path=config_path,
    )
    return config, created


def _color(value: object, default: str, name: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    if not QColor(text).isValid():
        logger.warning("Invalid %s %r, using default", name, value)
        return default
    return text


def app_dir() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    argv_path = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if argv_path is not None and argv_path.is_file():
        return argv_path.resolve().parent
    return Path.cwd()
