"""Tests for viewer configuration and logging setup."""

from __future__ import annotations

import json
import logging

from outliners.config import ViewerConfig, load_config
from outliners.constants import (
    DEFAULT_ARROW_COLOR,
    DEFAULT_FADED_OPACITY,
    DEFAULT_SHAKE_DURATION_MS,
)
from outliners.logging_config import LOGGER_NAMESPACE, setup_logging


def test_missing_config_is_written_with_defaults(tmp_path):
    path = tmp_path / "outliners_config.json"
    config, created = load_config(path)
    assert created
    assert config == ViewerConfig(path=path)
    assert json.loads(path.read_text(encoding="utf-8")) == ViewerConfig().to_dict()


def test_existing_config_is_read(tmp_path):
    path = tmp_path / "outliners_config.json"
    path.write_text(
        json.dumps(
            {
                "arrow_color": "#112233",
                "hover_color": "orange",
                "faded_opacity": 0.5,
                "shake_duration_ms": 250,
                "log_level": "debug",
            }
        ),
        encoding="utf-8",
    )
    config, created = load_config(path)
    assert not created
    assert config.arrow_color == "#112233"
    assert config.hover_color == "orange"
    assert config.faded_opacity == 0.5
    assert config.shake_duration_ms == 250
    assert config.log_level == "DEBUG"


def test_malformed_config_falls_back_with_warning(tmp_path, caplog):
    path = tmp_path / "outliners_config.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="outliners.config"):
        config, created = load_config(path)
    assert not created
    assert config == ViewerConfig(path=path)
    assert "malformed" in caplog.text


def test_bad_values_fall_back_individually(tmp_path, caplog):
    path = tmp_path / "outliners_config.json"
    path.write_text(
        json.dumps(
            {
                "arrow_color": "not-a-colour",
                "faded_opacity": 7,
                "shake_duration_ms": "soon",
                "log_level": "LOUD",
            }
        ),
        encoding="utf-8",
    )
    with caplog.at_level(logging.WARNING, logger="outliners.config"):
        config, _created = load_config(path)
    assert config.arrow_color == DEFAULT_ARROW_COLOR
    assert config.faded_opacity == 1.0
    assert config.shake_duration_ms == DEFAULT_SHAKE_DURATION_MS
    assert config.log_level == "INFO"
    assert len(caplog.records) == 3


def test_non_object_config_uses_defaults(tmp_path):
    path = tmp_path / "outliners_config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    config, _created = load_config(path)
    assert config.faded_opacity == DEFAULT_FADED_OPACITY


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "outliners.log"
    logger = setup_logging("debug", str(log_file))
    assert logger.name == LOGGER_NAMESPACE
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    logging.getLogger("outliners.world").info("hello from the world")
    for handler in logger.handlers:
        handler.flush()
    assert "outliners.world - INFO - hello from the world" in log_file.read_text(encoding="utf-8")

    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    logger.handlers.clear()
