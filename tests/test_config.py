"""Tests for the configuration module."""

import os
import tempfile

import pytest
import yaml

from sysstats_recorder.config import SysStatsConfig, load_config, validate_config


def test_load_config_defaults():
    """Loading from a non-existent file returns defaults."""
    cfg = load_config("/tmp/nonexistent_sysstats_recorder.yaml")
    assert isinstance(cfg, SysStatsConfig)
    assert cfg.recorder.output_prefix == "./output"
    assert cfg.recorder.interval_ms == 1000
    assert cfg.recorder.interval_seconds == 1.0
    assert cfg.logging.level == "INFO"


def test_load_config_from_yaml():
    """Loading from a YAML file populates values and ignores unknown keys."""
    data = {
        "recorder": {"output_prefix": "/var/tmp/host", "interval_ms": 500, "bogus": 1},
        "logging": {"level": "DEBUG"},
    }
    with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as fh:
        yaml.dump(data, fh)
        path = fh.name

    try:
        cfg = load_config(path)
        assert cfg.recorder.output_prefix == "/var/tmp/host"
        assert cfg.recorder.interval_ms == 500
        assert cfg.recorder.interval_seconds == 0.5
        assert cfg.logging.level == "DEBUG"
    finally:
        os.unlink(path)


def test_env_override(monkeypatch):
    """Environment variables override YAML values."""
    data = {"recorder": {"interval_ms": 2000}}
    with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as fh:
        yaml.dump(data, fh)
        path = fh.name

    try:
        monkeypatch.setenv("SYSSTATS_RECORDER_INTERVAL_MS", "250")
        monkeypatch.setenv("SYSSTATS_RECORDER_OUTPUT_PREFIX", "./env-out")
        cfg = load_config(path)
        assert cfg.recorder.interval_ms == 250
        assert cfg.recorder.output_prefix == "./env-out"
    finally:
        os.unlink(path)


@pytest.mark.parametrize("interval", [0, -5])
def test_non_positive_interval_rejected(interval):
    with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as fh:
        yaml.dump({"recorder": {"interval_ms": interval}}, fh)
        path = fh.name
    try:
        with pytest.raises(ValueError):
            load_config(path)
    finally:
        os.unlink(path)


def test_load_without_validation_defers_checks(monkeypatch):
    monkeypatch.setenv("SYSSTATS_RECORDER_INTERVAL_MS", "0")
    cfg = load_config("/tmp/nonexistent_sysstats_recorder.yaml", validate=False)
    assert cfg.recorder.interval_ms == 0
    with pytest.raises(ValueError):
        validate_config(cfg)
