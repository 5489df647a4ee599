"""Configuration loading and validation for sysstats_recorder."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class RecorderConfig:
    """Output file and sampling settings."""

    output_prefix: str = "./output"
    interval_ms: int = 1000

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"


@dataclass
class SysStatsConfig:
    """Top-level sysstats_recorder configuration."""

    recorder: RecorderConfig = field(default_factory=RecorderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides using SYSSTATS_RECORDER_ prefix."""
    env_map = {
        "SYSSTATS_RECORDER_OUTPUT_PREFIX": ("recorder", "output_prefix"),
        "SYSSTATS_RECORDER_INTERVAL_MS": ("recorder", "interval_ms"),
        "SYSSTATS_RECORDER_LOG_LEVEL": ("logging", "level"),
    }
    for env_key, path in env_map.items():
        value = os.environ.get(env_key)
        if value is not None:
            obj = data
            for part in path[:-1]:
                obj = obj.setdefault(part, {})
            final_key = path[-1]
            # coerce numeric values
            if final_key == "interval_ms":
                obj[final_key] = int(value)
            else:
                obj[final_key] = value
    return data


def _dict_to_config(data: dict[str, Any]) -> SysStatsConfig:
    """Convert a raw dictionary to a SysStatsConfig dataclass."""
    recorder_data = data.get("recorder") or {}
    logging_data = data.get("logging") or {}

    cfg = SysStatsConfig(
        recorder=RecorderConfig(**{
            k: v for k, v in recorder_data.items()
            if k in RecorderConfig.__dataclass_fields__
        }),
        logging=LoggingConfig(**{
            k: v for k, v in logging_data.items()
            if k in LoggingConfig.__dataclass_fields__
        }),
    )
    return cfg


def validate_config(cfg: SysStatsConfig) -> None:
    """Raise ``ValueError`` if *cfg* cannot drive a recording session."""
    interval = cfg.recorder.interval_ms
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        raise ValueError(f"interval_ms must be a positive integer, got {interval!r}")
    if not cfg.recorder.output_prefix:
        raise ValueError("output_prefix must not be empty")


def load_config(path: str | Path | None = None, *, validate: bool = True) -> SysStatsConfig:
    """Load configuration from a YAML file with environment overrides.

    Looks for ``sysstats_recorder.yaml`` in the current directory if *path*
    is None. Pass ``validate=False`` when more overrides are applied later;
    the caller then runs :func:`validate_config` itself.
    """
    data: dict[str, Any] = {}
    if path is None:
        path = Path("sysstats_recorder.yaml")
    else:
        path = Path(path)

    if path.exists():
        with open(path, encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh)
            if isinstance(loaded, dict):
                data = loaded

    data = _apply_env_overrides(data)
    cfg = _dict_to_config(data)
    if validate:
        validate_config(cfg)
    return cfg
