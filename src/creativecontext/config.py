# -*- coding: utf-8 -*-
"""Settings persistence and validation."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any

from creativecontext.constants import DEFAULT_SETTINGS_FILE, LOG_LEVELS, OCR_ENGINES
from creativecontext.utils.file_utils import read_json_file, write_json_file


DEFAULT_CONFIG: dict[str, Any] = {
    "ocr": {"engine": "tesseract", "language": "eng", "tesseract_cmd": ""},
    # Kept captures are never pruned; output_dir grows with every run.
    "capture": {"output_dir": ".captures", "monitor": 1, "keep_screenshots": True},
    "permissions": {"prompt_on_first_use": True},
    "logging": {"level": "INFO", "log_dir": "."},
}

# .env key -> (section, option)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "TESSERACT_CMD": ("ocr", "tesseract_cmd"),
    "CREATIVECONTEXT_OCR_ENGINE": ("ocr", "engine"),
    "CREATIVECONTEXT_OCR_LANGUAGE": ("ocr", "language"),
}


class ConfigError(ValueError):
    """Raised when settings are invalid."""


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default config."""
    return deepcopy(DEFAULT_CONFIG)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load a simple .env file (KEY=VALUE)."""
    values: dict[str, str] = {}
    if not env_path.exists():
        return values

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        values[key] = value
    return values


def _apply_env_overrides(config: dict[str, Any], env_values: dict[str, str]) -> dict[str, Any]:
    """Apply environment-based overrides to runtime config."""
    merged = deepcopy(config)
    for env_key, (section, option) in ENV_OVERRIDES.items():
        value = env_values.get(env_key, "").strip()
        if value:
            merged.setdefault(section, {})
            merged[section][option] = value
    return merged


def validate_config(config: dict[str, Any]) -> None:
    """Validate settings used by the pipeline."""
    ocr = config.get("ocr", {})
    if ocr.get("engine") not in OCR_ENGINES:
        raise ConfigError(f"ocr.engine must be one of: {', '.join(OCR_ENGINES)}")

    language = ocr.get("language")
    if not isinstance(language, str) or not language.strip():
        raise ConfigError("ocr.language must be a non-empty language tag")

    monitor = config.get("capture", {}).get("monitor")
    if not isinstance(monitor, int) or isinstance(monitor, bool) or monitor < 0:
        raise ConfigError("capture.monitor must be an int >= 0")

    level = str(config.get("logging", {}).get("level", "")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of: {', '.join(LOG_LEVELS)}")


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load config from JSON and merge into defaults."""
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    env_values = _load_env_file(config_path.parent / ".env")
    if not config_path.exists():
        merged = _apply_env_overrides(get_default_config(), env_values)
    else:
        loaded = read_json_file(config_path)
        merged = _apply_env_overrides(_deep_merge(get_default_config(), loaded), env_values)
    validate_config(merged)
    return merged


def save_config(config: dict[str, Any], path: str | Path | None = None) -> Path:
    """Validate and save config as JSON."""
    validate_config(config)
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    write_json_file(config_path, config)
    return config_path
