from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

_INTERVIEW_CONFIG_CACHE: dict[str, Any] | None = None
_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "interview.yaml"


def _config_path() -> Path:
    override = (os.getenv("INTERVIEW_CONFIG_PATH") or "").strip()
    return Path(override) if override else _DEFAULT_CONFIG_PATH


def get_interview_config() -> dict[str, Any]:
    """Load interview tunables from config/interview.yaml and cache them."""
    global _INTERVIEW_CONFIG_CACHE

    if _INTERVIEW_CONFIG_CACHE is not None:
        return _INTERVIEW_CONFIG_CACHE

    path = _config_path()
    if not path.exists():
        raise RuntimeError(
            f"Interview config not found at '{path}'. "
            "Expected file: config/interview.yaml"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read interview config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in interview config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid interview config '{path}': expected a top-level mapping.")

    _INTERVIEW_CONFIG_CACHE = parsed
    return _INTERVIEW_CONFIG_CACHE


def get_interview_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'session.size'."""
    if not path:
        return default

    current: Any = get_interview_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def session_size() -> int:
    return int(get_interview_value("session.size", 5))


def speak_delay_seconds() -> float:
    return float(get_interview_value("session.speak_delay_seconds", 0.5))


def timer_interval_seconds() -> float:
    return float(get_interview_value("session.timer_interval_seconds", 1.0))


def reset_interview_config_cache() -> None:
    global _INTERVIEW_CONFIG_CACHE
    _INTERVIEW_CONFIG_CACHE = None
