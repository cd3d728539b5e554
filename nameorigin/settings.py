#!/usr/bin/env python3
"""Settings loader for nameorigin."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    if not APP_CONFIG_PATH.exists():
        raise FileNotFoundError(f"Missing app config: {APP_CONFIG_PATH}")
    data = yaml.safe_load(APP_CONFIG_PATH.read_text(encoding="utf-8"))
    return data or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    data = load_app_config()
    current: Any = data
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def require_setting(path: str) -> Any:
    """Get a setting that has no sensible default."""
    value = get_setting(path)
    if value is None:
        raise ValueError(f"{path} must be set in app.yaml")
    return value


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a path string relative to the package root (unless absolute)."""
    if value is None:
        raise ValueError("path value is required")
    expanded = os.path.expanduser(str(value))
    path = Path(expanded)
    if not path.is_absolute():
        base = base or PACKAGE_ROOT
        path = (base / path).resolve()
    return path


def site_url() -> str:
    """Canonical site root; SITE_URL in the environment wins."""
    return (os.environ.get("SITE_URL") or require_setting("site.url")).rstrip("/")


def site_host() -> str:
    return require_setting("site.host")


def output_dir() -> Path:
    """Directory generated pages are written to; OUT_DIR in the environment wins."""
    env = os.environ.get("OUT_DIR")
    if env:
        return resolve_path(env, base=Path.cwd())
    return resolve_path(require_setting("paths.out_dir"), base=Path.cwd())


__all__ = [
    "load_app_config",
    "get_setting",
    "require_setting",
    "resolve_path",
    "site_url",
    "site_host",
    "output_dir",
    "PACKAGE_ROOT",
    "PROJECT_ROOT",
    "APP_CONFIG_PATH",
]
