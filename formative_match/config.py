"""
Configuration for formative-match.

Sources, lowest precedence first:
  1. Built-in model defaults
  2. ``config/default.toml`` (or the file passed as ``--config``)
  3. ``local.toml`` next to that file, deep-merged (gitignored)
  4. ``.env`` at the project root, loaded into the process environment
     without replacing variables that are already set
  5. ``FORMATIVE_MATCH_*`` environment variables

``load_config()`` returns a frozen ``AppConfig``.  CLI commands pass the
relevant section down (``config.api`` to the client, ``config.recommendations``
to the dashboard loader, ``config.logging`` to ``configure_logging``); nothing
below the CLI reads the environment.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ── Sections ──────────────────────────────────────────────────────────────────

class ApiConfig(BaseModel):
    """Marketplace backend connection settings."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://api.formative.example/api"
    token: Optional[str] = None
    timeout_seconds: float = 30.0

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got '{v}'.")
        try:
            host = httpx.URL(v).host
        except httpx.InvalidURL as exc:
            raise ValueError(f"base_url is not a valid URL: {exc}") from exc
        if not host:
            raise ValueError(f"base_url has no host: '{v}'.")
        return v.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {v}.")
        return v


class RecommendationsConfig(BaseModel):
    """Dashboard list sizes.

    ``carousel_limit`` is passed to the engine; the other two are the
    dashboard's own truncation policy for its non-ranked lists.
    """

    model_config = ConfigDict(frozen=True)

    carousel_limit: int = 6
    recent_limit: int = 3
    deadline_limit: int = 5

    @field_validator("carousel_limit", "recent_limit", "deadline_limit")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"List limits must be >= 0, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Where and how log records are written."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(_LOG_LEVELS)}; got '{v}'.")
        return level


class AppConfig(BaseModel):
    """Top-level configuration object handed to CLI commands."""

    model_config = ConfigDict(frozen=True)

    api: ApiConfig = ApiConfig()
    recommendations: RecommendationsConfig = RecommendationsConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loading ───────────────────────────────────────────────────────────────────

# env var -> (section, key); section None means a top-level key
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str]] = {
    "FORMATIVE_MATCH_API_BASE_URL": ("api", "base_url"),
    "FORMATIVE_MATCH_API_TOKEN":    ("api", "token"),
    "FORMATIVE_MATCH_LOG_LEVEL":    ("logging", "level"),
    "FORMATIVE_MATCH_DEBUG":        (None, "debug"),
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _project_root() -> Path:
    """Nearest ancestor of this package that holds ``pyproject.toml``."""
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "pyproject.toml").exists():
            return candidate
    return here.parent


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the effective ``AppConfig``.

    Args:
        config_path: TOML file to read.  When omitted,
            ``<project_root>/config/default.toml`` is used if it exists,
            otherwise only built-in defaults apply.

    Raises:
        FileNotFoundError: ``config_path`` was given but does not exist.
        pydantic.ValidationError: A merged value is invalid.
    """
    root = _project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    toml_path = _resolve_toml_path(root, config_path)
    raw: dict[str, Any] = {}
    if toml_path is not None:
        raw = _read_toml(toml_path)
        local_path = toml_path.with_name("local.toml")
        if local_path != toml_path and local_path.exists():
            raw = _deep_merge(raw, _read_toml(local_path))

    _apply_env_overrides(raw, os.environ)
    return AppConfig.model_validate(raw)


def _resolve_toml_path(root: Path, config_path: Optional[Path]) -> Optional[Path]:
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path
    default = root / "config" / "default.toml"
    return default if default.exists() else None


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated by ``override``, merging nested tables."""
    merged = dict(base)
    for key, val in override.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(val, dict):
            merged[key] = _deep_merge(existing, val)
        else:
            merged[key] = val
    return merged


def _apply_env_overrides(raw: dict[str, Any], environ: Any) -> None:
    """Write non-empty ``FORMATIVE_MATCH_*`` variables into ``raw`` in place."""
    for var, (section, key) in _ENV_OVERRIDES.items():
        value = environ.get(var)
        if not value:
            continue
        if key == "debug":
            value = value.strip().lower() in _TRUTHY
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = value
