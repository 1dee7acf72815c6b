"""Environment-driven settings for the catalog service."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parents[1]
CONFIG_DIR = BASE_DIR / "config"
DEFAULT_CATALOG_PATH = CONFIG_DIR / "catalog.yml"

_ENV_LOADED = False


def _load_env_once() -> None:
    """Populate os.environ from a local .env file if available."""

    global _ENV_LOADED
    if _ENV_LOADED:
        return

    env_paths = [BASE_DIR / ".env"]
    cwd_path = Path.cwd() / ".env"
    if cwd_path not in env_paths:
        env_paths.append(cwd_path)

    for env_path in env_paths:
        if not env_path.exists():
            continue
        try:
            for raw_line in env_path.read_text(encoding="utf-8").splitlines():
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value
        except OSError:
            logger.debug("Unable to read .env file at %s", env_path)

    _ENV_LOADED = True


def _env_float(name: str, default: float, *, low: float = 0.0, high: float = 1.0) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default
    if not low <= value <= high:
        logger.warning("Ignoring out-of-range %s=%r, using %s", name, raw, default)
        return default
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
        return default
    if value < 1:
        logger.warning("Ignoring non-positive %s=%r, using %s", name, raw, default)
        return default
    return value


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    values = tuple(part.strip() for part in raw.split(",") if part.strip())
    return values or default


@dataclass(frozen=True)
class Settings:
    catalog_path: Path = DEFAULT_CATALOG_PATH
    search_threshold: float = 0.3
    search_limit: int = 50
    related_limit: int = 5
    log_level: str = "INFO"
    cors_allow_origins: Tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls, *, load_dotenv: bool = True) -> "Settings":
        if load_dotenv:
            _load_env_once()
        defaults = cls()
        catalog_override: Optional[str] = os.getenv("CATALOG_PATH")
        catalog_path = Path(catalog_override).expanduser() if catalog_override else defaults.catalog_path
        log_level = (os.getenv("LOG_LEVEL") or defaults.log_level).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            logger.warning("Unknown LOG_LEVEL=%r, using %s", log_level, defaults.log_level)
            log_level = defaults.log_level
        return cls(
            catalog_path=catalog_path,
            search_threshold=_env_float("SEARCH_THRESHOLD", defaults.search_threshold),
            search_limit=_env_int("SEARCH_LIMIT", defaults.search_limit),
            related_limit=_env_int("RELATED_LIMIT", defaults.related_limit),
            log_level=log_level,
            cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", defaults.cors_allow_origins),
        )
