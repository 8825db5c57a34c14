from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_HERE = Path(__file__).resolve()
_PACKAGE_ROOT = _HERE.parents[1]  # repo root when installed editable
_PARENT_ROOT = _HERE.parents[2]  # monorepo root (when present)

DEFAULT_PRIMARY_MODEL = "gemini-2.5-pro"
DEFAULT_SECONDARY_MODEL = "gemini-2.5-flash"

_PLACEHOLDER_KEYS = {
    "placeholder_api_key",
    "your_api_key_here",
    "your_api_key",
    "changeme",
}


def load_env() -> None:
    """Load .env files; values already in the environment win."""
    load_dotenv(_PACKAGE_ROOT / ".env", override=False)
    load_dotenv(_PARENT_ROOT / ".env", override=False)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number); using %s", name, raw, default)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    logger.warning("Ignoring %s=%r (not a boolean); using %s", name, raw, default)
    return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return list(default)
    return [v.strip() for v in raw.split(",") if v.strip()]


def is_live_key(api_key: str | None) -> bool:
    key = (api_key or "").strip()
    return bool(key) and key.lower() not in _PLACEHOLDER_KEYS


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str | None = None
    primary_model: str = DEFAULT_PRIMARY_MODEL
    secondary_model: str = DEFAULT_SECONDARY_MODEL
    search_grounding: bool = True
    tier_timeout_s: float = 45.0
    fallback_delay_s: float = 1.5
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"

    @property
    def has_live_key(self) -> bool:
        return is_live_key(self.gemini_api_key)

    @classmethod
    def from_env(cls) -> Settings:
        load_env()
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            primary_model=os.getenv("GEMINI_MODEL", "").strip() or DEFAULT_PRIMARY_MODEL,
            secondary_model=os.getenv("GEMINI_FALLBACK_MODEL", "").strip() or DEFAULT_SECONDARY_MODEL,
            search_grounding=_env_bool("TRUSTLENS_SEARCH_GROUNDING", True),
            tier_timeout_s=max(1.0, _env_float("TRUSTLENS_TIER_TIMEOUT_S", 45.0)),
            fallback_delay_s=max(0.0, _env_float("TRUSTLENS_FALLBACK_DELAY_S", 1.5)),
            cors_origins=_env_list("TRUSTLENS_CORS_ORIGINS", ["http://localhost:3000"]),
            log_level=(os.getenv("TRUSTLENS_LOG_LEVEL", "").strip() or "INFO").upper(),
        )
