"""
Process-wide configuration.

Rationale:
- Everything here is built once and never mutated; the handler receives it by reference.
- The API key is not part of Settings: it is looked up per request and a missing
  key is reported to the caller.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

API_KEY_ENV = "GEMINI_API_KEY"

DEFAULT_BUDGET_KEY = "1000-2000"

BUDGET_LABELS: Mapping[str, str] = MappingProxyType({
    "under-500": "under ₹500",
    "500-1000": "₹500–₹1,000",
    "1000-2000": "₹1,000–₹2,000",
    "2000-5000": "₹2,000–₹5,000",
    "5000-plus": "₹5,000+",
})

# Sampling settings sent with every request (not request-derived)
GENERATION_CONFIG: Mapping[str, float] = MappingProxyType({
    "temperature": 0.8,
    "topP": 0.9,
    "maxOutputTokens": 1200,
})

GIFT_COUNT = 10

# Cap for upstream excerpts echoed back in error bodies
RAW_EXCERPT_LIMIT = 2000


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {value!r}")


def _env_list(name: str) -> Tuple[str, ...]:
    value = os.getenv(name, "")
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    model: str = "gemini-1.5-flash"
    api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 30.0
    strict_validation: bool = False
    cors_origins: Tuple[str, ...] = ()
    log_level: str = "INFO"
    budget_labels: Mapping[str, str] = field(default_factory=lambda: BUDGET_LABELS)
    generation_config: Mapping[str, float] = field(default_factory=lambda: GENERATION_CONFIG)

    @property
    def endpoint(self) -> str:
        return f"{self.api_base.rstrip('/')}/models/{self.model}:generateContent"


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        model=os.getenv("GEMINI_MODEL", "").strip() or Settings.model,
        api_base=os.getenv("GEMINI_API_BASE", "").strip() or Settings.api_base,
        timeout_seconds=_env_float("BACKEND_TIMEOUT_SECONDS", Settings.timeout_seconds),
        strict_validation=_env_bool("STRICT_GIFT_VALIDATION"),
        cors_origins=_env_list("CORS_ORIGINS"),
        log_level=os.getenv("LOG_LEVEL", "").strip().upper() or Settings.log_level,
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()


def get_api_key() -> Optional[str]:
    """Read the backend credential at request time."""
    key = os.getenv(API_KEY_ENV, "").strip()
    return key or None
