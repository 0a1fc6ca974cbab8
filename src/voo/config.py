from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Mapping, Optional

from dotenv import load_dotenv

from voo._exceptions import ConfigError

__all__ = ["Provider", "Settings", "get_api_key", "DEFAULT_MODELS"]


class Provider(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


_ENV_VARS: Final[dict[Provider, str]] = {
    Provider.OPENAI: "OPENAI_API_KEY",
    Provider.ANTHROPIC: "ANTHROPIC_API_KEY",
    Provider.GEMINI: "GEMINI_API_KEY",
}

DEFAULT_MODELS: Final[dict[Provider, str]] = {
    Provider.OPENAI: "gpt-4.1-mini",
    Provider.ANTHROPIC: "claude-3-5-haiku-latest",
    Provider.GEMINI: "gemini-2.0-flash",
}


def get_api_key(provider: Provider, env: Optional[Mapping[str, str]] = None) -> str:
    """Return the API key for *provider* or raise ConfigError."""
    if env is None:
        load_dotenv()
        env = os.environ

    try:
        env_var = _ENV_VARS[Provider(provider)]
    except (KeyError, ValueError):
        raise ConfigError(f"No config for {provider!s}") from None

    key = env.get(env_var)
    if not key:
        raise ConfigError(f"{env_var} missing")
    return key


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{name} must be at least 1, got {value}")
    return value


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Process-level configuration, read once at startup.

    Every field can be set through a ``VOO_*`` environment variable (or a
    ``.env`` file); command-line flags override them.
    """

    provider: Provider = Provider.GEMINI
    model: str = DEFAULT_MODELS[Provider.GEMINI]
    log_level: str = "WARNING"
    max_rounds: int = 10
    timeout: float = 60.0
    max_attempts: int = 3
    root: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        if env is None:
            load_dotenv()
            env = os.environ

        raw_provider = (env.get("VOO_PROVIDER") or Provider.GEMINI.value).lower()
        try:
            provider = Provider(raw_provider)
        except ValueError:
            raise ConfigError(f"Unsupported provider: {raw_provider}") from None

        log_level = (env.get("VOO_LOG_LEVEL") or "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"Unknown log level: {log_level}")

        return cls(
            provider=provider,
            model=env.get("VOO_MODEL") or DEFAULT_MODELS[provider],
            log_level=log_level,
            max_rounds=_int(env, "VOO_MAX_ROUNDS", cls.max_rounds),
            timeout=_float(env, "VOO_TIMEOUT", cls.timeout),
            max_attempts=_int(env, "VOO_MAX_ATTEMPTS", cls.max_attempts),
            root=env.get("VOO_ROOT") or None,
        )
