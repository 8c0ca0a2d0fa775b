"""Process configuration. Every setting can be overridden with a PUZZLE_* environment variable."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Self

ENV_PREFIX = "PUZZLE_"


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("*",)
    websocket_path: str = "/ws"
    default_page: str = "/"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Build the settings from the environment (falls back to the defaults above for anything missing or invalid)."""
        env = os.environ if environ is None else environ
        defaults = cls()
        origins = _env_str(env, "CORS_ORIGINS", ",".join(defaults.cors_origins))
        return cls(
            host=_env_str(env, "HOST", defaults.host),
            port=_env_int(env, "PORT", defaults.port),
            log_level=_env_str(env, "LOG_LEVEL", defaults.log_level).upper(),
            cors_origins=tuple(
                origin.strip() for origin in origins.split(",") if origin.strip()
            ),
            websocket_path=_env_str(env, "WS_PATH", defaults.websocket_path),
            default_page=_env_str(env, "DEFAULT_PAGE", defaults.default_page),
        )
