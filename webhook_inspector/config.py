"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigError

DEFAULT_DATABASE_URL = "sqlite:///webhooks.db"


def _int_var(environ: Mapping[str, str], name: str, default: Optional[int], positive: bool = False) -> Optional[int]:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if positive and value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


@dataclass
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 8080
    seed_count: int = 65
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        if environ is None:
            environ = os.environ
        return cls(
            database_url=environ.get("DATABASE_URL") or DEFAULT_DATABASE_URL,
            host=environ.get("HOST") or "0.0.0.0",
            port=_int_var(environ, "PORT", 8080, positive=True),
            seed_count=_int_var(environ, "SEED_COUNT", 65, positive=True),
            seed=_int_var(environ, "SEED", None),
        )
