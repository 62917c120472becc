"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    """Immutable configuration passed to the client, service and web app."""

    account: str = "develop-suda"
    api_base: str = "https://api.github.com"
    timeout: float = 10.0
    max_workers: int = 1
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    log_dir: str = "log"

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read from. If None, uses ``os.environ``.
        """
        if env is None:
            env = os.environ

        return cls(
            account=env.get("GITHUB_ACCOUNT", cls.account),
            api_base=env.get("GITHUB_API_BASE", cls.api_base).rstrip("/"),
            timeout=_float_env(env, "GITHUB_TIMEOUT", cls.timeout),
            max_workers=_int_env(env, "GITER_MAX_WORKERS", cls.max_workers),
            host=env.get("HOST", cls.host),
            port=_int_env(env, "PORT", cls.port),
            log_level=env.get("LOG_LEVEL", cls.log_level),
            log_dir=env.get("LOG_DIR", cls.log_dir),
        )
