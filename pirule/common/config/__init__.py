"""Configuration management for pirule.

Loads environment variables using pydantic-settings for type-safe configuration.
Gateway endpoints, credentials, and submission tuning are defined here.
"""

import os
from functools import lru_cache
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_LOADED = False
_ENV_LOCK = Lock()


def _resolve_env_file() -> str | None:
    """Locate the .env file regardless of the current working directory.

    Preference order:
        1. PIRULE_ENV_FILE environment variable (explicit override)
        2. Current working directory (common for local runs)
        3. Ancestors of this file (covers package execution from a checkout)
    """
    override = os.getenv("PIRULE_ENV_FILE")
    if override:
        override_path = Path(override).expanduser()
        if override_path.is_file():
            return str(override_path)

    cwd_candidate = Path.cwd() / ".env"
    if cwd_candidate.is_file():
        return str(cwd_candidate)

    for parent in Path(__file__).resolve().parents:
        candidate = parent / ".env"
        if candidate.is_file():
            return str(candidate)

    return None


_DEFAULT_ENV_FILE = _resolve_env_file()


def ensure_env_loaded() -> None:
    """Load environment variables from disk exactly once."""
    global _ENV_LOADED

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        env_path = _DEFAULT_ENV_FILE or _resolve_env_file()
        if env_path:
            load_dotenv(env_path, override=False)

        _ENV_LOADED = True


ensure_env_loaded()


class PiruleConfig(BaseSettings):
    """Main configuration class for pirule.

    Loads the pipeline schema location, owning application id, gateway
    endpoint and submission tuning from environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=_DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== Pipeline ==========
    pipeline_schema_path: Path | None = None  # None selects the bundled SAI schema
    app_id: str = Field(default="org.foo.app", min_length=1)

    # ========== ONOS REST Gateway ==========
    onos_url: str = "http://localhost:8181/onos/v1"
    onos_user: str = "onos"
    onos_password: SecretStr = SecretStr("rocks")
    onos_timeout: float = Field(default=10.0, gt=0, le=300)

    # ========== Submission Tuning ==========
    submit_max_attempts: int = Field(default=1, ge=1, le=10)  # 1 keeps fire-and-forget
    submit_min_wait: int = Field(default=1, ge=0)
    submit_max_wait: int = Field(default=10, ge=0)

    # ========== Observability ==========
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unsupported log level: {value}")
        return level

    @field_validator("onos_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache(maxsize=1)
def get_config() -> PiruleConfig:
    """Return cached Settings instance (thread-safe, process-local).

    Returns:
        PiruleConfig: The configuration instance loaded from environment variables.
    """
    return PiruleConfig()


# Export convenience accessors
__all__ = ["PiruleConfig", "ensure_env_loaded", "get_config"]
