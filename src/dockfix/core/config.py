"""dockfix Configuration.

Environment-driven settings with Pydantic validation.

Sources (highest to lowest priority):
1. Keyword overrides passed to create_settings()
2. Environment variables (DOCKER_HOST, DOCKER_CERT_PATH, DOCKFIX_*)
3. Optional dotenv file loaded by create_settings(env_file=...)
4. Defaults defined on the model

Settings are not cached process-wide: every engine-facing operation either
receives a Settings instance or builds a fresh one, so two fixtures in the
same process may target different engines.

Usage:
    from dockfix.core.config import create_settings

    settings = create_settings()
    print(settings.docker_host)  # "unix:///var/run/docker.sock" (default)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dockfix.core.exceptions import ConfigurationError


DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """Connection, state and logging settings.

    The engine fields keep the Docker CLI variable names so an existing
    ``docker`` environment (e.g. one prepared by ``docker-machine env``)
    is picked up unchanged.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCKFIX_",
        extra="ignore",
        populate_by_name=True,
    )

    docker_host: str = Field(
        default=DEFAULT_DOCKER_HOST,
        validation_alias=AliasChoices("DOCKER_HOST", "docker_host"),
    )
    docker_cert_path: str = Field(
        default="",
        validation_alias=AliasChoices("DOCKER_CERT_PATH", "docker_cert_path"),
    )
    state_dir: str = "."
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("docker_host")
    @classmethod
    def default_empty_host(cls, v: str) -> str:
        """Treat an empty DOCKER_HOST as unset."""
        v = v.strip()
        return v or DEFAULT_DOCKER_HOST

    @field_validator("docker_cert_path", "state_dir")
    @classmethod
    def strip_path(cls, v: str) -> str:
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level is valid."""
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of {sorted(VALID_LOG_LEVELS)}"
            )
        return v.upper()

    @property
    def state_path(self) -> Path:
        """Directory holding the ``<name>.container`` identity files."""
        return Path(self.state_dir or ".").expanduser()


def create_settings(
    env_file: Optional[Path] = None,
    **overrides: Any,
) -> Settings:
    """Create a Settings instance from the current environment.

    Args:
        env_file: Optional dotenv file. Values it defines do not override
            variables already present in the environment.
        **overrides: Field values that take precedence over the environment.

    Returns:
        Configured Settings instance.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    if env_file is not None:
        env_path = Path(env_file).expanduser()
        if env_path.exists():
            load_dotenv(env_path, override=False)

    try:
        return Settings(**overrides)
    except ValidationError as e:
        errors = e.errors()
        key = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
        raise ConfigurationError(
            key=key,
            message=f"Configuration validation failed: {e}",
        ) from e
