from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from gitkit.constants import (
    DEFAULT_GIT_BINARY,
    DEFAULT_NETWORK_TIMEOUT,
    DEFAULT_TIMEOUT,
    PROJECT_CONFIG_FILENAME,
)
from gitkit.exceptions import ConfigError
from gitkit.logging import get_logger

__all__ = [
    "GitkitConfig",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that reads a single YAML mapping from disk."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    value=type(loaded).__name__,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class GitkitConfig(BaseSettings):
    """Runtime settings for the git execution layer.

    Attributes:
        git_binary: Executable used for every invocation.
        timeout_seconds: Per-command timeout for local operations.
        network_timeout_seconds: Per-command timeout for clone/fetch/pull/push.
        untracked_concurrency: How many untracked-file comparisons a diff may
            run at once. 1 keeps them strictly sequential.
        verbosity: Default log level when no CLI flag overrides it.
    """

    model_config = SettingsConfigDict(
        env_prefix="GITKIT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    git_binary: str = DEFAULT_GIT_BINARY
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT, gt=0.0, le=3600.0)
    network_timeout_seconds: float = Field(
        default=DEFAULT_NETWORK_TIMEOUT, gt=0.0, le=7200.0
    )
    untracked_concurrency: int = Field(default=1, ge=1, le=32)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @field_validator("git_binary")
    @classmethod
    def check_git_binary_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("git_binary cannot be empty")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order settings sources, highest priority first.

        1. Explicit init kwargs
        2. Environment variables (GITKIT_*)
        3. Project YAML config (./gitkit.yaml or the path passed to load_config)
        4. User YAML config (~/.config/gitkit/config.yaml)
        """
        project_config_path = _project_config_path.get() or (
            Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


# Set only for the duration of a load_config(config_path=...) call
_project_config_path: ContextVar[Path | None] = ContextVar(
    "gitkit_project_config_path", default=None
)


def get_user_config_path() -> Path:
    """Return ``~/.config/gitkit/config.yaml``."""
    return Path.home() / ".config" / "gitkit" / "config.yaml"


def load_config(config_path: Path | None = None) -> GitkitConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional project config file. Defaults to ./gitkit.yaml.

    Returns:
        GitkitConfig with merged configuration.

    Raises:
        ConfigError: If a config file is unreadable or a value is invalid.
    """
    if config_path is not None and not config_path.exists():
        logger.info("config_file_missing", path=str(config_path))

    token = _project_config_path.set(config_path)
    try:
        return GitkitConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
