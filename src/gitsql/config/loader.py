"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (GITSQL__SECTION__KEY)
3. Repo config (.gitsql/config.yaml), or an explicit --config file
4. Global config (~/.config/gitsql/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from gitsql.config.constants import GLOBAL_CONFIG_FILE, REPO_CONFIG_DIR, REPO_CONFIG_FILE
from gitsql.config.models import (
    DisplayConfig,
    GitSqlConfig,
    LoggingConfig,
    QueryConfig,
    TraversalConfig,
)
from gitsql.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path(GLOBAL_CONFIG_FILE).expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.yaml_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.yaml_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source."""

    class GitSqlSettings(BaseSettings):
        """Root config. Env vars: GITSQL__LOGGING__LEVEL, GITSQL__QUERY__READ_ONLY, etc."""

        model_config = SettingsConfigDict(
            env_prefix="GITSQL__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        traversal: TraversalConfig = TraversalConfig()
        query: QueryConfig = QueryConfig()
        display: DisplayConfig = DisplayConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return GitSqlSettings


def load_config(
    repo_root: Path | None = None,
    *,
    config_file: Path | None = None,
    **kwargs: Any,
) -> GitSqlConfig:
    """Load config: defaults < global yaml < repo yaml < env vars < kwargs.

    Args:
        repo_root: Repository root to load .gitsql/config.yaml from.
                   Defaults to current working directory.
        config_file: Explicit YAML file used instead of the repo config.
                     Must exist.
        **kwargs: Override values (highest precedence), keyed by section.

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On a missing explicit file, invalid YAML syntax or
            validation errors.
    """
    if config_file is not None:
        if not config_file.is_file():
            raise ConfigError.missing_file(str(config_file))
        repo_yaml = _load_yaml(config_file)
    else:
        repo_root = repo_root or Path.cwd()
        repo_yaml = _load_yaml(repo_root / REPO_CONFIG_DIR / REPO_CONFIG_FILE)

    yaml_config = _deep_merge(_load_yaml(GLOBAL_CONFIG_PATH), repo_yaml)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_field(field, err.get("input"), err["msg"]) from e
    return GitSqlConfig.model_validate(settings.model_dump())
