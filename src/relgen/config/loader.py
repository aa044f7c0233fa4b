"""Configuration loading with pydantic-settings.

Sources, highest precedence first:
1. Direct kwargs
2. Environment variables (RELGEN__SECTION__KEY)
3. Project config (relgen.yaml beside the manifest)
4. Global config (~/.config/relgen/config.yaml)
5. Built-in defaults

The two YAML files are merged key by key before pydantic sees them, so a
project file only needs the keys it changes.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from relgen.config.models import (
    GenerationConfig,
    LoggingConfig,
    NamingConfig,
    RelgenConfig,
)
from relgen.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/relgen/config.yaml").expanduser()
PROJECT_CONFIG_NAME = "relgen.yaml"


def read_yaml(path: Path, *, missing_ok: bool = True) -> dict[str, Any]:
    """Read a YAML mapping. An empty document reads as ``{}``.

    Raises:
        ConfigError: Missing file (unless ``missing_ok``), invalid YAML, or a
            document whose top level is not a mapping.
    """
    if not path.is_file():
        if missing_ok:
            return {}
        raise ConfigError.file_not_found(str(path))
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class _LayeredYamlSource(PydanticBaseSettingsSource):
    """Settings source over the merged global and project YAML."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return self._data


def _settings_class(yaml_data: dict[str, Any]) -> type[BaseSettings]:
    """Build a settings class bound to one load's YAML data."""

    class RelgenSettings(BaseSettings):
        """Env vars: RELGEN__LOGGING__LEVEL, RELGEN__GENERATION__WORKERS, etc."""

        model_config = SettingsConfigDict(
            env_prefix="RELGEN__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        generation: GenerationConfig = GenerationConfig()
        naming: NamingConfig = NamingConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # First source wins.
            return (init_settings, env_settings, _LayeredYamlSource(settings_cls, yaml_data))

    return RelgenSettings


def load_config(project_root: Path | None = None, **kwargs: Any) -> RelgenConfig:
    """Resolve configuration for a project directory.

    Args:
        project_root: Directory holding relgen.yaml. Defaults to the working directory.
        **kwargs: Section overrides, e.g. ``generation=GenerationConfig(workers=4)``.

    Raises:
        ConfigError: Unreadable YAML or a value that fails validation.
    """
    project_root = project_root or Path.cwd()
    yaml_data = _deep_merge(
        read_yaml(GLOBAL_CONFIG_PATH),
        read_yaml(project_root / PROJECT_CONFIG_NAME),
    )

    try:
        settings = _settings_class(yaml_data)(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return RelgenConfig.model_validate(settings.model_dump())
