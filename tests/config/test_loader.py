"""Tests for config/loader.py module.

Covers:
- read_yaml() function
- _deep_merge() function
- load_config() precedence and validation
"""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from relgen.config.loader import (
    GLOBAL_CONFIG_PATH,
    PROJECT_CONFIG_NAME,
    _deep_merge,
    load_config,
    read_yaml,
)
from relgen.config.models import GenerationConfig, LoggingConfig
from relgen.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Remove RELGEN__* env vars for clean tests."""
    orig = {k: v for k, v in os.environ.items() if k.startswith("RELGEN__")}
    for k in orig:
        del os.environ[k]
    yield
    for k in [k for k in os.environ if k.startswith("RELGEN__")]:
        del os.environ[k]
    os.environ.update(orig)


@pytest.fixture
def no_global(tmp_path: Path) -> Generator[None, None, None]:
    """Point the global config at a file that does not exist."""
    with patch("relgen.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
        yield


class TestReadYaml:
    """Tests for read_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert read_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads valid YAML content."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("generation:\n  workers: 4\n")

        assert read_yaml(yaml_file) == {"generation": {"workers": 4}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        """Returns empty dict for empty file."""
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert read_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            read_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_for_missing_required_file(self, tmp_path: Path) -> None:
        """A required file must exist."""
        with pytest.raises(ConfigError) as exc_info:
            read_yaml(tmp_path / "models.yaml", missing_ok=False)
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_raises_for_non_mapping_document(self, tmp_path: Path) -> None:
        """A top-level list is rejected."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- generation\n")

        with pytest.raises(ConfigError, match="top level must be a mapping"):
            read_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        """Override values replace base values."""
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        """Nested dicts are merged recursively."""
        base = {"generation": {"workers": 2, "typed_sigil": "strict"}}
        override = {"generation": {"workers": 8}}
        assert _deep_merge(base, override) == {
            "generation": {"workers": 8, "typed_sigil": "strict"}
        }

    def test_override_replaces_non_dict(self) -> None:
        """Non-dict override replaces dict base."""
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}
        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        """Base dict is not mutated."""
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


@pytest.mark.usefixtures("no_global")
class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(self, tmp_path: Path) -> None:
        """Returns default config when no config files exist."""
        config = load_config(tmp_path)

        assert config.logging.level == "INFO"
        assert config.generation.association_methods == "per_class"
        assert config.generation.workers == 1
        assert config.naming.relation_class == "{model}::PrivateRelation"

    def test_loads_project_config(self, tmp_path: Path) -> None:
        """Loads relgen.yaml from the project root."""
        (tmp_path / PROJECT_CONFIG_NAME).write_text(
            "generation:\n  association_methods: common\n  typed_sigil: strict\n"
        )

        config = load_config(tmp_path)

        assert config.generation.association_methods == "common"
        assert config.generation.typed_sigil == "strict"

    def test_project_config_overrides_global(self, tmp_path: Path) -> None:
        """Project YAML wins over global YAML, key by key."""
        global_file = tmp_path / "global.yaml"
        global_file.write_text("generation:\n  workers: 2\n  typed_sigil: strict\n")
        project = tmp_path / "project"
        project.mkdir()
        (project / PROJECT_CONFIG_NAME).write_text("generation:\n  workers: 6\n")

        with patch("relgen.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(project)

        assert config.generation.workers == 6
        assert config.generation.typed_sigil == "strict"

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        """Environment variables override YAML config."""
        (tmp_path / PROJECT_CONFIG_NAME).write_text("logging:\n  level: INFO\n")

        with patch.dict(os.environ, {"RELGEN__LOGGING__LEVEL": "WARNING"}):
            config = load_config(tmp_path)

        assert config.logging.level == "WARNING"

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        """Keyword arguments override everything."""
        config = load_config(
            tmp_path,
            logging=LoggingConfig(level="ERROR"),
            generation=GenerationConfig(workers=3),
        )

        assert config.logging.level == "ERROR"
        assert config.generation.workers == 3

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid config values."""
        (tmp_path / PROJECT_CONFIG_NAME).write_text("generation:\n  workers: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "workers" in exc_info.value.details["field"]

    def test_raises_config_error_for_unknown_placement(self, tmp_path: Path) -> None:
        """Association placement is limited to the two supported modes."""
        (tmp_path / PROJECT_CONFIG_NAME).write_text("generation:\n  association_methods: both\n")

        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestGlobalConfigPath:
    """Tests for GLOBAL_CONFIG_PATH constant."""

    def test_is_in_user_config(self) -> None:
        assert isinstance(GLOBAL_CONFIG_PATH, Path)
        assert "relgen" in str(GLOBAL_CONFIG_PATH)
