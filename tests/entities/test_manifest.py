"""Tests for manifest parsing and loading."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from relgen.core.errors import ConfigError, ErrorCode
from relgen.entities.manifest import load_manifest, parse_manifest


class TestParseManifest:
    """Tests for parse_manifest."""

    def test_given_minimal_entry_when_parsed_then_defaults_applied(self) -> None:
        # When
        manifest = parse_manifest({"entities": [{"name": "Post"}]})

        # Then
        assert manifest.root == "ActiveRecord::Base"
        entity = manifest.entities[0]
        assert entity.superclass is None
        assert entity.abstract is False
        assert entity.scopes == []

    def test_given_qualified_names_when_parsed_then_accepted(self) -> None:
        manifest = parse_manifest(
            {"entities": [{"name": "Blog::Post", "superclass": "::ApplicationRecord"}]}
        )
        assert manifest.entities[0].name == "Blog::Post"

    @pytest.mark.parametrize("name", ["post", "Blog::", "Blog post", ""])
    def test_given_invalid_entity_name_when_parsed_then_config_error(self, name: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            parse_manifest({"entities": [{"name": name}]})
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "entities.0.name" in exc_info.value.details["field"]

    @pytest.mark.parametrize("scope", ["Published", "by-date", "1st", ""])
    def test_given_invalid_scope_name_when_parsed_then_config_error(self, scope: str) -> None:
        with pytest.raises(ConfigError):
            parse_manifest({"entities": [{"name": "Post", "scopes": [scope]}]})

    @pytest.mark.parametrize("scope", ["published", "_private", "visible?", "archive!", "by_id2"])
    def test_given_method_like_scope_when_parsed_then_accepted(self, scope: str) -> None:
        manifest = parse_manifest({"entities": [{"name": "Post", "scopes": [scope]}]})
        assert manifest.entities[0].scopes == [scope]


class TestLoadManifest:
    """Tests for load_manifest."""

    def test_given_yaml_file_when_loaded_then_parsed(
        self, write_manifest: Callable[[str], Path]
    ) -> None:
        # Given
        path = write_manifest(
            "root: ActiveRecord::Base\n"
            "entities:\n"
            "  - name: ApplicationRecord\n"
            "    abstract: true\n"
            "  - name: Post\n"
            "    superclass: ApplicationRecord\n"
            "    scopes: [published]\n"
        )

        # When
        manifest = load_manifest(path)

        # Then
        assert [e.name for e in manifest.entities] == ["ApplicationRecord", "Post"]
        assert manifest.entities[1].scopes == ["published"]

    def test_given_missing_file_when_loaded_then_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_manifest(tmp_path / "missing.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_given_invalid_yaml_when_loaded_then_parse_error(
        self, write_manifest: Callable[[str], Path]
    ) -> None:
        path = write_manifest("entities: [unclosed")
        with pytest.raises(ConfigError) as exc_info:
            load_manifest(path)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_given_list_at_top_level_when_loaded_then_parse_error(
        self, write_manifest: Callable[[str], Path]
    ) -> None:
        path = write_manifest("- name: Post\n")
        with pytest.raises(ConfigError, match="top level must be a mapping"):
            load_manifest(path)

    def test_given_empty_file_when_loaded_then_empty_manifest(
        self, write_manifest: Callable[[str], Path]
    ) -> None:
        assert load_manifest(write_manifest("")).entities == []
