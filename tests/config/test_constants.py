"""Tests for config/constants.py module."""

from __future__ import annotations

from relgen.config.constants import (
    ELEMENT_CONSTANT,
    ELEMENT_CONSTANT_VALUE,
    PERSISTENCE_ROOT,
    RBI_EXTENSION,
    TYPED_SIGILS,
    WORKERS_MAX,
)


class TestFrameworkNames:
    """Tests for framework constant names."""

    def test_persistence_root(self) -> None:
        assert PERSISTENCE_ROOT == "ActiveRecord::Base"

    def test_element_constant(self) -> None:
        assert ELEMENT_CONSTANT == "Elem"
        assert ELEMENT_CONSTANT_VALUE.format(model="Post") == "type_member(fixed: Post)"


class TestOutputConventions:
    """Tests for output constants."""

    def test_extension(self) -> None:
        assert RBI_EXTENSION == ".rbi"

    def test_sigils_include_strong(self) -> None:
        assert "strong" in TYPED_SIGILS
        assert "strict" in TYPED_SIGILS

    def test_workers_max(self) -> None:
        assert WORKERS_MAX == 64
