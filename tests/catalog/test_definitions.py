"""Tests for the static activerecord catalog."""

from __future__ import annotations

from relgen.catalog import CATALOG_VERSION, CapabilityModule, inventory


class TestCatalogContents:
    """The registered catalog covers every capability module."""

    def test_version_exposed(self) -> None:
        assert CATALOG_VERSION == "activerecord-6.0"
        assert inventory.version == CATALOG_VERSION

    def test_every_module_registered(self) -> None:
        assert set(inventory.modules()) == set(CapabilityModule)

    def test_query_methods_include_state_accessors(self) -> None:
        """Query state accessors are catalogued so they can be excluded."""
        names = inventory.instance_methods(CapabilityModule.QUERY_METHODS)
        assert {"where", "where!", "where_clause", "where_clause=", "order_values"} <= names
        assert {"limit_value", "limit_value=", "arel"} <= names

    def test_finder_methods(self) -> None:
        names = inventory.instance_methods(CapabilityModule.FINDER_METHODS)
        assert {"find", "find_by", "find_by!", "exists?", "forty_two!"} <= names


class TestAdditions:
    """Association-only and proxy-only methods are isolated by diffing."""

    def test_association_relation_additions(self) -> None:
        added = inventory.additions(CapabilityModule.ASSOCIATION_RELATION)

        assert "build" not in added
        assert added == [
            "proxy_association",
            "==",
            "insert",
            "insert_all",
            "insert!",
            "insert_all!",
            "upsert",
            "upsert_all",
        ]

    def test_collection_proxy_additions(self) -> None:
        added = inventory.additions(CapabilityModule.COLLECTION_PROXY)

        # Inherited from sibling modules
        for name in ("find", "last", "take", "build", "calculate", "pluck", "destroy_all", "=="):
            assert name not in added
        # Proxy-only
        for name in ("<<", "target", "load_target", "replace", "delete_all", "size", "to_ary"):
            assert name in added
