"""Tests for entity graph resolution."""

from __future__ import annotations

from typing import Any

import pytest
from structlog.testing import capture_logs

from relgen.core.errors import ErrorCode, UnsupportedEntityError
from relgen.entities import EntityGraph, ScopeSource, parse_manifest


def _graph(*entities: dict[str, Any], root: str = "ActiveRecord::Base") -> EntityGraph:
    return EntityGraph.from_manifest(parse_manifest({"root": root, "entities": list(entities)}))


class TestResolve:
    """Tests for EntityGraph.resolve."""

    def test_given_hierarchy_when_resolved_then_ancestors_nearest_first(
        self, blog_graph: EntityGraph
    ) -> None:
        # When
        entity = blog_graph.resolve("SuperCustomPost")

        # Then
        assert entity.ancestors == ("CustomPost", "Post", "ApplicationRecord", "ActiveRecord::Base")
        assert entity.superclass == "CustomPost"
        assert entity.chain[0] == "SuperCustomPost"
        assert entity.scopes == ("pinned", "published")

    def test_given_no_superclass_when_resolved_then_inherits_root(self) -> None:
        entity = _graph({"name": "Post"}).resolve("Post")
        assert entity.ancestors == ("ActiveRecord::Base",)

    def test_given_custom_root_when_resolved_then_chain_ends_there(self) -> None:
        graph = _graph({"name": "Widget"}, root="ApplicationRecord")
        assert graph.resolve("Widget").ancestors == ("ApplicationRecord",)

    def test_given_resolved_entity_when_resolved_again_then_same_object(
        self, blog_graph: EntityGraph
    ) -> None:
        assert blog_graph.resolve("Post") is blog_graph.resolve("Post")

    def test_given_unknown_superclass_when_resolved_then_rejected_and_logged(self) -> None:
        # Given
        graph = _graph({"name": "Post", "superclass": "Publishable"})

        # When
        with capture_logs() as logs, pytest.raises(UnsupportedEntityError) as exc_info:
            graph.resolve("Post")

        # Then
        assert exc_info.value.code == ErrorCode.ENTITY_UNKNOWN_SUPERCLASS
        assert exc_info.value.details == {"entity": "Post", "superclass": "Publishable"}
        assert logs[0]["event"] == "entity_rejected"
        assert logs[0]["reason"] == "unknown_superclass"
        assert logs[0]["log_level"] == "warning"

    def test_given_cycle_when_resolved_then_rejected(self) -> None:
        graph = _graph(
            {"name": "A", "superclass": "B"},
            {"name": "B", "superclass": "C"},
            {"name": "C", "superclass": "A"},
        )

        with pytest.raises(UnsupportedEntityError) as exc_info:
            graph.resolve("A")

        assert exc_info.value.code == ErrorCode.ENTITY_CYCLE
        assert exc_info.value.details["chain"] == ["A", "B", "C", "A"]

    def test_given_cycle_above_entity_when_resolved_then_rejected(self) -> None:
        """A cycle that does not pass through the entity itself still terminates."""
        graph = _graph(
            {"name": "Leaf", "superclass": "A"},
            {"name": "A", "superclass": "B"},
            {"name": "B", "superclass": "A"},
        )

        with pytest.raises(UnsupportedEntityError) as exc_info:
            graph.resolve("Leaf")

        assert exc_info.value.code == ErrorCode.ENTITY_CYCLE

    def test_given_self_parent_when_resolved_then_rejected(self) -> None:
        graph = _graph({"name": "Post", "superclass": "Post"})

        with pytest.raises(UnsupportedEntityError) as exc_info:
            graph.resolve("Post")

        assert exc_info.value.code == ErrorCode.ENTITY_CYCLE

    def test_given_unknown_name_when_resolved_then_not_found(self, blog_graph: EntityGraph) -> None:
        with pytest.raises(UnsupportedEntityError) as exc_info:
            blog_graph.resolve("Article")
        assert exc_info.value.code == ErrorCode.ENTITY_NOT_FOUND


class TestConstruction:
    """Tests for graph construction."""

    def test_given_duplicate_entity_when_built_then_rejected(self) -> None:
        with pytest.raises(UnsupportedEntityError) as exc_info:
            _graph({"name": "Post"}, {"name": "Post"})
        assert exc_info.value.code == ErrorCode.ENTITY_DUPLICATE

    def test_given_entity_named_like_root_when_built_then_rejected(self) -> None:
        with pytest.raises(UnsupportedEntityError):
            _graph({"name": "ActiveRecord::Base"})


class TestQueries:
    """Tests for graph queries."""

    def test_concrete_excludes_abstract_and_sorts(self, blog_graph: EntityGraph) -> None:
        names = [e.name for e in blog_graph.concrete()]
        assert names == ["Comment", "CustomPost", "Post", "SuperCustomPost"]

    def test_concrete_restricted_to_names(self, blog_graph: EntityGraph) -> None:
        names = [e.name for e in blog_graph.concrete(["Post", "ApplicationRecord", "Comment"])]
        assert names == ["Comment", "Post"]

    def test_scopes_at_level(self, blog_graph: EntityGraph) -> None:
        assert blog_graph.scopes_at("ApplicationRecord") == ("recent",)
        assert blog_graph.scopes_at("ActiveRecord::Base") == ()

    def test_is_scope_source(self, blog_graph: EntityGraph) -> None:
        assert isinstance(blog_graph, ScopeSource)

    def test_membership(self, blog_graph: EntityGraph) -> None:
        assert "Post" in blog_graph
        assert "Article" not in blog_graph
        assert len(blog_graph) == 5
