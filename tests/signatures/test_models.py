"""Tests for signature models and type binding."""

from __future__ import annotations

import pytest

from relgen.core.errors import InternalError
from relgen.signatures.models import MethodSignature, Parameter, ParamKind, TypeBindings

BINDINGS = TypeBindings(
    model="Post",
    relation="Post::PrivateRelation",
    association_relation="Post::PrivateAssociationRelation",
    collection_proxy="Post::PrivateCollectionProxy",
)


class TestParameter:
    """Tests for Parameter."""

    def test_default_type_is_untyped(self) -> None:
        assert Parameter("id").type == "T.untyped"


class TestTypeBindings:
    """Tests for TypeBindings.resolve."""

    @pytest.mark.parametrize(
        ("template", "expected"),
        [
            ("T::Boolean", "T::Boolean"),
            ("T.nilable({model})", "T.nilable(Post)"),
            ("T::Array[{collection_proxy}]", "T::Array[Post::PrivateCollectionProxy]"),
            ("{association_relation}", "Post::PrivateAssociationRelation"),
        ],
    )
    def test_resolves_placeholders(self, template: str, expected: str) -> None:
        assert BINDINGS.resolve(template) == expected

    def test_resolves_self_when_given(self) -> None:
        assert BINDINGS.resolve("{self}", BINDINGS.relation) == "Post::PrivateRelation"

    def test_unbound_self_is_internal_error(self) -> None:
        """A flavored type must never be bound without a flavor."""
        with pytest.raises(InternalError, match="unbound placeholder"):
            BINDINGS.resolve("{self}")


class TestMethodSignature:
    """Tests for MethodSignature."""

    def test_self_typed_by_return(self) -> None:
        assert MethodSignature("where", return_type="{self}").is_self_typed

    def test_self_typed_by_parameter(self) -> None:
        signature = MethodSignature("merge", (Parameter("other", type="{self}"),), "T::Boolean")
        assert signature.is_self_typed

    def test_void_not_self_typed(self) -> None:
        assert not MethodSignature("reload").is_self_typed

    def test_bind_substitutes_every_type(self) -> None:
        # Given
        signature = MethodSignature(
            "where",
            (Parameter("args", ParamKind.REST, "T.any({model}, {self})"),),
            "{self}",
        )

        # When
        bound = signature.bind(BINDINGS, BINDINGS.association_relation)

        # Then
        assert bound.parameters[0].type == "T.any(Post, Post::PrivateAssociationRelation)"
        assert bound.return_type == "Post::PrivateAssociationRelation"
        assert not bound.is_self_typed

    def test_bind_keeps_void(self) -> None:
        assert MethodSignature("reset").bind(BINDINGS).return_type is None
