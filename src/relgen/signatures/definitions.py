"""Rule definitions - the classification table for every capability module."""

import re

from relgen.catalog.models import CapabilityModule
from relgen.signatures.models import (
    SELF_TYPE,
    UNTYPED,
    MethodSignature,
    Parameter,
    ParamKind,
)
from relgen.signatures.rules import (
    Fallback,
    PatternOverride,
    Rule,
    SkipList,
    SkipPattern,
    ordered,
    override,
)

# =============================================================================
# Shared types and parameters
# =============================================================================

BOOLEAN = "T::Boolean"
COLUMN_NAME = "T.any(String, Symbol)"
OPTIONAL_NUMERIC = "T.nilable(Numeric)"
MODEL_ARRAY = "T::Array[{model}]"
RECORDS = "T.any({model}, T::Array[{model}], T::Array[{collection_proxy}])"
ATTRIBUTES_PAYLOAD = "T.nilable(T.any(::Hash, T::Array[::Hash]))"
RETURNING = "T.nilable(T.any(T::Array[Symbol], FalseClass))"
UNIQUE_BY = "T.nilable(T.any(T::Array[Symbol], Symbol))"
INSERT_RESULT = "ActiveRecord::Result"

ARGS = Parameter("args", ParamKind.REST)
BLK = Parameter("blk", ParamKind.BLOCK)
RECORD_BLOCK = Parameter(
    "block", ParamKind.BLOCK, "T.nilable(T.proc.params(record: {model}).returns(T.untyped))"
)
OBJECT_BLOCK = Parameter("block", ParamKind.BLOCK, "T.nilable(T.proc.params(object: {model}).void)")

DYNAMIC_SELF = Fallback(parameters=(ARGS, BLK), return_type=SELF_TYPE, label="chainable")
"""Chainable query method: any arguments, returns the enclosing relation."""

# =============================================================================
# Exclusions (every context)
# =============================================================================

INTERNAL_NAME = SkipPattern(
    pattern=re.compile(r"(_clause|_values?|(?<![=!<>])=)$"),
    label="internal query state",
)
"""Setters and query-state accessors. Operators such as ``==`` are not setters."""

EXCLUDED = SkipList(
    names=frozenset(
        {
            "_select!",
            "arel",
            "build_subquery",
            "construct_join_dependency",
            "extensions",
            "extract_associated",
            "raise_record_not_found_exception!",
            "reset_scope",
        }
    ),
    label="framework internal",
)

# =============================================================================
# Query building and spawning
# =============================================================================

_QUERY_RULES: list[Rule] = [INTERNAL_NAME, EXCLUDED, DYNAMIC_SELF]

# =============================================================================
# Finders
# =============================================================================

_ORDINALS = ("second", "third", "fourth", "fifth", "forty_two", "second_to_last", "third_to_last")


def _ordinal_finder(name: str) -> MethodSignature:
    # Bang variants raise instead of returning nil.
    returns = "{model}" if name.endswith("!") else "T.nilable({model})"
    return MethodSignature(name=name, return_type=returns)


_FINDER_RULES: list[Rule] = [
    override(
        "exists?",
        Parameter("conditions", default=":none"),
        returns=BOOLEAN,
    ),
    override(("find", "find_by!"), ARGS, returns=UNTYPED, declared_name="find"),
    override("find_by", ARGS, returns="T.nilable({model})"),
    override(("first", "last", "take"), Parameter("limit", default="nil"), returns=UNTYPED),
    override(("first!", "last!", "take!"), returns="{model}"),
    PatternOverride(
        pattern=re.compile(rf"^({'|'.join(_ORDINALS)})!?$"),
        build=_ordinal_finder,
        label="ordinal finder",
    ),
    INTERNAL_NAME,
    EXCLUDED,
]

# =============================================================================
# Calculations
# =============================================================================

_CALCULATION_RULES: list[Rule] = [
    override(
        ("average", "maximum", "minimum"),
        Parameter("column_name", type=COLUMN_NAME),
        returns=OPTIONAL_NUMERIC,
    ),
    override(
        "calculate",
        Parameter("operation", type="Symbol"),
        Parameter("column_name", type=COLUMN_NAME),
        returns=OPTIONAL_NUMERIC,
    ),
    override(
        ("count", "pick", "pluck"),
        Parameter("column_names", ParamKind.REST),
        returns=UNTYPED,
    ),
    override(
        "sum",
        Parameter("column_name", type=f"T.nilable({COLUMN_NAME})", default="nil"),
        Parameter(
            "block", ParamKind.BLOCK, "T.nilable(T.proc.params(record: {model}).returns(Numeric))"
        ),
        returns="Numeric",
    ),
    override("ids", returns="Array"),
    INTERNAL_NAME,
    EXCLUDED,
]

# =============================================================================
# Relation
# =============================================================================

FIND_OR_CREATE_METHODS = (
    "first_or_create",
    "first_or_create!",
    "first_or_initialize",
    "find_or_create_by",
    "find_or_create_by!",
    "find_or_initialize_by",
    "create_or_find_by",
    "create_or_find_by!",
)

_RELATION_RULES: list[Rule] = [
    override("all", returns=SELF_TYPE),
    override(
        "not",
        Parameter("opts"),
        Parameter("rest", ParamKind.REST),
        returns=SELF_TYPE,
    ),
    override(
        ("new", "build", "create", "create!"),
        Parameter("attributes", type=ATTRIBUTES_PAYLOAD, default="nil"),
        OBJECT_BLOCK,
        returns="{model}",
    ),
    override(
        FIND_OR_CREATE_METHODS,
        Parameter("attributes"),
        OBJECT_BLOCK,
        returns="{model}",
    ),
    override(("any?", "many?", "none?", "one?"), RECORD_BLOCK, returns=BOOLEAN),
    override("destroy_all", returns=MODEL_ARRAY),
    INTERNAL_NAME,
    EXCLUDED,
]

# =============================================================================
# Association relation and collection proxy
# =============================================================================


def _bulk_write(names: tuple[str, ...], payload: str, *, unique_by: bool) -> Rule:
    params = [
        Parameter("attributes", type=payload),
        Parameter("returning", ParamKind.KEYWORD, RETURNING, default="nil"),
    ]
    if unique_by:
        params.append(Parameter("unique_by", ParamKind.KEYWORD, UNIQUE_BY, default="nil"))
    return override(names, *params, returns=INSERT_RESULT)


_ASSOCIATION_RULES: list[Rule] = [
    _bulk_write(("insert", "upsert"), "::Hash", unique_by=True),
    _bulk_write(("insert!",), "::Hash", unique_by=False),
    _bulk_write(("insert_all", "upsert_all"), "T::Array[::Hash]", unique_by=True),
    _bulk_write(("insert_all!",), "T::Array[::Hash]", unique_by=False),
    override(
        ("<<", "append", "concat", "prepend", "push"),
        Parameter("records", ParamKind.REST, RECORDS),
        returns="{collection_proxy}",
    ),
    override(
        ("delete", "destroy"),
        Parameter("records", ParamKind.REST, RECORDS),
        returns=MODEL_ARRAY,
    ),
    override("replace", Parameter("other_array", type=RECORDS), returns=None),
    override("clear", returns="{collection_proxy}"),
    override("scope", returns="{association_relation}"),
    override(("target", "load_target", "records", "to_ary"), returns=MODEL_ARRAY),
    override("==", Parameter("other"), returns=BOOLEAN),
    override(
        "delete_all",
        Parameter("dependent", type="T.nilable(Symbol)", default="nil"),
        returns="Integer",
    ),
    override(("reload", "reset"), returns=None),
    override("proxy_association", returns=UNTYPED),
    override("size", returns="Integer"),
    override(("empty?", "loaded?"), returns=BOOLEAN),
    override("include?", Parameter("record"), returns=BOOLEAN),
    INTERNAL_NAME,
    EXCLUDED,
]

# Association relations and collection proxies redefine creation, finder and
# aggregate methods. Those keep their relation signatures.
_INHERITED_RULES: list[Rule] = [*_RELATION_RULES, *_FINDER_RULES, *_CALCULATION_RULES]

# =============================================================================
# Rule book
# =============================================================================

RULE_BOOK: dict[CapabilityModule, tuple[Rule, ...]] = {
    CapabilityModule.QUERY_METHODS: ordered(_QUERY_RULES),
    CapabilityModule.SPAWN_METHODS: ordered(_QUERY_RULES),
    CapabilityModule.FINDER_METHODS: ordered(_FINDER_RULES),
    CapabilityModule.CALCULATIONS: ordered(_CALCULATION_RULES),
    CapabilityModule.RELATION: ordered(_RELATION_RULES),
    CapabilityModule.ASSOCIATION_RELATION: ordered([*_ASSOCIATION_RULES, *_INHERITED_RULES]),
    CapabilityModule.COLLECTION_PROXY: ordered([*_ASSOCIATION_RULES, *_INHERITED_RULES]),
}

SCOPE_RULE = DYNAMIC_SELF
"""Named scopes are user methods: they always get the chainable signature."""
