"""Catalog definitions - the instance methods each capability module installs.

Method names are listed in framework source order. Every name here must be
decided by exactly one classification rule (see relgen.signatures.definitions).
"""

from relgen.catalog.inventory import MethodInventory
from relgen.catalog.models import CapabilityModule, ModuleInventory

CATALOG_VERSION = "activerecord-6.0"

inventory = MethodInventory(version=CATALOG_VERSION)

# =============================================================================
# Query building
# =============================================================================

# Multi-valued query state: accessor pairs plus the chainable method and its bang form.
_MULTI_VALUE_METHODS = (
    "includes",
    "eager_load",
    "preload",
    "select",
    "group",
    "order",
    "joins",
    "left_outer_joins",
    "references",
    "extending",
    "unscope",
    "optimizer_hints",
    "annotate",
)

_SINGLE_VALUE_METHODS = (
    "limit",
    "offset",
    "lock",
    "readonly",
    "reordering",
    "reverse_order",
    "distinct",
    "create_with",
    "skip_query_cache",
)

_CLAUSE_METHODS = ("where", "having", "from")


def _accessors() -> tuple[str, ...]:
    names: list[str] = []
    for name in _MULTI_VALUE_METHODS:
        names += [f"{name}_values", f"{name}_values="]
    for name in _SINGLE_VALUE_METHODS:
        names += [f"{name}_value", f"{name}_value="]
    for name in _CLAUSE_METHODS:
        names += [f"{name}_clause", f"{name}_clause="]
    return tuple(names)


inventory.register(
    ModuleInventory(
        module=CapabilityModule.QUERY_METHODS,
        methods=(
            *_accessors(),
            "includes",
            "includes!",
            "eager_load",
            "eager_load!",
            "preload",
            "preload!",
            "extract_associated",
            "references",
            "references!",
            "select",
            "_select!",
            "reselect",
            "reselect!",
            "group",
            "group!",
            "order",
            "order!",
            "reorder",
            "reorder!",
            "unscope",
            "unscope!",
            "joins",
            "joins!",
            "left_outer_joins",
            "left_joins",
            "left_outer_joins!",
            "where",
            "where!",
            "rewhere",
            "or",
            "or!",
            "having",
            "having!",
            "limit",
            "limit!",
            "offset",
            "offset!",
            "lock",
            "lock!",
            "none",
            "none!",
            "readonly",
            "readonly!",
            "create_with",
            "create_with!",
            "from",
            "from!",
            "distinct",
            "distinct!",
            "extending",
            "extending!",
            "extensions",
            "optimizer_hints",
            "optimizer_hints!",
            "reverse_order",
            "reverse_order!",
            "skip_query_cache!",
            "annotate",
            "annotate!",
            "arel",
            "construct_join_dependency",
            "build_subquery",
        ),
    )
)

inventory.register(
    ModuleInventory(
        module=CapabilityModule.SPAWN_METHODS,
        methods=("spawn", "merge", "merge!", "except", "only"),
    )
)

# =============================================================================
# Finders and aggregates
# =============================================================================

inventory.register(
    ModuleInventory(
        module=CapabilityModule.FINDER_METHODS,
        methods=(
            "find",
            "find_by",
            "find_by!",
            "take",
            "take!",
            "first",
            "first!",
            "last",
            "last!",
            "second",
            "second!",
            "third",
            "third!",
            "fourth",
            "fourth!",
            "fifth",
            "fifth!",
            "forty_two",
            "forty_two!",
            "third_to_last",
            "third_to_last!",
            "second_to_last",
            "second_to_last!",
            "exists?",
            "raise_record_not_found_exception!",
        ),
    )
)

inventory.register(
    ModuleInventory(
        module=CapabilityModule.CALCULATIONS,
        methods=(
            "count",
            "average",
            "minimum",
            "maximum",
            "sum",
            "calculate",
            "pluck",
            "pick",
            "ids",
        ),
    )
)

# =============================================================================
# Relation
# =============================================================================
# Methods the framework injects on the relation itself (and on the model via
# delegation) that the declaration surface covers.

inventory.register(
    ModuleInventory(
        module=CapabilityModule.RELATION,
        methods=(
            "all",
            "not",
            "new",
            "build",
            "create",
            "create!",
            "first_or_create",
            "first_or_create!",
            "first_or_initialize",
            "find_or_create_by",
            "find_or_create_by!",
            "find_or_initialize_by",
            "create_or_find_by",
            "create_or_find_by!",
            "any?",
            "many?",
            "none?",
            "one?",
            "destroy_all",
        ),
    )
)

# =============================================================================
# Associations
# =============================================================================

inventory.register(
    ModuleInventory(
        module=CapabilityModule.ASSOCIATION_RELATION,
        methods=(
            "proxy_association",
            "==",
            "build",
            "new",
            "create",
            "create!",
            "insert",
            "insert_all",
            "insert!",
            "insert_all!",
            "upsert",
            "upsert_all",
        ),
        siblings=(CapabilityModule.RELATION,),
    )
)

inventory.register(
    ModuleInventory(
        module=CapabilityModule.COLLECTION_PROXY,
        methods=(
            "target",
            "load_target",
            "find",
            "last",
            "take",
            "build",
            "new",
            "create",
            "create!",
            "replace",
            "delete_all",
            "destroy_all",
            "delete",
            "destroy",
            "calculate",
            "pluck",
            "size",
            "empty?",
            "include?",
            "proxy_association",
            "scope",
            "==",
            "records",
            "<<",
            "append",
            "prepend",
            "push",
            "concat",
            "clear",
            "reload",
            "reset",
            "reset_scope",
            "loaded?",
            "to_ary",
        ),
        siblings=(
            CapabilityModule.ASSOCIATION_RELATION,
            CapabilityModule.RELATION,
            CapabilityModule.QUERY_METHODS,
            CapabilityModule.SPAWN_METHODS,
            CapabilityModule.FINDER_METHODS,
            CapabilityModule.CALCULATIONS,
        ),
    )
)
