"""Configuration constants.

Framework names and output conventions that are not user-configurable.
For configurable values, see models.py (GenerationConfig, NamingConfig).
"""

# =============================================================================
# Framework Names
# =============================================================================

PERSISTENCE_ROOT = "ActiveRecord::Base"
"""Default root persistence class. Ancestor walks stop here."""

RELATION_SUPERCLASS = "ActiveRecord::Relation"
ASSOCIATION_RELATION_SUPERCLASS = "ActiveRecord::AssociationRelation"
COLLECTION_PROXY_SUPERCLASS = "ActiveRecord::Associations::CollectionProxy"

# =============================================================================
# Output Conventions
# =============================================================================

ELEMENT_CONSTANT = "Elem"
"""Type-parameter constant binding a synthesized class to its entity."""

ELEMENT_CONSTANT_VALUE = "type_member(fixed: {model})"

RBI_EXTENSION = ".rbi"

TYPED_SIGILS = ("ignore", "false", "true", "strict", "strong")
"""Valid Sorbet sigils for the file header."""

# =============================================================================
# Limits
# =============================================================================

WORKERS_MAX = 64
"""Upper bound on assembly worker threads."""
