"""Relationship declarations, registry and LLM context."""

from relmap.schema.context import RelationshipContextBuilder, get_relationship_context
from relmap.schema.declarations import ENTITY_RELATIONSHIPS
from relmap.schema.registry import (
    RelationshipRegistry,
    get_default_registry,
    get_entity_relationships,
)

__all__ = [
    "ENTITY_RELATIONSHIPS",
    "RelationshipRegistry",
    "RelationshipContextBuilder",
    "get_default_registry",
    "get_entity_relationships",
    "get_relationship_context",
]
