"""Relationship Context Builder for LLM prompts.

Describes the declared relationship graph in a structured form an LLM can
use when answering questions about business data or planning API lookups.

The context includes:
- Entity types and their direct neighbours
- Each declaration with its forward and reverse lookup endpoints
- Whether the declaration has a mirroring inverse
- Traversal guidelines
"""

from __future__ import annotations

from typing import Any

from relmap.core.endpoints import (
    INTEGRATION_UPDATE_ENDPOINT,
    collection_endpoint,
    reverse_lookup_endpoint,
)
from relmap.core.types import EntityRelationship
from relmap.schema.registry import RelationshipRegistry, get_default_registry


class RelationshipContextBuilder:
    """Builds relationship context for LLM prompts."""

    def __init__(self, registry: RelationshipRegistry | None = None) -> None:
        """Initialize the context builder.

        Args:
            registry: Declarations to describe (defaults to the built-in table)
        """
        self._registry = registry if registry is not None else get_default_registry()

    def build_context(
        self,
        entities: list[str] | None = None,
        include_guidelines: bool = True,
    ) -> dict[str, Any]:
        """Build relationship context.

        Args:
            entities: Optional entity types to restrict to (None = all). A
                declaration is included when either side is listed.
            include_guidelines: Whether to include traversal guidelines

        Returns:
            Context dict suitable for LLM prompts
        """
        all_types = self._registry.entity_types()
        selected = [t for t in all_types if t in entities] if entities else all_types

        relationships = [
            rel
            for rel in self._registry
            if not entities or rel.source_entity in entities or rel.target_entity in entities
        ]
        missing = {m.relationship for m in self._registry.missing_inverses()}

        context: dict[str, Any] = {
            "entity_types": [self._build_entity_context(name) for name in selected],
            "relationships": [
                self._build_relationship_context(rel, has_inverse=rel not in missing)
                for rel in relationships
            ],
            "endpoints": {
                "collection": collection_endpoint("<entityType>"),
                "reverse_lookup": reverse_lookup_endpoint("<entityType>", "<id>", "<type>"),
                "update_related": INTEGRATION_UPDATE_ENDPOINT,
            },
        }

        if include_guidelines:
            context["guidelines"] = self._build_guidelines()

        return context

    def _build_entity_context(self, name: str) -> dict[str, Any]:
        return {
            "name": name,
            "endpoint": collection_endpoint(name),
            "related_types": self._registry.related_types(name),
            "declarations": len(self._registry.for_entity(name)),
        }

    def _build_relationship_context(
        self, rel: EntityRelationship, has_inverse: bool
    ) -> dict[str, Any]:
        """Build context for a single declaration.

        The lookup hints show both ways of reaching related records: from the
        source (filtered collection on the target) and from the target
        (reverse-lookup sub-resource on the source type).
        """
        forward = collection_endpoint(rel.target_entity)
        reverse = reverse_lookup_endpoint(
            rel.source_entity, f"<{rel.target_entity} id>", rel.target_entity
        )
        return {
            "source_entity": rel.source_entity,
            "target_entity": rel.target_entity,
            "relationship_type": str(rel.type),
            "source_field": rel.source_field,
            "target_field": rel.target_field,
            "description": rel.description,
            "has_inverse": has_inverse,
            "forward_lookup": f"GET {forward}?{rel.target_field}=<{rel.source_entity} id>",
            "reverse_lookup": f"GET {reverse}",
        }

    def _build_guidelines(self) -> list[str]:
        return [
            "Relationships are directional: source_field is on the source, target_field on the target",
            "To list targets of a source record, filter the target collection by target_field",
            "To go from a target record back to its source, use the reverse_lookup endpoint",
            "Only the first declaration between two entity types is used for lookups",
            "Declarations with has_inverse = false can only be traversed from one side reliably",
            "Updating a source_field propagates to dependent entities via update_related",
        ]


def get_relationship_context(
    registry: RelationshipRegistry | None = None,
    entities: list[str] | None = None,
    include_guidelines: bool = True,
) -> dict[str, Any]:
    """Convenience function to get relationship context.

    Args:
        registry: Declarations to describe (defaults to the built-in table)
        entities: Optional entity types to restrict to
        include_guidelines: Whether to include traversal guidelines

    Returns:
        Relationship context dict for LLM prompts
    """
    builder = RelationshipContextBuilder(registry)
    return builder.build_context(entities=entities, include_guidelines=include_guidelines)
