"""URL paths of the platform API used for relationship traversal."""

from __future__ import annotations

from relmap.core.types import EntityRelationship

INTEGRATION_UPDATE_ENDPOINT = "/api/integration/update-related"


def collection_endpoint(entity_type: str) -> str:
    """Collection path for an entity type (``/api/<type>s``)."""
    return f"/api/{entity_type}s"


def reverse_lookup_endpoint(entity_type: str, entity_id: int | str, related_type: str) -> str:
    """Sub-resource listing records of ``related_type`` tied to one record."""
    return f"{collection_endpoint(entity_type)}/{entity_id}/related/{related_type}"


def related_entities_request(
    relationship: EntityRelationship,
    entity_type: str,
    entity_id: int | str,
    related_entity_type: str,
) -> tuple[str, dict[str, str]]:
    """Path and query parameters for fetching records related to one entity.

    When the queried entity is the declaration's source, the related type's
    collection is filtered by the declaration's target field. Otherwise the
    request goes to the reverse-lookup sub-resource and carries no filter.

    Returns:
        (path, params) tuple; params is empty for reverse lookups
    """
    if (
        relationship.source_entity == entity_type
        and relationship.target_entity == related_entity_type
    ):
        return collection_endpoint(related_entity_type), {
            relationship.target_field: str(entity_id)
        }
    return reverse_lookup_endpoint(related_entity_type, entity_id, entity_type), {}
