"""Traversal of declared relationships through the platform API."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from relmap.core.endpoints import INTEGRATION_UPDATE_ENDPOINT, related_entities_request
from relmap.core.http import ApiClient
from relmap.core.types import EntityRelationship, RelatedUpdateRequest
from relmap.exceptions import ApiError, RelationshipNotDefinedError
from relmap.schema.registry import RelationshipRegistry, get_default_registry

logger = logging.getLogger(__name__)


class RelationshipNavigator:
    """Fetches and updates records related through declared relationships.

    The navigator holds no entity data: reads and update propagation are
    delegated to the platform API. Request failures are logged and degraded
    (empty result for reads, dropped call for writes) unless ``strict`` is set,
    in which case they are raised as ``ApiError``.

    Example:
        navigator = RelationshipNavigator()
        invoices = navigator.get_related_entities("client", 1, "invoice")
    """

    def __init__(
        self,
        registry: RelationshipRegistry | None = None,
        client: ApiClient | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize the navigator.

        Args:
            registry: Declarations to traverse (defaults to the built-in table)
            client: API client (created from environment settings on first use)
            strict: Raise request failures instead of degrading them
        """
        self._registry = registry if registry is not None else get_default_registry()
        self._client = client
        self._strict = strict

    @property
    def registry(self) -> RelationshipRegistry:
        """Declarations being traversed."""
        return self._registry

    @property
    def client(self) -> ApiClient:
        """Get or create the API client."""
        if self._client is None:
            self._client = ApiClient()
        return self._client

    def get_entity_relationships(self, entity_type: str) -> list[EntityRelationship]:
        """Declarations where the type is the source or the target."""
        return self._registry.for_entity(entity_type)

    def get_related_entities(
        self,
        entity_type: str,
        entity_id: int | str,
        related_entity_type: str,
    ) -> list[Any]:
        """Fetch records of ``related_entity_type`` related to one entity.

        Args:
            entity_type: Type of the entity (client, invoice, ...)
            entity_id: ID of the entity
            related_entity_type: Type of related records to fetch

        Returns:
            Related records; empty if the lookup failed (non-strict mode)

        Raises:
            RelationshipNotDefinedError: If no declaration links the two types
            ApiError: If the request fails and the navigator is strict
        """
        relationship = self._registry.find_between(entity_type, related_entity_type)
        if relationship is None:
            raise RelationshipNotDefinedError(
                entity_type, related_entity_type, self._registry.related_types(entity_type)
            )

        path, params = related_entities_request(
            relationship, entity_type, entity_id, related_entity_type
        )
        try:
            data = self.client.get(path, params=params)
        except ApiError as e:
            if self._strict:
                raise
            logger.error(
                f"Error fetching related entities ({entity_type} {entity_id} -> "
                f"{related_entity_type}): {e}"
            )
            return []

        if data is None:
            return []
        if isinstance(data, list):
            return data
        return [data]

    def relationships_affected_by(
        self, entity_type: str, updates: dict[str, Any]
    ) -> list[EntityRelationship]:
        """Outgoing declarations whose source field appears in ``updates``."""
        return [rel for rel in self._registry.outgoing(entity_type) if rel.source_field in updates]

    def update_related_entities(
        self,
        entity_type: str,
        entity_id: int | str,
        updates: dict[str, Any],
    ) -> None:
        """Propagate a change on one entity to entities that depend on it.

        One integration call is sent per outgoing declaration whose source
        field was updated. A failed call is logged and the remaining
        declarations are still processed.

        A request body that cannot be built or serialized counts as a failed
        call.

        Raises:
            ApiError: If a call fails and the navigator is strict
            pydantic.ValidationError: If the request body is invalid (strict)
            PydanticSerializationError: If ``updates`` is not serializable (strict)
        """
        for relationship in self.relationships_affected_by(entity_type, updates):
            try:
                request = RelatedUpdateRequest(
                    source_entity=entity_type,
                    source_id=entity_id,
                    target_entity=relationship.target_entity,
                    relationship=relationship,
                    updates=updates,
                )
                self.client.post(INTEGRATION_UPDATE_ENDPOINT, json=request.to_wire())
            except (ApiError, ValidationError, PydanticSerializationError) as e:
                if self._strict:
                    raise
                logger.error(
                    f"Error updating related entities ({entity_type} {entity_id} -> "
                    f"{relationship.target_entity}): {e}"
                )
