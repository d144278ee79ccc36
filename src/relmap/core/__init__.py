"""Core components for relmap."""

from relmap.core.config import ApiSettings
from relmap.core.http import ApiClient
from relmap.core.navigator import RelationshipNavigator
from relmap.core.types import (
    EntityRelationship,
    EntityType,
    InvalidationPlan,
    RelatedUpdateRequest,
    RelationshipType,
)

__all__ = [
    "ApiSettings",
    "ApiClient",
    "RelationshipNavigator",
    "EntityType",
    "RelationshipType",
    "EntityRelationship",
    "RelatedUpdateRequest",
    "InvalidationPlan",
]
