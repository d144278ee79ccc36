"""relmap - Data relationship mapping for the business platform.

Declares how business entities (clients, invoices, contracts, expenses,
products, projects, time entries, users) reference each other, and
traverses those relationships through the platform's REST API.

Example:
    from relmap import (
        RelationshipNavigator,
        get_entity_relationships,
        get_relationship_context,
    )

    # Static lookups, no I/O
    for rel in get_entity_relationships("client"):
        print(rel)

    # API-backed traversal
    navigator = RelationshipNavigator()
    invoices = navigator.get_related_entities("client", 1, "invoice")
    navigator.update_related_entities("invoice", 5, {"clientId": 2})

    # Relationship graph as LLM prompt context
    context = get_relationship_context(entities=["client"])
"""

from relmap.core.config import ApiSettings
from relmap.core.http import ApiClient
from relmap.core.navigator import RelationshipNavigator
from relmap.core.types import (
    DuplicateDeclaration,
    EntityRelationship,
    EntityType,
    InvalidationPlan,
    MissingInverse,
    ModuleFetchResult,
    RelatedUpdateRequest,
    RelationshipType,
)
from relmap.exceptions import (
    ApiConnectionError,
    ApiError,
    ApiRequestError,
    ApiResponseError,
    RegistryLoadError,
    RelationshipNotDefinedError,
    RelmapError,
)
from relmap.integration import (
    IntegrationService,
    plan_cross_module_event,
    plan_insight_refresh,
    plan_module_sync,
)
from relmap.schema import (
    ENTITY_RELATIONSHIPS,
    RelationshipContextBuilder,
    RelationshipRegistry,
    get_default_registry,
    get_entity_relationships,
    get_relationship_context,
)

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "RelationshipRegistry",
    "RelationshipNavigator",
    "IntegrationService",
    "ApiClient",
    "ApiSettings",
    # Types
    "EntityType",
    "RelationshipType",
    "EntityRelationship",
    "RelatedUpdateRequest",
    "MissingInverse",
    "DuplicateDeclaration",
    "ModuleFetchResult",
    "InvalidationPlan",
    # Declarations and lookups
    "ENTITY_RELATIONSHIPS",
    "get_default_registry",
    "get_entity_relationships",
    # LLM context
    "RelationshipContextBuilder",
    "get_relationship_context",
    # Cross-module planning
    "plan_module_sync",
    "plan_insight_refresh",
    "plan_cross_module_event",
    # Exceptions
    "RelmapError",
    "RelationshipNotDefinedError",
    "RegistryLoadError",
    "ApiError",
    "ApiRequestError",
    "ApiConnectionError",
    "ApiResponseError",
]
