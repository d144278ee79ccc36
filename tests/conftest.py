"""Shared test fixtures for relmap."""

from unittest.mock import MagicMock

import pytest

from relmap.core.http import ApiClient
from relmap.core.navigator import RelationshipNavigator
from relmap.core.types import EntityRelationship, RelationshipType
from relmap.integration.service import IntegrationService
from relmap.schema.registry import RelationshipRegistry


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of the tests."""
    for name in (
        "RELMAP_API_URL",
        "RELMAP_API_TIMEOUT",
        "RELMAP_API_TOKEN",
        "RELMAP_RELATIONSHIPS_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry() -> RelationshipRegistry:
    """Registry over the built-in declarations."""
    return RelationshipRegistry.default()


@pytest.fixture
def mock_client() -> MagicMock:
    """API client double; every call returns an empty list by default."""
    client = MagicMock(spec=ApiClient)
    client.get.return_value = []
    client.post.return_value = None
    client.patch.return_value = None
    return client


@pytest.fixture
def navigator(registry: RelationshipRegistry, mock_client: MagicMock) -> RelationshipNavigator:
    """Navigator over the built-in declarations and a mocked API client."""
    return RelationshipNavigator(registry, mock_client)


@pytest.fixture
def integration(mock_client: MagicMock) -> IntegrationService:
    """Integration service over a mocked API client."""
    return IntegrationService(mock_client)


@pytest.fixture
def order_registry() -> RelationshipRegistry:
    """Small hand-built registry with a duplicated direction and a one-sided declaration."""
    return RelationshipRegistry(
        [
            EntityRelationship(
                source_entity="customer",
                target_entity="order",
                type=RelationshipType.ONE_TO_MANY,
                source_field="id",
                target_field="customerId",
                description="A customer places orders",
            ),
            EntityRelationship(
                source_entity="order",
                target_entity="customer",
                type=RelationshipType.MANY_TO_ONE,
                source_field="customerId",
                target_field="id",
                description="An order belongs to a customer",
            ),
            EntityRelationship(
                source_entity="order",
                target_entity="customer",
                type=RelationshipType.MANY_TO_ONE,
                source_field="billedTo",
                target_field="id",
                description="An order is billed to a customer",
            ),
            EntityRelationship(
                source_entity="order",
                target_entity="warehouse",
                type=RelationshipType.MANY_TO_ONE,
                source_field="warehouseId",
                target_field="id",
                description="An order ships from a warehouse",
            ),
        ]
    )
