"""Reads and writes that span several business modules."""

from __future__ import annotations

import logging
from typing import Any

from relmap.core.http import ApiClient
from relmap.core.types import InvalidationPlan, ModuleFetchResult
from relmap.exceptions import ApiError
from relmap.integration.modules import (
    ENDPOINT_MODULES,
    ENTITY_DATA_SOURCES,
    ENTITY_INSIGHT_TYPES,
    ENTITY_UPDATE_ENDPOINTS,
    plan_for_modules,
)

logger = logging.getLogger(__name__)


class IntegrationService:
    """Gathers an entity's data across modules and fans updates out to them.

    Each module endpoint is called independently; a failing endpoint is
    logged and skipped so the others still succeed (unless ``strict``).
    """

    def __init__(self, client: ApiClient | None = None, strict: bool = False) -> None:
        self._client = client
        self._strict = strict

    @property
    def client(self) -> ApiClient:
        """Get or create the API client."""
        if self._client is None:
            self._client = ApiClient()
        return self._client

    def fetch_module_data(self, entity_type: str, entity_id: int | str) -> list[ModuleFetchResult]:
        """Read the entity from every module that holds a copy of it."""
        results = []
        for source in ENTITY_DATA_SOURCES.get(entity_type, []):
            try:
                data = self.client.get(f"{source}/{entity_id}")
            except ApiError as e:
                if self._strict:
                    raise
                logger.error(f"Error fetching data from {source}: {e}")
                results.append(ModuleFetchResult(source=source, success=False))
                continue
            results.append(ModuleFetchResult(source=source, data=data, success=True))
        return results

    def get_integrated_entity_data(self, entity_type: str, entity_id: int | str) -> dict[str, Any]:
        """Entity data keyed by module name; failed modules are omitted.

        Unknown entity types yield an empty dict.
        """
        return {
            result.module: result.data
            for result in self.fetch_module_data(entity_type, entity_id)
            if result.success
        }

    def update_across_modules(
        self,
        entity_type: str,
        entity_id: int | str,
        updates: dict[str, Any],
    ) -> InvalidationPlan:
        """PATCH the entity in every module that accepts updates for it.

        Returns:
            Query keys and insights to refresh for the modules involved. All
            targeted modules are included, since a failed PATCH may still
            have been partially applied.
        """
        endpoints = ENTITY_UPDATE_ENDPOINTS.get(entity_type, [])
        for endpoint in endpoints:
            try:
                self.client.patch(f"{endpoint}/{entity_id}", json=updates)
            except ApiError as e:
                if self._strict:
                    raise
                logger.error(f"Error updating {endpoint}: {e}")

        modules = list(
            dict.fromkeys(ENDPOINT_MODULES[e] for e in endpoints if e in ENDPOINT_MODULES)
        )
        return plan_for_modules(modules, ENTITY_INSIGHT_TYPES.get(entity_type))
