"""CLI context management for API access and shared state."""

from dataclasses import dataclass, field

from relmap.core.config import ApiSettings
from relmap.core.http import ApiClient
from relmap.core.navigator import RelationshipNavigator
from relmap.integration.service import IntegrationService
from relmap.schema.registry import RelationshipRegistry, get_default_registry


@dataclass
class CLIContext:
    """Shared context for CLI commands.

    Manages registry loading, API client lifecycle and output preferences.
    """

    settings: ApiSettings
    json_output: bool
    _registry: RelationshipRegistry | None = field(default=None, init=False, repr=False)
    _client: ApiClient | None = field(default=None, init=False, repr=False)

    def get_registry(self) -> RelationshipRegistry:
        """Get the declarations, loading the override file if one is configured."""
        if self._registry is None:
            if self.settings.relationships_file:
                self._registry = RelationshipRegistry.from_file(self.settings.relationships_file)
            else:
                self._registry = get_default_registry()
        return self._registry

    def get_client(self) -> ApiClient:
        """Get or create the API client (lazy initialization)."""
        if self._client is None:
            self._client = ApiClient(self.settings)
        return self._client

    def get_navigator(self, strict: bool = False) -> RelationshipNavigator:
        """Navigator over the configured registry and API client."""
        return RelationshipNavigator(self.get_registry(), self.get_client(), strict=strict)

    def get_integration(self, strict: bool = False) -> IntegrationService:
        """Integration service over the configured API client."""
        return IntegrationService(self.get_client(), strict=strict)

    def close(self) -> None:
        """Close the API client if open."""
        if self._client is not None:
            self._client.close()
            self._client = None
