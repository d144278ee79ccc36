"""Cross-module integration: dependency tables and fan-out service."""

from relmap.integration.modules import (
    plan_cross_module_event,
    plan_insight_refresh,
    plan_module_sync,
)
from relmap.integration.service import IntegrationService

__all__ = [
    "IntegrationService",
    "plan_cross_module_event",
    "plan_insight_refresh",
    "plan_module_sync",
]
