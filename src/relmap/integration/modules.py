"""Cross-module dependency tables.

Each business module exposes data through several API endpoints, and client
caches keyed by those endpoints must be refreshed when related data changes.
These tables map a change (by module, data type, or named event) to the
query keys that depend on it.
"""

from __future__ import annotations

import logging

from relmap.core.types import InvalidationPlan

logger = logging.getLogger(__name__)

AI_INSIGHTS_KEY = "/api/ai-insights"

# Module -> API query keys whose data depends on that module
MODULE_QUERY_KEYS: dict[str, list[str]] = {
    "finances": ["/api/dashboard", "/api/financials", "/api/cash-flow", "/api/tax-management"],
    "invoices": ["/api/dashboard", "/api/financials", "/api/cash-flow", "/api/client-management"],
    "expenses": ["/api/dashboard", "/api/financials", "/api/cash-flow", "/api/tax-management"],
    "inventory": ["/api/dashboard", "/api/inventory-cost-analysis", "/api/financials"],
    "clients": ["/api/dashboard", "/api/invoices", "/api/contracts", "/api/client-management"],
    "employees": [
        "/api/dashboard",
        "/api/payroll-processing",
        "/api/time-tracking",
        "/api/employee-management",
    ],
    "contracts": ["/api/dashboard", "/api/invoices", "/api/client-management"],
    "banking": [
        "/api/dashboard",
        "/api/financials",
        "/api/bank-reconciliation",
        "/api/cash-flow",
    ],
    "taxes": ["/api/dashboard", "/api/financials", "/api/tax-management"],
    "calendar": ["/api/dashboard", "/api/time-tracking", "/api/client-management"],
    "timeTracking": ["/api/dashboard", "/api/payroll-processing", "/api/employee-management"],
    "payroll": ["/api/dashboard", "/api/financials", "/api/employee-management"],
    "budget": ["/api/dashboard", "/api/financials", "/api/cash-flow", "/api/budget-planning"],
}

# Data type -> AI insight kinds derived from it
INSIGHT_TYPES: dict[str, list[str]] = {
    "financial": ["financial-health", "cash-flow-forecast"],
    "inventory": ["inventory-optimization", "supply-chain"],
    "clients": ["client-relationships", "sales-forecast"],
    "expenses": ["expense-patterns", "cost-saving-opportunities"],
    "time": ["productivity-analysis", "resource-allocation"],
}

# Event -> (modules to sync, insight data type)
CROSS_MODULE_EVENTS: dict[str, tuple[list[str], str]] = {
    "invoice.created": (["finances", "clients"], "financial"),
    "expense.recorded": (["finances", "taxes"], "expenses"),
    "client.added": (["clients"], "clients"),
    "inventory.updated": (["inventory"], "inventory"),
    "time.tracked": (["timeTracking", "payroll"], "time"),
    "transaction.imported": (["banking", "finances"], "financial"),
    "contract.signed": (["contracts", "clients"], "clients"),
}

# Entity type -> endpoints holding a copy of the entity (read side)
ENTITY_DATA_SOURCES: dict[str, list[str]] = {
    "client": ["/api/clients", "/api/invoices", "/api/contracts"],
    "invoice": ["/api/invoices", "/api/clients", "/api/finances"],
    "expense": ["/api/expenses", "/api/taxes", "/api/finances"],
    "employee": ["/api/employees", "/api/time-tracking", "/api/payroll-processing"],
    "inventory": ["/api/inventory", "/api/inventory-cost-analysis", "/api/finances"],
}

# Entity type -> endpoints accepting PATCH updates for the entity (write side)
ENTITY_UPDATE_ENDPOINTS: dict[str, list[str]] = {
    "client": ["/api/clients", "/api/client-management"],
    "invoice": ["/api/invoices", "/api/finances"],
    "expense": ["/api/expenses", "/api/finances", "/api/tax-management"],
    "employee": ["/api/employees", "/api/payroll-processing"],
    "inventory": ["/api/inventory", "/api/inventory-cost-analysis"],
}

# Update endpoint -> module whose caches it feeds
ENDPOINT_MODULES: dict[str, str] = {
    "/api/clients": "clients",
    "/api/client-management": "clients",
    "/api/invoices": "invoices",
    "/api/finances": "finances",
    "/api/expenses": "expenses",
    "/api/tax-management": "taxes",
    "/api/employees": "employees",
    "/api/payroll-processing": "payroll",
    "/api/inventory": "inventory",
    "/api/inventory-cost-analysis": "inventory",
}

# Entity type -> insight data type refreshed after an update
ENTITY_INSIGHT_TYPES: dict[str, str] = {
    "client": "clients",
    "invoice": "financial",
    "expense": "expenses",
    "employee": "time",
    "inventory": "inventory",
}


def plan_module_sync(module: str) -> list[str]:
    """Query keys to refresh after data in ``module`` changed.

    Unknown modules yield an empty list.
    """
    return list(MODULE_QUERY_KEYS.get(module, []))


def plan_insight_refresh(data_type: str) -> list[str]:
    """Insight query keys to refresh after ``data_type`` changed.

    The insights overview is always included; specific insight kinds are
    added when the data type is known.
    """
    return [AI_INSIGHTS_KEY] + [
        f"{AI_INSIGHTS_KEY}/{insight}" for insight in INSIGHT_TYPES.get(data_type, [])
    ]


def plan_for_modules(
    modules: list[str], insight_type: str | None = None, event: str | None = None
) -> InvalidationPlan:
    """Combine module syncs and an optional insight refresh into one plan."""
    query_keys: dict[str, None] = {}
    for module in modules:
        for key in plan_module_sync(module):
            query_keys[key] = None

    insight_keys = plan_insight_refresh(insight_type) if insight_type else []
    return InvalidationPlan(event=event, query_keys=list(query_keys), insight_keys=insight_keys)


def plan_cross_module_event(event: str) -> InvalidationPlan:
    """Everything to refresh when a named business event occurs.

    Unknown events are logged and produce an empty plan.
    """
    mapping = CROSS_MODULE_EVENTS.get(event)
    if mapping is None:
        logger.info(f"Unhandled cross-module event: {event}")
        return InvalidationPlan(event=event)

    modules, insight_type = mapping
    return plan_for_modules(modules, insight_type, event=event)
