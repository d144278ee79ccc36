"""Built-in relationship declarations for the business platform.

The table is maintained by hand. Bidirectional relationships are declared
from both sides; ``RelationshipRegistry.missing_inverses()`` lists the ones
that are only declared from one side.
"""

from __future__ import annotations

from relmap.core.types import EntityRelationship, EntityType, RelationshipType


def _rel(
    source: EntityType,
    target: EntityType,
    rel_type: RelationshipType,
    source_field: str,
    target_field: str,
    description: str,
) -> EntityRelationship:
    return EntityRelationship(
        source_entity=source.value,
        target_entity=target.value,
        type=rel_type,
        source_field=source_field,
        target_field=target_field,
        description=description,
    )


_ONE = RelationshipType.ONE_TO_ONE
_MANY = RelationshipType.ONE_TO_MANY
_BELONGS = RelationshipType.MANY_TO_ONE

ENTITY_RELATIONSHIPS: tuple[EntityRelationship, ...] = (
    # Clients
    _rel(EntityType.CLIENT, EntityType.INVOICE, _MANY, "id", "clientId",
         "A client can have multiple invoices"),
    _rel(EntityType.CLIENT, EntityType.CONTRACT, _MANY, "id", "clientId",
         "A client can have multiple contracts"),
    # Invoices
    _rel(EntityType.INVOICE, EntityType.CLIENT, _BELONGS, "clientId", "id",
         "An invoice belongs to a client"),
    _rel(EntityType.INVOICE, EntityType.PAYMENT, _MANY, "id", "invoiceId",
         "An invoice can have multiple payments"),
    _rel(EntityType.INVOICE, EntityType.CONTRACT, _BELONGS, "contractId", "id",
         "An invoice can be associated with a contract"),
    # Contracts
    _rel(EntityType.CONTRACT, EntityType.CLIENT, _BELONGS, "clientId", "id",
         "A contract belongs to a client"),
    _rel(EntityType.CONTRACT, EntityType.INVOICE, _MANY, "id", "contractId",
         "A contract can have multiple invoices"),
    # Expenses
    _rel(EntityType.EXPENSE, EntityType.EXPENSE_CATEGORY, _BELONGS, "categoryId", "id",
         "An expense belongs to a category"),
    _rel(EntityType.EXPENSE, EntityType.PROJECT, _BELONGS, "projectId", "id",
         "An expense can be associated with a project"),
    _rel(EntityType.EXPENSE, EntityType.USER, _BELONGS, "submittedBy", "id",
         "An expense is submitted by a user"),
    # Products and inventory
    _rel(EntityType.PRODUCT, EntityType.PRODUCT_CATEGORY, _BELONGS, "categoryId", "id",
         "A product belongs to a category"),
    _rel(EntityType.PRODUCT, EntityType.INVENTORY, _ONE, "id", "productId",
         "A product has inventory information"),
    _rel(EntityType.PRODUCT, EntityType.SUPPLIER, _BELONGS, "supplierId", "id",
         "A product comes from a supplier"),
    # Projects
    _rel(EntityType.PROJECT, EntityType.CLIENT, _BELONGS, "clientId", "id",
         "A project belongs to a client"),
    _rel(EntityType.PROJECT, EntityType.TASK, _MANY, "id", "projectId",
         "A project can have multiple tasks"),
    _rel(EntityType.PROJECT, EntityType.EXPENSE, _MANY, "id", "projectId",
         "A project can have multiple expenses"),
    # Time tracking
    _rel(EntityType.TIME_ENTRY, EntityType.PROJECT, _BELONGS, "projectId", "id",
         "A time entry is associated with a project"),
    _rel(EntityType.TIME_ENTRY, EntityType.TASK, _BELONGS, "taskId", "id",
         "A time entry can be for a specific task"),
    _rel(EntityType.TIME_ENTRY, EntityType.USER, _BELONGS, "userId", "id",
         "A time entry belongs to a user"),
    # Users
    _rel(EntityType.USER, EntityType.ROLE, _BELONGS, "roleId", "id",
         "A user has a role"),
    _rel(EntityType.USER, EntityType.TIME_ENTRY, _MANY, "id", "userId",
         "A user can have multiple time entries"),
    _rel(EntityType.USER, EntityType.EXPENSE, _MANY, "id", "submittedBy",
         "A user can submit multiple expenses"),
)
