"""Core types for relmap.

Relationship declarations travel over the wire in camelCase (the platform
API's convention), while Python code uses snake_case attributes. All models
accept either spelling on input and dump camelCase with ``by_alias=True``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RelationshipType(StrEnum):
    """Cardinality of a relationship between a source and a target entity."""

    ONE_TO_ONE = "oneToOne"  # e.g., Product -> Inventory
    ONE_TO_MANY = "oneToMany"  # e.g., Client -> Invoices
    MANY_TO_ONE = "manyToOne"  # e.g., Invoice -> Client
    MANY_TO_MANY = "manyToMany"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid relationship type values."""
        return [t.value for t in cls]

    @property
    def inverse(self) -> RelationshipType:
        """Cardinality seen from the target's side."""
        if self is RelationshipType.ONE_TO_MANY:
            return RelationshipType.MANY_TO_ONE
        if self is RelationshipType.MANY_TO_ONE:
            return RelationshipType.ONE_TO_MANY
        return self


class EntityType(StrEnum):
    """Entity kinds known to the built-in relationship table.

    Lookups accept plain strings as well; names outside this enumeration are
    valid but match nothing in the default registry.
    """

    CLIENT = "client"
    INVOICE = "invoice"
    PAYMENT = "payment"
    CONTRACT = "contract"
    EXPENSE = "expense"
    EXPENSE_CATEGORY = "expenseCategory"
    PROJECT = "project"
    TASK = "task"
    TIME_ENTRY = "timeEntry"
    USER = "user"
    ROLE = "role"
    PRODUCT = "product"
    PRODUCT_CATEGORY = "productCategory"
    INVENTORY = "inventory"
    SUPPLIER = "supplier"

    @classmethod
    def values(cls) -> list[str]:
        """Return all known entity type names."""
        return [t.value for t in cls]

    @classmethod
    def is_known(cls, name: str) -> bool:
        """Check whether ``name`` is one of the built-in entity kinds."""
        return name in cls.values()


class WireModel(BaseModel):
    """Base for models exchanged with the platform API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump as a JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class EntityRelationship(WireModel):
    """A directional relationship declaration between two entity types."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    source_entity: str = Field(..., description="Entity type holding the reference")
    target_entity: str = Field(..., description="Entity type being referenced")
    type: RelationshipType = Field(..., description="Relationship cardinality")
    source_field: str = Field(..., description="Field on the source matched by the target")
    target_field: str = Field(..., description="Field on the target matched by the source")
    description: str = Field(default="", description="Human-readable description")

    @field_validator("source_entity", "target_entity", "source_field", "target_field")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def involves(self, entity_type: str) -> bool:
        """Check whether the entity type is this declaration's source or target."""
        return entity_type in (self.source_entity, self.target_entity)

    def connects(self, entity_type: str, other_type: str) -> bool:
        """Check whether this declaration links the two types in either direction."""
        return (self.source_entity == entity_type and self.target_entity == other_type) or (
            self.source_entity == other_type and self.target_entity == entity_type
        )

    def expected_inverse(self) -> EntityRelationship:
        """Build the declaration that would mirror this one from the target's side."""
        return EntityRelationship(
            source_entity=self.target_entity,
            target_entity=self.source_entity,
            type=self.type.inverse,
            source_field=self.target_field,
            target_field=self.source_field,
            description=f"Inverse of: {self.description}" if self.description else "",
        )

    def is_inverse_of(self, other: EntityRelationship) -> bool:
        """Check whether ``other`` mirrors this declaration (descriptions ignored)."""
        return (
            self.source_entity == other.target_entity
            and self.target_entity == other.source_entity
            and self.type == other.type.inverse
            and self.source_field == other.target_field
            and self.target_field == other.source_field
        )

    def __str__(self) -> str:
        return (
            f"{self.source_entity}.{self.source_field} -> "
            f"{self.target_entity}.{self.target_field} ({self.type})"
        )


class RelatedUpdateRequest(WireModel):
    """Body posted to the integration endpoint when a source entity changes."""

    source_entity: str
    source_id: int | str
    target_entity: str
    relationship: EntityRelationship
    updates: dict[str, Any] = Field(default_factory=dict)


class MissingInverse(WireModel):
    """A declaration with no mirroring declaration on the target's side."""

    relationship: EntityRelationship
    expected_inverse: EntityRelationship


class DuplicateDeclaration(WireModel):
    """More than one declaration for the same source -> target direction."""

    source_entity: str
    target_entity: str
    count: int


class ModuleFetchResult(BaseModel):
    """Outcome of reading one module's copy of an entity."""

    source: str
    data: Any = None
    success: bool

    @property
    def module(self) -> str:
        """Module name, taken from the endpoint path (``/api/<module>``)."""
        parts = self.source.split("/")
        return parts[2] if len(parts) > 2 else self.source


class InvalidationPlan(WireModel):
    """API query keys a client cache must refresh after a change."""

    event: str | None = None
    query_keys: list[str] = Field(default_factory=list)
    insight_keys: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when nothing needs refreshing."""
        return not self.query_keys and not self.insight_keys

    def merge(self, other: InvalidationPlan) -> InvalidationPlan:
        """Combine two plans, keeping first-seen order and dropping repeats."""
        query_keys = list(dict.fromkeys([*self.query_keys, *other.query_keys]))
        insight_keys = list(dict.fromkeys([*self.insight_keys, *other.insight_keys]))
        return InvalidationPlan(
            event=self.event or other.event,
            query_keys=query_keys,
            insight_keys=insight_keys,
        )
