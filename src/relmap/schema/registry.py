"""Relationship registry: the immutable declaration table and its lookups."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable, Iterator
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from relmap.core.types import DuplicateDeclaration, EntityRelationship, MissingInverse
from relmap.exceptions import RegistryLoadError
from relmap.schema.declarations import ENTITY_RELATIONSHIPS


class RelationshipRegistry:
    """Read-only view over a set of relationship declarations.

    The registry owns no entity data. Declarations are stored in a tuple in
    the order they were given; every lookup preserves that order, and
    ``find_between`` resolves to the first matching declaration.
    """

    def __init__(self, relationships: Iterable[EntityRelationship]) -> None:
        self._relationships: tuple[EntityRelationship, ...] = tuple(relationships)

    @classmethod
    def default(cls) -> RelationshipRegistry:
        """Registry holding the built-in business platform declarations."""
        return cls(ENTITY_RELATIONSHIPS)

    @classmethod
    def from_records(
        cls, records: list[dict[str, Any]], source: str = "<records>"
    ) -> RelationshipRegistry:
        """Build a registry from wire-form (camelCase) or snake_case dicts.

        Raises:
            RegistryLoadError: If the records are not a list or any record is invalid
        """
        if not isinstance(records, list):
            raise RegistryLoadError(source, "expected a JSON array of relationship objects")

        relationships = []
        for index, record in enumerate(records):
            try:
                relationships.append(EntityRelationship.model_validate(record))
            except PydanticValidationError as e:
                raise RegistryLoadError(source, f"record {index} is invalid: {e}") from e
        return cls(relationships)

    @classmethod
    def from_file(cls, path: str | Path) -> RelationshipRegistry:
        """Load declarations from a JSON file containing an array of records.

        Raises:
            RegistryLoadError: If the file is missing, unreadable or invalid
        """
        file_path = Path(path)
        if not file_path.exists():
            raise RegistryLoadError(str(path), "file not found")

        try:
            with file_path.open("r", encoding="utf-8") as f:
                records = json.load(f)
        except json.JSONDecodeError as e:
            raise RegistryLoadError(str(path), f"invalid JSON: {e.msg}") from e
        except UnicodeDecodeError as e:
            raise RegistryLoadError(str(path), f"not valid UTF-8: {e.reason}") from e
        except OSError as e:
            raise RegistryLoadError(str(path), str(e)) from e

        return cls.from_records(records, source=str(path))

    @property
    def relationships(self) -> tuple[EntityRelationship, ...]:
        """All declarations in declaration order."""
        return self._relationships

    def __iter__(self) -> Iterator[EntityRelationship]:
        return iter(self._relationships)

    def __len__(self) -> int:
        return len(self._relationships)

    def __repr__(self) -> str:
        return f"RelationshipRegistry({len(self._relationships)} declarations)"

    # === Lookups ===

    def for_entity(self, entity_type: str) -> list[EntityRelationship]:
        """Every declaration where the type is the source or the target.

        Unknown types yield an empty list.
        """
        return [rel for rel in self._relationships if rel.involves(entity_type)]

    def outgoing(self, entity_type: str) -> list[EntityRelationship]:
        """Declarations where the type is the source."""
        return [rel for rel in self._relationships if rel.source_entity == entity_type]

    def incoming(self, entity_type: str) -> list[EntityRelationship]:
        """Declarations where the type is the target."""
        return [rel for rel in self._relationships if rel.target_entity == entity_type]

    def find_between(self, entity_type: str, other_type: str) -> EntityRelationship | None:
        """First declaration linking the two types, in either direction."""
        for rel in self._relationships:
            if rel.connects(entity_type, other_type):
                return rel
        return None

    def related_types(self, entity_type: str) -> list[str]:
        """Types reachable from ``entity_type`` through a single declaration."""
        related: dict[str, None] = {}
        for rel in self.for_entity(entity_type):
            other = rel.target_entity if rel.source_entity == entity_type else rel.source_entity
            related[other] = None
        return list(related)

    def entity_types(self) -> list[str]:
        """Every type named in any declaration, in order of first appearance."""
        names: dict[str, None] = {}
        for rel in self._relationships:
            names[rel.source_entity] = None
            names[rel.target_entity] = None
        return list(names)

    # === Consistency checks ===

    def missing_inverses(self) -> list[MissingInverse]:
        """Declarations with no mirroring declaration from the target's side."""
        missing = []
        for rel in self._relationships:
            if not any(rel.is_inverse_of(other) for other in self._relationships):
                missing.append(
                    MissingInverse(relationship=rel, expected_inverse=rel.expected_inverse())
                )
        return missing

    def duplicate_declarations(self) -> list[DuplicateDeclaration]:
        """Source -> target directions declared more than once.

        Only the first of these is ever resolved by ``find_between``.
        """
        counts = Counter((rel.source_entity, rel.target_entity) for rel in self._relationships)
        return [
            DuplicateDeclaration(source_entity=source, target_entity=target, count=count)
            for (source, target), count in counts.items()
            if count > 1
        ]

    def to_records(self) -> list[dict[str, Any]]:
        """Export declarations in wire form."""
        return [rel.to_wire() for rel in self._relationships]


@lru_cache(maxsize=1)
def get_default_registry() -> RelationshipRegistry:
    """Shared registry over the built-in declarations, created on first use."""
    return RelationshipRegistry.default()


def get_entity_relationships(
    entity_type: str, registry: RelationshipRegistry | None = None
) -> list[EntityRelationship]:
    """Convenience function: declarations involving ``entity_type``.

    Args:
        entity_type: Entity type name (e.g. "client")
        registry: Registry to search (defaults to the built-in declarations)

    Returns:
        Declarations where the type is source or target, in declaration order
    """
    if registry is None:
        registry = get_default_registry()
    return registry.for_entity(entity_type)
