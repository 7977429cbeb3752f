"""Domain-level error definitions shared by services and adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from budgetry.domain.model import EntityType


class ConstraintViolationError(RuntimeError):
    """Raised by persistence adapters when a write breaks a store-level uniqueness rule."""


class RecordNotFoundError(LookupError):
    """Raised when a referenced record is missing from the store."""

    def __init__(self, entity_type: EntityType, entity_id: UUID) -> None:
        super().__init__(f"{entity_type} {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id
