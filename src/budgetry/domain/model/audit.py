"""Audit trail records written by the traceability service."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar

from budgetry.domain.model.entity import Entity
from budgetry.domain.model.enums import EntityType, LogAction, Visibility

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class TraceableMixin(Entity, ABC):
    """Capability: creation is attributed to a user at a point in time.

    The fields are stamped by the traceability service, never by callers.
    """

    created_at: datetime | None = None
    created_by_id: UUID | None = None
    visibility: Visibility | None = None


@dataclass(eq=False, kw_only=True)
class ActionLog(Entity):
    """One audit entry: who did what to which resource, and who may see it."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ACTION_LOG

    user_id: UUID | None
    action: LogAction
    resource_type: EntityType
    resource_id: UUID
    visibility: Visibility = Visibility.ADMIN_ONLY
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    extra: dict[str, object] = field(default_factory=dict[str, object])
