"""Audit-aware creation of domain records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol

from budgetry.domain.model import ActionLog, EntityType, LogAction, TraceableMixin, Visibility

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from budgetry.domain.model import User
    from budgetry.domain.ports import ImportRepositories, Repository

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class Traceability(Protocol):
    """Creation path that records who created what, and who may see the log entry."""

    def create[TEntity: TraceableMixin](
        self,
        entity_cls: type[TEntity],
        actor: User,
        attributes: Mapping[str, Any],
        *,
        visibility: Visibility = Visibility.ADMIN_ONLY,
        extra: Mapping[str, object] | None = None,
    ) -> TEntity: ...


@dataclass(slots=True)
class TraceabilityService:
    """Create entities and their ``ActionLog`` entry inside the caller's unit of work.

    Nothing is committed here; the entity and the log entry live or die with the
    surrounding transaction.
    """

    repositories: ImportRepositories
    clock: Callable[[], datetime] = field(default=_utcnow)

    def create[TEntity: TraceableMixin](
        self,
        entity_cls: type[TEntity],
        actor: User,
        attributes: Mapping[str, Any],
        *,
        visibility: Visibility = Visibility.ADMIN_ONLY,
        extra: Mapping[str, object] | None = None,
    ) -> TEntity:
        entity = entity_cls(**attributes)
        created_at = self.clock()
        entity.created_at = created_at
        entity.created_by_id = actor.id
        entity.visibility = visibility

        self._repository_for(entity.entity_type).add(entity)
        self.repositories.action_logs.add(
            ActionLog(
                user_id=actor.id,
                action=LogAction.CREATE,
                resource_type=entity.entity_type,
                resource_id=entity.id,
                visibility=visibility,
                created_at=created_at,
                extra=dict(extra or {}),
            )
        )
        log.debug("Created %s %s by user %s", entity.entity_type, entity.id, actor.id)
        return entity

    def _repository_for(self, entity_type: EntityType) -> Repository[Any]:
        if entity_type == EntityType.PROJECT:
            return self.repositories.projects
        raise ValueError(f"No traceable repository registered for {entity_type}")
