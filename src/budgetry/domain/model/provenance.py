from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar

from budgetry.domain.model.entity import Entity
from budgetry.domain.model.enums import EntityType, LinkKind

if TYPE_CHECKING:
    from uuid import UUID

    from budgetry.domain.model.entity import EntityRef


@dataclass(eq=False, kw_only=True)
class ProvenanceLink(Entity):
    """Directed, named relation from a source entity to a target entity.

    ``target_owner_id`` is the aggregate owning the target (the budget of a
    project). Storage keeps (kind, source, target type, target owner) unique so a
    source can be linked at most once into each owner.
    """

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PROVENANCE_LINK

    kind: LinkKind
    source_type: EntityType
    source_id: UUID
    target_type: EntityType
    target_id: UUID
    target_owner_id: UUID | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    @classmethod
    def between(
        cls,
        source: EntityRef,
        target: EntityRef,
        *,
        kind: LinkKind,
        target_owner_id: UUID | None = None,
    ) -> ProvenanceLink:
        return cls(
            kind=kind,
            source_type=source.entity_type,
            source_id=source.id,
            target_type=target.entity_type,
            target_id=target.id,
            target_owner_id=target_owner_id,
        )
