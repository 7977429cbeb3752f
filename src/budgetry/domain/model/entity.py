"""Identity shared by every persisted record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from budgetry.domain.model.enums import EntityType


def new_id() -> UUID:
    return uuid4()


@runtime_checkable
class EntityRef(Protocol):
    """Anything that can be the source or target of a provenance link or log entry."""

    @property
    def entity_type(self) -> EntityType: ...

    @property
    def id(self) -> UUID: ...


@dataclass(eq=False, kw_only=True)
class Entity:
    """Ids are assigned on construction, before the record reaches the store.

    Equality is identity; two records with equal fields are still two records.
    """

    ENTITY_TYPE: ClassVar[EntityType]

    id: UUID = field(default_factory=new_id)

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE
