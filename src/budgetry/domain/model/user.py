"""Participants acting on the platform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from budgetry.domain.model.entity import Entity
from budgetry.domain.model.enums import EntityType


@dataclass(eq=False, kw_only=True)
class User(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.USER

    name: str
    email: str | None = None
