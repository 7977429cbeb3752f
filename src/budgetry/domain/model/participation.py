"""Participatory budgeting entities: components, budgets, proposals and projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar

from budgetry.domain.model.audit import TraceableMixin
from budgetry.domain.model.entity import Entity
from budgetry.domain.model.enums import ComponentManifest, EntityType, ProposalState

if TYPE_CHECKING:
    from uuid import UUID

    from budgetry.domain.model.primitives import Amount, LocalizedText


@dataclass(eq=False, kw_only=True)
class Component(Entity):
    """A feature block (proposals, budgets, ...) inside a participatory space."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.COMPONENT

    manifest: ComponentManifest
    participatory_space_id: UUID
    name: str = ""


@dataclass(eq=False, kw_only=True)
class Budget(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.BUDGET

    component: Component = field(repr=False)
    title: LocalizedText = field(default_factory=dict[str, str])
    total_budget: Amount = 0

    @property
    def component_id(self) -> UUID:
        return self.component.id


@dataclass(eq=False, kw_only=True)
class Proposal(Entity):
    """Citizen proposal. Read-only from the import's point of view."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PROPOSAL

    component: Component = field(repr=False)
    title: str
    body: str = ""
    state: ProposalState = ProposalState.NOT_ANSWERED
    category_id: UUID | None = None
    scope_id: UUID | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    @property
    def component_id(self) -> UUID:
        return self.component.id


@dataclass(eq=False, kw_only=True)
class Project(TraceableMixin):
    """Budget line item, created from an accepted proposal or by hand."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PROJECT

    budget: Budget = field(repr=False)
    title: LocalizedText
    description: LocalizedText = field(default_factory=dict[str, str])
    budget_amount: Amount = 0
    category_id: UUID | None = None
    scope_id: UUID | None = None

    @property
    def budget_id(self) -> UUID:
        return self.budget.id
