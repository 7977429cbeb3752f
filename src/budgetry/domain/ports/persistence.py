"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from budgetry.domain.model import (
    ActionLog,
    Budget,
    Component,
    Project,
    Proposal,
    ProvenanceLink,
    User,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from budgetry.domain.model import EntityRef, LinkKind, ProposalState


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class LookupRepository[TEntity](Repository[TEntity], Protocol):
    """Repository whose entities can be loaded by primary key."""

    def get(self, entity_id: UUID) -> TEntity | None: ...


@runtime_checkable
class UserRepository(LookupRepository[User], Protocol):
    """Repository contract for users."""


@runtime_checkable
class ComponentRepository(LookupRepository[Component], Protocol):
    """Repository contract for components."""


@runtime_checkable
class BudgetRepository(LookupRepository[Budget], Protocol):
    """Repository contract for budgets."""


@runtime_checkable
class ProposalRepository(LookupRepository[Proposal], Protocol):
    """Repository contract for proposals."""

    def list_by_component(
        self,
        component_id: UUID,
        *,
        state: ProposalState | None = None,
    ) -> Sequence[Proposal]: ...


@runtime_checkable
class ProjectRepository(LookupRepository[Project], Protocol):
    """Repository contract for projects."""

    def list_by_budget(self, budget_id: UUID) -> Sequence[Project]: ...

    def linked_from(self, source: EntityRef, kind: LinkKind) -> Sequence[Project]:
        """Return the projects ``source`` links to through ``kind`` links."""
        ...


@runtime_checkable
class ProvenanceLinkRepository(Repository[ProvenanceLink], Protocol):
    """Repository contract for provenance links.

    ``add`` must make a uniqueness conflict visible immediately as
    ``ConstraintViolationError`` rather than deferring it to commit.
    """

    def list_from(self, source: EntityRef, kind: LinkKind) -> Sequence[ProvenanceLink]: ...


@runtime_checkable
class ActionLogRepository(Repository[ActionLog], Protocol):
    """Repository contract for audit entries."""

    def list_for(self, resource: EntityRef) -> Sequence[ActionLog]: ...
