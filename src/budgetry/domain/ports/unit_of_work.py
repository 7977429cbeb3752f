"""Transaction boundary the import runs inside."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from budgetry.domain.ports.persistence import (
        ActionLogRepository,
        BudgetRepository,
        ComponentRepository,
        ProjectRepository,
        ProposalRepository,
        ProvenanceLinkRepository,
        UserRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker for the repositories a unit of work hands out together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Everything written through ``repositories`` becomes visible on ``commit``.

    Leaving the ``with`` block without committing discards the writes; leaving it
    with an exception rolls back and re-raises.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class ImportRepositories(RepositoryCollection):
    users: UserRepository
    components: ComponentRepository
    budgets: BudgetRepository
    proposals: ProposalRepository
    projects: ProjectRepository
    provenance_links: ProvenanceLinkRepository
    action_logs: ActionLogRepository


type ImportUnitOfWork = UnitOfWork[ImportRepositories]
