"""Domain port definitions for adapters."""

from __future__ import annotations

from .locales import LocaleRegistry
from .persistence import (
    ActionLogRepository,
    BudgetRepository,
    ComponentRepository,
    LookupRepository,
    ProjectRepository,
    ProposalRepository,
    ProvenanceLinkRepository,
    Repository,
    UserRepository,
)
from .unit_of_work import (
    ImportRepositories,
    ImportUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ActionLogRepository",
    "BudgetRepository",
    "ComponentRepository",
    "ImportRepositories",
    "ImportUnitOfWork",
    "LocaleRegistry",
    "LookupRepository",
    "ProjectRepository",
    "ProposalRepository",
    "ProvenanceLinkRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
    "UserRepository",
]
