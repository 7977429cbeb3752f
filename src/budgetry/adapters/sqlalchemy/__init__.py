"""SQLAlchemy adapter package for Budgetry."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyActionLogRepository,
    SqlAlchemyBudgetRepository,
    SqlAlchemyComponentRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyProposalRepository,
    SqlAlchemyProvenanceLinkRepository,
    SqlAlchemyUserRepository,
)
from .unit_of_work import SqlAlchemyImportUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyActionLogRepository",
    "SqlAlchemyBudgetRepository",
    "SqlAlchemyComponentRepository",
    "SqlAlchemyImportUnitOfWork",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyProposalRepository",
    "SqlAlchemyProvenanceLinkRepository",
    "SqlAlchemyUserRepository",
    "mapper_registry",
    "shutdown",
    "startup",
]
