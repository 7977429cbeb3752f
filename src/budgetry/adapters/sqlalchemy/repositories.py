"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import UniqueConstraint, and_, select
from sqlalchemy.exc import IntegrityError

from budgetry.adapters.sqlalchemy.mappings import (
    LINK_OWNER_CONSTRAINT,
    action_log_table,
    project_table,
    proposal_table,
    provenance_link_table,
)
from budgetry.domain.errors import ConstraintViolationError
from budgetry.domain.model import (
    ActionLog,
    Budget,
    Component,
    EntityType,
    Project,
    Proposal,
    ProvenanceLink,
    User,
)

if TYPE_CHECKING:
    import uuid
    from collections.abc import Sequence

    from sqlalchemy import Table
    from sqlalchemy.orm import Session

    from budgetry.domain.model import EntityRef, LinkKind, ProposalState


def is_link_conflict(exc: IntegrityError) -> bool:
    """Whether ``exc`` reports a duplicate provenance link into the same owner.

    SQLite names the constrained columns instead of the constraint.
    """

    message = str(exc.orig)
    return LINK_OWNER_CONSTRAINT in message or _SQLITE_LINK_OWNER_FAILURE in message


def _sqlite_unique_failure(table: Table, name: str) -> str:
    [constraint] = [
        constraint
        for constraint in table.constraints
        if isinstance(constraint, UniqueConstraint) and constraint.name == name
    ]
    columns = ", ".join(f"{table.name}.{column.name}" for column in constraint.columns)
    return f"UNIQUE constraint failed: {columns}"


_SQLITE_LINK_OWNER_FAILURE = _sqlite_unique_failure(provenance_link_table, LINK_OWNER_CONSTRAINT)


class SqlAlchemyLookupRepository[TEntity]:
    """Shared helpers for repositories loading entities by primary key."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def get(self, entity_id: uuid.UUID) -> TEntity | None:
        return self.session.get(self._entity_cls, entity_id)


class SqlAlchemyUserRepository(SqlAlchemyLookupRepository[User]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, User)


class SqlAlchemyComponentRepository(SqlAlchemyLookupRepository[Component]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Component)


class SqlAlchemyBudgetRepository(SqlAlchemyLookupRepository[Budget]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Budget)


class SqlAlchemyProposalRepository(SqlAlchemyLookupRepository[Proposal]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Proposal)

    def list_by_component(
        self,
        component_id: uuid.UUID,
        *,
        state: ProposalState | None = None,
    ) -> Sequence[Proposal]:
        stmt = select(Proposal).where(proposal_table.c._component_id == component_id)  # noqa: SLF001
        if state is not None:
            stmt = stmt.where(proposal_table.c.state == state)
        stmt = stmt.order_by(proposal_table.c.created_at, proposal_table.c.id)
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyProjectRepository(SqlAlchemyLookupRepository[Project]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Project)

    def list_by_budget(self, budget_id: uuid.UUID) -> Sequence[Project]:
        stmt = (
            select(Project)
            .where(project_table.c._budget_id == budget_id)  # noqa: SLF001
            .order_by(project_table.c.created_at, project_table.c.id)
        )
        return self.session.execute(stmt).scalars().all()

    def linked_from(self, source: EntityRef, kind: LinkKind) -> Sequence[Project]:
        stmt = (
            select(Project)
            .join(
                provenance_link_table,
                and_(
                    provenance_link_table.c.target_id == project_table.c.id,
                    provenance_link_table.c.target_type == EntityType.PROJECT,
                ),
            )
            .where(provenance_link_table.c.kind == kind)
            .where(provenance_link_table.c.source_type == source.entity_type)
            .where(provenance_link_table.c.source_id == source.id)
        )
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyProvenanceLinkRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: ProvenanceLink) -> None:
        # Pending project and log rows go first so their failures stay IntegrityErrors.
        self.session.flush()
        self.session.add(entity)
        try:
            self.session.flush()
        except IntegrityError as exc:
            if not is_link_conflict(exc):
                raise
            raise ConstraintViolationError(
                f"{entity.kind} link from {entity.source_type} {entity.source_id} "
                f"into {entity.target_owner_id} already exists"
            ) from exc

    def list_from(self, source: EntityRef, kind: LinkKind) -> Sequence[ProvenanceLink]:
        stmt = (
            select(ProvenanceLink)
            .where(provenance_link_table.c.kind == kind)
            .where(provenance_link_table.c.source_type == source.entity_type)
            .where(provenance_link_table.c.source_id == source.id)
            .order_by(provenance_link_table.c.created_at)
        )
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyActionLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: ActionLog) -> None:
        self.session.add(entity)

    def list_for(self, resource: EntityRef) -> Sequence[ActionLog]:
        stmt = (
            select(ActionLog)
            .where(action_log_table.c.resource_type == resource.entity_type)
            .where(action_log_table.c.resource_id == resource.id)
            .order_by(action_log_table.c.created_at)
        )
        return self.session.execute(stmt).scalars().all()


if TYPE_CHECKING:
    from budgetry.domain.ports.persistence import (
        ActionLogRepository,
        BudgetRepository,
        ComponentRepository,
        ProjectRepository,
        ProposalRepository,
        ProvenanceLinkRepository,
        UserRepository,
    )

    _session_stub = cast("Session", object())
    _user_repo: UserRepository = SqlAlchemyUserRepository(_session_stub)
    _component_repo: ComponentRepository = SqlAlchemyComponentRepository(_session_stub)
    _budget_repo: BudgetRepository = SqlAlchemyBudgetRepository(_session_stub)
    _proposal_repo: ProposalRepository = SqlAlchemyProposalRepository(_session_stub)
    _project_repo: ProjectRepository = SqlAlchemyProjectRepository(_session_stub)
    _link_repo: ProvenanceLinkRepository = SqlAlchemyProvenanceLinkRepository(_session_stub)
    _log_repo: ActionLogRepository = SqlAlchemyActionLogRepository(_session_stub)
