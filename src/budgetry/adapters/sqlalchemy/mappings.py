"""SQLAlchemy mapping metadata for the Budgetry domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    JSON,
    BigInteger,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from budgetry.domain.model import (
    ActionLog,
    Budget,
    Component,
    ComponentManifest,
    EntityType,
    LinkKind,
    LogAction,
    Project,
    Proposal,
    ProposalState,
    ProvenanceLink,
    User,
    Visibility,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]
LINK_OWNER_CONSTRAINT = "uq_provenance_link_owner"


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Participants and spaces -------------------------------------------------------

user_table = Table(
    "user_account",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("email", String, nullable=True),
)

component_table = Table(
    "component",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("manifest", Enum(ComponentManifest, native_enum=False), nullable=False),
    Column("participatory_space_id", UUIDColumnType, nullable=False),
    Column("name", String, nullable=False, default=""),
)

budget_table = Table(
    "budget",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "component_id",
        UUIDColumnType,
        ForeignKey("component.id", ondelete="CASCADE"),
        key="_component_id",
        nullable=False,
    ),
    Column("title", JSON, nullable=False),
    Column("total_budget", BigInteger, nullable=False, default=0),
)

proposal_table = Table(
    "proposal",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "component_id",
        UUIDColumnType,
        ForeignKey("component.id", ondelete="CASCADE"),
        key="_component_id",
        nullable=False,
    ),
    Column("title", String, nullable=False),
    Column("body", Text, nullable=False, default=""),
    Column("state", Enum(ProposalState, native_enum=False), nullable=False),
    Column("category_id", UUIDColumnType, nullable=True),
    Column("scope_id", UUIDColumnType, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_proposal_component_state", "_component_id", "state"),
)

# Import targets -------------------------------------------------------------------

project_table = Table(
    "project",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "budget_id",
        UUIDColumnType,
        ForeignKey("budget.id", ondelete="CASCADE"),
        key="_budget_id",
        nullable=False,
    ),
    Column("title", JSON, nullable=False),
    Column("description", JSON, nullable=False),
    Column("budget_amount", BigInteger, nullable=False),
    Column("category_id", UUIDColumnType, nullable=True),
    Column("scope_id", UUIDColumnType, nullable=True),
    Column("visibility", Enum(Visibility, native_enum=False), nullable=True),
    Column("created_by_id", UUIDColumnType, ForeignKey("user_account.id"), nullable=True),
    Column("created_at", UTCDateTime(), nullable=True),
)

provenance_link_table = Table(
    "provenance_link",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("kind", Enum(LinkKind, native_enum=False), nullable=False),
    Column("source_type", Enum(EntityType, native_enum=False), nullable=False),
    Column("source_id", UUIDColumnType, nullable=False),
    Column("target_type", Enum(EntityType, native_enum=False), nullable=False),
    Column("target_id", UUIDColumnType, nullable=False),
    Column("target_owner_id", UUIDColumnType, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    # one link per source into each owning aggregate (e.g. proposal -> budget)
    UniqueConstraint(
        "kind",
        "source_type",
        "source_id",
        "target_type",
        "target_owner_id",
        name=LINK_OWNER_CONSTRAINT,
    ),
    Index("ix_provenance_link_source", "source_type", "source_id", "kind"),
)

action_log_table = Table(
    "action_log",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", UUIDColumnType, ForeignKey("user_account.id"), nullable=True),
    Column("action", Enum(LogAction, native_enum=False), nullable=False),
    Column("resource_type", Enum(EntityType, native_enum=False), nullable=False),
    Column("resource_id", UUIDColumnType, nullable=False),
    Column("visibility", Enum(Visibility, native_enum=False), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("extra", JSON, nullable=False),
    Index("ix_action_log_resource", "resource_type", "resource_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(User, user_table)
    mapper_registry.map_imperatively(Component, component_table)

    mapper_registry.map_imperatively(
        Budget,
        budget_table,
        properties={
            "component": relationship(Component),
        },
    )

    mapper_registry.map_imperatively(
        Proposal,
        proposal_table,
        properties={
            "component": relationship(Component),
        },
    )

    mapper_registry.map_imperatively(
        Project,
        project_table,
        properties={
            "budget": relationship(Budget),
        },
    )

    mapper_registry.map_imperatively(ProvenanceLink, provenance_link_table)
    mapper_registry.map_imperatively(ActionLog, action_log_table)

    configure_mappers()
    return mapper_registry

