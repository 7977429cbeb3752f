"""Public domain model surface."""

from __future__ import annotations

from budgetry.domain.model.audit import ActionLog, TraceableMixin
from budgetry.domain.model.entity import Entity, EntityRef
from budgetry.domain.model.enums import (
    ComponentManifest,
    EntityType,
    LinkKind,
    LogAction,
    ProposalState,
    Visibility,
)
from budgetry.domain.model.participation import Budget, Component, Project, Proposal
from budgetry.domain.model.primitives import Amount, Locale, LocalizedText, localized, translated
from budgetry.domain.model.provenance import ProvenanceLink
from budgetry.domain.model.user import User

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "EntityRef",
    # participation
    "Component",
    "Budget",
    "Proposal",
    "Project",
    # user
    "User",
    # provenance
    "ProvenanceLink",
    # audit
    "ActionLog",
    "TraceableMixin",
    # enums
    "ComponentManifest",
    "EntityType",
    "LinkKind",
    "LogAction",
    "ProposalState",
    "Visibility",
    # primitives
    "Amount",
    "Locale",
    "LocalizedText",
    "localized",
    "translated",
]
