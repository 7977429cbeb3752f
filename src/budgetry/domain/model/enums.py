"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Typed-reference discriminator for polymorphic links (ProvenanceLink, ActionLog)."""

    USER = "user"
    COMPONENT = "component"
    BUDGET = "budget"
    PROPOSAL = "proposal"
    PROJECT = "project"
    PROVENANCE_LINK = "provenance_link"
    ACTION_LOG = "action_log"


class ComponentManifest(StrEnum):
    PROPOSALS = "proposals"
    BUDGETS = "budgets"


class ProposalState(StrEnum):
    NOT_ANSWERED = "not_answered"
    EVALUATING = "evaluating"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class LinkKind(StrEnum):
    INCLUDED_PROPOSALS = "included_proposals"


class Visibility(StrEnum):
    ALL = "all"
    ADMIN_ONLY = "admin-only"
    PUBLIC_ONLY = "public-only"
    PRIVATE_ONLY = "private-only"


class LogAction(StrEnum):
    CREATE = "create"
