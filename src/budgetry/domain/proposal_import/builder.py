"""Derivation of a budget project from an accepted proposal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from budgetry.domain.model import Project, Visibility, localized

if TYPE_CHECKING:
    from collections.abc import Set as AbstractSet

    from budgetry.domain.model import Budget, Locale, Proposal, User
    from budgetry.domain.proposal_import.request import ImportRequest
    from budgetry.domain.traceability import Traceability


def project_attributes(
    proposal: Proposal,
    request: ImportRequest,
    *,
    budget: Budget,
    locales: AbstractSet[Locale],
) -> dict[str, Any]:
    """Return the field set of the project derived from ``proposal``.

    Title and body are copied verbatim under every locale.
    """

    return {
        "budget": budget,
        "title": localized(proposal.title, locales),
        "description": localized(proposal.body, locales),
        "budget_amount": request.default_budget,
        "category_id": proposal.category_id,
        "scope_id": proposal.scope_id,
    }


class TargetBuilder(Protocol):
    def build(
        self,
        proposal: Proposal,
        request: ImportRequest,
        *,
        budget: Budget,
        actor: User,
        locales: AbstractSet[Locale],
        traceability: Traceability,
    ) -> Project: ...


@dataclass(frozen=True, slots=True)
class ProjectBuilder(TargetBuilder):
    visibility: Visibility = Visibility.ALL

    def build(
        self,
        proposal: Proposal,
        request: ImportRequest,
        *,
        budget: Budget,
        actor: User,
        locales: AbstractSet[Locale],
        traceability: Traceability,
    ) -> Project:
        return traceability.create(
            Project,
            actor,
            project_attributes(proposal, request, budget=budget, locales=locales),
            visibility=self.visibility,
            extra={"proposal_id": str(proposal.id)},
        )
