"""Provenance bookkeeping between proposals and the projects created from them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from budgetry.domain.model import LinkKind, ProvenanceLink

if TYPE_CHECKING:
    from budgetry.domain.model import Budget, Project, Proposal
    from budgetry.domain.ports import ImportRepositories


class ProvenanceIndex(Protocol):
    def already_imported(
        self,
        repositories: ImportRepositories,
        proposal: Proposal,
        budget: Budget,
    ) -> bool: ...


class ProvenanceLinker(Protocol):
    def link(
        self,
        repositories: ImportRepositories,
        proposal: Proposal,
        project: Project,
    ) -> ProvenanceLink: ...


@dataclass(frozen=True, slots=True)
class LinkedProjectIndex(ProvenanceIndex):
    """A proposal counts as imported when any project it links to sits in ``budget``."""

    kind: LinkKind = LinkKind.INCLUDED_PROPOSALS

    def already_imported(
        self,
        repositories: ImportRepositories,
        proposal: Proposal,
        budget: Budget,
    ) -> bool:
        return any(
            project.budget_id == budget.id
            for project in repositories.projects.linked_from(proposal, self.kind)
        )


@dataclass(frozen=True, slots=True)
class IncludedProposalsLinker(ProvenanceLinker):
    kind: LinkKind = LinkKind.INCLUDED_PROPOSALS

    def link(
        self,
        repositories: ImportRepositories,
        proposal: Proposal,
        project: Project,
    ) -> ProvenanceLink:
        link = ProvenanceLink.between(
            proposal,
            project,
            kind=self.kind,
            target_owner_id=project.budget_id,
        )
        repositories.provenance_links.add(link)
        return link
