"""Selection of proposals eligible for import."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from budgetry.domain.model import ProposalState

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from uuid import UUID

    from budgetry.domain.model import Proposal
    from budgetry.domain.ports import ImportRepositories


class EligibilitySelector(Protocol):
    def select(
        self,
        repositories: ImportRepositories,
        origin_component_id: UUID,
    ) -> Iterable[Proposal]: ...


@dataclass(frozen=True, slots=True)
class EligibleProposals:
    """Lazy, restartable view over the proposals of a component in a given state.

    The query runs on each iteration, not on construction. Rows are fetched in full
    before the first item is yielded so no cursor stays open while callers write.
    """

    repositories: ImportRepositories
    component_id: UUID
    state: ProposalState

    def __iter__(self) -> Iterator[Proposal]:
        yield from self.repositories.proposals.list_by_component(
            self.component_id,
            state=self.state,
        )


@dataclass(frozen=True, slots=True)
class AcceptedProposalSelector(EligibilitySelector):
    state: ProposalState = ProposalState.ACCEPTED

    def select(
        self,
        repositories: ImportRepositories,
        origin_component_id: UUID,
    ) -> Iterable[Proposal]:
        return EligibleProposals(repositories, origin_component_id, self.state)
