"""Builders for participatory spaces with proposals ready to import."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from budgetry.domain.model import (
    Budget,
    Component,
    ComponentManifest,
    Proposal,
    ProposalState,
    User,
)
from budgetry.domain.proposal_import import ImportRequest

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from budgetry.domain.ports import ImportRepositories

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)
DEFAULT_STATES: Mapping[str, ProposalState] = {
    "A": ProposalState.ACCEPTED,
    "B": ProposalState.ACCEPTED,
    "C": ProposalState.REJECTED,
}
FOUR_ACCEPTED: Mapping[str, ProposalState] = dict.fromkeys("ABCD", ProposalState.ACCEPTED)


@dataclass(slots=True)
class BudgetScenario:
    admin: User
    origin: Component
    budgets_component: Component
    budget: Budget
    proposals: dict[str, Proposal] = field(default_factory=dict[str, Proposal])
    category_id: UUID = field(default_factory=uuid4)
    scope_id: UUID = field(default_factory=uuid4)

    def request(self, *, default_budget: int = 1000) -> ImportRequest:
        return ImportRequest(
            origin_component_id=self.origin.id,
            budget_id=self.budget.id,
            default_budget=default_budget,
            current_user_id=self.admin.id,
        )

    def payload(self, **overrides: object) -> dict[str, object]:
        payload: dict[str, object] = {
            "origin_component_id": str(self.origin.id),
            "budget_id": str(self.budget.id),
            "default_budget": 1000,
            "current_user_id": str(self.admin.id),
            "import_all_accepted_proposals": True,
        }
        payload.update(overrides)
        return payload


def seed_scenario(
    repositories: ImportRepositories,
    *,
    states: Mapping[str, ProposalState] = DEFAULT_STATES,
    space_id: UUID | None = None,
) -> BudgetScenario:
    """Add an admin, a proposals component, a budget and one proposal per ``states`` key.

    Proposals are named by their key (title ``"Proposal <key>"``) and created one
    minute apart in key order.
    """

    participatory_space_id = space_id or uuid4()
    admin = User(name="Admin", email="admin@example.org")
    origin = Component(
        manifest=ComponentManifest.PROPOSALS,
        participatory_space_id=participatory_space_id,
        name="Proposals",
    )
    budgets_component = Component(
        manifest=ComponentManifest.BUDGETS,
        participatory_space_id=participatory_space_id,
        name="Budgets",
    )
    budget = Budget(component=budgets_component, title={"en": "Budget X"}, total_budget=100_000)
    scenario = BudgetScenario(
        admin=admin,
        origin=origin,
        budgets_component=budgets_component,
        budget=budget,
    )

    repositories.users.add(admin)
    repositories.components.add(origin)
    repositories.components.add(budgets_component)
    repositories.budgets.add(budget)

    for offset, (key, state) in enumerate(states.items()):
        proposal = Proposal(
            component=origin,
            title=f"Proposal {key}",
            body=f"Body of proposal {key}",
            state=state,
            category_id=scenario.category_id,
            scope_id=scenario.scope_id,
            created_at=BASE_TIME + timedelta(minutes=offset),
        )
        repositories.proposals.add(proposal)
        scenario.proposals[key] = proposal

    return scenario


@dataclass(frozen=True, slots=True)
class SingleProposalSelector:
    """Selects one proposal by id, as an import started for just that proposal would."""

    proposal_id: UUID

    def select(
        self,
        repositories: ImportRepositories,
        origin_component_id: UUID,
    ) -> Iterable[Proposal]:
        proposal = repositories.proposals.get(self.proposal_id)
        return [] if proposal is None else [proposal]
