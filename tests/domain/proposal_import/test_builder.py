from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from budgetry.domain.model import (
    Budget,
    Component,
    ComponentManifest,
    Project,
    Proposal,
    ProposalState,
    User,
    Visibility,
)
from budgetry.domain.proposal_import import ImportRequest, ProjectBuilder, project_attributes

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True)
class _RecordingTraceability:
    calls: list[dict[str, Any]] = field(default_factory=list[dict[str, Any]])

    def create(
        self,
        entity_cls: type[Project],
        actor: User,
        attributes: Mapping[str, Any],
        *,
        visibility: Visibility = Visibility.ADMIN_ONLY,
        extra: Mapping[str, object] | None = None,
    ) -> Project:
        self.calls.append(
            {"actor": actor, "attributes": dict(attributes), "visibility": visibility, "extra": extra}
        )
        return entity_cls(**attributes)


def _fixture() -> tuple[Proposal, Budget, ImportRequest]:
    space_id = uuid4()
    origin = Component(manifest=ComponentManifest.PROPOSALS, participatory_space_id=space_id)
    budgets = Component(manifest=ComponentManifest.BUDGETS, participatory_space_id=space_id)
    budget = Budget(component=budgets, title={"en": "Budget X"})
    proposal = Proposal(
        component=origin,
        title="More trees",
        body="Plant trees along the river",
        state=ProposalState.ACCEPTED,
        category_id=uuid4(),
        scope_id=uuid4(),
    )
    request = ImportRequest(
        origin_component_id=origin.id,
        budget_id=budget.id,
        default_budget=1000,
        current_user_id=uuid4(),
    )
    return proposal, budget, request


def test_project_attributes_copy_proposal_fields() -> None:
    proposal, budget, request = _fixture()

    attributes = project_attributes(proposal, request, budget=budget, locales={"en", "fr"})

    assert attributes == {
        "budget": budget,
        "title": {"en": "More trees", "fr": "More trees"},
        "description": {
            "en": "Plant trees along the river",
            "fr": "Plant trees along the river",
        },
        "budget_amount": 1000,
        "category_id": proposal.category_id,
        "scope_id": proposal.scope_id,
    }


def test_project_attributes_leave_missing_references_empty() -> None:
    proposal, budget, request = _fixture()
    proposal.category_id = None
    proposal.scope_id = None

    attributes = project_attributes(proposal, request, budget=budget, locales={"en"})

    assert attributes["category_id"] is None
    assert attributes["scope_id"] is None


def test_builder_creates_public_project_through_traceability() -> None:
    proposal, budget, request = _fixture()
    actor = User(name="Admin")
    traceability = _RecordingTraceability()

    project = ProjectBuilder().build(
        proposal,
        request,
        budget=budget,
        actor=actor,
        locales=frozenset({"en", "ca"}),
        traceability=traceability,
    )

    assert project.budget is budget
    assert project.title == {"ca": "More trees", "en": "More trees"}
    [call] = traceability.calls
    assert call["actor"] is actor
    assert call["visibility"] is Visibility.ALL
    assert call["extra"] == {"proposal_id": str(proposal.id)}
