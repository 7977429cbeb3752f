from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import pytest

from budgetry.config import LocaleConfig, StaticLocaleRegistry
from budgetry.domain.errors import ConstraintViolationError, RecordNotFoundError
from budgetry.domain.model import EntityType, ProposalState, Visibility
from budgetry.domain.proposal_import import (
    ImportRequest,
    ImportStatus,
    IncludedProposalsLinker,
    InvalidImportRequest,
    ProjectBuilder,
    ProposalImporter,
)
from tests.helpers.fakes import FakeStore, FakeUnitOfWork, seeded_fake_factory
from tests.helpers.participation import FOUR_ACCEPTED, SingleProposalSelector

if TYPE_CHECKING:
    from uuid import UUID

    from budgetry.domain.model import Project, Proposal, ProvenanceLink
    from budgetry.domain.ports import ImportRepositories

LOCALES = StaticLocaleRegistry(config=LocaleConfig(available_locales=("en", "fr")))


@dataclass(slots=True)
class _FailingBuilder:
    fail_on: int
    calls: int = 0
    inner: ProjectBuilder = field(default_factory=ProjectBuilder)

    def build(self, proposal: Proposal, request: ImportRequest, **kwargs: Any) -> Project:
        self.calls += 1
        if self.calls == self.fail_on:
            raise RuntimeError("builder exploded")
        return self.inner.build(proposal, request, **kwargs)


@dataclass(slots=True)
class _ConflictingLinker:
    """Raises a uniqueness conflict for the first ``conflicts`` link attempts."""

    conflicts: int
    attempts: int = 0
    inner: IncludedProposalsLinker = field(default_factory=IncludedProposalsLinker)

    def link(
        self,
        repositories: ImportRepositories,
        proposal: Proposal,
        project: Project,
    ) -> ProvenanceLink:
        self.attempts += 1
        if self.attempts <= self.conflicts:
            raise ConstraintViolationError("link already exists")
        return self.inner.link(repositories, proposal, project)


@dataclass(slots=True)
class _RacingLinker:
    """Lets a single-proposal import of the same proposal commit just before each first link."""

    store: FakeStore
    request: ImportRequest
    raced: set[UUID] = field(default_factory=set)
    inner: IncludedProposalsLinker = field(default_factory=IncludedProposalsLinker)

    def link(
        self,
        repositories: ImportRepositories,
        proposal: Proposal,
        project: Project,
    ) -> ProvenanceLink:
        if proposal.id in self.raced:
            return self.inner.link(repositories, proposal, project)
        self.raced.add(proposal.id)
        competitor = ProposalImporter(
            unit_of_work_factory=lambda: FakeUnitOfWork(self.store),
            locale_registry=LOCALES,
            selector=SingleProposalSelector(proposal.id),
        )
        assert len(competitor.run(self.request).created) == 1
        raise ConstraintViolationError("link already exists")


def test_import_creates_projects_for_accepted_proposals() -> None:
    factory, scenario = seeded_fake_factory()
    importer = ProposalImporter(unit_of_work_factory=factory, locale_registry=LOCALES)

    outcome = importer.run(scenario.request())

    assert outcome.status is ImportStatus.OK
    assert [project.title for project in outcome.created] == [
        {"en": "Proposal A", "fr": "Proposal A"},
        {"en": "Proposal B", "fr": "Proposal B"},
    ]
    for project in outcome.created:
        assert project.budget is scenario.budget
        assert project.budget_amount == 1000
        assert project.visibility is Visibility.ALL
        assert project.created_by_id == scenario.admin.id
        assert project.created_at is not None
        assert project.category_id == scenario.category_id
        assert project.scope_id == scenario.scope_id

    store = factory.store
    assert len(store.projects) == 2
    assert {link.source_id for link in store.links} == {
        scenario.proposals["A"].id,
        scenario.proposals["B"].id,
    }
    assert all(link.target_owner_id == scenario.budget.id for link in store.links)
    assert [entry.resource_type for entry in store.action_logs] == [EntityType.PROJECT] * 2
    assert [uow.committed for uow in factory.opened] == [True]


def test_rerun_creates_nothing() -> None:
    factory, scenario = seeded_fake_factory()
    importer = ProposalImporter(unit_of_work_factory=factory, locale_registry=LOCALES)
    importer.run(scenario.request())
    projects_before = dict(factory.store.projects)
    links_before = list(factory.store.links)

    outcome = importer.run(scenario.request())

    assert outcome.status is ImportStatus.OK
    assert outcome.created == ()
    assert factory.store.projects == projects_before
    assert factory.store.links == links_before


def test_rerun_picks_up_newly_accepted_proposals() -> None:
    factory, scenario = seeded_fake_factory()
    importer = ProposalImporter(unit_of_work_factory=factory, locale_registry=LOCALES)
    importer.run(scenario.request())
    scenario.proposals["C"].state = ProposalState.ACCEPTED

    outcome = importer.run(scenario.request())

    assert [project.title["en"] for project in outcome.created] == ["Proposal C"]
    assert len(factory.store.projects) == 3


@pytest.mark.parametrize(
    "request_value",
    [
        InvalidImportRequest(errors=("default_budget: must be positive",)),
        ImportRequest(
            origin_component_id=uuid4(),
            budget_id=uuid4(),
            default_budget=1000,
            current_user_id=uuid4(),
            valid=False,
            errors=("Budget does not exist",),
        ),
    ],
)
def test_invalid_request_has_no_side_effects(
    request_value: ImportRequest | InvalidImportRequest,
) -> None:
    factory, _ = seeded_fake_factory()
    importer = ProposalImporter(unit_of_work_factory=factory, locale_registry=LOCALES)

    outcome = importer.run(request_value)

    assert outcome.status is ImportStatus.INVALID
    assert outcome.errors == request_value.errors
    assert outcome.created == ()
    assert factory.opened == []
    assert factory.store.projects == {}


@pytest.mark.parametrize("fail_on", [1, 2])
def test_failure_mid_batch_rolls_back_everything(fail_on: int) -> None:
    factory, scenario = seeded_fake_factory()
    importer = ProposalImporter(
        unit_of_work_factory=factory,
        locale_registry=LOCALES,
        builder=_FailingBuilder(fail_on=fail_on),
    )

    with pytest.raises(RuntimeError, match="builder exploded"):
        importer.run(scenario.request())

    store = factory.store
    assert store.projects == {}
    assert store.links == []
    assert store.action_logs == []
    [uow] = factory.opened
    assert uow.rolled_back
    assert not uow.committed


def test_missing_budget_raises_not_found() -> None:
    factory, scenario = seeded_fake_factory()
    del factory.store.budgets[scenario.budget.id]
    importer = ProposalImporter(unit_of_work_factory=factory, locale_registry=LOCALES)

    with pytest.raises(RecordNotFoundError) as excinfo:
        importer.run(scenario.request())

    assert excinfo.value.entity_type is EntityType.BUDGET
    assert excinfo.value.entity_id == scenario.budget.id


def test_missing_user_raises_not_found() -> None:
    factory, scenario = seeded_fake_factory()
    del factory.store.users[scenario.admin.id]
    importer = ProposalImporter(unit_of_work_factory=factory, locale_registry=LOCALES)

    with pytest.raises(RecordNotFoundError) as excinfo:
        importer.run(scenario.request())

    assert excinfo.value.entity_type is EntityType.USER


def test_constraint_violation_retries_in_fresh_unit_of_work() -> None:
    factory, scenario = seeded_fake_factory()
    linker = _ConflictingLinker(conflicts=1)
    importer = ProposalImporter(
        unit_of_work_factory=factory,
        locale_registry=LOCALES,
        linker=linker,
    )

    outcome = importer.run(scenario.request())

    assert outcome.status is ImportStatus.OK
    assert len(outcome.created) == 2
    assert [(uow.committed, uow.rolled_back) for uow in factory.opened] == [
        (False, True),
        (True, False),
    ]
    assert len(factory.store.projects) == 2
    assert len(factory.store.links) == 2


def test_every_proposal_raced_by_another_import_still_succeeds() -> None:
    factory, scenario = seeded_fake_factory(states=FOUR_ACCEPTED)
    request = scenario.request()
    importer = ProposalImporter(
        unit_of_work_factory=factory,
        locale_registry=LOCALES,
        linker=_RacingLinker(store=factory.store, request=request),
        max_attempts=1,
    )

    outcome = importer.run(request)

    assert outcome.status is ImportStatus.OK
    assert outcome.created == ()
    assert [uow.committed for uow in factory.opened] == [False, False, False, False, True]
    assert len(factory.store.projects) == 4
    assert {link.source_id for link in factory.store.links} == {
        proposal.id for proposal in scenario.proposals.values()
    }


def test_conflict_repeating_on_same_proposal_reraised_after_max_attempts() -> None:
    factory, scenario = seeded_fake_factory()
    importer = ProposalImporter(
        unit_of_work_factory=factory,
        locale_registry=LOCALES,
        linker=_ConflictingLinker(conflicts=10),
        max_attempts=2,
    )

    with pytest.raises(ConstraintViolationError):
        importer.run(scenario.request())

    assert len(factory.opened) == 3
    assert factory.store.projects == {}


def test_skips_are_logged_not_reported(caplog: pytest.LogCaptureFixture) -> None:
    factory, scenario = seeded_fake_factory()
    importer = ProposalImporter(unit_of_work_factory=factory, locale_registry=LOCALES)
    importer.run(scenario.request())

    with caplog.at_level(logging.DEBUG, logger="budgetry.domain.proposal_import.orchestrator"):
        outcome = importer.run(scenario.request())

    assert outcome.created == ()
    messages = [record.getMessage() for record in caplog.records]
    assert sum("already imported" in message for message in messages) == 2
    assert any("created=0, skipped=2" in message for message in messages)
