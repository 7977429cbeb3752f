from __future__ import annotations

from typing import TYPE_CHECKING

from budgetry.app import import_proposals_to_budget
from budgetry.config import ImportConfig
from budgetry.domain.proposal_import import ImportStatus
from tests.helpers.participation import seed_scenario

if TYPE_CHECKING:
    from collections.abc import Callable

    from budgetry.adapters.sqlalchemy.unit_of_work import SqlAlchemyImportUnitOfWork
    from budgetry.config import StaticLocaleRegistry

type UowFactory = Callable[[], SqlAlchemyImportUnitOfWork]


def test_import_proposals_to_budget_end_to_end(
    sqlite_unit_of_work: UowFactory,
    locale_registry: StaticLocaleRegistry,
) -> None:
    with sqlite_unit_of_work() as uow:
        scenario = seed_scenario(uow.repositories)
        uow.commit()

    outcome = import_proposals_to_budget(
        scenario.payload(default_budget="250"),
        unit_of_work_factory=sqlite_unit_of_work,
        locale_registry=locale_registry,
        import_config=ImportConfig(max_attempts=1),
    )

    assert outcome.status is ImportStatus.OK
    assert [project.title for project in outcome.created] == [
        {"en": "Proposal A", "fr": "Proposal A"},
        {"en": "Proposal B", "fr": "Proposal B"},
    ]
    assert {project.budget_amount for project in outcome.created} == {250}


def test_import_proposals_to_budget_reports_invalid_payload(
    sqlite_unit_of_work: UowFactory,
    locale_registry: StaticLocaleRegistry,
) -> None:
    with sqlite_unit_of_work() as uow:
        scenario = seed_scenario(uow.repositories)
        uow.commit()

    outcome = import_proposals_to_budget(
        scenario.payload(import_all_accepted_proposals=False),
        unit_of_work_factory=sqlite_unit_of_work,
        locale_registry=locale_registry,
    )

    assert outcome.status is ImportStatus.INVALID
    assert outcome.created == ()
    assert len(outcome.errors) == 1
    assert outcome.errors[0].startswith("import_all_accepted_proposals:")

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.projects.list_by_budget(scenario.budget.id) == []
