"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from budgetry.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyImportUnitOfWork,
    is_started,
    startup,
)
from budgetry.config import get_import_config, get_locale_registry
from budgetry.domain.proposal_import import ImportOutcome, ProposalImporter
from budgetry.ui.forms import build_import_request

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from budgetry.config import ImportConfig
    from budgetry.domain.ports import ImportUnitOfWork, LocaleRegistry

type UnitOfWorkFactory = Callable[[], ImportUnitOfWork]

log = getLogger(__name__)


def import_proposals_to_budget(
    payload: Mapping[str, object],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    locale_registry: LocaleRegistry | None = None,
    import_config: ImportConfig | None = None,
) -> ImportOutcome:
    """Import the accepted proposals named by an admin ``payload`` into its budget."""

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyImportUnitOfWork
    effective_config = import_config or get_import_config()

    request = build_import_request(payload, unit_of_work_factory=unit_of_work_factory)
    log.info(
        "Starting proposal import: origin=%s, budget=%s, valid=%s",
        payload.get("origin_component_id"),
        payload.get("budget_id"),
        request.valid,
    )

    importer = ProposalImporter(
        unit_of_work_factory=unit_of_work_factory,
        locale_registry=locale_registry or get_locale_registry(),
        max_attempts=effective_config.max_attempts,
    )
    outcome = importer.run(request)

    log.info(
        "Finished proposal import: status=%s, created=%s",
        outcome.status,
        len(outcome.created),
    )
    return outcome
