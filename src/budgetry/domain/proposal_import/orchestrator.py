"""Transactional import of accepted proposals into a budget."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from budgetry.domain.errors import ConstraintViolationError, RecordNotFoundError
from budgetry.domain.model import EntityType
from budgetry.domain.proposal_import.builder import ProjectBuilder, TargetBuilder
from budgetry.domain.proposal_import.provenance import (
    IncludedProposalsLinker,
    LinkedProjectIndex,
    ProvenanceIndex,
    ProvenanceLinker,
)
from budgetry.domain.proposal_import.request import ImportOutcome, InvalidImportRequest
from budgetry.domain.proposal_import.selector import AcceptedProposalSelector, EligibilitySelector
from budgetry.domain.traceability import TraceabilityService

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from budgetry.domain.model import Budget, Locale, Project, User
    from budgetry.domain.ports import ImportRepositories, ImportUnitOfWork, LocaleRegistry
    from budgetry.domain.proposal_import.request import ImportRequest, ImportRequestLike
    from budgetry.domain.traceability import Traceability

log = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(slots=True)
class ProposalImporter:
    """Import every accepted, not yet imported proposal of a component into a budget.

    The whole batch runs in one unit of work: either every eligible proposal gets a
    project plus an ``included_proposals`` link, or nothing is written. Re-running
    with the same request creates nothing new.

    A ``ConstraintViolationError`` while linking a proposal means a concurrent run
    linked it into the same budget after our duplicate check. The attempt is rolled
    back and the batch re-run, so the proposal is skipped on the next pass. Retries
    for distinct proposals are unbounded since there are only so many eligible
    proposals; a conflict that repeats on the same proposal, or that surfaces
    outside linking, is retried at most ``max_attempts`` times before re-raising.
    """

    unit_of_work_factory: Callable[[], ImportUnitOfWork]
    locale_registry: LocaleRegistry
    selector: EligibilitySelector = field(default_factory=AcceptedProposalSelector)
    provenance_index: ProvenanceIndex = field(default_factory=LinkedProjectIndex)
    builder: TargetBuilder = field(default_factory=ProjectBuilder)
    linker: ProvenanceLinker = field(default_factory=IncludedProposalsLinker)
    traceability_factory: Callable[[ImportRepositories], Traceability] = TraceabilityService
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def run(self, request: ImportRequestLike) -> ImportOutcome:
        if isinstance(request, InvalidImportRequest) or not request.valid:
            log.info("Rejected proposal import request: %s", "; ".join(request.errors))
            return ImportOutcome.invalid(request.errors)

        locales = self.locale_registry.available_locales()
        raced: set[UUID] = set()
        stalled = 0
        while True:
            batch = _Batch()
            try:
                self._import_batch(request, locales, batch)
            except ConstraintViolationError:
                # A committed link never goes away, so each proposal races at most once.
                if batch.importing is not None and batch.importing not in raced:
                    raced.add(batch.importing)
                else:
                    stalled += 1
                    if stalled >= self.max_attempts:
                        raise
                log.warning(
                    "Concurrent import of proposal %s into budget %s; retrying",
                    batch.importing,
                    request.budget_id,
                )
                continue
            return ImportOutcome.ok(batch.created)

    def _import_batch(
        self,
        request: ImportRequest,
        locales: frozenset[Locale],
        batch: _Batch,
    ) -> None:
        created = batch.created
        skipped = 0
        with self.unit_of_work_factory() as uow:
            repositories = uow.repositories
            budget = _require_budget(repositories, request)
            actor = _require_user(repositories, request)
            traceability = self.traceability_factory(repositories)

            for proposal in self.selector.select(repositories, request.origin_component_id):
                if self.provenance_index.already_imported(repositories, proposal, budget):
                    log.debug("Proposal %s already imported into budget %s", proposal.id, budget.id)
                    skipped += 1
                    continue

                batch.importing = proposal.id
                project = self.builder.build(
                    proposal,
                    request,
                    budget=budget,
                    actor=actor,
                    locales=locales,
                    traceability=traceability,
                )
                self.linker.link(repositories, proposal, project)
                batch.importing = None
                created.append(project)

            uow.commit()

        log.info(
            "Imported proposals from component %s into budget %s: created=%s, skipped=%s",
            request.origin_component_id,
            request.budget_id,
            len(created),
            skipped,
        )


@dataclass(slots=True)
class _Batch:
    """State of one attempt; ``importing`` names the proposal being linked, if any."""

    created: list[Project] = field(default_factory=list)
    importing: UUID | None = None


def _require_budget(repositories: ImportRepositories, request: ImportRequest) -> Budget:
    budget = repositories.budgets.get(request.budget_id)
    if budget is None:
        raise RecordNotFoundError(EntityType.BUDGET, request.budget_id)
    return budget


def _require_user(repositories: ImportRepositories, request: ImportRequest) -> User:
    user = repositories.users.get(request.current_user_id)
    if user is None:
        raise RecordNotFoundError(EntityType.USER, request.current_user_id)
    return user
