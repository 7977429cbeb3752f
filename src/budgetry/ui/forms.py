"""Admin form turning a raw import payload into an ``ImportRequest``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from budgetry.domain.proposal_import import (
    ImportRequest,
    InvalidImportRequest,
    reference_errors,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from budgetry.domain.ports import ImportUnitOfWork
    from budgetry.domain.proposal_import import ImportRequestLike


class ImportProposalsForm(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    origin_component_id: UUID
    budget_id: UUID
    current_user_id: UUID
    default_budget: int = Field(gt=0)
    import_all_accepted_proposals: bool

    @field_validator("import_all_accepted_proposals")
    @classmethod
    def _require_confirmation(cls, value: bool) -> bool:  # noqa: FBT001
        if not value:
            raise ValueError("must be accepted to import all accepted proposals")
        return value


def _format_errors(exc: ValidationError) -> tuple[str, ...]:
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "form"
        messages.append(f"{location}: {error['msg']}")
    return tuple(messages)


def build_import_request(
    payload: Mapping[str, object],
    *,
    unit_of_work_factory: Callable[[], ImportUnitOfWork],
) -> ImportRequestLike:
    """Validate ``payload`` and the records it references.

    Shape errors short-circuit before the store is touched. Reference checks run in
    their own read-only unit of work, which is never committed.
    """

    try:
        form = ImportProposalsForm.model_validate(payload)
    except ValidationError as exc:
        return InvalidImportRequest(errors=_format_errors(exc))

    with unit_of_work_factory() as uow:
        errors = reference_errors(
            uow.repositories,
            origin_component_id=form.origin_component_id,
            budget_id=form.budget_id,
            current_user_id=form.current_user_id,
        )

    return ImportRequest(
        origin_component_id=form.origin_component_id,
        budget_id=form.budget_id,
        default_budget=form.default_budget,
        current_user_id=form.current_user_id,
        valid=not errors,
        errors=tuple(errors),
    )
