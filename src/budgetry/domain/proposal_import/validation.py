"""Reference checks run before an import request is considered valid."""

from __future__ import annotations

from typing import TYPE_CHECKING

from budgetry.domain.model import ComponentManifest

if TYPE_CHECKING:
    from uuid import UUID

    from budgetry.domain.ports import ImportRepositories


def reference_errors(
    repositories: ImportRepositories,
    *,
    origin_component_id: UUID,
    budget_id: UUID,
    current_user_id: UUID,
) -> list[str]:
    """Return human-readable problems with the records an import request points at.

    The origin must be a proposals component and the budget must belong to a budgets
    component of the same participatory space.
    """

    errors: list[str] = []

    origin = repositories.components.get(origin_component_id)
    if origin is None:
        errors.append(f"Origin component {origin_component_id} does not exist")
    elif origin.manifest != ComponentManifest.PROPOSALS:
        errors.append(f"Origin component {origin_component_id} is not a proposals component")

    budget = repositories.budgets.get(budget_id)
    if budget is None:
        errors.append(f"Budget {budget_id} does not exist")
    elif budget.component.manifest != ComponentManifest.BUDGETS:
        errors.append(f"Budget {budget_id} does not belong to a budgets component")
    elif origin is not None and (
        budget.component.participatory_space_id != origin.participatory_space_id
    ):
        errors.append(
            f"Budget {budget_id} and origin component {origin_component_id} belong to "
            "different participatory spaces"
        )

    if repositories.users.get(current_user_id) is None:
        errors.append(f"User {current_user_id} does not exist")

    return errors
