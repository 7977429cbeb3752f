"""Request and outcome values exchanged with the import orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from budgetry.domain.model import Amount, Project


@dataclass(frozen=True, slots=True)
class ImportRequest:
    """Validated instruction to import accepted proposals into one budget."""

    origin_component_id: UUID
    budget_id: UUID
    default_budget: Amount
    current_user_id: UUID
    valid: bool = True
    errors: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class InvalidImportRequest:
    """A request that could not even be parsed into an ``ImportRequest``."""

    errors: tuple[str, ...]
    valid: bool = field(default=False, init=False)


type ImportRequestLike = ImportRequest | InvalidImportRequest


class ImportStatus(StrEnum):
    OK = "ok"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class ImportOutcome:
    """Result broadcast to the caller: ``ok`` with the created projects, or ``invalid``."""

    status: ImportStatus
    created: tuple[Project, ...] = ()
    errors: tuple[str, ...] = ()

    @classmethod
    def ok(cls, created: tuple[Project, ...] | list[Project]) -> ImportOutcome:
        return cls(status=ImportStatus.OK, created=tuple(created))

    @classmethod
    def invalid(cls, errors: tuple[str, ...] = ()) -> ImportOutcome:
        return cls(status=ImportStatus.INVALID, errors=errors)

    @property
    def is_ok(self) -> bool:
        return self.status == ImportStatus.OK
