"""Import of accepted proposals into budget projects.

The import is split into small collaborators so each rule stays testable on its own:
an eligibility selector, a provenance index guarding against duplicates, a project
builder writing through the traceability service, and a provenance linker. The
``ProposalImporter`` runs them inside a single unit of work.
"""

from __future__ import annotations

from .builder import ProjectBuilder, TargetBuilder, project_attributes
from .orchestrator import ProposalImporter
from .provenance import (
    IncludedProposalsLinker,
    LinkedProjectIndex,
    ProvenanceIndex,
    ProvenanceLinker,
)
from .request import (
    ImportOutcome,
    ImportRequest,
    ImportRequestLike,
    ImportStatus,
    InvalidImportRequest,
)
from .selector import AcceptedProposalSelector, EligibilitySelector, EligibleProposals
from .validation import reference_errors

__all__ = [
    "AcceptedProposalSelector",
    "EligibilitySelector",
    "EligibleProposals",
    "ImportOutcome",
    "ImportRequest",
    "ImportRequestLike",
    "ImportStatus",
    "IncludedProposalsLinker",
    "InvalidImportRequest",
    "LinkedProjectIndex",
    "ProjectBuilder",
    "ProposalImporter",
    "ProvenanceIndex",
    "ProvenanceLinker",
    "TargetBuilder",
    "project_attributes",
    "reference_errors",
]
