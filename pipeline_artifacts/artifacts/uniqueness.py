"""Duplicate detection among sibling pluggable artifact declarations.

Only the first pluggable declaration already present in the sibling list is
compared against a candidate. A candidate that finds a pluggable sibling is
not registered in the list, so later declarations are never compared to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from pipeline_artifacts.artifacts.base import ArtifactConfig
    from pipeline_artifacts.artifacts.pluggable import PluggableArtifactConfig

ID = "id"
DUPLICATE_ID_MESSAGE = "Duplicate pluggable artifacts with id '{id}' defined."
DUPLICATE_CONFIGURATION_MESSAGE = "Duplicate pluggable artifacts configuration defined."


@dataclass(frozen=True)
class DuplicateFinding:
    """An error the caller should record on ``target``."""

    target: "PluggableArtifactConfig"
    field_name: str
    message: str


@dataclass
class DuplicateScan:
    """Outcome of comparing a candidate against its siblings."""

    matched: Optional["PluggableArtifactConfig"] = None
    findings: List[DuplicateFinding] = field(default_factory=list)

    @property
    def should_register(self) -> bool:
        """True when no pluggable sibling exists and the candidate joins the list."""
        return self.matched is None


def first_pluggable(siblings: Sequence["ArtifactConfig"]) -> Optional["PluggableArtifactConfig"]:
    for sibling in siblings:
        pluggable = sibling.as_pluggable()
        if pluggable is not None:
            return pluggable
    return None


def _equal_ignoring_case(left: Optional[str], right: Optional[str]) -> bool:
    if left is None or right is None:
        return False
    return left.lower() == right.lower()


def detect_duplicates(
    candidate: "PluggableArtifactConfig", siblings: Sequence["ArtifactConfig"]
) -> DuplicateScan:
    """Compare ``candidate`` against the first pluggable sibling without mutating anything."""
    matched = first_pluggable(siblings)
    if matched is None:
        return DuplicateScan()

    findings: List[DuplicateFinding] = []
    if _equal_ignoring_case(candidate.id, matched.id):
        message = DUPLICATE_ID_MESSAGE.format(id=candidate.id)
        findings.append(DuplicateFinding(candidate, ID, message))
        findings.append(DuplicateFinding(matched, ID, message))

    if _equal_ignoring_case(candidate.store_id, matched.store_id):
        ours, theirs = candidate.configuration, matched.configuration
        if ours.size() == theirs.size() and ours.contains_all(theirs):
            findings.append(DuplicateFinding(candidate, ID, DUPLICATE_CONFIGURATION_MESSAGE))
            findings.append(DuplicateFinding(matched, ID, DUPLICATE_CONFIGURATION_MESSAGE))

    return DuplicateScan(matched=matched, findings=findings)


def apply_duplicate_scan(
    candidate: "PluggableArtifactConfig",
    scan: DuplicateScan,
    siblings: List["ArtifactConfig"],
) -> None:
    for finding in scan.findings:
        finding.target.add_error(finding.field_name, finding.message)
    if scan.should_register:
        siblings.append(candidate)
