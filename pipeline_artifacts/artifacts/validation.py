"""Validation of a job's artifact list."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from pydantic import ValidationError

from logging_config import log_debug
from pipeline_artifacts.artifacts.base import ArtifactConfig
from pipeline_artifacts.artifacts.models import PluggableArtifactPayload
from pipeline_artifacts.artifacts.pluggable import PluggableArtifactConfig
from pipeline_artifacts.stores.registry import ValidationContext

logger = logging.getLogger(__name__)


class ArtifactConfigs:
    """Ordered artifact declarations belonging to one job."""

    def __init__(self, artifacts: Optional[Iterable[ArtifactConfig]] = None):
        self._artifacts: List[ArtifactConfig] = list(artifacts) if artifacts is not None else []

    def add(self, artifact: ArtifactConfig) -> None:
        self._artifacts.append(artifact)

    def pluggable_artifacts(self) -> List[PluggableArtifactConfig]:
        return [entry for entry in (a.as_pluggable() for a in self._artifacts) if entry is not None]

    def find_pluggable(self, artifact_id: str) -> Optional[PluggableArtifactConfig]:
        for artifact in self.pluggable_artifacts():
            if artifact.id == artifact_id:
                return artifact
        return None

    def __len__(self) -> int:
        return len(self._artifacts)

    def __iter__(self) -> Iterator[ArtifactConfig]:
        return iter(self._artifacts)

    def __getitem__(self, index: int) -> ArtifactConfig:
        return self._artifacts[index]


def _takes_part_in_uniqueness(artifact: ArtifactConfig) -> bool:
    pluggable = artifact.as_pluggable()
    return pluggable is None or not pluggable.is_missing_mandatory_fields()


def validate_artifact_configs(artifacts: Iterable[ArtifactConfig], context: ValidationContext) -> bool:
    """Validate each declaration, then check siblings for duplicates.

    Returns True when no declaration carries an error afterwards.
    """
    declarations = list(artifacts)
    for artifact in declarations:
        artifact.validate_tree(context)

    siblings: List[ArtifactConfig] = []
    for artifact in declarations:
        if _takes_part_in_uniqueness(artifact):
            artifact.check_uniqueness_against(siblings)

    invalid = [artifact for artifact in declarations if artifact.has_errors()]
    log_debug(
        logger,
        "Artifact list validated",
        component="ArtifactValidation",
        data={"declarations": len(declarations), "invalid": len(invalid)},
    )
    return not invalid


def collect_errors(artifacts: Iterable[ArtifactConfig]) -> List[Dict[str, Any]]:
    """Report the recorded errors of every declaration that has any."""
    report: List[Dict[str, Any]] = []
    for artifact in artifacts:
        if not artifact.has_errors():
            continue
        entry: Dict[str, Any] = {"artifact": str(artifact), "errors": artifact.errors().as_dict()}
        pluggable = artifact.as_pluggable()
        if pluggable is not None:
            property_errors = {
                prop.key: prop.errors().as_dict() for prop in pluggable if prop.has_errors()
            }
            if property_errors:
                entry["properties"] = property_errors
        report.append(entry)
    return report


def validate_canonical_payload(payload: Dict[str, Any]) -> List[str]:
    """Validate a canonical pluggable-artifact mapping and return list of errors."""
    try:
        PluggableArtifactPayload.model_validate(payload)
        return []
    except ValidationError as exc:
        return [err["msg"] for err in exc.errors()]
