"""Built-in build and test artifact declarations."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from pipeline_artifacts.artifacts.base import ArtifactConfig
from pipeline_artifacts.artifacts.models import ArtifactType
from pipeline_artifacts.stores.registry import ValidationContext

SRC = "source"
DEST = "destination"
DUPLICATE_ARTIFACTS_MESSAGE = "Duplicate artifacts defined."


class BuiltinArtifactConfig(ArtifactConfig):
    """Files uploaded to the server's own artifact repository."""

    def __init__(
        self,
        source: Optional[str] = None,
        destination: Optional[str] = None,
        artifact_type: ArtifactType = ArtifactType.BUILD,
    ):
        super().__init__()
        if artifact_type == ArtifactType.EXTERNAL:
            raise ValueError("Built-in artifacts must be of type 'build' or 'test'")
        self.source = source
        self.destination = destination or ""
        self._artifact_type = artifact_type

    @property
    def artifact_type(self) -> ArtifactType:
        return self._artifact_type

    def validate(self, context: ValidationContext) -> None:
        if not (self.source or "").strip():
            self.add_error(SRC, f'"Source" is required for {self.artifact_type_value}')
        if self.destination and os.path.isabs(self.destination):
            self.add_error(
                DEST, f"Invalid destination path '{self.destination}'. It must be a relative path."
            )

    def check_uniqueness_against(self, siblings: List[ArtifactConfig]) -> None:
        for sibling in siblings:
            existing = sibling.as_builtin()
            if existing is not None and self._same_target(existing):
                for entity in (self, existing):
                    entity.add_error(SRC, DUPLICATE_ARTIFACTS_MESSAGE)
                    entity.add_error(DEST, DUPLICATE_ARTIFACTS_MESSAGE)
                return
        siblings.append(self)

    def _same_target(self, other: "BuiltinArtifactConfig") -> bool:
        return (
            self.artifact_type == other.artifact_type
            and self.source == other.source
            and self.destination == other.destination
        )

    def to_canonical_form(self) -> Dict[str, Any]:
        return {
            "type": self.artifact_type.value,
            "source": self.source,
            "destination": self.destination,
        }

    def as_builtin(self) -> Optional["BuiltinArtifactConfig"]:
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BuiltinArtifactConfig):
            return NotImplemented
        return self._same_target(other)

    def __hash__(self) -> int:
        return hash((self.artifact_type, self.source, self.destination))

    def __repr__(self) -> str:
        return (
            f"BuiltinArtifactConfig{{type='{self.artifact_type.value}', "
            f"source='{self.source}', destination='{self.destination}'}}"
        )
