"""Common interface for the artifact declarations a job can hold."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pipeline_artifacts.artifacts.models import ARTIFACT_TYPE_LABELS, ArtifactType
from pipeline_artifacts.domain.errors import ConfigErrors
from pipeline_artifacts.stores.registry import ValidationContext

if TYPE_CHECKING:
    from pipeline_artifacts.artifacts.builtin import BuiltinArtifactConfig
    from pipeline_artifacts.artifacts.pluggable import PluggableArtifactConfig


class ArtifactConfig(ABC):
    """One entry of a job's artifact list.

    Validation never raises for bad input: problems are recorded on the
    declaration's own error collector and surfaced through ``has_errors``.
    Sibling lists hold several variants; ``as_pluggable`` and ``as_builtin``
    give a typed view when the declaration is of that kind.
    """

    def __init__(self):
        self._errors = ConfigErrors()

    @property
    @abstractmethod
    def artifact_type(self) -> ArtifactType:
        ...

    @property
    def artifact_type_value(self) -> str:
        return ARTIFACT_TYPE_LABELS[self.artifact_type]

    @abstractmethod
    def validate(self, context: ValidationContext) -> None:
        ...

    @abstractmethod
    def check_uniqueness_against(self, siblings: List["ArtifactConfig"]) -> None:
        ...

    @abstractmethod
    def to_canonical_form(self) -> Dict[str, Any]:
        ...

    def validate_tree(self, context: ValidationContext) -> bool:
        self.validate(context)
        return not self.has_errors()

    def errors(self) -> ConfigErrors:
        return self._errors

    def add_error(self, field_name: str, message: str) -> None:
        self._errors.add(field_name, message)

    def has_errors(self) -> bool:
        return not self._errors.is_empty()

    def clear_errors(self) -> None:
        self._errors.clear()

    def as_pluggable(self) -> Optional["PluggableArtifactConfig"]:
        return None

    def as_builtin(self) -> Optional["BuiltinArtifactConfig"]:
        return None
