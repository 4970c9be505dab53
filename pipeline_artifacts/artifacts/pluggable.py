"""Artifact declarations published through a plugin-backed artifact store."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional

from logging_config import log_debug
from pipeline_artifacts.artifacts.base import ArtifactConfig
from pipeline_artifacts.artifacts.models import ArtifactType, PluggableArtifactPayload
from pipeline_artifacts.artifacts.uniqueness import apply_duplicate_scan, detect_duplicates
from pipeline_artifacts.domain.configuration import Configuration, ConfigurationProperty
from pipeline_artifacts.domain.naming import NameTypeValidator
from pipeline_artifacts.stores.registry import ValidationContext

logger = logging.getLogger(__name__)

ID = "id"
STORE_ID = "storeId"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class PluggableArtifactConfig(ArtifactConfig):
    """Reference to an artifact store plus the plugin settings for one artifact.

    The plugin settings live in a composed :class:`Configuration`; the
    declaration also behaves as a sized, iterable view over those properties.
    """

    def __init__(
        self,
        id: Optional[str] = None,
        store_id: Optional[str] = None,
        *properties: ConfigurationProperty,
        configuration: Optional[Configuration] = None,
    ):
        super().__init__()
        self.id = id
        self.store_id = store_id
        self.configuration = configuration if configuration is not None else Configuration()
        for prop in properties:
            self.configuration.add(prop)

    @property
    def artifact_type(self) -> ArtifactType:
        return ArtifactType.EXTERNAL

    def validate(self, context: ValidationContext) -> None:
        if not self._validate_mandatory_attributes():
            return

        self.configuration.validate_uniqueness(self.artifact_type_value)

        name_validator = NameTypeValidator()
        if not name_validator.is_name_valid(self.store_id):
            self.add_error(
                STORE_ID, NameTypeValidator.error_message("pluggable artifact storeId", self.store_id)
            )

        if not _is_blank(self.store_id):
            if context.artifact_stores().find(self.store_id) is None:
                self.add_error(STORE_ID, f"Artifact store with id '{self.store_id}' does not exist.")

        if not name_validator.is_name_valid(self.id):
            self.add_error(ID, NameTypeValidator.error_message("pluggable artifact id", self.id))

        log_debug(
            logger,
            f"Validated {self}",
            component="PluggableArtifactConfig",
            data={"error_fields": self.errors().fields(), "properties": len(self.configuration)},
        )

    def _validate_mandatory_attributes(self) -> bool:
        """Record missing id/storeId; False means the pass must stop here."""
        passed = True
        if _is_blank(self.id):
            self.add_error(ID, '"Id" is required')
            passed = False
        if _is_blank(self.store_id):
            self.add_error(STORE_ID, '"Store id" is required')
            passed = False
        return passed

    def is_missing_mandatory_fields(self) -> bool:
        return _is_blank(self.id) or _is_blank(self.store_id)

    def check_uniqueness_against(self, siblings: List[ArtifactConfig]) -> None:
        apply_duplicate_scan(self, detect_duplicates(self, siblings), siblings)

    def has_errors(self) -> bool:
        return super().has_errors() or self.configuration.has_errors()

    def clear_errors(self) -> None:
        super().clear_errors()
        self.configuration.clear_errors()

    def as_pluggable(self) -> Optional["PluggableArtifactConfig"]:
        return self

    def add_property(self, key: str, value: Optional[str] = None, secure: bool = False) -> ConfigurationProperty:
        return self.configuration.add_new(key, value, secure)

    def to_canonical_form(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "storeId": self.store_id,
            "configuration": self.configuration.as_map(resolve_secure=True),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_canonical_form())

    @classmethod
    def from_canonical_form(cls, payload: Dict[str, Any]) -> "PluggableArtifactConfig":
        """Rebuild a declaration from its canonical mapping.

        Only declarations that pass validation round-trip through
        ``to_canonical_form``: a missing id or storeId is emitted as null and
        rejected here, and repeated property keys collapse into one entry.

        Raises pydantic.ValidationError when the payload is malformed.
        """
        parsed = PluggableArtifactPayload.model_validate(payload)
        properties = [ConfigurationProperty(key, value) for key, value in parsed.configuration.items()]
        return cls(parsed.id, parsed.store_id, *properties)

    def __len__(self) -> int:
        return len(self.configuration)

    def __iter__(self) -> Iterator[ConfigurationProperty]:
        return iter(self.configuration)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, PluggableArtifactConfig):
            return NotImplemented
        return (
            self.configuration == other.configuration
            and self.id == other.id
            and self.store_id == other.store_id
        )

    def __hash__(self) -> int:
        return hash((self.configuration, self.id, self.store_id))

    def __repr__(self) -> str:
        return f"PluggableArtifactConfig{{id='{self.id}', storeId='{self.store_id}'}}"
