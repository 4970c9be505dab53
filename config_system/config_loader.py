"""
Configuration loading for job artifact declarations.
Reads a YAML document of artifact stores and jobs and materializes the
artifact declarations each job holds.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    EmptyConfigError,
    LookupFailedError,
    UnknownArtifactTypeError,
)
from logging_config import log_debug, log_warning
from pipeline_artifacts.artifacts.base import ArtifactConfig
from pipeline_artifacts.artifacts.builtin import BuiltinArtifactConfig
from pipeline_artifacts.artifacts.models import ArtifactType
from pipeline_artifacts.artifacts.pluggable import PluggableArtifactConfig
from pipeline_artifacts.artifacts.validation import (
    ArtifactConfigs,
    collect_errors,
    validate_artifact_configs,
)
from pipeline_artifacts.domain.configuration import ConfigurationProperty
from pipeline_artifacts.stores.registry import ArtifactStore, ArtifactStores, ValidationContext

logger = logging.getLogger(__name__)


class PropertyEntry(BaseModel):
    """A plugin setting as written in YAML."""
    key: str
    value: Optional[str] = None
    secure: bool = False


class ArtifactStoreEntry(BaseModel):
    """Configuration for an artifact store."""
    id: str
    plugin_id: str
    properties: List[PropertyEntry] = []


class ArtifactEntry(BaseModel):
    """One entry of a job's artifacts section; fields depend on ``type``."""
    model_config = ConfigDict(populate_by_name=True)

    type: str
    id: Optional[str] = None
    store_id: Optional[str] = Field(default=None, alias="storeId")
    configuration: List[PropertyEntry] = []
    source: Optional[str] = None
    destination: Optional[str] = None


class JobEntry(BaseModel):
    """Configuration for a single job."""
    name: str
    artifacts: List[ArtifactEntry] = []


class PipelineConfigDocument(BaseModel):
    """Top-level configuration document."""
    artifact_stores: List[ArtifactStoreEntry] = []
    jobs: List[JobEntry] = []


@dataclass
class JobConfig:
    """A job and its materialized artifact declarations."""
    name: str
    artifacts: ArtifactConfigs = field(default_factory=ArtifactConfigs)


class ConfigValidationError(ConfigLoadError):
    """Raised when the configuration document is malformed."""
    pass


class ConfigLoader:
    """Loads a configuration document and builds declarations from it."""

    def __init__(self, config_path: Union[str, Path]):
        self.config_path = Path(config_path)
        self._document: Optional[PipelineConfigDocument] = None

    def load_document(self) -> PipelineConfigDocument:
        """Load and validate the YAML document (cached after the first read)."""
        if self._document is not None:
            return self._document

        if not self.config_path.exists():
            raise ConfigFileNotFoundError(f"Config file not found: {self.config_path}")

        raw_text = self.config_path.read_text(encoding="utf-8")
        if not raw_text.strip():
            raise EmptyConfigError(f"Config file is empty: {self.config_path}")

        try:
            config_data = yaml.safe_load(raw_text)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(config_data, dict):
            raise ConfigValidationError(
                f"Config in {self.config_path} must be a mapping, not {type(config_data).__name__}"
            )

        try:
            self._document = PipelineConfigDocument(**config_data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid config in {self.config_path}: {e}")

        log_debug(logger, "Configuration document loaded", component="ConfigLoader", data={
            "config_path": str(self.config_path),
            "artifact_stores": len(self._document.artifact_stores),
            "jobs": len(self._document.jobs),
        })
        return self._document

    def load_artifact_stores(self) -> ArtifactStores:
        document = self.load_document()
        return ArtifactStores(
            ArtifactStore(
                id=entry.id,
                plugin_id=entry.plugin_id,
                properties={prop.key: prop.value for prop in entry.properties},
            )
            for entry in document.artifact_stores
        )

    def build_validation_context(self) -> ValidationContext:
        return ValidationContext(self.load_artifact_stores())

    def load_jobs(self) -> List[JobConfig]:
        """Materialize fresh declarations for every job."""
        document = self.load_document()
        jobs = []
        for job_entry in document.jobs:
            artifacts = ArtifactConfigs(
                self._build_artifact(entry, job_entry.name) for entry in job_entry.artifacts
            )
            jobs.append(JobConfig(name=job_entry.name, artifacts=artifacts))
        return jobs

    def _build_artifact(self, entry: ArtifactEntry, job_name: str) -> ArtifactConfig:
        try:
            artifact_type = ArtifactType(entry.type)
        except ValueError:
            raise UnknownArtifactTypeError(
                f"Job '{job_name}' declares an artifact of unknown type '{entry.type}'. "
                f"Supported types: {[t.value for t in ArtifactType]}"
            )

        if artifact_type == ArtifactType.EXTERNAL:
            properties = [
                ConfigurationProperty(prop.key, prop.value, prop.secure) for prop in entry.configuration
            ]
            return PluggableArtifactConfig(entry.id, entry.store_id, *properties)

        return BuiltinArtifactConfig(entry.source, entry.destination, artifact_type)

    def list_job_names(self) -> List[str]:
        return [job.name for job in self.load_document().jobs]

    def get_job(self, job_name: str) -> JobConfig:
        for job in self.load_jobs():
            if job.name == job_name:
                return job
        raise LookupFailedError(f"Job '{job_name}' not found in {self.config_path}")

    def find_artifact(self, job_name: str, artifact_id: str) -> PluggableArtifactConfig:
        artifact = self.get_job(job_name).artifacts.find_pluggable(artifact_id)
        if artifact is None:
            raise LookupFailedError(
                f"Pluggable artifact '{artifact_id}' not found in job '{job_name}'"
            )
        return artifact

    def validate_jobs(self) -> Dict[str, List[Dict[str, Any]]]:
        """Validate every job's artifacts and return the errors per job."""
        context = self.build_validation_context()
        report: Dict[str, List[Dict[str, Any]]] = {}
        for job in self.load_jobs():
            if validate_artifact_configs(job.artifacts, context):
                continue
            report[job.name] = collect_errors(job.artifacts)
            for entry in report[job.name]:
                log_warning(logger, f"Invalid artifact in job '{job.name}'", component="ConfigLoader",
                            data=entry)
        return report

    def validate_all(self) -> bool:
        return not self.validate_jobs()


def validate_config(config_path: Union[str, Path]) -> bool:
    """Validate a configuration file; load problems raise, declaration problems return False."""
    loader = ConfigLoader(config_path)
    return loader.validate_all()
