"""Artifact type vocabulary and the canonical pluggable-artifact payload."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ArtifactType(str, Enum):
    """Supported artifact declaration kinds."""

    BUILD = "build"
    TEST = "test"
    EXTERNAL = "external"


ARTIFACT_TYPE_LABELS: Dict[ArtifactType, str] = {
    ArtifactType.BUILD: "Build Artifact",
    ArtifactType.TEST: "Test Artifact",
    ArtifactType.EXTERNAL: "Pluggable Artifact",
}


class PluggableArtifactPayload(BaseModel):
    """Canonical form of a pluggable artifact declaration."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    store_id: str = Field(alias="storeId")
    configuration: Dict[str, Optional[str]] = Field(default_factory=dict)
