#!/usr/bin/env python3
"""Export JSON schemas for the configuration document and pluggable artifacts."""

from __future__ import annotations

import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config_system.config_loader import PipelineConfigDocument
from pipeline_artifacts.artifacts.models import PluggableArtifactPayload

SCHEMA_MODELS = {
    "PipelineConfigDocument": PipelineConfigDocument,
    "PluggableArtifact": PluggableArtifactPayload,
}


def main(target_dir: str = "pipeline_artifacts/artifacts/schemas") -> int:
    schema_dir = Path(target_dir)
    schema_dir.mkdir(parents=True, exist_ok=True)

    for name, model_cls in SCHEMA_MODELS.items():
        schema_path = schema_dir / f"{name}.schema.json"
        with open(schema_path, "w", encoding="utf-8") as file_obj:
            json.dump(model_cls.model_json_schema(by_alias=True), file_obj, indent=2, ensure_ascii=False)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
