"""Read-only artifact store registry consulted during validation."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from pydantic import BaseModel, Field


class ArtifactStore(BaseModel):
    """A plugin-backed location where pluggable artifacts are published."""

    id: str
    plugin_id: str
    properties: Dict[str, Optional[str]] = Field(default_factory=dict)


class ArtifactStores:
    """Ordered registry of artifact stores looked up by exact id."""

    def __init__(self, stores: Optional[Iterable[ArtifactStore]] = None):
        self._stores: List[ArtifactStore] = list(stores) if stores is not None else []

    def add(self, store: ArtifactStore) -> None:
        self._stores.append(store)

    def find(self, store_id: Optional[str]) -> Optional[ArtifactStore]:
        for store in self._stores:
            if store.id == store_id:
                return store
        return None

    def ids(self) -> List[str]:
        return [store.id for store in self._stores]

    def __len__(self) -> int:
        return len(self._stores)

    def __iter__(self) -> Iterator[ArtifactStore]:
        return iter(self._stores)


class ValidationContext:
    """Lookup surface handed to declarations while they validate."""

    def __init__(self, artifact_stores: Optional[ArtifactStores] = None):
        self._artifact_stores = artifact_stores if artifact_stores is not None else ArtifactStores()

    def artifact_stores(self) -> ArtifactStores:
        return self._artifact_stores
