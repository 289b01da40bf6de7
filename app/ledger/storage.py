"""
Key/value blob stores backing the invoice ledger.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from app.models import StoredBlob


class BlobStore(ABC):
    """Minimal named-blob storage: get, put, delete."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under *key*, or None."""

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Overwrite the blob stored under *key*."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove *key*; missing keys are ignored."""


class MemoryBlobStore(BlobStore):
    """In-process store used by tests and throwaway local runs."""

    def __init__(self) -> None:
        self._blobs: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def put(self, key: str, value: str) -> None:
        self._blobs[key] = value

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)


class MongoBlobStore(BlobStore):
    """Blobs kept as ``StoredBlob`` documents in MongoDB."""

    def get(self, key: str) -> Optional[str]:
        blob = StoredBlob.objects(key=key).first()
        return blob.value if blob else None

    def put(self, key: str, value: str) -> None:
        StoredBlob.objects(key=key).update_one(
            set__value=value,
            set__updated_at=datetime.utcnow(),
            upsert=True,
        )

    def delete(self, key: str) -> None:
        StoredBlob.objects(key=key).delete()


def create_blob_store(backend: str) -> BlobStore:
    """Return the blob store named by the ``LEDGER_BACKEND`` setting."""
    if backend == "mongo":
        return MongoBlobStore()
    if backend == "memory":
        return MemoryBlobStore()
    raise ValueError(f"Unknown ledger backend: {backend!r}")
