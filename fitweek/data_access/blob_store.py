"""Blob storage contract and the local-disk implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from fitweek.config import settings
from fitweek.infra import log_utils
from .documents import validate_path


class BlobStore(ABC):
    """Stores byte payloads under a key and hands back a retrievable URL."""

    @abstractmethod
    def upload(self, key: str, payload: bytes, content_type: str = "application/octet-stream") -> str:
        """Uploads `payload` under `key` and returns its download URL."""
        pass


class LocalBlobStore(BlobStore):
    """Blob store that writes files below `settings.blob_path`."""

    def __init__(self, root: Optional[Path] = None):
        self._root = root

    @property
    def root(self) -> Path:
        return self._root or settings.blob_path

    def upload(self, key: str, payload: bytes, content_type: str = "application/octet-stream") -> str:
        target = self.root.joinpath(*validate_path(key))
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
        log_utils.log_message(f"[LocalBlobStore] Stored {len(payload)} bytes at {key}")
        return target.resolve().as_uri()
