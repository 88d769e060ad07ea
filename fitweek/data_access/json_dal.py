"""JSON file-based implementation of the Data Access Layer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from fitweek.config import settings
from fitweek.infra import log_utils
from .dal import DataAccessLayer, DocumentNotFoundError, Snapshot
from .documents import apply_updates, deep_merge, resolve, validate_path


class JsonDal(DataAccessLayer):
    """Data Access Layer that persists each document as a JSON file on disk."""

    def __init__(self, root: Optional[Path] = None):
        self._root = root

    @property
    def root(self) -> Path:
        return self._root or settings.store_path

    def _file_for(self, path: str) -> Path:
        segments = validate_path(path)
        return self.root.joinpath(*segments[:-1], f"{segments[-1]}.json")

    def _read_json(self, path: Path) -> Any:
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def _write_json(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)

    # --- Document Operations -------------------------------------------------
    def get_document(self, path: str) -> Snapshot:
        return self._read_json(self._file_for(path))

    def set_document(self, path: str, data: Dict[str, Any], merge: bool = False) -> None:
        file_path = self._file_for(path)
        if merge:
            body = deep_merge(self._read_json(file_path), data)
        else:
            body = resolve(data)
        self._write_json(file_path, body)
        self._notify(path)

    def create_document(self, path: str, data: Dict[str, Any]) -> bool:
        file_path = self._file_for(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            # Exclusive creation makes create-if-absent atomic on the filesystem
            with file_path.open("x", encoding="utf-8") as f:
                json.dump(resolve(data), f, indent=2, sort_keys=True)
        except FileExistsError:
            log_utils.log_message(f"[JsonDal] {path} already exists, not created")
            return False
        self._notify(path)
        return True

    def update_fields(self, path: str, updates: Dict[str, Any]) -> None:
        file_path = self._file_for(path)
        current = self._read_json(file_path)
        if current is None:
            raise DocumentNotFoundError(path)
        self._write_json(file_path, apply_updates(current, updates))
        self._notify(path)

    def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        directory = self.root.joinpath(*validate_path(collection))
        if not directory.is_dir():
            return []
        return [self._read_json(p) for p in sorted(directory.glob("*.json"))]
