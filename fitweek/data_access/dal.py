from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional


Snapshot = Optional[Dict[str, Any]]


class DocumentNotFoundError(LookupError):
    """Raised when a field update targets a document that does not exist."""

    def __init__(self, path: str):
        super().__init__(f"No document at {path}")
        self.path = path


class DataAccessLayer(ABC):
    """
    Abstract Base Class for a Data Access Layer.
    Defines the contract for the keyed document store that holds profiles,
    week plans, measurements and diet plans, so the business logic can work
    against any storage backend (JSON, DB, etc.) through a consistent interface.

    Documents are addressed by slash-separated paths such as `users/{uid}` or
    `userWeeks/{uid}_{weekId}`; see `fitweek.data_access.paths`.
    """

    @abstractmethod
    def get_document(self, path: str) -> Snapshot:
        """Returns the document at `path`, or None if it does not exist."""
        pass

    @abstractmethod
    def set_document(self, path: str, data: Dict[str, Any], merge: bool = False) -> None:
        """
        Writes a document.

        Args:
            path: The document path.
            data: The document body. May contain `Increment` values.
            merge: When True, deep-merge into the existing document (creating
                it if needed) instead of replacing it.
        """
        pass

    @abstractmethod
    def create_document(self, path: str, data: Dict[str, Any]) -> bool:
        """
        Atomically creates a document if nothing exists at `path`.

        Returns:
            True if this call created the document, False if it already existed.
        """
        pass

    @abstractmethod
    def update_fields(self, path: str, updates: Dict[str, Any]) -> None:
        """
        Applies dotted-path field updates (`"stats.totalPoints": Increment(10)`)
        to an existing document.

        Raises:
            DocumentNotFoundError: if the document does not exist.
        """
        pass

    @abstractmethod
    def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        """Returns the documents directly under `collection`, ordered by key."""
        pass

    # --- Live subscriptions ---------------------------------------------------
    def subscribe(self, path: str, callback: Callable[[Snapshot], None]) -> Callable[[], None]:
        """
        Calls `callback` with the current snapshot of `path` now and after every
        write made to it through this instance. Returns an unsubscribe function.
        """
        listeners = self._listeners().setdefault(path, [])
        listeners.append(callback)
        callback(self.get_document(path))

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def _listeners(self) -> Dict[str, List[Callable[[Snapshot], None]]]:
        if not hasattr(self, "_subscriptions"):
            self._subscriptions: Dict[str, List[Callable[[Snapshot], None]]] = {}
        return self._subscriptions

    def _notify(self, path: str) -> None:
        callbacks = list(self._listeners().get(path, []))
        if not callbacks:
            return
        snapshot = self.get_document(path)
        for callback in callbacks:
            callback(snapshot)
