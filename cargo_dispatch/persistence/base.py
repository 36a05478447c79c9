"""
Document store contract shared by every persistence backend.

A store holds named collections of JSON-like documents. Documents returned by
``list`` and ``get`` carry their id under the ``id`` key; document bodies
passed in never need one.
"""

import copy
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import structlog

Document = dict[str, Any]
SnapshotCallback = Callable[[list[Document]], None]
Unsubscribe = Callable[[], None]


class DocumentStore(ABC):
    """
    Base class for persistence backends.

    Provides:
    - CRUD per collection
    - Full-snapshot change subscriptions for in-process backends
    """

    def __init__(self, logger: Optional[structlog.BoundLogger] = None) -> None:
        self.logger = logger or structlog.get_logger(store=self.__class__.__name__)
        self._listeners: dict[str, list[SnapshotCallback]] = {}
        self._listeners_lock = threading.Lock()

    @abstractmethod
    def list(self, collection: str) -> list[Document]:
        """Return every document in a collection."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Document:
        """
        Return a single document.

        Raises:
            DocumentNotFoundError: If no document has this id
        """

    @abstractmethod
    def add(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        """
        Create a document and return its id.

        Args:
            collection: Collection name
            data: Document body
            doc_id: Explicit id; generated when omitted
        """

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: Document) -> None:
        """Create or replace the document with this id."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, changes: Document) -> None:
        """
        Shallow-merge changes into an existing document.

        Raises:
            DocumentNotFoundError: If no document has this id
        """

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document; deleting a missing id does nothing."""

    def subscribe(self, collection: str, callback: SnapshotCallback) -> Unsubscribe:
        """
        Receive full-collection snapshots.

        The current snapshot is delivered immediately and again after every
        change to the collection.

        Returns:
            Function that cancels the subscription
        """
        with self._listeners_lock:
            self._listeners.setdefault(collection, []).append(callback)

        self.logger.debug("collection_subscribed", collection=collection)
        callback(self.list(collection))

        def unsubscribe() -> None:
            with self._listeners_lock:
                listeners = self._listeners.get(collection, [])
                if callback in listeners:
                    listeners.remove(callback)
            self.logger.debug("collection_unsubscribed", collection=collection)

        return unsubscribe

    def _notify(self, collection: str) -> None:
        """Push the current snapshot of a collection to its subscribers."""
        with self._listeners_lock:
            listeners = list(self._listeners.get(collection, []))
        if not listeners:
            return

        snapshot = self.list(collection)
        for listener in listeners:
            listener(copy.deepcopy(snapshot))

    @staticmethod
    def _with_id(doc_id: str, data: Document) -> Document:
        document = copy.deepcopy(data)
        document["id"] = doc_id
        return document

    @staticmethod
    def _body(data: Document) -> Document:
        body = copy.deepcopy(data)
        body.pop("id", None)
        return body

    def __repr__(self) -> str:
        """String representation of the store."""
        return f"{self.__class__.__name__}()"
