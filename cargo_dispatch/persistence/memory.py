"""
In-memory document store for tests and demos.
"""

import uuid
from typing import Any, Optional

from cargo_dispatch.core.exceptions import DocumentNotFoundError
from cargo_dispatch.persistence.base import Document, DocumentStore


class MemoryDocumentStore(DocumentStore):
    """Process-local store; collections keep insertion order."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._collections: dict[str, dict[str, Document]] = {}

    def _collection(self, collection: str) -> dict[str, Document]:
        return self._collections.setdefault(collection, {})

    def list(self, collection: str) -> list[Document]:
        return [self._with_id(doc_id, data) for doc_id, data in self._collection(collection).items()]

    def get(self, collection: str, doc_id: str) -> Document:
        documents = self._collection(collection)
        if doc_id not in documents:
            raise DocumentNotFoundError(collection, doc_id)
        return self._with_id(doc_id, documents[doc_id])

    def add(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or uuid.uuid4().hex[:20]
        self._collection(collection)[doc_id] = self._body(data)
        self._notify(collection)
        return doc_id

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        self._collection(collection)[doc_id] = self._body(data)
        self._notify(collection)

    def update(self, collection: str, doc_id: str, changes: Document) -> None:
        documents = self._collection(collection)
        if doc_id not in documents:
            raise DocumentNotFoundError(collection, doc_id)
        documents[doc_id].update(self._body(changes))
        self._notify(collection)

    def delete(self, collection: str, doc_id: str) -> None:
        if self._collection(collection).pop(doc_id, None) is not None:
            self._notify(collection)
