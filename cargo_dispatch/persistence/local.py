"""
Local fallback store backed by on-disk key-value storage.

Each collection is one key holding a JSON array of documents, stored as
``<directory>/<collection>.json``. Every operation reads and rewrites the
whole key, which is fine for the small collections a dispatcher handles.
"""

import json
import time
from pathlib import Path
from typing import Any, Optional

from cargo_dispatch.core.exceptions import DocumentNotFoundError
from cargo_dispatch.persistence.base import Document, DocumentStore


class LocalDocumentStore(DocumentStore):
    """JSON file per collection; ids are epoch-millisecond strings."""

    def __init__(self, directory: Path, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._last_id = 0

    def _path(self, collection: str) -> Path:
        return self.directory / f"{collection}.json"

    def has_key(self, collection: str) -> bool:
        """Whether the collection key has ever been written."""
        return self._path(collection).exists()

    def _read(self, collection: str) -> list[Document]:
        path = self._path(collection)
        if not path.exists():
            return []
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, collection: str, documents: list[Document]) -> None:
        path = self._path(collection)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(documents, f, indent=2, default=str)
        tmp_path.replace(path)
        self._notify(collection)

    def _next_id(self) -> str:
        # Two adds in the same millisecond must not share an id
        candidate = int(time.time() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    def initialize(self, defaults: dict[str, list[Document]]) -> None:
        """
        Seed collections that have never been written.

        Args:
            defaults: Seed documents per collection; each should carry an ``id``
        """
        for collection, documents in defaults.items():
            if self.has_key(collection):
                continue
            seeded = [
                {**document, "id": str(document.get("id") or self._next_id())}
                for document in documents
            ]
            self._write(collection, seeded)
            self.logger.info("collection_seeded", collection=collection, count=len(seeded))

    def list(self, collection: str) -> list[Document]:
        return self._read(collection)

    def get(self, collection: str, doc_id: str) -> Document:
        for document in self._read(collection):
            if document.get("id") == doc_id:
                return document
        raise DocumentNotFoundError(collection, doc_id)

    def add(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        # An explicit id that already exists replaces that document
        doc_id = doc_id or self._next_id()
        self.set(collection, doc_id, data)
        return doc_id

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        documents = self._read(collection)
        replacement = self._with_id(doc_id, data)
        for index, document in enumerate(documents):
            if document.get("id") == doc_id:
                documents[index] = replacement
                break
        else:
            documents.append(replacement)
        self._write(collection, documents)

    def update(self, collection: str, doc_id: str, changes: Document) -> None:
        documents = self._read(collection)
        for document in documents:
            if document.get("id") == doc_id:
                document.update(self._body(changes))
                break
        else:
            raise DocumentNotFoundError(collection, doc_id)
        self._write(collection, documents)

    def delete(self, collection: str, doc_id: str) -> None:
        documents = self._read(collection)
        remaining = [document for document in documents if document.get("id") != doc_id]
        if len(remaining) != len(documents):
            self._write(collection, remaining)

    def __repr__(self) -> str:
        """String representation of the store."""
        return f"{self.__class__.__name__}(directory='{self.directory}')"
