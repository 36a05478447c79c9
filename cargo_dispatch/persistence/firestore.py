"""
Remote document store backed by Google Cloud Firestore.

Firestore pushes real-time snapshots through ``on_snapshot``; callbacks run on
the client's watch thread, not the caller's.
"""

from typing import Any, Optional

from google.api_core.exceptions import NotFound
from google.cloud import firestore

from cargo_dispatch.core.exceptions import DocumentNotFoundError
from cargo_dispatch.persistence.base import Document, DocumentStore, SnapshotCallback, Unsubscribe


class FirestoreDocumentStore(DocumentStore):
    """Adapter from the document store contract to a Firestore client."""

    def __init__(
        self,
        client: Optional[firestore.Client] = None,
        project_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the Firestore store.

        Args:
            client: Existing Firestore client (created from ADC credentials when omitted)
            project_id: Google Cloud project for a newly created client
        """
        super().__init__(**kwargs)
        self.client = client or firestore.Client(project=project_id)

    @staticmethod
    def _snapshot_document(snapshot: Any) -> Document:
        return {**(snapshot.to_dict() or {}), "id": snapshot.id}

    def list(self, collection: str) -> list[Document]:
        return [self._snapshot_document(snap) for snap in self.client.collection(collection).stream()]

    def get(self, collection: str, doc_id: str) -> Document:
        snapshot = self.client.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            raise DocumentNotFoundError(collection, doc_id)
        return self._snapshot_document(snapshot)

    def add(self, collection: str, data: Document, doc_id: Optional[str] = None) -> str:
        _, ref = self.client.collection(collection).add(self._body(data), document_id=doc_id)
        return ref.id

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        self.client.collection(collection).document(doc_id).set(self._body(data))

    def update(self, collection: str, doc_id: str, changes: Document) -> None:
        try:
            self.client.collection(collection).document(doc_id).update(self._body(changes))
        except NotFound as e:
            raise DocumentNotFoundError(collection, doc_id) from e

    def delete(self, collection: str, doc_id: str) -> None:
        self.client.collection(collection).document(doc_id).delete()

    def subscribe(self, collection: str, callback: SnapshotCallback) -> Unsubscribe:
        """Forward Firestore collection snapshots as lists of documents."""

        def on_snapshot(snapshots: Any, changes: Any, read_time: Any) -> None:
            callback([self._snapshot_document(snap) for snap in snapshots])

        watch = self.client.collection(collection).on_snapshot(on_snapshot)
        self.logger.info("firestore_watch_started", collection=collection)
        return watch.unsubscribe

    def __repr__(self) -> str:
        """String representation of the store."""
        return f"{self.__class__.__name__}(project='{self.client.project}')"
