"""
Base repository class for all collection-backed services.

Provides common functionality:
- Collection name lookup from configuration
- Document to model mapping
- Snapshot subscriptions delivered as models
- Structured logging
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from cargo_dispatch.core.config import ConfigManager, get_config
from cargo_dispatch.persistence.base import Document, DocumentStore, Unsubscribe

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository(ABC, Generic[ModelT]):
    """
    Base class for repositories over one document collection.

    Subclasses set ``collection_key`` and implement ``to_model``.
    """

    collection_key: str = ""

    def __init__(
        self,
        store: DocumentStore,
        config_manager: Optional[ConfigManager] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """
        Initialize the repository.

        Args:
            store: Persistence backend
            config_manager: Optional config manager (defaults to global instance)
            logger: Optional structured logger
        """
        self.store = store
        self.config_manager = config_manager or get_config()
        self.collection = self.config_manager.get_collection_name(self.collection_key)
        self.logger = logger or structlog.get_logger(repository=self.collection_key)

    @abstractmethod
    def to_model(self, document: Document) -> ModelT:
        """Map a stored document to its model."""

    def to_models(self, documents: list[Document]) -> list[ModelT]:
        """Map documents, skipping any that fail validation."""
        models = []
        for document in documents:
            try:
                models.append(self.to_model(document))
            except ValidationError as e:
                self.logger.warning(
                    "document_skipped",
                    collection=self.collection,
                    doc_id=document.get("id"),
                    error=str(e),
                )
        return models

    def list_all(self) -> list[ModelT]:
        """Return every model in the collection."""
        return self.to_models(self.store.list(self.collection))

    def get(self, doc_id: str) -> ModelT:
        """
        Return one model.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        return self.to_model(self.store.get(self.collection, doc_id))

    def delete(self, doc_id: str) -> None:
        """Delete a document by id."""
        self.store.delete(self.collection, doc_id)
        self.logger.info("document_deleted", collection=self.collection, doc_id=doc_id)

    def subscribe(self, callback: Callable[[list[ModelT]], None]) -> Unsubscribe:
        """
        Receive every collection snapshot as a list of models.

        Returns:
            Function that cancels the subscription
        """

        def on_snapshot(documents: list[Document]) -> None:
            callback(self.to_models(documents))

        return self.store.subscribe(self.collection, on_snapshot)

    def _update(self, doc_id: str, changes: dict[str, Any]) -> None:
        if not changes:
            return
        self.store.update(self.collection, doc_id, changes)
        self.logger.info(
            "document_updated", collection=self.collection, doc_id=doc_id, fields=sorted(changes)
        )

    def __repr__(self) -> str:
        """String representation of the repository."""
        return f"{self.__class__.__name__}(collection='{self.collection}')"
