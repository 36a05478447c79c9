"""
Cargo repository - CRUD and snapshots for the cargos collection.
"""

from cargo_dispatch.data.models.cargo import Cargo, CargoDraft, CargoUpdate
from cargo_dispatch.persistence.base import Document
from cargo_dispatch.services.base import BaseRepository


class CargoRepository(BaseRepository[Cargo]):
    """Cargos stored as documents keyed by id."""

    collection_key = "cargos"

    def to_model(self, document: Document) -> Cargo:
        return Cargo.from_document(document)

    def add(self, draft: CargoDraft) -> Cargo:
        """
        Create a cargo from form input.

        Args:
            draft: Create-cargo form input with defaults applied

        Returns:
            The stored Cargo with its new id
        """
        body = draft.to_document()
        doc_id = self.store.add(self.collection, body)
        self.logger.info(
            "cargo_added", doc_id=doc_id, cargo_id=draft.cargo_id, driver_id=draft.driver_id
        )
        return Cargo.from_document({**body, "id": doc_id})

    def update(self, doc_id: str, update: CargoUpdate) -> None:
        """Write the changed cargo fields."""
        self._update(doc_id, update.to_changes())

    def update_order(self, doc_id: str, order: int) -> None:
        """Write a new dispatch sequence number."""
        self._update(doc_id, {"order": order})
