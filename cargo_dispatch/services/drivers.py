"""
Driver repository - CRUD and snapshots for the drivers collection.
"""

from typing import Optional

from cargo_dispatch.data.models.driver import Driver, DriverDraft, DriverUpdate
from cargo_dispatch.data.models.user import User
from cargo_dispatch.persistence.base import Document
from cargo_dispatch.services.base import BaseRepository


class DriverRepository(BaseRepository[Driver]):
    """Drivers stored as documents keyed by id."""

    collection_key = "drivers"

    def to_model(self, document: Document) -> Driver:
        return Driver.from_document(document)

    def add(self, draft: DriverDraft) -> Driver:
        """
        Create a driver from validated form input.

        Args:
            draft: Add-driver form input

        Returns:
            The stored Driver with its new id
        """
        body = draft.to_document()
        doc_id = self.store.add(self.collection, body)
        self.logger.info("driver_added", driver_id=doc_id, name=draft.name)
        return Driver.from_document({**body, "id": doc_id})

    def update(self, driver_id: str, update: DriverUpdate) -> None:
        """Write the changed driver fields."""
        self._update(driver_id, update.to_changes())


def search_drivers(drivers: list[Driver], query: str) -> list[Driver]:
    """Filter drivers by a case-insensitive name substring."""
    needle = query.strip().lower()
    if not needle:
        return list(drivers)
    return [driver for driver in drivers if needle in driver.name.lower()]


def visible_drivers(
    drivers: list[Driver], user: Optional[User], public_owner_id: str
) -> list[Driver]:
    """Drivers the user may see (public ones plus their own, all for admins)."""
    return [driver for driver in drivers if driver.is_visible_to(user, public_owner_id)]
