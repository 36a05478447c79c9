"""
User repository - operator profiles keyed by identity provider uid.
"""

from typing import Optional

from cargo_dispatch.core.exceptions import DocumentNotFoundError
from cargo_dispatch.data.models.user import User
from cargo_dispatch.persistence.base import Document
from cargo_dispatch.services.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Users stored under the uid issued by the identity provider."""

    collection_key = "users"

    def to_model(self, document: Document) -> User:
        return User.from_document(document)

    def save(self, user: User) -> None:
        """Create or replace the user's profile document."""
        self.store.set(self.collection, user.id, user.to_document())
        self.logger.info("user_saved", user_id=user.id, is_admin=user.is_admin)

    def find(self, uid: str) -> Optional[User]:
        """Return the user's profile, or None when no document exists."""
        try:
            return self.get(uid)
        except DocumentNotFoundError:
            return None
