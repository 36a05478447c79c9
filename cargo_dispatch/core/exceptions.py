"""Error hierarchy for the dispatch dashboard."""


class DispatchError(Exception):
    """Base class for all dispatch errors."""


class ConfigurationError(DispatchError):
    """Configuration is missing or invalid."""


class DocumentNotFoundError(DispatchError):
    """A document does not exist in its collection."""

    def __init__(self, collection: str, doc_id: str) -> None:
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document not found: {collection}/{doc_id}")


class DuplicateCargoIdError(DispatchError):
    """A user-entered cargo id is already used by another cargo."""

    def __init__(self, cargo_id: str) -> None:
        self.cargo_id = cargo_id
        super().__init__("This ID already exists")


class AuthError(DispatchError):
    """Authentication failed; the message is shown to the operator."""
