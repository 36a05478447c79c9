"""
Persistence backends for the dispatch dashboard.

This module provides:
- DocumentStore: The collection CRUD + snapshot subscription contract
- MemoryDocumentStore: Process-local store
- LocalDocumentStore: Offline/demo fallback on local key-value files
- FirestoreDocumentStore: Remote store with real-time listeners
"""

from typing import Optional

from cargo_dispatch.core.config import ConfigManager, get_config
from cargo_dispatch.persistence.base import DocumentStore
from cargo_dispatch.persistence.local import LocalDocumentStore
from cargo_dispatch.persistence.memory import MemoryDocumentStore


def create_document_store(config_manager: Optional[ConfigManager] = None) -> DocumentStore:
    """
    Create the persistence backend named in configuration.

    The local backend is seeded with the configured demo data the first time
    it runs.

    Args:
        config_manager: Optional config manager (defaults to global instance)

    Returns:
        Configured DocumentStore
    """
    config_manager = config_manager or get_config()
    storage = config_manager.get_storage_config()

    if storage.backend == "memory":
        return MemoryDocumentStore()

    if storage.backend == "firestore":
        # Google client is only loaded for the remote backend
        from cargo_dispatch.persistence.firestore import FirestoreDocumentStore

        return FirestoreDocumentStore(project_id=storage.firestore_project_id)

    store = LocalDocumentStore(storage.local_path)
    seed = {
        config_manager.get_collection_name(key): documents
        for key, documents in config_manager.get_seed_data().items()
    }
    store.initialize(seed)
    return store


__all__ = [
    "DocumentStore",
    "LocalDocumentStore",
    "MemoryDocumentStore",
    "create_document_store",
]
