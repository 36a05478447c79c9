"""
Client state for the dispatch dashboard.
"""

from .dispatch_store import DispatchStore, create_dispatch_store

__all__ = ["DispatchStore", "create_dispatch_store"]
