"""Document store abstraction — pluggable keyed-document storage."""

import os

from shared.store.port import Document, DocumentNotFound, DocumentStore, Filter

__all__ = [
    "Document",
    "DocumentNotFound",
    "DocumentStore",
    "Filter",
    "get_store",
    "reset_store",
    "set_store",
]

_store_instance: DocumentStore | None = None


def get_store() -> DocumentStore:
    """Return the configured document store (singleton).

    Uses the in-memory store by default. In production, configure via the
    STORE_ADAPTER environment variable.
    """
    global _store_instance
    if _store_instance is None:
        adapter = os.environ.get("STORE_ADAPTER", "memory")
        if adapter == "memory":
            from shared.store.memory import InMemoryDocumentStore

            _store_instance = InMemoryDocumentStore()
        elif adapter == "firestore":
            from shared.store.firestore_adapter import FirestoreDocumentStore

            _store_instance = FirestoreDocumentStore()
        else:
            raise ValueError(f"Unknown store adapter: {adapter}")
    return _store_instance


def set_store(store: DocumentStore) -> None:
    """Override the active store (useful for tests)."""
    global _store_instance
    _store_instance = store


def reset_store() -> None:
    """Reset the store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
