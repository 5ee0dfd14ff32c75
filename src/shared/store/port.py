"""Document store port — abstract interface over the keyed-document store.

The core only needs get-by-id, equality/range queries with a limit, inserts,
and field-level updates. Adapters: InMemoryDocumentStore (dev/test) and
FirestoreDocumentStore (production).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class DocumentNotFound(LookupError):
    """Raised by update() when the target document does not exist."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"{collection}/{document_id} does not exist")
        self.collection = collection
        self.document_id = document_id


@dataclass(frozen=True)
class Filter:
    """A single query predicate: ``field <op> value``."""

    field: str
    op: str
    value: Any

    OPERATORS = ("==", "<", "<=", ">", ">=", "in")

    def __post_init__(self) -> None:
        if self.op not in self.OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op}")


@dataclass(frozen=True)
class Document:
    """A document snapshot returned by queries."""

    id: str
    data: dict = field(default_factory=dict)


class DocumentStore(ABC):
    """Abstract keyed-document store."""

    @abstractmethod
    def get(self, collection: str, document_id: str) -> dict | None:
        """Return the document's data, or None when it does not exist."""
        ...

    @abstractmethod
    def query(
        self,
        collection: str,
        filters: list[Filter],
        limit: int | None = None,
    ) -> list[Document]:
        """Return documents matching every filter, at most ``limit`` of them."""
        ...

    @abstractmethod
    def create(self, collection: str, data: dict) -> str:
        """Insert a new document with a generated id and return the id."""
        ...

    @abstractmethod
    def update(self, collection: str, document_id: str, fields: dict) -> None:
        """Overwrite the given fields. Raises DocumentNotFound if absent."""
        ...
