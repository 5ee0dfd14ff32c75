"""In-memory document store — records writes for testing.

Documents are deep-copied on the way in and out so callers can never mutate
stored state by accident, mirroring the snapshot semantics of a real store.
"""

import copy
import operator
from uuid import uuid4

from shared.store.port import Document, DocumentNotFound, DocumentStore, Filter

_OPS = {
    "==": operator.eq,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "in": lambda value, options: value in options,
}


class InMemoryDocumentStore(DocumentStore):
    """Document store that keeps collections in dictionaries."""

    def __init__(self):
        self.collections: dict[str, dict[str, dict]] = {}
        self.writes: list[dict] = []

    # Seeding helpers (not part of the port)
    def put(self, collection: str, document_id: str, data: dict) -> None:
        self.collections.setdefault(collection, {})[document_id] = copy.deepcopy(data)

    def delete(self, collection: str, document_id: str) -> None:
        self.collections.get(collection, {}).pop(document_id, None)

    def all(self, collection: str) -> dict[str, dict]:
        return copy.deepcopy(self.collections.get(collection, {}))

    def writes_to(self, collection: str) -> list[dict]:
        return [w for w in self.writes if w["collection"] == collection]

    def get(self, collection: str, document_id: str) -> dict | None:
        data = self.collections.get(collection, {}).get(document_id)
        return copy.deepcopy(data) if data is not None else None

    def query(
        self,
        collection: str,
        filters: list[Filter],
        limit: int | None = None,
    ) -> list[Document]:
        results = []
        for document_id, data in self.collections.get(collection, {}).items():
            if all(_matches(data, f) for f in filters):
                results.append(Document(id=document_id, data=copy.deepcopy(data)))
                if limit is not None and len(results) >= limit:
                    break
        return results

    def create(self, collection: str, data: dict) -> str:
        document_id = uuid4().hex[:20]
        self.put(collection, document_id, data)
        self.writes.append(
            {"op": "create", "collection": collection, "id": document_id, "data": copy.deepcopy(data)}
        )
        return document_id

    def update(self, collection: str, document_id: str, fields: dict) -> None:
        existing = self.collections.get(collection, {}).get(document_id)
        if existing is None:
            raise DocumentNotFound(collection, document_id)
        existing.update(copy.deepcopy(fields))
        self.writes.append(
            {"op": "update", "collection": collection, "id": document_id, "data": copy.deepcopy(fields)}
        )

    def reset(self):
        """Drop all documents and recorded writes."""
        self.collections.clear()
        self.writes.clear()


def _matches(data: dict, f: Filter) -> bool:
    if f.field not in data:
        return False
    try:
        return bool(_OPS[f.op](data[f.field], f.value))
    except TypeError:
        # Mismatched types never match, as in Firestore
        return False
