"""Firestore document store adapter (production).

Wraps the firebase-admin Firestore client. Collection arguments may be
slash-separated paths to nested collections
(``conversations/<id>/messages``).
"""

import structlog
from firebase_admin import firestore
from google.api_core.exceptions import NotFound
from google.cloud.firestore_v1.base_query import FieldFilter

from shared.firebase import get_firebase_app
from shared.store.port import Document, DocumentNotFound, DocumentStore, Filter

logger = structlog.get_logger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by Cloud Firestore."""

    def __init__(self, client=None) -> None:
        self.client = client or firestore.client(app=get_firebase_app())

    def get(self, collection: str, document_id: str) -> dict | None:
        snapshot = self.client.collection(collection).document(document_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def query(
        self,
        collection: str,
        filters: list[Filter],
        limit: int | None = None,
    ) -> list[Document]:
        query = self.client.collection(collection)
        for f in filters:
            query = query.where(filter=FieldFilter(f.field, f.op, f.value))
        if limit is not None:
            query = query.limit(limit)
        return [Document(id=snap.id, data=snap.to_dict() or {}) for snap in query.stream()]

    def create(self, collection: str, data: dict) -> str:
        _, ref = self.client.collection(collection).add(data)
        return ref.id

    def update(self, collection: str, document_id: str, fields: dict) -> None:
        try:
            self.client.collection(collection).document(document_id).update(fields)
        except NotFound as exc:
            raise DocumentNotFound(collection, document_id) from exc
