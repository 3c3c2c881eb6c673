"""Remote document store adapter.

The facade only talks to the :class:`DocumentStore` interface, so the store
can be absent (local-only mode) or swapped for a fake in tests.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import firebase_admin
from firebase_admin import credentials, firestore

from storefront.core.config import settings

logger = logging.getLogger(__name__)

MENU_COLLECTION: str = "menu_items"
ORDER_COLLECTION: str = "orders"
SETTINGS_COLLECTION: str = "settings"
ANNOUNCEMENTS_COLLECTION: str = "announcements"
VIDEO_COLLECTION: str = "preview_videos"
SETTINGS_DOC_ID: str = "config"

Document = dict[str, Any]
Unsubscribe = Callable[[], None]
OrderBy = tuple[str, bool]  # (field, descending)


class DocumentStore(ABC):
    """Collection/document CRUD plus real-time listeners.

    Documents returned by list/find/watch carry their id under ``"id"``.
    """

    @abstractmethod
    def list_documents(self, collection: str, order_by: OrderBy | None = None) -> list[Document]: ...

    @abstractmethod
    def get_document(self, collection: str, doc_id: str) -> Document | None: ...

    @abstractmethod
    def add_document(self, collection: str, data: Document) -> str:
        """Create a document with a store-assigned id and return that id."""

    @abstractmethod
    def set_document(self, collection: str, doc_id: str, data: Document, *, merge: bool = False) -> None: ...

    @abstractmethod
    def update_document(self, collection: str, doc_id: str, data: Document) -> None: ...

    @abstractmethod
    def delete_document(self, collection: str, doc_id: str) -> None: ...

    @abstractmethod
    def find_documents(self, collection: str, field: str, value: Any, limit: int | None = None) -> list[Document]: ...

    @abstractmethod
    def batch_update(self, collection: str, updates: dict[str, Document]) -> None:
        """Apply partial updates to several documents in one atomic write."""

    @abstractmethod
    def watch_collection(
        self,
        collection: str,
        callback: Callable[[list[Document]], None],
        order_by: OrderBy | None = None,
    ) -> Unsubscribe: ...

    @abstractmethod
    def watch_document(
        self,
        collection: str,
        doc_id: str,
        callback: Callable[[Document | None], None],
    ) -> Unsubscribe: ...


class FirestoreDocumentStore(DocumentStore):
    """Cloud Firestore implementation backed by a firebase-admin client."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def _query(self, collection: str, order_by: OrderBy | None) -> Any:
        query = self._client.collection(collection)
        if order_by is not None:
            field, descending = order_by
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(field, direction=direction)
        return query

    @staticmethod
    def _with_id(snapshot: Any) -> Document:
        data = snapshot.to_dict() or {}
        data["id"] = snapshot.id
        return data

    def list_documents(self, collection: str, order_by: OrderBy | None = None) -> list[Document]:
        return [self._with_id(snap) for snap in self._query(collection, order_by).stream()]

    def get_document(self, collection: str, doc_id: str) -> Document | None:
        snap = self._client.collection(collection).document(doc_id).get()
        if not snap.exists:
            return None
        return snap.to_dict()

    def add_document(self, collection: str, data: Document) -> str:
        _, ref = self._client.collection(collection).add(data)
        return ref.id

    def set_document(self, collection: str, doc_id: str, data: Document, *, merge: bool = False) -> None:
        self._client.collection(collection).document(doc_id).set(data, merge=merge)

    def update_document(self, collection: str, doc_id: str, data: Document) -> None:
        self._client.collection(collection).document(doc_id).update(data)

    def delete_document(self, collection: str, doc_id: str) -> None:
        self._client.collection(collection).document(doc_id).delete()

    def find_documents(self, collection: str, field: str, value: Any, limit: int | None = None) -> list[Document]:
        query = self._client.collection(collection).where(filter=firestore.FieldFilter(field, "==", value))
        if limit is not None:
            query = query.limit(limit)
        return [self._with_id(snap) for snap in query.stream()]

    def batch_update(self, collection: str, updates: dict[str, Document]) -> None:
        if not updates:
            return
        batch = self._client.batch()
        for doc_id, data in updates.items():
            batch.update(self._client.collection(collection).document(doc_id), data)
        batch.commit()

    def watch_collection(
        self,
        collection: str,
        callback: Callable[[list[Document]], None],
        order_by: OrderBy | None = None,
    ) -> Unsubscribe:
        def _on_snapshot(snapshots: list[Any], changes: Any, read_time: Any) -> None:
            callback([self._with_id(snap) for snap in snapshots])

        watch = self._query(collection, order_by).on_snapshot(_on_snapshot)
        return watch.unsubscribe

    def watch_document(
        self,
        collection: str,
        doc_id: str,
        callback: Callable[[Document | None], None],
    ) -> Unsubscribe:
        def _on_snapshot(snapshots: list[Any], changes: Any, read_time: Any) -> None:
            snap = snapshots[0] if snapshots else None
            callback(snap.to_dict() if snap is not None and snap.exists else None)

        watch = self._client.collection(collection).document(doc_id).on_snapshot(_on_snapshot)
        return watch.unsubscribe


def get_document_store() -> DocumentStore | None:
    """Connect to Firestore when configured; None means local-only mode."""
    if not settings.firebase_enabled:
        logger.info("Running in local mode (FIREBASE_PROJECT_ID not set)")
        return None

    try:
        try:
            firebase_admin.get_app()
        except ValueError:
            if settings.firebase_credentials_path:
                cred = credentials.Certificate(settings.firebase_credentials_path)
            else:
                cred = credentials.ApplicationDefault()
            firebase_admin.initialize_app(cred, {"projectId": settings.firebase_project_id})
        client = firestore.client()
    except Exception:
        logger.warning("Firebase initialization error, falling back to local mode", exc_info=True)
        return None

    logger.info("Firebase initialized for project %s", settings.firebase_project_id)
    return FirestoreDocumentStore(client)
