"""Shared fixtures: a temporary local cache and an in-memory document store."""

from collections import defaultdict
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from storefront.db.base import Base
from storefront.storage.document_store import Document, DocumentStore, OrderBy, Unsubscribe
from storefront.storage.local_cache import LocalCacheStore


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


class FakeDocumentStore(DocumentStore):
    """In-memory document store with push listeners and failure injection."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, Document]] = defaultdict(dict)
        self.available = True
        self.batch_calls: list[tuple[str, dict[str, Document]]] = []
        self._collection_watchers: dict[str, list[tuple[Callable[[list[Document]], None], OrderBy | None]]] = (
            defaultdict(list)
        )
        self._document_watchers: dict[tuple[str, str], list[Callable[[Document | None], None]]] = defaultdict(list)
        self._counter = 0

    def _check(self) -> None:
        if not self.available:
            raise ConnectionError("remote store unavailable")

    def _snapshot(self, collection: str, order_by: OrderBy | None) -> list[Document]:
        docs = [{**data, "id": doc_id} for doc_id, data in self.collections[collection].items()]
        if order_by is not None:
            field, descending = order_by
            docs.sort(key=lambda doc: doc.get(field, 0), reverse=descending)
        return docs

    def _notify(self, collection: str, doc_id: str) -> None:
        for callback, order_by in list(self._collection_watchers[collection]):
            callback(self._snapshot(collection, order_by))
        for callback in list(self._document_watchers[(collection, doc_id)]):
            data = self.collections[collection].get(doc_id)
            callback(dict(data) if data is not None else None)

    def list_documents(self, collection: str, order_by: OrderBy | None = None) -> list[Document]:
        self._check()
        return self._snapshot(collection, order_by)

    def get_document(self, collection: str, doc_id: str) -> Document | None:
        self._check()
        data = self.collections[collection].get(doc_id)
        return dict(data) if data is not None else None

    def add_document(self, collection: str, data: Document) -> str:
        self._check()
        self._counter += 1
        doc_id = f"remote-{self._counter}"
        self.collections[collection][doc_id] = dict(data)
        self._notify(collection, doc_id)
        return doc_id

    def set_document(self, collection: str, doc_id: str, data: Document, *, merge: bool = False) -> None:
        self._check()
        existing = self.collections[collection].get(doc_id, {}) if merge else {}
        self.collections[collection][doc_id] = {**existing, **data}
        self._notify(collection, doc_id)

    def update_document(self, collection: str, doc_id: str, data: Document) -> None:
        self._check()
        if doc_id not in self.collections[collection]:
            raise KeyError(doc_id)
        self.collections[collection][doc_id].update(data)
        self._notify(collection, doc_id)

    def delete_document(self, collection: str, doc_id: str) -> None:
        self._check()
        self.collections[collection].pop(doc_id, None)
        self._notify(collection, doc_id)

    def find_documents(self, collection: str, field: str, value: Any, limit: int | None = None) -> list[Document]:
        self._check()
        matches = [doc for doc in self._snapshot(collection, None) if doc.get(field) == value]
        return matches[:limit] if limit is not None else matches

    def batch_update(self, collection: str, updates: dict[str, Document]) -> None:
        self._check()
        if any(doc_id not in self.collections[collection] for doc_id in updates):
            raise KeyError("batch target missing")
        self.batch_calls.append((collection, updates))
        for doc_id, data in updates.items():
            self.collections[collection][doc_id].update(data)
        for doc_id in updates:
            self._notify(collection, doc_id)

    def watch_collection(
        self,
        collection: str,
        callback: Callable[[list[Document]], None],
        order_by: OrderBy | None = None,
    ) -> Unsubscribe:
        self._check()
        entry = (callback, order_by)
        self._collection_watchers[collection].append(entry)
        callback(self._snapshot(collection, order_by))
        return lambda: self._collection_watchers[collection].remove(entry)

    def watch_document(
        self,
        collection: str,
        doc_id: str,
        callback: Callable[[Document | None], None],
    ) -> Unsubscribe:
        self._check()
        self._document_watchers[(collection, doc_id)].append(callback)
        data = self.collections[collection].get(doc_id)
        callback(dict(data) if data is not None else None)
        return lambda: self._document_watchers[(collection, doc_id)].remove(callback)


@pytest.fixture
def session_factory(tmp_path: Path) -> sessionmaker:
    engine = _build_test_engine(tmp_path / "test_local_cache.db")
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def local_cache(session_factory: sessionmaker) -> LocalCacheStore:
    return LocalCacheStore(session_factory, max_bytes=5 * 1024 * 1024)


@pytest.fixture
def remote_store() -> FakeDocumentStore:
    return FakeDocumentStore()
