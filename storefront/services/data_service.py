"""Synchronization facade over the local cache and the remote document store.

Every entity type gets the same contract whether or not a remote store is
configured:

* reads prefer the remote store and mirror its result into the local cache;
  any remote failure silently falls back to the cached snapshot;
* writes always land in the local cache first and are then mirrored to the
  remote store on a best-effort basis;
* subscriptions use remote push listeners when available and otherwise poll
  the local cache.

Remote failures are logged and never raised; there is no retry, the next call
simply tries the remote store again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar
from uuid import uuid4

from pydantic import ValidationError

from storefront.core.config import settings
from storefront.db.seed import default_settings, seed_menu
from storefront.schemas.analytics import DailySales
from storefront.schemas.base import DocumentModel
from storefront.schemas.content import Announcement, PreviewVideo
from storefront.schemas.menu import CartItem, MenuItem
from storefront.schemas.order import CustomerInfo, Order, OrderStatus, Platform
from storefront.schemas.settings import AppSettings
from storefront.services.analytics import summarize_daily_sales
from storefront.services.order_status import InvalidStatusTransitionError, can_transition
from storefront.services.order_sync import OrderSheetDispatcher, is_sink_connected, order_to_row
from storefront.services.subscriptions import Unsubscribe, noop_unsubscribe, once, poll
from storefront.storage.document_store import (
    ANNOUNCEMENTS_COLLECTION,
    MENU_COLLECTION,
    ORDER_COLLECTION,
    SETTINGS_COLLECTION,
    SETTINGS_DOC_ID,
    VIDEO_COLLECTION,
    Document,
    DocumentStore,
    OrderBy,
)
from storefront.storage.local_cache import (
    ANNOUNCEMENTS_KEY,
    MENU_KEY,
    ORDERS_KEY,
    SETTINGS_KEY,
    VIDEOS_KEY,
    LocalCacheStore,
    StorageQuotaExceededError,
)
from storefront.utils.time import now_ms

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=DocumentModel)

MENU_ID_PREFIX: str = "local_"
ORDER_ID_PREFIX: str = "ord_"
ANNOUNCEMENT_ID_PREFIX: str = "ann_"
VIDEO_ID_PREFIX: str = "vid_"


class RecordNotFoundError(LookupError):
    """Raised when an operation targets a record id that does not exist."""


class OrderNotFoundError(RecordNotFoundError):
    pass


class VideoNotFoundError(RecordNotFoundError):
    pass


class CategoryError(ValueError):
    """Raised for invalid category additions, renames or deletions."""


class CollectionSync(Generic[ModelT]):
    """Two-tier repository for one collection: remote wins on read, both written on write."""

    def __init__(
        self,
        *,
        local: LocalCacheStore,
        remote: DocumentStore | None,
        model: type[ModelT],
        cache_key: str,
        collection: str,
        id_prefix: str,
        poll_interval: float,
        default: Callable[[], list[ModelT]] = list,
        seeded: bool = False,
        order_by: OrderBy | None = None,
        prepend_new: bool = False,
    ) -> None:
        self._local = local
        self._remote = remote
        self._model = model
        self._cache_key = cache_key
        self._collection = collection
        self._id_prefix = id_prefix
        self._poll_interval = poll_interval
        self._default = default
        self._seeded = seeded
        self._order_by = order_by
        self._prepend_new = prepend_new

    def is_placeholder_id(self, item_id: str) -> bool:
        """True for ids never assigned by the remote store."""
        return not item_id or item_id.startswith(self._id_prefix)

    def new_placeholder_id(self) -> str:
        return f"{self._id_prefix}{now_ms()}_{uuid4().hex[:6]}"

    def read_local(self) -> list[ModelT]:
        raw = self._local.read(self._cache_key)
        if raw is None:
            return self._default()
        if not isinstance(raw, list):
            logger.warning("Cached %s is not a list; using defaults", self._cache_key)
            return self._default()
        items: list[ModelT] = []
        for doc in raw:
            try:
                items.append(self._model.model_validate(doc))
            except ValidationError:
                logger.warning("Skipping malformed record in %s", self._cache_key)
        return items

    def write_local(self, items: list[ModelT]) -> None:
        self._local.write(self._cache_key, [item.to_document(include_id=True) for item in items])

    def _mirror(self, items: list[ModelT]) -> None:
        try:
            self.write_local(items)
        except StorageQuotaExceededError:
            logger.warning("Could not mirror %s into local cache", self._collection)

    def _parse(self, docs: list[Document]) -> list[ModelT]:
        return [self._model.model_validate(doc) for doc in docs]

    def get(self) -> list[ModelT]:
        """Return the best-known snapshot of the collection."""
        if self._remote is None:
            return self.read_local()
        try:
            items = self._parse(self._remote.list_documents(self._collection, self._order_by))
        except Exception:
            logger.warning("Remote read of %s failed; using local cache", self._collection, exc_info=True)
            return self.read_local()
        if not items and self._seeded:
            # Remote collection not migrated yet.
            return self.read_local()
        self._mirror(items)
        return items

    def find(self, item_id: str) -> ModelT | None:
        return next((item for item in self.get() if item.id == item_id), None)

    def subscribe(self, callback: Callable[[list[ModelT]], None]) -> Unsubscribe:
        """Register for continuous updates; the returned function is safe to call repeatedly."""
        if self._remote is None:
            return poll(self.read_local, callback, self._poll_interval, name=f"{self._collection}-poll")

        def _on_documents(docs: list[Document]) -> None:
            try:
                items = self._parse(docs)
            except ValidationError:
                logger.warning("Ignoring malformed %s snapshot", self._collection, exc_info=True)
                return
            if not items and self._seeded:
                callback(self.read_local())
                return
            self._mirror(items)
            callback(items)

        try:
            return once(self._remote.watch_collection(self._collection, _on_documents, self._order_by))
        except Exception:
            logger.warning("Remote listener for %s failed; using local snapshot", self._collection, exc_info=True)
            callback(self.read_local())
            return noop_unsubscribe

    def _upsert_local(self, item: ModelT, *, replace_id: str | None = None) -> None:
        match_ids = {item.id} if replace_id is None else {item.id, replace_id}
        items = self.read_local()
        index = next((position for position, existing in enumerate(items) if existing.id in match_ids), None)
        items = [existing for existing in items if existing.id not in match_ids]
        if index is not None:
            items.insert(min(index, len(items)), item)
        elif self._prepend_new:
            items.insert(0, item)
        else:
            items.append(item)
        self.write_local(items)

    def save(self, item: ModelT) -> ModelT:
        """Persist locally, then create or merge-update remotely.

        Returns the stored record, carrying the remote id when the remote
        create succeeded and a placeholder id otherwise.
        """
        item = item.model_copy(deep=True)
        if not item.id:
            item.id = self.new_placeholder_id()
        self._upsert_local(item)
        if self._remote is None:
            return item

        data = item.to_document()
        try:
            if self.is_placeholder_id(item.id):
                remote_id = self._remote.add_document(self._collection, data)
            else:
                self._remote.set_document(self._collection, item.id, data, merge=True)
                return item
        except Exception:
            logger.warning("Remote save to %s failed; kept local copy %s", self._collection, item.id, exc_info=True)
            return item

        placeholder_id = item.id
        item.id = remote_id
        self._upsert_local(item, replace_id=placeholder_id)
        return item

    def update(self, item_id: str, **changes: Any) -> ModelT | None:
        """Apply field changes locally and as a partial remote update."""
        updated: ModelT | None = None
        items = self.read_local()
        for index, existing in enumerate(items):
            if existing.id == item_id:
                updated = existing.model_copy(update=changes)
                items[index] = updated
                break
        if updated is not None:
            self.write_local(items)

        if self._remote is not None:
            fields = {self._model.model_fields[name].alias or name: value for name, value in changes.items()}
            try:
                self._remote.update_document(self._collection, item_id, fields)
            except Exception:
                logger.warning("Remote update of %s/%s failed", self._collection, item_id, exc_info=True)
        return updated

    def delete(self, item_id: str) -> None:
        """Remove locally right away, then best-effort remotely."""
        self.write_local([item for item in self.read_local() if item.id != item_id])
        if self._remote is None:
            return
        try:
            self._remote.delete_document(self._collection, item_id)
        except Exception:
            logger.warning("Remote delete of %s/%s failed", self._collection, item_id, exc_info=True)


class SettingsSync:
    """Singleton settings document merged over defaults."""

    def __init__(self, *, local: LocalCacheStore, remote: DocumentStore | None, poll_interval: float) -> None:
        self._local = local
        self._remote = remote
        self._poll_interval = poll_interval

    @staticmethod
    def _dump(value: AppSettings) -> Document:
        return value.model_dump(by_alias=True, exclude_none=True)

    def _merge(self, base: Document, overrides: Document) -> AppSettings | None:
        try:
            return AppSettings.model_validate({**base, **overrides})
        except ValidationError:
            logger.warning("Ignoring malformed settings document", exc_info=True)
            return None

    def read_local(self) -> AppSettings:
        defaults = self._dump(default_settings())
        stored = self._local.read(SETTINGS_KEY)
        if not isinstance(stored, dict):
            return AppSettings.model_validate(defaults)
        return self._merge(defaults, stored) or AppSettings.model_validate(defaults)

    def _mirror(self, value: AppSettings) -> None:
        try:
            self._local.write(SETTINGS_KEY, self._dump(value))
        except StorageQuotaExceededError:
            logger.warning("Could not mirror settings into local cache")

    def get(self) -> AppSettings:
        local = self.read_local()
        if self._remote is None:
            return local
        try:
            doc = self._remote.get_document(SETTINGS_COLLECTION, SETTINGS_DOC_ID)
        except Exception:
            logger.warning("Remote settings read failed; using local cache", exc_info=True)
            return local
        merged = self._merge(self._dump(local), doc) if doc else None
        if merged is None:
            return local
        self._mirror(merged)
        return merged

    def save(self, value: AppSettings) -> AppSettings:
        """Replace the settings document; omitted optional fields are removed."""
        data = self._dump(value)
        self._local.write(SETTINGS_KEY, data)
        if self._remote is not None:
            try:
                self._remote.set_document(SETTINGS_COLLECTION, SETTINGS_DOC_ID, data)
            except Exception:
                logger.warning("Remote settings save failed", exc_info=True)
        return value

    def subscribe(self, callback: Callable[[AppSettings], None]) -> Unsubscribe:
        if self._remote is None:
            return poll(self.read_local, callback, self._poll_interval, name="settings-poll")

        def _on_document(doc: Document | None) -> None:
            local = self.read_local()
            merged = self._merge(self._dump(local), doc) if doc else None
            if merged is None:
                callback(local)
                return
            self._mirror(merged)
            callback(merged)

        try:
            return once(self._remote.watch_document(SETTINGS_COLLECTION, SETTINGS_DOC_ID, _on_document))
        except Exception:
            logger.warning("Remote settings listener failed; using local snapshot", exc_info=True)
            callback(self.read_local())
            return noop_unsubscribe


class DataService:
    """Uniform CRUD and subscribe operations for every storefront entity."""

    def __init__(
        self,
        local: LocalCacheStore,
        remote: DocumentStore | None = None,
        *,
        dispatcher: OrderSheetDispatcher | None = None,
        poll_interval: float | None = None,
        orders_poll_interval: float | None = None,
    ) -> None:
        self._local = local
        self._remote = remote
        self._dispatcher = dispatcher
        interval = settings.local_poll_interval if poll_interval is None else poll_interval
        orders_interval = settings.orders_poll_interval if orders_poll_interval is None else orders_poll_interval

        self.menu: CollectionSync[MenuItem] = CollectionSync(
            local=local,
            remote=remote,
            model=MenuItem,
            cache_key=MENU_KEY,
            collection=MENU_COLLECTION,
            id_prefix=MENU_ID_PREFIX,
            poll_interval=interval,
            default=seed_menu,
            seeded=True,
        )
        self.orders: CollectionSync[Order] = CollectionSync(
            local=local,
            remote=remote,
            model=Order,
            cache_key=ORDERS_KEY,
            collection=ORDER_COLLECTION,
            id_prefix=ORDER_ID_PREFIX,
            poll_interval=orders_interval,
            order_by=("timestamp", True),
            prepend_new=True,
        )
        self.announcements: CollectionSync[Announcement] = CollectionSync(
            local=local,
            remote=remote,
            model=Announcement,
            cache_key=ANNOUNCEMENTS_KEY,
            collection=ANNOUNCEMENTS_COLLECTION,
            id_prefix=ANNOUNCEMENT_ID_PREFIX,
            poll_interval=interval,
        )
        self.videos: CollectionSync[PreviewVideo] = CollectionSync(
            local=local,
            remote=remote,
            model=PreviewVideo,
            cache_key=VIDEOS_KEY,
            collection=VIDEO_COLLECTION,
            id_prefix=VIDEO_ID_PREFIX,
            poll_interval=interval,
            order_by=("createdAt", True),
            prepend_new=True,
        )
        self.settings = SettingsSync(local=local, remote=remote, poll_interval=interval)

    @property
    def remote_enabled(self) -> bool:
        return self._remote is not None

    # Settings

    def get_settings(self) -> AppSettings:
        return self.settings.get()

    def save_settings(self, value: AppSettings) -> AppSettings:
        return self.settings.save(value)

    def subscribe_to_settings(self, callback: Callable[[AppSettings], None]) -> Unsubscribe:
        return self.settings.subscribe(callback)

    def add_category(self, name: str) -> AppSettings:
        name = name.strip()
        if not name:
            raise CategoryError("Category name is required")
        current = self.get_settings()
        if name in current.categories:
            raise CategoryError(f"Category '{name}' already exists")
        return self.save_settings(current.model_copy(update={"categories": [*current.categories, name]}))

    def rename_category(self, old_name: str, new_name: str) -> AppSettings:
        """Rename a category and move every menu item that referenced it."""
        new_name = new_name.strip()
        if not new_name:
            raise CategoryError("Category name is required")
        current = self.get_settings()
        if old_name not in current.categories:
            raise CategoryError(f"Category '{old_name}' does not exist")
        if new_name != old_name and new_name in current.categories:
            raise CategoryError(f"Category '{new_name}' already exists")

        categories = [new_name if category == old_name else category for category in current.categories]
        saved = self.save_settings(current.model_copy(update={"categories": categories}))
        for item in self.get_menu():
            if item.category == old_name:
                self.save_menu_item(item.model_copy(update={"category": new_name}))
        return saved

    def delete_category(self, name: str) -> AppSettings:
        """Remove a category; menu items keep the now dangling category string."""
        current = self.get_settings()
        if name not in current.categories:
            raise CategoryError(f"Category '{name}' does not exist")
        categories = [category for category in current.categories if category != name]
        return self.save_settings(current.model_copy(update={"categories": categories}))

    # Menu

    def get_menu(self) -> list[MenuItem]:
        return self.menu.get()

    def subscribe_to_menu(self, callback: Callable[[list[MenuItem]], None]) -> Unsubscribe:
        return self.menu.subscribe(callback)

    def save_menu_item(self, item: MenuItem) -> MenuItem:
        return self.menu.save(item)

    def delete_menu_item(self, item_id: str) -> None:
        self.menu.delete(item_id)

    def seed_initial_menu(self) -> list[MenuItem]:
        """Reset the menu to the seed items, locally and best-effort remotely."""
        items = seed_menu()
        self.menu.write_local(items)
        if self._remote is not None:
            try:
                for item in items:
                    self._remote.set_document(MENU_COLLECTION, item.id, item.to_document())
            except Exception:
                logger.warning("Could not seed remote menu", exc_info=True)
        return items

    # Announcements

    def get_announcements(self) -> list[Announcement]:
        return self.announcements.get()

    def get_active_announcements(self) -> list[Announcement]:
        return [item for item in self.get_announcements() if item.is_active]

    def subscribe_to_announcements(self, callback: Callable[[list[Announcement]], None]) -> Unsubscribe:
        return self.announcements.subscribe(callback)

    def save_announcement(self, item: Announcement) -> Announcement:
        return self.announcements.save(item)

    def delete_announcement(self, item_id: str) -> None:
        self.announcements.delete(item_id)

    # Preview videos

    def get_videos(self) -> list[PreviewVideo]:
        return self.videos.get()

    def subscribe_to_videos(self, callback: Callable[[list[PreviewVideo]], None]) -> Unsubscribe:
        return self.videos.subscribe(callback)

    def _deactivate_other_videos(self, keep_id: str) -> None:
        videos = self.videos.get()
        others = [video for video in videos if video.id != keep_id and video.is_active]
        if not others:
            return
        for video in others:
            video.is_active = False
        self.videos.write_local(videos)

        updates = {
            video.id: {"isActive": False}
            for video in others
            if not self.videos.is_placeholder_id(video.id)
        }
        if self._remote is not None and updates:
            try:
                self._remote.batch_update(VIDEO_COLLECTION, updates)
            except Exception:
                logger.warning("Remote deactivation of preview videos failed", exc_info=True)

    def save_preview_video(self, video: PreviewVideo) -> PreviewVideo:
        """Save a video; an active one first deactivates every other video."""
        if video.is_active:
            self._deactivate_other_videos(keep_id=video.id)
        return self.videos.save(video)

    def activate_preview_video(self, video_id: str) -> PreviewVideo:
        """Make video_id the only active video using a single batch write."""
        videos = self.videos.get()
        target = next((video for video in videos if video.id == video_id), None)
        if target is None:
            raise VideoNotFoundError(video_id)

        for video in videos:
            video.is_active = video.id == video_id
        self.videos.write_local(videos)

        if self._remote is not None:
            updates = {
                video.id: {"isActive": video.is_active}
                for video in videos
                if not self.videos.is_placeholder_id(video.id)
            }
            try:
                self._remote.batch_update(VIDEO_COLLECTION, updates)
            except Exception:
                logger.warning("Remote activation of preview video %s failed", video_id, exc_info=True)
        return target

    def get_active_preview_video(self) -> PreviewVideo | None:
        if self._remote is not None:
            try:
                docs = self._remote.find_documents(VIDEO_COLLECTION, "isActive", True, limit=1)
                return PreviewVideo.model_validate(docs[0]) if docs else None
            except Exception:
                logger.warning("Remote active video lookup failed; using local cache", exc_info=True)
        return next((video for video in self.videos.read_local() if video.is_active), None)

    def delete_preview_video(self, video_id: str) -> None:
        self.videos.delete(video_id)

    # Orders

    def get_orders(self) -> list[Order]:
        return self.orders.get()

    def subscribe_to_orders(self, callback: Callable[[list[Order]], None]) -> Unsubscribe:
        return self.orders.subscribe(callback)

    def create_order(
        self,
        customer: CustomerInfo,
        items: list[CartItem],
        *,
        platform: Platform = "whatsapp",
    ) -> Order:
        """Create a pending order from a snapshot of the given cart lines."""
        snapshot = [item.model_copy(deep=True) for item in items]
        order = Order(
            customer=customer.model_copy(),
            items=snapshot,
            total_amount=sum(item.price * item.quantity for item in snapshot),
            status="pending",
            timestamp=now_ms(),
            platform=platform,
        )
        saved = self.orders.save(order)
        logger.info("Order %s created (%s items, total %s)", saved.id, saved.item_count, saved.total_amount)
        self._dispatch_order(saved)
        return saved

    def update_order_status(self, order_id: str, status: OrderStatus) -> Order:
        """Move an order along its lifecycle.

        Raises:
            OrderNotFoundError: unknown order id.
            InvalidStatusTransitionError: status not reachable from the current one.
        """
        order = self.orders.find(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not can_transition(order.status, status):
            raise InvalidStatusTransitionError(order.status, status)

        updated = self.orders.update(order_id, status=status)
        if updated is None:
            updated = order.model_copy(update={"status": status})
        logger.info("Order %s status %s -> %s", order_id, order.status, status)
        self._dispatch_order(updated)
        return updated

    def _dispatch_order(self, order: Order) -> None:
        if self._dispatcher is None:
            return
        try:
            delivered = self._dispatcher.dispatch(order, self.get_settings().google_sheets)
        except Exception:
            logger.exception("[SHEETS] Sync of order %s failed", order.id)
            return
        if delivered:
            self._record_sheet_sync()

    def _record_sheet_sync(self) -> None:
        current = self.get_settings()
        if current.google_sheets is None:
            return
        sheets = current.google_sheets.model_copy(update={"last_sync_time": now_ms()})
        self.save_settings(current.model_copy(update={"google_sheets": sheets}))

    def export_orders_to_sheet(self) -> int:
        """Append every known order to the sheet; returns the number of rows sent."""
        config = self.get_settings().google_sheets
        if self._dispatcher is None or not is_sink_connected(config):
            return 0
        rows = [order_to_row(order) for order in reversed(self.get_orders())]
        if not rows or not self._dispatcher.append_rows(rows, config):
            return 0
        self._record_sheet_sync()
        return len(rows)

    # Analytics and maintenance

    def get_sales_data(self) -> list[DailySales]:
        return summarize_daily_sales(self.get_orders())

    def clear_local_data(self) -> None:
        self._local.clear()
