"""Subscription helpers shared by the data service and the auth gate."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

SnapshotT = TypeVar("SnapshotT")
Unsubscribe = Callable[[], None]


def once(cancel: Callable[[], None]) -> Unsubscribe:
    """Wrap a cancel function so repeated calls are no-ops."""
    lock = threading.Lock()
    done = False

    def _unsubscribe() -> None:
        nonlocal done
        with lock:
            if done:
                return
            done = True
        cancel()

    return _unsubscribe


def noop_unsubscribe() -> None:
    return None


def poll(
    read: Callable[[], SnapshotT],
    callback: Callable[[SnapshotT], None],
    interval: float,
    *,
    name: str = "local-poll",
) -> Unsubscribe:
    """Deliver ``read()`` to callback now and then every ``interval`` seconds.

    The first delivery happens synchronously in the caller. Later deliveries
    run on a daemon thread until the returned function is called.
    """
    callback(read())
    stop = threading.Event()

    def _run() -> None:
        while not stop.wait(interval):
            try:
                callback(read())
            except Exception:
                logger.exception("Subscription %s callback failed", name)

    threading.Thread(target=_run, name=name, daemon=True).start()
    return once(stop.set)
