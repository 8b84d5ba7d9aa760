"""
Change Feed - announces committed changes to the products table.

Hooks SQLAlchemy session events on a session factory:
- after_flush marks the session when a ProductRecord was inserted,
  updated or deleted
- after_commit notifies every subscriber (no payload) if the session
  was marked

Subscribers react by refetching the whole collection. That is fine for a
household catalog; a large table would want incremental merges instead.
"""

import inspect
import itertools
import logging
import threading
import weakref
from typing import Callable, Optional

from sqlalchemy import event
from sqlalchemy.orm import Session, sessionmaker

from models.entities import ProductRecord

logger = logging.getLogger(__name__)

_CHANGED_FLAG = "products_changed"


def _reference(callback: Callable[[], None]) -> Callable[[], Optional[Callable[[], None]]]:
    """
    Weak reference for bound methods, strong for plain functions.

    A list engine left behind by a closed browser session should not be
    kept alive (and refetching) by a process-wide store.
    """
    if inspect.ismethod(callback):
        return weakref.WeakMethod(callback)
    return lambda: callback


class ChangeFeed:
    """Subscriber registry for product table changes."""

    def __init__(self):
        self._subscribers: list[Callable[[], Optional[Callable[[], None]]]] = []
        self._lock = threading.Lock()

    def attach(self, session_factory: sessionmaker) -> None:
        """Listen to flush/commit/rollback on every session the factory makes."""
        event.listen(session_factory, "after_flush", self._on_flush)
        event.listen(session_factory, "after_commit", self._on_commit)
        event.listen(session_factory, "after_rollback", self._on_rollback)

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register a callback for table changes.

        Returns:
            A function that removes the subscription
        """
        ref = _reference(callback)
        with self._lock:
            self._subscribers.append(ref)

        def unsubscribe() -> None:
            with self._lock:
                try:
                    self._subscribers.remove(ref)
                except ValueError:
                    pass

        return unsubscribe

    def _live_subscribers(self) -> list[Callable[[], None]]:
        """Resolve references, dropping the ones whose owner is gone."""
        with self._lock:
            live = []
            alive_refs = []
            for ref in self._subscribers:
                callback = ref()
                if callback is not None:
                    live.append(callback)
                    alive_refs.append(ref)
            self._subscribers = alive_refs
        return live

    def subscriber_count(self) -> int:
        return len(self._live_subscribers())

    def notify(self) -> None:
        """Call every subscriber; one failing subscriber does not stop the rest."""
        for callback in self._live_subscribers():
            try:
                callback()
            except Exception as e:
                logger.error(f"Change subscriber {callback!r} failed: {e}")

    # ==========================================
    # Session event handlers
    # ==========================================

    def _on_flush(self, session: Session, flush_context) -> None:
        # new/dirty/deleted still hold the pre-flush state here
        touched = itertools.chain(session.new, session.dirty, session.deleted)
        if any(isinstance(obj, ProductRecord) for obj in touched):
            session.info[_CHANGED_FLAG] = True

    def _on_commit(self, session: Session) -> None:
        if session.info.pop(_CHANGED_FLAG, False):
            self.notify()

    def _on_rollback(self, session: Session) -> None:
        session.info.pop(_CHANGED_FLAG, None)
