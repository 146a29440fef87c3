"""Transactional key-value store backing the election.

State lives in named tables (plain dicts of immutable records). Every mutating
operation runs inside ``Store.transaction()``, which works on private copies of
the tables: the writing thread sees its copies through ``table()``, every other
thread keeps reading the committed tables. The copies replace the committed
tables only when the transaction exits cleanly, so a call either fully applies
or leaves no trace, and nobody sees it half done. Notifications emitted inside
a transaction are only published once it commits.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

TABLES = ("election", "candidates", "voters", "vote_timestamps")

Tables = Dict[str, Dict[Any, Any]]


class Transaction:
    """Handle yielded by ``Store.transaction``; buffers notifications."""

    def __init__(self) -> None:
        self.pending: List[Any] = []

    def emit(self, event: Any) -> None:
        self.pending.append(event)


class Store:
    def __init__(self) -> None:
        self._tables: Tables = {name: {} for name in TABLES}
        self._lock = threading.RLock()
        # open transactions of the thread holding the lock, innermost last
        self._active: List[Tuple[Tables, Transaction]] = []
        self._owner: Optional[int] = None
        self._subscribers: List[Callable[[Any], None]] = []
        # append-only log of committed notifications
        self.events: List[Any] = []

    def table(self, name: str) -> Dict[Any, Any]:
        if self._active and self._owner == threading.get_ident():
            return self._active[-1][0][name]
        return self._tables[name]

    def subscribe(self, callback: Callable[[Any], None]) -> None:
        self._subscribers.append(callback)

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        with self._lock:
            base = self._active[-1][0] if self._active else self._tables
            working = {name: dict(rows) for name, rows in base.items()}
            txn = Transaction()
            self._active.append((working, txn))
            self._owner = threading.get_ident()
            try:
                yield txn
            finally:
                # on any exit the copies stop being visible; only a clean exit keeps them
                self._active.pop()
                if not self._active:
                    self._owner = None

            if self._active:
                outer_tables, outer_txn = self._active[-1]
                outer_tables.update(working)
                outer_txn.pending.extend(txn.pending)
                return
            self._tables = working
            self.events.extend(txn.pending)
        for event in txn.pending:
            self._publish(event)

    def _publish(self, event: Any) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("subscriber %r failed on %r", callback, event)
