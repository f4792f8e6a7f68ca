from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from .client import HypixelClient
from .ledger import record_transfer
from .models import JournalEntry, LedgerState
from .reconcile import ReconcileResult, reconcile
from .store import LedgerStore


log = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class BankerService:
    """Owns the ledger between passes.

    Passes and manual transfers are serialised by ``_lock`` and run on a copy
    of the current snapshot. The copy replaces the snapshot only once it has
    been saved, so readers of ``snapshot`` always get a complete ledger.
    """

    def __init__(self, client: HypixelClient, store: LedgerStore, profile_uuid: str) -> None:
        self.client = client
        self.store = store
        self.profile_uuid = profile_uuid
        self._lock = threading.Lock()
        self._snapshot = store.load()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def snapshot(self) -> LedgerState:
        return self._snapshot

    def refresh(self, now: Optional[int] = None) -> ReconcileResult:
        with self._lock:
            profile = self.client.profile(self.profile_uuid)
            result = reconcile(self._snapshot, profile, now if now is not None else now_ms())
            self.store.save(result.state)
            self._snapshot = result.state
            return result

    def transfer(self, amount: float, sender: str, receiver: str, now: Optional[int] = None) -> JournalEntry:
        with self._lock:
            updated = self._snapshot.model_copy(deep=True)
            entry = record_transfer(updated, amount, sender, receiver, now if now is not None else now_ms())
            self.store.save(updated)
            self._snapshot = updated
            return entry

    def _run(self, interval: float) -> None:
        while not self._stop.is_set():
            try:
                self.refresh()
            except Exception:
                log.exception("TSC: reconciliation pass failed, keeping the previous ledger")
            self._stop.wait(interval)

    def start(self, interval: float) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, args=(interval,), name="banker-refresh", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
