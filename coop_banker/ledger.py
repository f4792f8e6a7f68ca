from __future__ import annotations

import logging
from typing import List, Sequence

from .errors import InvalidTransfer, LedgerError
from .models import (
    AnomalyMarker,
    BankInterest,
    JournalEntry,
    LedgerState,
    PlayerPurse,
    PlayerTransfer,
)


log = logging.getLogger(__name__)

ANOMALY_THRESHOLD = 50


def check_transfer(state: LedgerState, transfer: PlayerTransfer) -> None:
    if transfer.sender == transfer.receiver:
        raise InvalidTransfer(f"{transfer.sender} cannot transfer coins to themselves")
    missing = [name for name in (transfer.sender, transfer.receiver) if name not in state.balances]
    if missing:
        raise InvalidTransfer(f"unknown co-op member(s): {', '.join(missing)}")


def apply_operation(state: LedgerState, operation) -> None:
    if isinstance(operation, PlayerPurse):
        state.balances[operation.username] = state.balances.get(operation.username, 0.0) + operation.amount
    elif isinstance(operation, BankInterest):
        state.bank_interest_total += operation.amount
    elif isinstance(operation, PlayerTransfer):
        # Validate before touching either side so a rejected transfer leaves no trace.
        check_transfer(state, operation)
        state.balances[operation.sender] -= operation.amount
        state.balances[operation.receiver] += operation.amount
    elif isinstance(operation, AnomalyMarker):
        pass
    else:
        raise LedgerError(f"unsupported operation: {operation!r}")


def apply_batch(state: LedgerState, batch: Sequence[JournalEntry], now: int) -> List[JournalEntry]:
    """Fold newly classified operations into ``state`` in the order received.

    Returns the journal entries appended by this call. Batches larger than
    ``ANOMALY_THRESHOLD`` are still applied in full, followed by a single
    ``AnomalyMarker`` stamped with ``now``.
    """
    entries: List[JournalEntry] = list(batch)
    if len(entries) > ANOMALY_THRESHOLD:
        log.warning(
            "TSC: %d new transactions, maybe some were not correctly registered",
            len(entries),
        )
        entries.append((now, AnomalyMarker()))
    elif not entries:
        log.info("TSC: no new transactions")
    else:
        log.info("TSC: %d new transactions", len(entries))

    for timestamp, operation in entries:
        log.info("TSC NEW: %s", operation)
        apply_operation(state, operation)
        state.cursor = max(state.cursor, timestamp)
        state.journal.append((timestamp, operation))
    return entries


def record_transfer(state: LedgerState, amount: float, sender: str, receiver: str, now: int) -> JournalEntry:
    if amount <= 0:
        raise InvalidTransfer(f"transfer amount must be greater than 0, got {amount}")
    transfer = PlayerTransfer(amount=amount, sender=sender, receiver=receiver, repeat_count=1)
    apply_operation(state, transfer)
    state.cursor = max(state.cursor, now)
    state.journal.append((now, transfer))
    log.info("TSF NEW: %s", transfer)
    return now, transfer
