from __future__ import annotations

from typing import Dict, Iterable

from .models import JournalEntry, PlayerPurse, PlayerTransfer


DELTA_WINDOW_MS = 24 * 3600 * 1000


def balance_deltas(
    journal: Iterable[JournalEntry],
    now: int,
    window: int = DELTA_WINDOW_MS,
) -> Dict[str, float]:
    """Net per-member change over the trailing ``window`` milliseconds.

    Entries are picked by comparing their timestamp with ``now``; the journal is
    newest-first per pass, so its position says nothing about age.
    """
    start = now - window
    deltas: Dict[str, float] = {}
    for timestamp, operation in journal:
        if timestamp < start or timestamp > now:
            continue
        if isinstance(operation, PlayerPurse):
            deltas[operation.username] = deltas.get(operation.username, 0.0) + operation.amount
        elif isinstance(operation, PlayerTransfer):
            deltas[operation.sender] = deltas.get(operation.sender, 0.0) - operation.amount
            deltas[operation.receiver] = deltas.get(operation.receiver, 0.0) + operation.amount
    return deltas
