from __future__ import annotations

from typing import Iterable, List

from .models import (
    BankInterest,
    JournalEntry,
    PlayerPurse,
    Transaction,
    TransactionAction,
)


FORMATTING_MARKER = "§"
BANK_INTEREST_LABELS = frozenset({"Bank Interest", "Bank Interest (x2)"})


def canonical_name(display_name: str) -> str:
    """Drop a leading colour code such as ``§a`` from a display name.

    The marker and its colour code are two code points; slicing by code point
    keeps multi-byte names intact.
    """
    if display_name.startswith(FORMATTING_MARKER):
        return display_name[2:]
    return display_name


def classify(transaction: Transaction) -> JournalEntry:
    username = canonical_name(transaction.initiator_name)
    if transaction.action is TransactionAction.WITHDRAW:
        operation = PlayerPurse(amount=-transaction.amount, username=username, repeat_count=1)
    elif username in BANK_INTEREST_LABELS and transaction.amount >= 0:
        operation = BankInterest(amount=transaction.amount)
    else:
        operation = PlayerPurse(amount=transaction.amount, username=username, repeat_count=1)
    return transaction.timestamp, operation


def select_new(transactions: Iterable[Transaction], cursor: int) -> List[Transaction]:
    # Feed order is kept; duplicates of the cursor entry are not newer.
    return [tx for tx in transactions if tx.timestamp > cursor]


def classify_all(transactions: Iterable[Transaction]) -> List[JournalEntry]:
    return [classify(tx) for tx in transactions]
