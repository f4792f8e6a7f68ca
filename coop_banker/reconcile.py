from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from .classifier import classify_all, select_new
from .ledger import ANOMALY_THRESHOLD, apply_batch
from .models import LedgerState, Profile
from .upgrades import profile_upgrade_cap


log = logging.getLogger(__name__)

DRIFT_TOLERANCE = 1.0


@dataclass
class ReconcileResult:
    state: LedgerState
    new_operations: int
    anomaly: bool
    drift_exceeded: bool


def compute_drift(balances: Mapping[str, float], bank_interest_total: float, authoritative: float) -> float:
    return abs(authoritative - (sum(balances.values()) + bank_interest_total))


def reconcile(state: LedgerState, profile: Profile, now: int) -> ReconcileResult:
    """Run one reconciliation pass against a freshly fetched profile.

    ``state`` is never mutated: the pass works on a deep copy, so a failure
    leaves the caller holding the last good ledger.
    """
    log.info("TSC: updating from cursor %d", state.cursor)
    updated = state.model_copy(deep=True)
    banking = profile.banking

    batch = classify_all(select_new(banking.transactions, updated.cursor))
    apply_batch(updated, batch, now)

    updated.drift = compute_drift(updated.balances, updated.bank_interest_total, banking.balance)
    drift_exceeded = updated.drift > DRIFT_TOLERANCE
    if drift_exceeded:
        log.warning(
            "DRIFT: found %s between balance %s and sum %s",
            updated.drift,
            banking.balance,
            updated.total(),
        )

    updated.upgrade_cap = profile_upgrade_cap(profile)
    if updated.upgrade_cap is None:
        log.warning("TSC: could not resolve the bank upgrade cap from %d member(s)", len(profile.members))
    updated.balance = banking.balance
    updated.last_check = now

    return ReconcileResult(
        state=updated,
        new_operations=len(batch),
        anomaly=len(batch) > ANOMALY_THRESHOLD,
        drift_exceeded=drift_exceeded,
    )
