from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .evolution import balance_deltas
from .models import LedgerState
from .reconcile import DRIFT_TOLERANCE


RECENT_OPERATIONS = 25


def format_coins(amount: float) -> str:
    text = str(abs(int(round(amount))))
    groups: List[str] = []
    while text:
        groups.insert(0, text[-3:])
        text = text[:-3]
    sign = "-" if round(amount) < 0 else ""
    return sign + " ".join(groups)


def format_timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).isoformat()


def completion_percentage(balance: float, upgrade_cap: Optional[int]) -> Optional[float]:
    if not upgrade_cap:
        return None
    return round(balance / upgrade_cap * 100, 2)


def operations_view(state: LedgerState, limit: int = RECENT_OPERATIONS) -> List[Dict[str, Any]]:
    # Most recently appended first.
    rows: List[Dict[str, Any]] = []
    for timestamp, operation in reversed(state.journal[-limit:] if limit > 0 else []):
        row = operation.model_dump()
        row["timestamp"] = timestamp
        row["timestamp_utc"] = format_timestamp(timestamp)
        row["description"] = operation.describe()
        rows.append(row)
    return rows


def dashboard(state: LedgerState, now: int) -> Dict[str, Any]:
    users = sorted(state.balances.items(), key=lambda item: item[1], reverse=True)
    deltas = sorted(balance_deltas(state.journal, now).items(), key=lambda item: item[1], reverse=True)
    return {
        "balance": state.balance,
        "balance_display": format_coins(state.balance),
        "upgrade_cap": state.upgrade_cap,
        "completion_percentage": completion_percentage(state.balance, state.upgrade_cap),
        "bank_interest_total": state.bank_interest_total,
        "drift": state.drift,
        "drift_exceeded": state.drift > DRIFT_TOLERANCE,
        "cursor": state.cursor,
        "last_check": state.last_check,
        "users": [
            {"name": name, "balance": balance, "balance_display": format_coins(balance)}
            for name, balance in users
        ],
        "deltas": [{"name": name, "delta": delta} for name, delta in deltas],
        "operations": operations_view(state),
        "total_operations": len(state.journal),
    }
