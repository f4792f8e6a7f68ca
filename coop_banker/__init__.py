from .errors import BankerError, InvalidTransfer, LedgerError
from .models import LedgerState
from .reconcile import ReconcileResult, compute_drift, reconcile

__all__ = [
    "BankerError",
    "InvalidTransfer",
    "LedgerError",
    "LedgerState",
    "ReconcileResult",
    "compute_drift",
    "reconcile",
]
