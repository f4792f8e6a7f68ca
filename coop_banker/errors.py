from __future__ import annotations


class BankerError(Exception):
    """Base class for every failure raised by coop_banker."""


class LedgerError(BankerError):
    """Raised when an operation cannot be applied to the ledger."""


class InvalidTransfer(LedgerError):
    """Raised when a transfer names the same member twice or an unknown member."""


class FeedError(BankerError):
    """Raised when the profile feed cannot be fetched or is unusable."""


class StoreError(BankerError):
    """Raised when the ledger snapshot cannot be read or written."""


class ConfigError(BankerError):
    """Raised when required settings are missing or malformed."""
