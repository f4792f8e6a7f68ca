from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


LEDGER_VERSION = 3


# Feed records, as returned by the profile endpoint. Unknown fields are ignored.


class TransactionAction(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"


class Transaction(BaseModel):
    amount: float
    timestamp: int
    action: TransactionAction
    initiator_name: str


class Banking(BaseModel):
    balance: float
    transactions: List[Transaction] = Field(default_factory=list)


class Leveling(BaseModel):
    completed_tasks: List[str] = Field(default_factory=list)


class Member(BaseModel):
    leveling: Leveling = Field(default_factory=Leveling)


class Profile(BaseModel):
    profile_id: str = ""
    members: Dict[str, Member] = Field(default_factory=dict)
    banking: Banking


class ProfileResponse(BaseModel):
    success: bool
    cause: Optional[str] = None
    profile: Optional[Profile] = None


# Journal operations.


class _Operation(BaseModel):
    model_config = ConfigDict(frozen=True)

    def describe(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.describe()


class PlayerPurse(_Operation):
    """A member deposit (positive amount) or withdrawal (negative amount)."""

    type: Literal["PlayerPurse"] = "PlayerPurse"
    amount: float
    username: str
    repeat_count: int = Field(default=1, ge=1)

    def describe(self) -> str:
        verb = "deposit" if self.amount > 0 else "withdraw"
        return f"{self.username} has {verb} {abs(self.amount)} coins"


class PlayerTransfer(_Operation):
    type: Literal["PlayerTransfer"] = "PlayerTransfer"
    amount: float = Field(ge=0)
    sender: str
    receiver: str
    repeat_count: int = Field(default=1, ge=1)

    def describe(self) -> str:
        return f"{self.sender} has transfered {self.amount} coins to {self.receiver}"


class BankInterest(_Operation):
    type: Literal["BankInterest"] = "BankInterest"
    amount: float = Field(ge=0)

    def describe(self) -> str:
        return f"bank interest: {self.amount} coins"


class AnomalyMarker(_Operation):
    """Too many new entries in one pass to trust individual attribution."""

    type: Literal["AnomalyMarker"] = "AnomalyMarker"

    def describe(self) -> str:
        return "anomaly marker: more new transactions than the feed can be trusted with"


Operation = Annotated[
    Union[PlayerPurse, PlayerTransfer, BankInterest, AnomalyMarker],
    Field(discriminator="type"),
]

JournalEntry = Tuple[int, Operation]


class LedgerState(BaseModel):
    version: int = LEDGER_VERSION
    cursor: int = 0
    last_check: int = 0
    balance: float = 0.0
    balances: Dict[str, float] = Field(default_factory=dict)
    bank_interest_total: float = 0.0
    drift: float = 0.0
    journal: List[JournalEntry] = Field(default_factory=list)
    upgrade_cap: Optional[int] = None

    def total(self) -> float:
        return sum(self.balances.values()) + self.bank_interest_total
