"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class Direction(str, Enum):
    """Which way money moved relative to the account holder."""

    DEBIT = "debit"
    CREDIT = "credit"


class RejectionCode(str, Enum):
    """Why a message did not become a transaction."""

    INFORMATIONAL_MESSAGE = "informational_message"
    NO_TRANSACTION_INDICATOR = "no_transaction_indicator"
    AMOUNT_NOT_FOUND = "amount_not_found"
    AMOUNT_OUT_OF_RANGE = "amount_out_of_range"
    VERIFIER_REJECTED = "verifier_rejected"
    SENDER_NOT_ALLOWED = "sender_not_allowed"


@dataclass(frozen=True)
class RawMessage:
    """A message as delivered by the message source."""

    id: str
    sender: str
    body: str
    received_at: int


@dataclass(frozen=True)
class Parsed:
    """A message classified as a completed money movement."""

    amount: Decimal
    direction: Direction
    institution: str
    merchant_guess: Optional[str]
    description_snippet: str
    occurred_at: int
    dedup_key: str
    raw_text: str


@dataclass(frozen=True)
class Rejected:
    """A message that was skipped. Rejection is final for that message."""

    code: RejectionCode
    reason: str


ParseOutcome = Union[Parsed, Rejected]


@dataclass(frozen=True)
class VerifierVerdict:
    """Advisory answer from the external verifier."""

    is_transaction: bool
    direction: Optional[Direction]
    reason: str
    amount: Optional[Decimal] = None


@dataclass
class IngestStats:
    """Counters for a single ingestion run."""

    seen: int = 0
    parsed: int = 0
    inserted: int = 0
    duplicates: int = 0
    rejected: dict[RejectionCode, int] = field(default_factory=dict)

    def record_rejection(self, code: RejectionCode) -> None:
        self.rejected[code] = self.rejected.get(code, 0) + 1

    @property
    def rejected_total(self) -> int:
        return sum(self.rejected.values())
