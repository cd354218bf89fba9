"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProducerId, ConsumerId, TransactionId wrap str identifiers — never mix kinds
    - KilowattHours and Money are exact ints (no floats anywhere in the core)
    - Record kinds encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - int over Decimal: quantities are integer base units, arbitrary precision
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProducerId = NewType("ProducerId", str)
ConsumerId = NewType("ConsumerId", str)
TransactionId = NewType("TransactionId", str)


# ─── Value Types ─────────────────────────────────────────────────

KilowattHours = NewType("KilowattHours", int)   # >= 0
Money = NewType("Money", int)                   # >= 0, base currency units


# ─── Enums ───────────────────────────────────────────────────────

class RecordKind(str, Enum):
    """The three record kinds held by a ledger store."""
    PRODUCER = "Producer"
    CONSUMER = "Consumer"
    TRANSACTION = "Transaction"

    def lock_key(self, record_id: str) -> str:
        """Key under which the record's mutex is registered."""
        return f"{self.name.lower()}:{record_id}"
