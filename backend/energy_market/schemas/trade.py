"""Trade Schemas — settlement requests and ledger entries."""

from datetime import datetime

from pydantic import BaseModel, Field

from energy_market.core.records import EnergyTransaction


class TradeRequest(BaseModel):
    """Settle a consumer against an explicitly chosen producer."""
    consumer_id: str = Field(min_length=1)
    producer_id: str = Field(min_length=1)


class AutoTradeRequest(BaseModel):
    """Settle a consumer against its first-fit producer."""
    consumer_id: str = Field(min_length=1)


class TransactionResponse(BaseModel):
    id: str
    producer_id: str
    consumer_id: str
    energy_amount: int
    total_price: int
    created_at: datetime

    @classmethod
    def from_record(cls, transaction: EnergyTransaction) -> "TransactionResponse":
        return cls(
            id=transaction.id,
            producer_id=transaction.producer_id,
            consumer_id=transaction.consumer_id,
            energy_amount=transaction.energy_amount,
            total_price=transaction.total_price,
            created_at=transaction.created_at,
        )
