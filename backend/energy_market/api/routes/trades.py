"""Trade Routes — settle consumers against producers.

Invariants:
    - Every successful call appends exactly one ledger entry (201)
    - Rejections (insufficient energy/budget, no match) return 422 and change nothing
"""

from fastapi import APIRouter, Depends, status

from energy_market.api.dependencies import get_marketplace
from energy_market.schemas.trade import (
    AutoTradeRequest, TradeRequest, TransactionResponse,
)
from energy_market.services.marketplace import Marketplace

router = APIRouter(prefix="/api/v1/trades", tags=["trades"])


@router.post(
    "", response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
def execute_trade(
    body: TradeRequest, marketplace: Marketplace = Depends(get_marketplace),
):
    """Settle the consumer's need against the given producer."""
    transaction = marketplace.execute_transaction(body.consumer_id, body.producer_id)
    return TransactionResponse.from_record(transaction)


@router.post(
    "/auto", response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
def match_and_settle(
    body: AutoTradeRequest, marketplace: Marketplace = Depends(get_marketplace),
):
    """Settle the consumer against its first-fit producer."""
    transaction = marketplace.match_and_settle(body.consumer_id)
    return TransactionResponse.from_record(transaction)
