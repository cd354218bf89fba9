"""Transaction Routes — read-only view of the append-only ledger."""

from fastapi import APIRouter, Depends

from energy_market.api.dependencies import get_marketplace
from energy_market.schemas.trade import TransactionResponse
from energy_market.services.marketplace import Marketplace

router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.get("", response_model=list[TransactionResponse])
def list_transactions(marketplace: Marketplace = Depends(get_marketplace)):
    return [
        TransactionResponse.from_record(t) for t in marketplace.list_transactions()
    ]


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str, marketplace: Marketplace = Depends(get_marketplace),
):
    return TransactionResponse.from_record(
        marketplace.get_transaction(transaction_id),
    )
