"""Producer Routes — register, list, inspect and update producer listings.

Invariants:
    - No DELETE route: producers referenced by the ledger must stay resolvable
    - PATCH applies only the supplied fields
"""

from fastapi import APIRouter, Depends, status

from energy_market.api.dependencies import get_marketplace
from energy_market.schemas.producer import (
    ProducerCreate, ProducerResponse, ProducerUpdate,
)
from energy_market.services.marketplace import Marketplace

router = APIRouter(prefix="/api/v1/producers", tags=["producers"])


@router.post(
    "", response_model=ProducerResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_producer(
    body: ProducerCreate, marketplace: Marketplace = Depends(get_marketplace),
):
    """Register a new producer listing."""
    producer = marketplace.create_producer(
        body.name, body.energy_capacity, body.price_per_kwh,
    )
    return ProducerResponse.from_record(producer)


@router.get("", response_model=list[ProducerResponse])
def list_producers(marketplace: Marketplace = Depends(get_marketplace)):
    return [ProducerResponse.from_record(p) for p in marketplace.list_producers()]


@router.get("/{producer_id}", response_model=ProducerResponse)
def get_producer(
    producer_id: str, marketplace: Marketplace = Depends(get_marketplace),
):
    return ProducerResponse.from_record(marketplace.get_producer(producer_id))


@router.patch("/{producer_id}", response_model=ProducerResponse)
def update_producer(
    producer_id: str,
    body: ProducerUpdate,
    marketplace: Marketplace = Depends(get_marketplace),
):
    """Update capacity and/or price."""
    producer = marketplace.update_producer(
        producer_id,
        energy_capacity=body.energy_capacity,
        price_per_kwh=body.price_per_kwh,
    )
    return ProducerResponse.from_record(producer)
