"""Consumer Routes — register, list, inspect, update, delete and match consumers.

Invariants:
    - PATCH applies only the supplied fields
    - GET /{id}/match is advisory: it never reserves the returned producer
"""

from fastapi import APIRouter, Depends, Response, status

from energy_market.api.dependencies import get_marketplace
from energy_market.schemas.consumer import (
    ConsumerCreate, ConsumerResponse, ConsumerUpdate, MatchResponse,
)
from energy_market.services.marketplace import Marketplace

router = APIRouter(prefix="/api/v1/consumers", tags=["consumers"])


@router.post(
    "", response_model=ConsumerResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_consumer(
    body: ConsumerCreate, marketplace: Marketplace = Depends(get_marketplace),
):
    """Register a new consumer."""
    consumer = marketplace.create_consumer(body.name, body.energy_need, body.budget)
    return ConsumerResponse.from_record(consumer)


@router.get("", response_model=list[ConsumerResponse])
def list_consumers(marketplace: Marketplace = Depends(get_marketplace)):
    return [ConsumerResponse.from_record(c) for c in marketplace.list_consumers()]


@router.get("/{consumer_id}", response_model=ConsumerResponse)
def get_consumer(
    consumer_id: str, marketplace: Marketplace = Depends(get_marketplace),
):
    return ConsumerResponse.from_record(marketplace.get_consumer(consumer_id))


@router.patch("/{consumer_id}", response_model=ConsumerResponse)
def update_consumer(
    consumer_id: str,
    body: ConsumerUpdate,
    marketplace: Marketplace = Depends(get_marketplace),
):
    """Update energy need and/or budget."""
    consumer = marketplace.update_consumer(
        consumer_id, energy_need=body.energy_need, budget=body.budget,
    )
    return ConsumerResponse.from_record(consumer)


@router.delete("/{consumer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_consumer(
    consumer_id: str, marketplace: Marketplace = Depends(get_marketplace),
):
    marketplace.delete_consumer(consumer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{consumer_id}/match", response_model=MatchResponse)
def find_match(
    consumer_id: str, marketplace: Marketplace = Depends(get_marketplace),
):
    """First-fit producer for this consumer, or null."""
    return MatchResponse(
        consumer_id=consumer_id,
        producer_id=marketplace.find_match(consumer_id),
    )
