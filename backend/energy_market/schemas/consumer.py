"""Consumer Schemas — create/update payloads, public consumer shape, match result."""

from pydantic import BaseModel, Field, StrictInt, model_validator

from energy_market.core.records import Consumer


class ConsumerCreate(BaseModel):
    """Consumer registration payload."""
    name: str = Field(max_length=200)
    energy_need: StrictInt
    budget: StrictInt


class ConsumerUpdate(BaseModel):
    """Partial consumer update — omitted fields are left untouched."""
    energy_need: StrictInt | None = None
    budget: StrictInt | None = None

    @model_validator(mode="after")
    def require_any_field(self):
        if self.energy_need is None and self.budget is None:
            raise ValueError("update requires energy_need or budget")
        return self


class ConsumerResponse(BaseModel):
    id: str
    name: str
    energy_need: int
    budget: int

    @classmethod
    def from_record(cls, consumer: Consumer) -> "ConsumerResponse":
        return cls(**consumer.to_dict())


class MatchResponse(BaseModel):
    """Advisory match result — producer_id is None when nothing qualifies."""
    consumer_id: str
    producer_id: str | None
