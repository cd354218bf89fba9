"""Producer Schemas — create/update payloads and public producer shape."""

from pydantic import BaseModel, Field, StrictInt, model_validator

from energy_market.core.records import Producer


class ProducerCreate(BaseModel):
    """Producer registration payload."""
    name: str = Field(max_length=200)
    energy_capacity: StrictInt
    price_per_kwh: StrictInt


class ProducerUpdate(BaseModel):
    """Partial producer update — omitted fields are left untouched."""
    energy_capacity: StrictInt | None = None
    price_per_kwh: StrictInt | None = None

    @model_validator(mode="after")
    def require_any_field(self):
        if self.energy_capacity is None and self.price_per_kwh is None:
            raise ValueError("update requires energy_capacity or price_per_kwh")
        return self


class ProducerResponse(BaseModel):
    id: str
    name: str
    energy_capacity: int
    price_per_kwh: int
    available_energy: int

    @classmethod
    def from_record(cls, producer: Producer) -> "ProducerResponse":
        return cls(**producer.to_dict())
