import uuid
from datetime import date
from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    field_serializer,
    field_validator,
    model_validator,
)

from app.utils.periods import format_month, parse_month

# Upper bound of the BIGINT price column
MAX_PRICE = 2**63 - 1


class SubscriptionRequest(BaseModel):
    """Body of POST /subscriptions and PUT /subscriptions/{id}."""

    service_name: str = Field(min_length=1)
    price: StrictInt = Field(ge=0, le=MAX_PRICE, description="Price in the smallest currency unit")
    user_id: uuid.UUID = Field(validation_alias=AliasChoices("user_id", "owner_id"))
    start_date: date = Field(description="MM-YYYY", examples=["07-2025"])
    end_date: Optional[date] = Field(default=None, description="MM-YYYY, omitted while active")

    @field_validator("service_name")
    @classmethod
    def validate_service_name(cls, v):
        if not v.strip():
            raise ValueError("service_name must not be blank")
        return v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_period(cls, v, info):
        if v is None:
            return v
        try:
            return parse_month(v)
        except ValueError:
            raise ValueError(f"invalid {info.field_name} format, expected MM-YYYY")

    @model_validator(mode="after")
    def validate_period_order(self):
        if self.end_date is not None and self.start_date > self.end_date:
            raise ValueError("start_date must be before or equal to end_date")
        return self


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: date
    end_date: Optional[date] = None

    @field_serializer("start_date", "end_date")
    def serialize_period(self, value: Optional[date]):
        return format_month(value) if value is not None else None


class TotalResponse(BaseModel):
    total: int
