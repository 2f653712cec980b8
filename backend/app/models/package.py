"""Package catalog records."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from app.models.shared import CamelModel, Money

FRIEND_PASS_BENEFIT = "friend_pass"


class PackageType(str, Enum):
    SINGLE_RIDE = "SINGLE_RIDE"
    CREDIT_PACK = "CREDIT_PACK"
    ELITE_30 = "ELITE_30"
    ALL_ACCESS = "ALL_ACCESS"


class Package(CamelModel):
    """A sellable catalog entry owned by an organization.

    The pricing fields at the bottom are derived from the organization credit
    price and are only filled in by the pricing calculator.
    """

    id: str
    organization_id: str | None = None
    code: str
    name: str
    name_tr: str | None = None
    type: PackageType
    price: Money
    credits: int | None = None
    description: str | None = None
    description_tr: str | None = None
    benefits: list[str] = Field(default_factory=list)

    valid_from: datetime | None = None
    valid_until: datetime | None = None

    is_active: bool = True
    display_order: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    base_price: Money | None = None
    discount_amount: Money | None = None
    discount_percentage: Money | None = None
    price_per_credit: Money | None = None

    @field_validator("benefits", mode="before")
    @classmethod
    def _null_benefits_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value
