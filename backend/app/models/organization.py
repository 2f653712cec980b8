"""Organization (tenant) record as served by the main backend."""

from decimal import Decimal
from typing import Any

from pydantic import field_validator

from app.models.shared import CamelModel, Money


class Organization(CamelModel):
    id: str
    name: str
    credit_price: Money = Decimal("0")
    currency: str = "TL"
    language: str = "en"
    email: str | None = None

    @field_validator("credit_price", mode="before")
    @classmethod
    def _missing_credit_price_is_zero(cls, value: Any) -> Any:
        return Decimal("0") if value is None else value
