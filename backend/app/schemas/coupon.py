"""Coupon request and response schemas."""

from datetime import datetime

from pydantic import Field

from app.models.coupon import CouponType, DiscountType
from app.models.shared import CamelModel, Money


class CouponCreate(CamelModel):
    code: str = Field(max_length=255)
    name: str = Field(max_length=255)
    name_tr: str | None = None
    description: str | None = None
    description_tr: str | None = None
    coupon_type: CouponType
    package_id: str | None = None
    custom_price: Money | None = Field(default=None, ge=0)
    custom_credits: int | None = Field(default=None, ge=0)
    discount_type: DiscountType | None = None
    discount_value: Money | None = Field(default=None, ge=0)
    applicable_package_ids: list[str] | None = None
    bonus_credits: int | None = Field(default=None, ge=0)
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    max_redemptions: int | None = Field(default=None, ge=1)
    max_redemptions_per_member: int = Field(default=1, ge=1)
    is_active: bool = True


class CouponUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=255)
    name_tr: str | None = None
    description: str | None = None
    description_tr: str | None = None
    custom_price: Money | None = Field(default=None, ge=0)
    custom_credits: int | None = Field(default=None, ge=0)
    discount_value: Money | None = Field(default=None, ge=0)
    applicable_package_ids: list[str] | None = None
    bonus_credits: int | None = Field(default=None, ge=0)
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    max_redemptions: int | None = Field(default=None, ge=1)
    max_redemptions_per_member: int | None = Field(default=None, ge=1)
    is_active: bool | None = None


class CouponValidationRequest(CamelModel):
    package_id: str


class CouponValidationResponse(CamelModel):
    valid: bool
    reason: str | None = None
