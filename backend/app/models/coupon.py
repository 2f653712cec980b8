"""Coupon records for promotional codes."""

from datetime import datetime
from enum import Enum

from app.models.shared import CamelModel, Money


class CouponType(str, Enum):
    DISCOUNT = "DISCOUNT"
    PACKAGE = "PACKAGE"
    CREDIT_BONUS = "CREDIT_BONUS"


class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


class Coupon(CamelModel):
    """Coupon scoped to an organization.

    Only the attribute group matching ``coupon_type`` is meaningful:
    package coupons use ``package_id``/``custom_price``/``custom_credits``,
    discount coupons use ``discount_type``/``discount_value``/
    ``applicable_package_ids`` and credit bonus coupons use ``bonus_credits``.
    """

    id: str
    organization_id: str | None = None
    code: str
    name: str
    name_tr: str | None = None
    description: str | None = None
    description_tr: str | None = None

    coupon_type: CouponType

    package_id: str | None = None
    custom_price: Money | None = None
    custom_credits: int | None = None

    discount_type: DiscountType | None = None
    discount_value: Money | None = None
    applicable_package_ids: list[str] | None = None

    bonus_credits: int | None = None

    valid_from: datetime | None = None
    valid_until: datetime | None = None
    max_redemptions: int | None = None
    max_redemptions_per_member: int = 1
    is_active: bool = True

    created_at: datetime | None = None
    updated_at: datetime | None = None
