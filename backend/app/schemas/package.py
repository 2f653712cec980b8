"""Package request and response schemas."""

from datetime import datetime

from pydantic import Field

from app.models.package import PackageType
from app.models.redemption import RedemptionType
from app.models.shared import CamelModel, Money
from app.schemas.coupon import CouponValidationResponse


class PackageCreate(CamelModel):
    code: str = Field(max_length=255)
    name: str = Field(max_length=255)
    name_tr: str | None = None
    type: PackageType
    price: Money = Field(ge=0)
    credits: int | None = Field(default=None, ge=0)
    description: str | None = None
    description_tr: str | None = None
    benefits: list[str] = Field(default_factory=list)
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    is_active: bool = True
    display_order: int = 0


class PackageUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=255)
    name_tr: str | None = None
    price: Money | None = Field(default=None, ge=0)
    credits: int | None = Field(default=None, ge=0)
    description: str | None = None
    description_tr: str | None = None
    benefits: list[str] | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    is_active: bool | None = None
    display_order: int | None = None


class RedemptionQuoteRequest(CamelModel):
    package_id: str
    coupon_code: str | None = None


class RedeemPackageRequest(CamelModel):
    member_id: str
    package_id: str
    coupon_code: str | None = None
    notes: str | None = None


class RedemptionQuoteResponse(CamelModel):
    """What a member would get and pay when redeeming a package."""

    package_id: str
    coupon_id: str | None = None
    coupon_validation: CouponValidationResponse | None = None
    original_price: Money
    discount_amount: Money
    final_price: Money
    redemption_type: RedemptionType
    credits_to_add: int
    bonus_credits: int = 0
    all_access_expires_at: datetime | None = None
    all_access_days: int | None = None
    friend_pass_available: bool = False
    friend_pass_expires_at: datetime | None = None
    final_price_display: str
