"""Package redemption and All Access daily usage records."""

from datetime import date, datetime
from enum import Enum

from app.models.shared import CamelModel, Money


class RedemptionType(str, Enum):
    PACKAGE_DIRECT = "PACKAGE_DIRECT"
    COUPON_PACKAGE = "COUPON_PACKAGE"
    COUPON_DISCOUNT = "COUPON_DISCOUNT"


class RedemptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    USED = "USED"


class PackageRedemption(CamelModel):
    """A member acquiring a package, with or without a coupon.

    ACTIVE is the only non-terminal status.
    """

    id: str
    member_id: str
    organization_id: str | None = None

    package_id: str | None = None
    coupon_id: str | None = None

    redemption_type: RedemptionType
    redeemed_at: datetime
    redeemed_by: str | None = None

    original_price: Money
    discount_amount: Money
    final_price: Money

    credits_added: int | None = None
    all_access_expires_at: datetime | None = None
    all_access_days: int | None = None

    friend_pass_available: bool = False
    friend_pass_expires_at: datetime | None = None
    friend_pass_used: bool = False
    friend_pass_used_at: datetime | None = None
    friend_pass_booking_id: str | None = None

    # Kept as a plain string so unknown statuses still parse.
    status: str = RedemptionStatus.ACTIVE.value

    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AllAccessDailyUsage(CamelModel):
    """One usage per calendar day of an ALL_ACCESS redemption."""

    id: str
    package_redemption_id: str
    member_id: str
    usage_date: date
    booking_id: str | None = None
    was_no_show: bool = False
    created_at: datetime | None = None
