from app.models.coupon import Coupon, CouponType, DiscountType
from app.models.organization import Organization
from app.models.package import FRIEND_PASS_BENEFIT, Package, PackageType
from app.models.redemption import (
    AllAccessDailyUsage,
    PackageRedemption,
    RedemptionStatus,
    RedemptionType,
)
from app.models.shared import CamelModel, Money

__all__ = [
    "AllAccessDailyUsage",
    "CamelModel",
    "Coupon",
    "CouponType",
    "DiscountType",
    "FRIEND_PASS_BENEFIT",
    "Money",
    "Organization",
    "Package",
    "PackageRedemption",
    "PackageType",
    "RedemptionStatus",
    "RedemptionType",
]
