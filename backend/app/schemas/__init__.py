from app.schemas.coupon import (
    CouponCreate,
    CouponUpdate,
    CouponValidationRequest,
    CouponValidationResponse,
)
from app.schemas.package import (
    PackageCreate,
    PackageUpdate,
    RedeemPackageRequest,
    RedemptionQuoteRequest,
    RedemptionQuoteResponse,
)
from app.schemas.redemption import (
    AllAccessUsageResponse,
    FriendPassResponse,
    RedemptionDetailResponse,
    StatusDisplayResponse,
)

__all__ = [
    "AllAccessUsageResponse",
    "CouponCreate",
    "CouponUpdate",
    "CouponValidationRequest",
    "CouponValidationResponse",
    "FriendPassResponse",
    "PackageCreate",
    "PackageUpdate",
    "RedeemPackageRequest",
    "RedemptionQuoteRequest",
    "RedemptionQuoteResponse",
    "RedemptionDetailResponse",
    "StatusDisplayResponse",
]
