"""Redemption response schemas."""

from datetime import datetime

from app.models.redemption import AllAccessDailyUsage, PackageRedemption
from app.models.shared import CamelModel


class StatusDisplayResponse(CamelModel):
    text: str
    color: str


class RedemptionDetailResponse(PackageRedemption):
    status_display: StatusDisplayResponse


class AllAccessUsageResponse(CamelModel):
    redemption_id: str
    usages: list[AllAccessDailyUsage]
    can_use_today: bool
    all_access_expires_at: datetime | None = None


class FriendPassResponse(CamelModel):
    redemption_id: str
    friend_pass_available: bool
    friend_pass_used: bool
    friend_pass_expires_at: datetime | None = None
    is_valid: bool
