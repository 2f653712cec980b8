"""All Access daily usage and friend pass rules for redeemed packages."""

from datetime import datetime, timedelta

from app.core.clock import as_local, local_now
from app.models.package import FRIEND_PASS_BENEFIT, Package, PackageType
from app.models.redemption import AllAccessDailyUsage, PackageRedemption, RedemptionStatus

DEFAULT_VALIDITY_DAYS = 30


def _end_of_day_after(purchase_date: datetime, days: int) -> datetime:
    expiration = as_local(purchase_date) + timedelta(days=days)
    return expiration.replace(hour=23, minute=59, second=59, microsecond=999000)


def calculate_all_access_expiration(
    purchase_date: datetime,
    days: int = DEFAULT_VALIDITY_DAYS,
) -> datetime:
    """End of the studio-local day ``days`` calendar days after the purchase."""
    return _end_of_day_after(purchase_date, days)


def calculate_friend_pass_expiration(
    purchase_date: datetime,
    days: int = DEFAULT_VALIDITY_DAYS,
) -> datetime:
    """End of the studio-local day ``days`` calendar days after the purchase."""
    return _end_of_day_after(purchase_date, days)


def can_use_all_access_today(
    redemption: PackageRedemption,
    daily_usages: list[AllAccessDailyUsage],
    now: datetime | None = None,
) -> bool:
    """Check whether an All Access redemption can be used for a booking today.

    All Access allows one attended usage per calendar day; a no-show does not
    consume the day.

    Args:
        redemption: The All Access redemption.
        daily_usages: Usage records of this redemption.
        now: Reference instant; the clock is read once when omitted.

    Returns:
        True if the redemption is active, not expired before today and not
        already used today.
    """
    if redemption.status != RedemptionStatus.ACTIVE.value:
        return False
    if redemption.all_access_expires_at is None:
        return False

    now = local_now(now)
    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if as_local(redemption.all_access_expires_at) < start_of_today:
        return False

    today = start_of_today.date()
    used_today = any(
        usage.usage_date == today and not usage.was_no_show for usage in daily_usages
    )
    return not used_today


def is_friend_pass_valid(redemption: PackageRedemption, now: datetime | None = None) -> bool:
    """A friend pass is valid while available, unused and not past its expiry."""
    if not redemption.friend_pass_available:
        return False
    if redemption.friend_pass_used:
        return False
    if redemption.friend_pass_expires_at is None:
        return False

    return as_local(redemption.friend_pass_expires_at) >= local_now(now)


def has_friend_pass_benefit(package: Package) -> bool:
    return package.type == PackageType.ELITE_30 and FRIEND_PASS_BENEFIT in package.benefits


def is_all_access_package(package: Package) -> bool:
    return package.type == PackageType.ALL_ACCESS
