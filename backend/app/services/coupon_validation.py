"""Coupon eligibility checks against a package."""

from dataclasses import dataclass
from datetime import datetime

from app.core.clock import as_local, local_now
from app.models.coupon import Coupon, CouponType
from app.models.package import Package


@dataclass
class CouponValidation:
    valid: bool
    reason: str | None = None


def can_apply_coupon_to_package(
    coupon: Coupon,
    package: Package,
    now: datetime | None = None,
) -> CouponValidation:
    """Check whether a coupon may be applied to a package right now.

    Gates are checked in a fixed order and the first failing one is reported.
    A package coupon without a package_id applies to every package.

    Args:
        coupon: The coupon being redeemed.
        package: The package it is redeemed against.
        now: Reference instant; defaults to the current time.

    Returns:
        CouponValidation with ``valid`` and, when invalid, the reason.
    """
    now = local_now(now)

    if not coupon.is_active:
        return CouponValidation(valid=False, reason="Coupon is not active")

    if coupon.valid_from and as_local(coupon.valid_from) > now:
        return CouponValidation(valid=False, reason="Coupon not yet valid")

    if coupon.valid_until and as_local(coupon.valid_until) < now:
        return CouponValidation(valid=False, reason="Coupon has expired")

    if (
        coupon.coupon_type == CouponType.DISCOUNT
        and coupon.applicable_package_ids is not None
        and package.id not in coupon.applicable_package_ids
    ):
        return CouponValidation(valid=False, reason="Coupon does not apply to this package")

    if (
        coupon.coupon_type == CouponType.PACKAGE
        and coupon.package_id
        and coupon.package_id != package.id
    ):
        return CouponValidation(valid=False, reason="Coupon is for a different package")

    return CouponValidation(valid=True)
