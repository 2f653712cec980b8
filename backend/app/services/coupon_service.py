"""Coupon resolution: how a coupon changes the price and credits of a package."""

from dataclasses import dataclass
from decimal import Decimal

from app.models.coupon import Coupon, CouponType, DiscountType
from app.models.package import Package, PackageType
from app.models.redemption import RedemptionType


@dataclass
class DiscountedPrice:
    """Result of applying a discount coupon to a price."""

    discount_amount: Decimal
    final_price: Decimal


@dataclass
class RedemptionPrice:
    """Pricing snapshot recorded on a package redemption."""

    original_price: Decimal
    discount_amount: Decimal
    final_price: Decimal
    redemption_type: RedemptionType


def calculate_discounted_price(original_price: Decimal, coupon: Coupon) -> DiscountedPrice:
    """Apply a DISCOUNT coupon to a price.

    The final price is floored at zero but the discount amount is reported as
    configured, so a fixed discount larger than the price keeps its full
    value while the final price becomes zero.

    Args:
        original_price: The package price before the coupon.
        coupon: The coupon to apply.

    Returns:
        DiscountedPrice with the raw discount and the clamped final price.
    """
    original = Decimal(str(original_price))
    discount_amount = Decimal("0")

    if (
        coupon.coupon_type == CouponType.DISCOUNT
        and coupon.discount_type
        and coupon.discount_value
    ):
        value = Decimal(str(coupon.discount_value))
        if coupon.discount_type == DiscountType.PERCENTAGE:
            discount_amount = original * value / Decimal("100")
        elif coupon.discount_type == DiscountType.FIXED_AMOUNT:
            discount_amount = value

    final_price = max(Decimal("0"), original - discount_amount)
    return DiscountedPrice(discount_amount=discount_amount, final_price=final_price)


def calculate_redemption_price(package: Package, coupon: Coupon | None = None) -> RedemptionPrice:
    """Calculate the price a member pays for a package, optionally with a coupon.

    Coupons that cannot change the price (package coupons without a custom
    price, credit bonus coupons) fall back to a direct purchase.
    """
    original_price = Decimal(str(package.price))

    if coupon is not None:
        if coupon.coupon_type == CouponType.DISCOUNT:
            discounted = calculate_discounted_price(original_price, coupon)
            return RedemptionPrice(
                original_price=original_price,
                discount_amount=discounted.discount_amount,
                final_price=discounted.final_price,
                redemption_type=RedemptionType.COUPON_DISCOUNT,
            )

        if coupon.coupon_type == CouponType.PACKAGE and coupon.custom_price is not None:
            custom_price = Decimal(str(coupon.custom_price))
            return RedemptionPrice(
                original_price=original_price,
                discount_amount=original_price - custom_price,
                final_price=custom_price,
                redemption_type=RedemptionType.COUPON_PACKAGE,
            )

    return RedemptionPrice(
        original_price=original_price,
        discount_amount=Decimal("0"),
        final_price=original_price,
        redemption_type=RedemptionType.PACKAGE_DIRECT,
    )


def get_credits_from_package(package: Package, coupon: Coupon | None = None) -> int:
    """Number of credits a redemption grants."""
    if package.type == PackageType.ALL_ACCESS:
        return 0

    if coupon is not None and coupon.custom_credits is not None:
        return coupon.custom_credits

    return package.credits or 0
