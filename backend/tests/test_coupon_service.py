"""Tests for coupon price resolution and credit grants."""

from decimal import Decimal

from app.models.redemption import RedemptionType
from app.services.coupon_service import (
    DiscountedPrice,
    calculate_discounted_price,
    calculate_redemption_price,
    get_credits_from_package,
)
from tests.conftest import make_coupon, make_package


class TestCalculateDiscountedPrice:
    def test_percentage(self):
        coupon = make_coupon(discountType="PERCENTAGE", discountValue=10)
        result = calculate_discounted_price(Decimal("1000"), coupon)
        assert result == DiscountedPrice(discount_amount=Decimal("100"), final_price=Decimal("900"))

    def test_fixed_amount(self):
        coupon = make_coupon(discountType="FIXED_AMOUNT", discountValue=250)
        result = calculate_discounted_price(Decimal("1000"), coupon)
        assert result.discount_amount == Decimal("250")
        assert result.final_price == Decimal("750")

    def test_fixed_amount_above_price_clamps_final_price_only(self):
        coupon = make_coupon(discountType="FIXED_AMOUNT", discountValue=1500)
        result = calculate_discounted_price(Decimal("1000"), coupon)

        assert result.discount_amount == Decimal("1500")
        assert result.final_price == Decimal("0")

    def test_hundred_percent(self):
        coupon = make_coupon(discountType="PERCENTAGE", discountValue=100)
        result = calculate_discounted_price(Decimal("1000"), coupon)
        assert result.final_price == 0

    def test_missing_discount_type(self):
        coupon = make_coupon(discountType=None, discountValue=10)
        result = calculate_discounted_price(Decimal("1000"), coupon)
        assert result.discount_amount == 0
        assert result.final_price == Decimal("1000")

    def test_missing_discount_value(self):
        coupon = make_coupon(discountType="PERCENTAGE", discountValue=None)
        result = calculate_discounted_price(Decimal("1000"), coupon)
        assert result.discount_amount == 0

    def test_non_discount_coupon_gives_no_discount(self):
        coupon = make_coupon(couponType="PACKAGE", discountType="PERCENTAGE", discountValue=50)
        result = calculate_discounted_price(Decimal("1000"), coupon)
        assert result.discount_amount == 0
        assert result.final_price == Decimal("1000")


class TestCalculateRedemptionPrice:
    def test_without_coupon(self):
        package = make_package(price=800)
        result = calculate_redemption_price(package)

        assert result.original_price == Decimal("800")
        assert result.discount_amount == 0
        assert result.final_price == Decimal("800")
        assert result.redemption_type == RedemptionType.PACKAGE_DIRECT

    def test_discount_coupon(self):
        package = make_package(price=1000)
        coupon = make_coupon(discountType="PERCENTAGE", discountValue=10)
        result = calculate_redemption_price(package, coupon)

        assert result.discount_amount == Decimal("100")
        assert result.final_price == Decimal("900")
        assert result.redemption_type == RedemptionType.COUPON_DISCOUNT

    def test_discount_coupon_without_discount_type_is_still_coupon_discount(self):
        package = make_package(price=1000)
        coupon = make_coupon(discountType=None, discountValue=None)
        result = calculate_redemption_price(package, coupon)

        assert result.final_price == Decimal("1000")
        assert result.redemption_type == RedemptionType.COUPON_DISCOUNT

    def test_fixed_discount_larger_than_price(self):
        package = make_package(price=1000)
        coupon = make_coupon(discountType="FIXED_AMOUNT", discountValue=1500)
        result = calculate_redemption_price(package, coupon)

        assert result.discount_amount == Decimal("1500")
        assert result.final_price == 0
        assert result.original_price - result.discount_amount != result.final_price

    def test_package_coupon_with_custom_price(self):
        package = make_package(price=800)
        coupon = make_coupon(couponType="PACKAGE", packageId=package.id, customPrice=500)
        result = calculate_redemption_price(package, coupon)

        assert result.original_price == Decimal("800")
        assert result.discount_amount == Decimal("300")
        assert result.final_price == Decimal("500")
        assert result.redemption_type == RedemptionType.COUPON_PACKAGE

    def test_package_coupon_custom_price_above_package_price(self):
        package = make_package(price=800)
        coupon = make_coupon(couponType="PACKAGE", customPrice=1000)
        result = calculate_redemption_price(package, coupon)

        assert result.discount_amount == Decimal("-200")
        assert result.final_price == Decimal("1000")

    def test_package_coupon_with_zero_custom_price(self):
        package = make_package(price=800)
        coupon = make_coupon(couponType="PACKAGE", customPrice=0)
        result = calculate_redemption_price(package, coupon)

        assert result.final_price == 0
        assert result.discount_amount == Decimal("800")
        assert result.redemption_type == RedemptionType.COUPON_PACKAGE

    def test_package_coupon_without_custom_price_falls_back(self):
        package = make_package(price=800)
        coupon = make_coupon(couponType="PACKAGE", customPrice=None, customCredits=12)
        result = calculate_redemption_price(package, coupon)

        assert result.discount_amount == 0
        assert result.final_price == Decimal("800")
        assert result.redemption_type == RedemptionType.PACKAGE_DIRECT

    def test_credit_bonus_coupon_falls_back(self):
        package = make_package(price=800)
        coupon = make_coupon(couponType="CREDIT_BONUS", bonusCredits=2)
        result = calculate_redemption_price(package, coupon)

        assert result.final_price == Decimal("800")
        assert result.redemption_type == RedemptionType.PACKAGE_DIRECT


class TestGetCreditsFromPackage:
    def test_package_credits(self):
        assert get_credits_from_package(make_package(credits=10)) == 10

    def test_all_access_grants_no_credits(self):
        package = make_package(type="ALL_ACCESS", credits=None)
        coupon = make_coupon(couponType="PACKAGE", customCredits=5)
        assert get_credits_from_package(package, coupon) == 0

    def test_coupon_custom_credits_override(self):
        coupon = make_coupon(couponType="PACKAGE", customCredits=12)
        assert get_credits_from_package(make_package(credits=10), coupon) == 12

    def test_coupon_without_custom_credits(self):
        coupon = make_coupon()
        assert get_credits_from_package(make_package(credits=10), coupon) == 10

    def test_missing_credits(self):
        assert get_credits_from_package(make_package(credits=None)) == 0
