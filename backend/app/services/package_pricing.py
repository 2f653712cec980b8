"""Package pricing derived from the organization credit price."""

from dataclasses import dataclass
from decimal import Decimal

from app.models.package import Package, PackageType


@dataclass
class PackagePricing:
    """Derived pricing of a credit based package."""

    base_price: Decimal
    discount_amount: Decimal
    discount_percentage: Decimal
    price_per_credit: Decimal


def calculate_package_pricing(
    package: Package,
    organization_credit_price: Decimal,
) -> PackagePricing | None:
    """Calculate base price, discount and per-credit price of a package.

    The base price is what the package's credits would cost at the
    organization's nominal credit price. The discount is not clamped, so a
    package priced above the nominal rate yields a negative discount.

    Args:
        package: The catalog package.
        organization_credit_price: Price of a single credit for the organization.

    Returns:
        PackagePricing, or None for All Access packages and packages without
        credits.
    """
    if package.type == PackageType.ALL_ACCESS or not package.credits:
        return None

    credit_price = Decimal(str(organization_credit_price))
    credits = Decimal(package.credits)
    price = Decimal(str(package.price))

    base_price = credit_price * credits
    discount_amount = base_price - price
    discount_percentage = (
        discount_amount / base_price * Decimal("100") if base_price > 0 else Decimal("0")
    )
    price_per_credit = price / credits

    return PackagePricing(
        base_price=base_price,
        discount_amount=discount_amount,
        discount_percentage=discount_percentage,
        price_per_credit=price_per_credit,
    )


def enrich_package_with_pricing(package: Package, organization_credit_price: Decimal) -> Package:
    """Return a copy of the package with its derived pricing fields filled in."""
    pricing = calculate_package_pricing(package, organization_credit_price)
    if pricing is None:
        return package

    return package.model_copy(
        update={
            "base_price": pricing.base_price,
            "discount_amount": pricing.discount_amount,
            "discount_percentage": pricing.discount_percentage,
            "price_per_credit": pricing.price_per_credit,
        }
    )


def enrich_packages_with_pricing(
    packages: list[Package],
    organization_credit_price: Decimal,
) -> list[Package]:
    return [enrich_package_with_pricing(p, organization_credit_price) for p in packages]
