"""Display formatting for packages and redemptions in Turkish locale conventions."""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from app.core.clock import as_local, local_now
from app.models.package import Package
from app.models.redemption import PackageRedemption, RedemptionStatus

# Symbols used by the tr-TR locale; other ISO codes are printed as-is.
CURRENCY_SYMBOLS = {
    "TRY": "₺",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

TWO_PLACES = Decimal("0.01")
ONE_PLACE = Decimal("0.1")


@dataclass
class SavingsDisplay:
    amount: Decimal
    percentage: Decimal
    display: str


@dataclass
class StatusDisplay:
    text: str
    color: str


def _iso_currency(currency: str) -> str:
    return "TRY" if currency == "TL" else currency


def _group_tr(value: Decimal) -> str:
    """Format a non-negative amount as 1.234,50."""
    return f"{value:,.2f}".replace(",", "\x00").replace(".", ",").replace("\x00", ".")


def format_package_price(price: Decimal | float, currency: str = "TL") -> str:
    """Format a price the way tr-TR currency formatting does, e.g. ``₺1.234,50``."""
    code = _iso_currency(currency)
    amount = Decimal(str(price)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{_group_tr(abs(amount))}"


def format_discount_percentage(percentage: Decimal | float) -> str:
    value = Decimal(str(percentage)).quantize(ONE_PLACE, rounding=ROUND_HALF_UP)
    return f"{value}%"


def get_package_display_name(package: Package, language: str = "en") -> str:
    if language == "tr" and package.name_tr:
        return package.name_tr
    return package.name


def get_savings_display(base_price: Decimal, final_price: Decimal) -> SavingsDisplay:
    base = Decimal(str(base_price))
    amount = base - Decimal(str(final_price))
    percentage = amount / base * Decimal("100") if base > 0 else Decimal("0")
    return SavingsDisplay(
        amount=amount,
        percentage=percentage,
        display=(
            f"Save {format_package_price(amount)} "
            f"({format_discount_percentage(percentage)} off)"
        ),
    )


def get_redemption_status_display(
    redemption: PackageRedemption,
    now: datetime | None = None,
) -> StatusDisplay:
    """Label and badge color for a redemption.

    An ACTIVE All Access redemption whose access has lapsed is shown as
    expired even before the main backend flips its status.
    """
    status = redemption.status
    if status == RedemptionStatus.ACTIVE.value:
        expires_at = redemption.all_access_expires_at
        if expires_at is not None and as_local(expires_at) < local_now(now):
            return StatusDisplay(text="Expired", color="gray")
        return StatusDisplay(text="Active", color="green")
    if status == RedemptionStatus.EXPIRED.value:
        return StatusDisplay(text="Expired", color="gray")
    if status == RedemptionStatus.CANCELLED.value:
        return StatusDisplay(text="Cancelled", color="red")
    if status == RedemptionStatus.USED.value:
        return StatusDisplay(text="Used", color="blue")
    return StatusDisplay(text="Unknown", color="gray")
