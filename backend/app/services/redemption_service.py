"""Package redemption quoting and submission."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.core.clock import local_now
from app.core.config import settings
from app.models.coupon import Coupon, CouponType
from app.models.organization import Organization
from app.models.package import Package
from app.services.coupon_service import (
    RedemptionPrice,
    calculate_redemption_price,
    get_credits_from_package,
)
from app.services.coupon_validation import CouponValidation, can_apply_coupon_to_package
from app.services.email_service import EmailService
from app.services.main_backend_client import MainBackendClient, MainBackendError
from app.services.package_benefits import (
    calculate_all_access_expiration,
    calculate_friend_pass_expiration,
    has_friend_pass_benefit,
    is_all_access_package,
)

logger = logging.getLogger(__name__)


class CouponNotApplicableError(ValueError):
    """Raised when a coupon fails its eligibility checks for a package."""


@dataclass
class RedemptionQuote:
    """Everything a redemption of a package would record."""

    package: Package
    coupon: Coupon | None
    validation: CouponValidation | None
    pricing: RedemptionPrice
    credits_to_add: int
    bonus_credits: int
    all_access_expires_at: datetime | None
    all_access_days: int | None
    friend_pass_available: bool
    friend_pass_expires_at: datetime | None


class RedemptionService:
    """Service for pricing and submitting package redemptions."""

    def __init__(self, client: MainBackendClient, email_service: EmailService | None = None):
        self.client = client
        self.email_service = email_service or EmailService()

    def quote(
        self,
        package_id: str,
        coupon_code: str | None = None,
        auth_token: str | None = None,
        now: datetime | None = None,
    ) -> RedemptionQuote:
        """Price a package redemption, optionally with a coupon code.

        Args:
            package_id: The package being redeemed.
            coupon_code: Optional coupon code.
            auth_token: Caller's bearer token, forwarded to the main backend.
            now: Redemption instant; the clock is read once when omitted.

        Returns:
            The RedemptionQuote.

        Raises:
            CouponNotApplicableError: If the coupon cannot be used on the package.
            MainBackendError: If the package or coupon cannot be loaded.
        """
        now = local_now(now)
        package = Package.model_validate(self.client.get_package(package_id, auth_token))

        coupon: Coupon | None = None
        validation: CouponValidation | None = None
        if coupon_code:
            coupon = Coupon.model_validate(self.client.get_coupon_by_code(coupon_code, auth_token))
            validation = can_apply_coupon_to_package(coupon, package, now)
            if not validation.valid:
                raise CouponNotApplicableError(validation.reason)

        bonus_credits = 0
        if coupon is not None and coupon.coupon_type == CouponType.CREDIT_BONUS:
            bonus_credits = coupon.bonus_credits or 0

        all_access_expires_at = None
        all_access_days = None
        if is_all_access_package(package):
            all_access_days = settings.ALL_ACCESS_DAYS
            all_access_expires_at = calculate_all_access_expiration(now, all_access_days)

        friend_pass_available = has_friend_pass_benefit(package)
        friend_pass_expires_at = None
        if friend_pass_available:
            friend_pass_expires_at = calculate_friend_pass_expiration(now, settings.FRIEND_PASS_DAYS)

        return RedemptionQuote(
            package=package,
            coupon=coupon,
            validation=validation,
            pricing=calculate_redemption_price(package, coupon),
            credits_to_add=get_credits_from_package(package, coupon),
            bonus_credits=bonus_credits,
            all_access_expires_at=all_access_expires_at,
            all_access_days=all_access_days,
            friend_pass_available=friend_pass_available,
            friend_pass_expires_at=friend_pass_expires_at,
        )

    async def redeem(
        self,
        member_id: str,
        package_id: str,
        redeemed_by: str,
        coupon_code: str | None = None,
        notes: str | None = None,
        auth_token: str | None = None,
    ) -> Any:
        """Quote the redemption, submit it to the main backend and email a receipt."""
        quote = self.quote(package_id, coupon_code, auth_token)

        payload: dict[str, Any] = {
            "memberId": member_id,
            "packageId": quote.package.id,
            "couponId": quote.coupon.id if quote.coupon else None,
            "couponCode": quote.coupon.code if quote.coupon else None,
            "redemptionType": quote.pricing.redemption_type.value,
            "redeemedBy": redeemed_by,
            "originalPrice": float(quote.pricing.original_price),
            "discountAmount": float(quote.pricing.discount_amount),
            "finalPrice": float(quote.pricing.final_price),
            "creditsAdded": quote.credits_to_add + quote.bonus_credits,
            "allAccessExpiresAt": _isoformat(quote.all_access_expires_at),
            "allAccessDays": quote.all_access_days,
            "friendPassAvailable": quote.friend_pass_available,
            "friendPassExpiresAt": _isoformat(quote.friend_pass_expires_at),
            "notes": notes,
        }
        redemption = self.client.redeem_package(
            {k: v for k, v in payload.items() if v is not None},
            auth_token,
        )
        logger.info(
            "Redeemed package %s for member %s (%s, final price %s)",
            quote.package.id,
            member_id,
            quote.pricing.redemption_type.value,
            quote.pricing.final_price,
        )

        await self._send_receipt(member_id, quote, auth_token)
        return redemption

    async def _send_receipt(
        self,
        member_id: str,
        quote: RedemptionQuote,
        auth_token: str | None,
    ) -> None:
        try:
            member = self.client.get_member(member_id, auth_token) or {}
        except MainBackendError as exc:
            logger.warning("Could not load member %s for receipt: %s", member_id, exc)
            return

        user = member.get("user") or {}
        email = member.get("email") or user.get("email")
        if not email:
            logger.warning("Member %s has no email, skipping receipt", member_id)
            return

        organization = self._load_organization(auth_token)
        try:
            await self.email_service.send_redemption_receipt_email(
                to=email,
                member_name=member.get("name") or user.get("name"),
                package=quote.package,
                pricing=quote.pricing,
                coupon=quote.coupon,
                language=organization.language if organization else "en",
                currency=organization.currency if organization else settings.DEFAULT_CURRENCY,
            )
        except Exception:
            logger.exception("Failed to send redemption receipt to %s", email)

    def _load_organization(self, auth_token: str | None) -> Organization | None:
        try:
            return Organization.model_validate(self.client.get_organization(auth_token))
        except MainBackendError as exc:
            logger.warning("Could not load organization for receipt: %s", exc)
            return None


def _isoformat(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None
