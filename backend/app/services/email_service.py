"""Email service for sending transactional emails via SMTP."""

from __future__ import annotations

import html
import logging
from email.message import EmailMessage
from typing import TYPE_CHECKING

from app.core.config import settings
from app.services.package_display import format_package_price, get_package_display_name

if TYPE_CHECKING:
    from app.models.coupon import Coupon
    from app.models.package import Package
    from app.services.coupon_service import RedemptionPrice

logger = logging.getLogger(__name__)

RECEIPT_TRANSLATIONS = {
    "en": {
        "subject": "Package Redemption Receipt - Spin8 Studio",
        "greeting": "Dear",
        "intro": "Thank you! Your package has been added to your account.",
        "package": "Package",
        "price": "Price",
        "discount": "Discount",
        "coupon": "Coupon",
        "total": "Total",
    },
    "tr": {
        "subject": "Paket Alım Makbuzu - Spin8 Studio",
        "greeting": "Sayın",
        "intro": "Teşekkürler! Paketiniz hesabınıza eklendi.",
        "package": "Paket",
        "price": "Fiyat",
        "discount": "İndirim",
        "coupon": "Kupon",
        "total": "Toplam",
    },
}


class EmailService:
    """Service for sending transactional emails via SMTP."""

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
    ) -> bool:
        """Send an email via SMTP.

        Args:
            to: Recipient email address.
            subject: Email subject line.
            html_body: HTML content of the email.

        Returns:
            True if sent successfully (or no-op when SMTP unconfigured).
        """
        if not settings.SMTP_HOST:
            logger.info("SMTP not configured, skipping email to %s: %s", to, subject)
            return True

        import aiosmtplib

        msg = EmailMessage()
        msg["From"] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("Please view this email in an HTML-capable client.")
        msg.add_alternative(html_body, subtype="html")

        await aiosmtplib.send(
            msg,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME or None,
            password=settings.SMTP_PASSWORD or None,
            start_tls=settings.SMTP_USE_TLS,
        )
        logger.info("Email sent to %s: %s", to, subject)
        return True

    async def send_redemption_receipt_email(
        self,
        to: str,
        member_name: str | None,
        package: Package,
        pricing: RedemptionPrice,
        coupon: Coupon | None = None,
        language: str = "en",
        currency: str = "TL",
    ) -> bool:
        """Send the member a receipt for a package redemption.

        The discount line shows the discount as calculated, which for a fixed
        discount larger than the price exceeds the difference between price
        and total.
        """
        t = RECEIPT_TRANSLATIONS["tr" if language == "tr" else "en"]
        package_name = get_package_display_name(package, language)

        rows = [
            (t["package"], f"{package_name} ({package.code})"),
            (t["price"], format_package_price(pricing.original_price, currency)),
        ]
        if pricing.discount_amount:
            rows.append((t["discount"], format_package_price(pricing.discount_amount, currency)))
        if coupon is not None:
            rows.append((t["coupon"], coupon.code))
        rows.append((t["total"], format_package_price(pricing.final_price, currency)))

        table = "".join(
            f"<tr><td><strong>{label}:</strong></td><td>{html.escape(value)}</td></tr>"
            for label, value in rows
        )
        html_body = (
            f"<h2>{t['subject']}</h2>"
            f"<p>{t['greeting']} {html.escape(member_name or '')},</p>"
            f"<p>{t['intro']}</p>"
            f"<table>{table}</table>"
        )

        return await self.send_email(to=to, subject=t["subject"], html_body=html_body)
