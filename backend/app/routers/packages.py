"""Package API endpoints."""

import logging
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from app.core.auth import AuthUser, get_bearer_token, get_current_user
from app.core.config import settings
from app.models.organization import Organization
from app.models.package import Package
from app.schemas.coupon import CouponValidationResponse
from app.schemas.package import (
    PackageCreate,
    PackageUpdate,
    RedeemPackageRequest,
    RedemptionQuoteRequest,
    RedemptionQuoteResponse,
)
from app.services.main_backend_client import (
    MainBackendClient,
    MainBackendError,
    get_main_backend_client,
)
from app.services.package_display import format_package_price
from app.services.package_pricing import enrich_package_with_pricing, enrich_packages_with_pricing
from app.services.redemption_service import CouponNotApplicableError, RedemptionService

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_organization(client: MainBackendClient, auth_token: str | None) -> Organization | None:
    try:
        return Organization.model_validate(client.get_organization(auth_token))
    except MainBackendError as exc:
        logger.info("Could not load organization: %s", exc)
        return None


def _organization_credit_price(client: MainBackendClient, auth_token: str | None) -> Decimal | None:
    organization = _load_organization(client, auth_token)
    return organization.credit_price if organization else None


@router.get(
    "/",
    response_model=list[Package],
    summary="List packages",
)
async def list_packages(
    request: Request,
    client: MainBackendClient = Depends(get_main_backend_client),
) -> list[Package]:
    """List the tenant's packages with pricing derived from the credit price.

    Packages are public; a rejected token falls back to an anonymous lookup.
    """
    auth_token = get_bearer_token(request)
    try:
        data = client.get_packages(auth_token)
    except MainBackendError as exc:
        if exc.status_code != 401 or auth_token is None:
            raise
        logger.info("Token rejected, fetching packages without auth")
        auth_token = None
        data = client.get_packages(None)

    packages = [Package.model_validate(p) for p in data or []]
    credit_price = _organization_credit_price(client, auth_token)
    if credit_price is None:
        return packages
    return enrich_packages_with_pricing(packages, credit_price)


@router.post(
    "/quote",
    response_model=RedemptionQuoteResponse,
    summary="Quote package redemption",
    responses={
        400: {"description": "Coupon cannot be applied to this package"},
        401: {"description": "Unauthorized"},
        404: {"description": "Package or coupon not found"},
    },
)
async def quote_redemption(
    data: RedemptionQuoteRequest,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> RedemptionQuoteResponse:
    """Calculate what redeeming a package, optionally with a coupon, would cost."""
    service = RedemptionService(client)
    try:
        quote = service.quote(data.package_id, data.coupon_code, user.token)
    except CouponNotApplicableError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None

    organization = _load_organization(client, user.token)
    currency = organization.currency if organization else settings.DEFAULT_CURRENCY

    return RedemptionQuoteResponse(
        package_id=quote.package.id,
        coupon_id=quote.coupon.id if quote.coupon else None,
        coupon_validation=(
            CouponValidationResponse(valid=quote.validation.valid, reason=quote.validation.reason)
            if quote.validation
            else None
        ),
        original_price=quote.pricing.original_price,
        discount_amount=quote.pricing.discount_amount,
        final_price=quote.pricing.final_price,
        redemption_type=quote.pricing.redemption_type,
        credits_to_add=quote.credits_to_add,
        bonus_credits=quote.bonus_credits,
        all_access_expires_at=quote.all_access_expires_at,
        all_access_days=quote.all_access_days,
        friend_pass_available=quote.friend_pass_available,
        friend_pass_expires_at=quote.friend_pass_expires_at,
        final_price_display=format_package_price(quote.pricing.final_price, currency),
    )


@router.post(
    "/redeem",
    status_code=201,
    summary="Redeem package",
    responses={
        400: {"description": "Coupon cannot be applied to this package"},
        401: {"description": "Unauthorized"},
        404: {"description": "Package, coupon or member not found"},
    },
)
async def redeem_package(
    data: RedeemPackageRequest,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> Any:
    """Redeem a package for a member, directly or with a coupon."""
    service = RedemptionService(client)
    try:
        return await service.redeem(
            member_id=data.member_id,
            package_id=data.package_id,
            redeemed_by=user.id,
            coupon_code=data.coupon_code,
            notes=data.notes,
            auth_token=user.token,
        )
    except CouponNotApplicableError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None


@router.get(
    "/{package_id}",
    response_model=Package,
    summary="Get package",
    responses={404: {"description": "Package not found"}},
)
async def get_package(
    package_id: str,
    request: Request,
    client: MainBackendClient = Depends(get_main_backend_client),
) -> Package:
    """Get a package with its derived pricing."""
    auth_token = get_bearer_token(request)
    package = Package.model_validate(client.get_package(package_id, auth_token))
    credit_price = _organization_credit_price(client, auth_token)
    if credit_price is None:
        return package
    return enrich_package_with_pricing(package, credit_price)


@router.post(
    "/",
    status_code=201,
    response_model=Package,
    summary="Create package",
    responses={
        401: {"description": "Unauthorized"},
        422: {"description": "Validation error"},
    },
)
async def create_package(
    data: PackageCreate,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> Package:
    """Create a package for the tenant organization."""
    created = client.create_package(
        data.model_dump(mode="json", by_alias=True, exclude_none=True), user.token
    )
    return Package.model_validate(created)


@router.patch(
    "/{package_id}",
    response_model=Package,
    summary="Update package",
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Package not found"},
        422: {"description": "Validation error"},
    },
)
async def update_package(
    package_id: str,
    data: PackageUpdate,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> Package:
    """Update a package."""
    updated = client.update_package(
        package_id,
        data.model_dump(mode="json", by_alias=True, exclude_unset=True),
        user.token,
    )
    return Package.model_validate(updated)


@router.delete(
    "/{package_id}",
    status_code=204,
    summary="Delete package",
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Package not found"},
    },
)
async def delete_package(
    package_id: str,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> None:
    """Delete a package."""
    client.delete_package(package_id, user.token)
