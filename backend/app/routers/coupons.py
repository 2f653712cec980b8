"""Coupon API endpoints."""

from fastapi import APIRouter, Depends

from app.core.auth import AuthUser, get_current_user
from app.models.coupon import Coupon
from app.models.package import Package
from app.schemas.coupon import (
    CouponCreate,
    CouponUpdate,
    CouponValidationRequest,
    CouponValidationResponse,
)
from app.services.coupon_validation import can_apply_coupon_to_package
from app.services.main_backend_client import MainBackendClient, get_main_backend_client

router = APIRouter()


@router.get(
    "/",
    response_model=list[Coupon],
    summary="List coupons",
    responses={401: {"description": "Unauthorized"}},
)
async def list_coupons(
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> list[Coupon]:
    """List the tenant's coupons."""
    return [Coupon.model_validate(c) for c in client.get_coupons(user.token) or []]


@router.get(
    "/code/{code}",
    response_model=Coupon,
    summary="Get coupon by code",
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Coupon not found"},
    },
)
async def get_coupon_by_code(
    code: str,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> Coupon:
    """Get a coupon by code."""
    return Coupon.model_validate(client.get_coupon_by_code(code, user.token))


@router.post(
    "/code/{code}/validate",
    response_model=CouponValidationResponse,
    summary="Validate coupon for package",
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Coupon or package not found"},
    },
)
async def validate_coupon(
    code: str,
    data: CouponValidationRequest,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> CouponValidationResponse:
    """Check whether a coupon can currently be applied to a package."""
    coupon = Coupon.model_validate(client.get_coupon_by_code(code, user.token))
    package = Package.model_validate(client.get_package(data.package_id, user.token))
    result = can_apply_coupon_to_package(coupon, package)
    return CouponValidationResponse(valid=result.valid, reason=result.reason)


@router.post(
    "/",
    response_model=Coupon,
    status_code=201,
    summary="Create coupon",
    responses={
        401: {"description": "Unauthorized"},
        409: {"description": "Coupon with this code already exists"},
        422: {"description": "Validation error"},
    },
)
async def create_coupon(
    data: CouponCreate,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> Coupon:
    """Create a new coupon."""
    created = client.create_coupon(
        data.model_dump(mode="json", by_alias=True, exclude_none=True), user.token
    )
    return Coupon.model_validate(created)


@router.patch(
    "/{coupon_id}",
    response_model=Coupon,
    summary="Update coupon",
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Coupon not found"},
        422: {"description": "Validation error"},
    },
)
async def update_coupon(
    coupon_id: str,
    data: CouponUpdate,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> Coupon:
    """Update a coupon."""
    updated = client.update_coupon(
        coupon_id,
        data.model_dump(mode="json", by_alias=True, exclude_unset=True),
        user.token,
    )
    return Coupon.model_validate(updated)


@router.delete(
    "/{coupon_id}",
    status_code=204,
    summary="Delete coupon",
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Coupon not found"},
    },
)
async def delete_coupon(
    coupon_id: str,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> None:
    """Delete a coupon."""
    client.delete_coupon(coupon_id, user.token)
