"""Package redemption API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from app.core.auth import AuthUser, get_current_user
from app.core.clock import local_now
from app.models.redemption import AllAccessDailyUsage, PackageRedemption
from app.schemas.redemption import (
    AllAccessUsageResponse,
    FriendPassResponse,
    RedemptionDetailResponse,
    StatusDisplayResponse,
)
from app.services.main_backend_client import MainBackendClient, get_main_backend_client
from app.services.package_benefits import can_use_all_access_today, is_friend_pass_valid
from app.services.package_display import get_redemption_status_display

router = APIRouter()


def _usage_items(data: Any) -> list[Any]:
    # The usage endpoint answers either a bare list or {"usages": [...]}.
    if isinstance(data, dict):
        return list(data.get("usages") or [])
    return list(data or [])


@router.get(
    "/",
    response_model=list[PackageRedemption],
    summary="List redemptions",
    responses={401: {"description": "Unauthorized"}},
)
async def list_redemptions(
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> list[PackageRedemption]:
    return [PackageRedemption.model_validate(r) for r in client.get_redemptions(user.token) or []]


@router.get(
    "/{redemption_id}",
    response_model=RedemptionDetailResponse,
    summary="Get redemption",
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Redemption not found"},
    },
)
async def get_redemption(
    redemption_id: str,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> RedemptionDetailResponse:
    """Get a redemption with its display status."""
    redemption = PackageRedemption.model_validate(client.get_redemption(redemption_id, user.token))
    display = get_redemption_status_display(redemption)
    return RedemptionDetailResponse(
        **redemption.model_dump(),
        status_display=StatusDisplayResponse(text=display.text, color=display.color),
    )


@router.get(
    "/{redemption_id}/all-access-usage",
    response_model=AllAccessUsageResponse,
    summary="Get All Access daily usage",
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Redemption not found"},
    },
)
async def get_all_access_usage(
    redemption_id: str,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> AllAccessUsageResponse:
    """Daily usage of an All Access redemption and whether it can be used today."""
    redemption = PackageRedemption.model_validate(client.get_redemption(redemption_id, user.token))
    usages = [
        AllAccessDailyUsage.model_validate(u)
        for u in _usage_items(client.get_all_access_daily_usage(redemption_id, user.token))
    ]
    return AllAccessUsageResponse(
        redemption_id=redemption.id,
        usages=usages,
        can_use_today=can_use_all_access_today(redemption, usages, local_now()),
        all_access_expires_at=redemption.all_access_expires_at,
    )


@router.get(
    "/{redemption_id}/friend-pass",
    response_model=FriendPassResponse,
    summary="Get friend pass status",
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Redemption not found"},
    },
)
async def get_friend_pass(
    redemption_id: str,
    user: AuthUser = Depends(get_current_user),
    client: MainBackendClient = Depends(get_main_backend_client),
) -> FriendPassResponse:
    redemption = PackageRedemption.model_validate(client.get_redemption(redemption_id, user.token))
    return FriendPassResponse(
        redemption_id=redemption.id,
        friend_pass_available=redemption.friend_pass_available,
        friend_pass_used=redemption.friend_pass_used,
        friend_pass_expires_at=redemption.friend_pass_expires_at,
        is_valid=is_friend_pass_valid(redemption),
    )
