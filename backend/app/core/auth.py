import logging
from dataclasses import dataclass
from typing import Any

import jwt
from fastapi import Depends, HTTPException, Request

from app.core.config import settings
from app.services.main_backend_client import (
    MainBackendClient,
    MainBackendError,
    get_main_backend_client,
)

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "MEMBER"


@dataclass
class AuthUser:
    id: str
    email: str
    supabase_user_id: str
    organization_id: str
    role: str
    token: str


def get_bearer_token(request: Request) -> str | None:
    """Return the bearer token from the Authorization header, if any."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:] or None


def verify_identity_token(token: str) -> dict[str, Any]:
    """Decode and validate an identity provider access token.

    Raises jwt.ExpiredSignatureError or jwt.InvalidTokenError on failure.
    """
    payload = jwt.decode(
        token,
        settings.SUPABASE_JWT_SECRET,
        algorithms=["HS256"],
        audience=settings.SUPABASE_JWT_AUDIENCE,
    )
    if not payload.get("sub"):
        raise jwt.InvalidTokenError("Token has no subject")
    return payload


def get_current_user(
    request: Request,
    client: MainBackendClient = Depends(get_main_backend_client),
) -> AuthUser:
    """Authenticate the caller and check they belong to the tenant organization.

    The organization lookup is made with the caller's token, so the main
    backend answers 401/403 for users of other organizations.
    """
    token = get_bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        claims = verify_identity_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired") from None
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token") from None

    try:
        organization = client.get_organization(token)
    except MainBackendError as exc:
        if exc.status_code in (401, 403):
            logger.info(
                "User %s is not authorized for organization %s",
                claims.get("email"),
                settings.TENANT_ORGANIZATION_ID,
            )
            raise HTTPException(status_code=401, detail="Unauthorized") from None
        raise

    organization_id = str((organization or {}).get("id", ""))
    if organization_id != settings.TENANT_ORGANIZATION_ID:
        logger.warning(
            "Organization mismatch: %s does not match tenant organization %s",
            organization_id,
            settings.TENANT_ORGANIZATION_ID,
        )
        raise HTTPException(status_code=403, detail="Forbidden")

    user_id = claims["sub"]
    role = DEFAULT_ROLE
    try:
        backend_user = client.get_current_user(token) or {}
        user_id = str(backend_user.get("id") or user_id)
        role = str(backend_user.get("role") or DEFAULT_ROLE)
    except MainBackendError as exc:
        logger.info("Could not load role for %s, defaulting to %s: %s", user_id, role, exc)

    return AuthUser(
        id=user_id,
        email=str(claims.get("email") or ""),
        supabase_user_id=claims["sub"],
        organization_id=organization_id,
        role=role,
        token=token,
    )
