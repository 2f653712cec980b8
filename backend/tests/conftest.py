"""Shared test fixtures for all test modules."""

from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import jwt
import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import app
from app.models.coupon import Coupon
from app.models.package import Package
from app.models.redemption import PackageRedemption
from app.services.main_backend_client import MainBackendClient, get_main_backend_client

DEFAULT_ORG_ID = settings.TENANT_ORGANIZATION_ID
BACKEND_URL = "http://backend.test"


def make_token(**overrides: Any) -> str:
    """Sign an identity provider access token for tests."""
    payload: dict[str, Any] = {
        "sub": "supabase-user-1",
        "email": "staff@spin8.studio",
        "aud": settings.SUPABASE_JWT_AUDIENCE,
        "exp": datetime.now(UTC) + timedelta(hours=1),
    }
    payload.update(overrides)
    return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm="HS256")


def package_data(**overrides: Any) -> dict[str, Any]:
    """Package JSON as served by the main backend."""
    data: dict[str, Any] = {
        "id": "pkg-10",
        "organizationId": DEFAULT_ORG_ID,
        "code": "CREDIT-10",
        "name": "10 Ride Pack",
        "nameTr": "10 Sürüş Paketi",
        "type": "CREDIT_PACK",
        "price": 4500,
        "credits": 10,
        "benefits": [],
        "isActive": True,
        "displayOrder": 2,
    }
    data.update(overrides)
    return data


def coupon_data(**overrides: Any) -> dict[str, Any]:
    """Coupon JSON as served by the main backend."""
    data: dict[str, Any] = {
        "id": "cpn-1",
        "organizationId": DEFAULT_ORG_ID,
        "code": "SUMMER10",
        "name": "Summer 10%",
        "couponType": "DISCOUNT",
        "discountType": "PERCENTAGE",
        "discountValue": 10,
        "maxRedemptionsPerMember": 1,
        "isActive": True,
    }
    data.update(overrides)
    return data


def redemption_data(**overrides: Any) -> dict[str, Any]:
    """Redemption JSON as served by the main backend."""
    data: dict[str, Any] = {
        "id": "red-1",
        "memberId": "mem-1",
        "organizationId": DEFAULT_ORG_ID,
        "packageId": "pkg-10",
        "redemptionType": "PACKAGE_DIRECT",
        "redeemedAt": "2025-03-01T10:00:00Z",
        "originalPrice": 4500,
        "discountAmount": 0,
        "finalPrice": 4500,
        "creditsAdded": 10,
        "friendPassAvailable": False,
        "friendPassUsed": False,
        "status": "ACTIVE",
    }
    data.update(overrides)
    return data


def make_package(**overrides: Any) -> Package:
    return Package.model_validate(package_data(**overrides))


def make_coupon(**overrides: Any) -> Coupon:
    return Coupon.model_validate(coupon_data(**overrides))


def make_redemption(**overrides: Any) -> PackageRedemption:
    return PackageRedemption.model_validate(redemption_data(**overrides))


class FakeMainBackend:
    """In-memory stand-in for the main backend, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.set(
            "GET",
            "/api/organizations",
            {"id": DEFAULT_ORG_ID, "name": "Spin8 Studio", "creditPrice": 500, "currency": "TL"},
        )
        self.set("GET", "/api/users/me", {"id": "backend-user-1", "role": "ADMIN"})

    def set(self, method: str, path: str, body: Any = None, status_code: int = 200) -> None:
        self.routes[(method, path)] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"error": "Not found"})
        status_code, body = self.routes[key]
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    def last_request(self, method: str, path: str) -> httpx.Request:
        for request in reversed(self.requests):
            if request.method == method and request.url.path == path:
                return request
        raise AssertionError(f"No {method} {path} request was made")

    def client(self) -> MainBackendClient:
        return MainBackendClient(
            base_url=BACKEND_URL,
            organization_id=DEFAULT_ORG_ID,
            api_key="test-api-key",
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def backend():
    return FakeMainBackend()


@pytest.fixture
def client(backend):
    """Test client whose main backend calls go to the fake backend."""
    app.dependency_overrides[get_main_backend_client] = backend.client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}
