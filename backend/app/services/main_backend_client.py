"""HTTP client for the main backend REST API.

Every call is scoped to the tenant organization: GET requests carry
``organizationId`` in the query string and write requests carry it in the
JSON body.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class MainBackendError(Exception):
    """Raised when the main backend rejects a request or cannot be reached."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class MainBackendClient:
    """Thin wrapper over httpx for the main backend endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        organization_id: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.MAIN_BACKEND_URL).rstrip("/")
        self.organization_id = organization_id or settings.TENANT_ORGANIZATION_ID
        self.api_key = settings.MAIN_BACKEND_API_KEY if api_key is None else api_key
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout or settings.MAIN_BACKEND_TIMEOUT,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def _headers(self, auth_token: str | None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        body: dict[str, Any] | None = None,
        auth_token: str | None = None,
    ) -> Any:
        """Send a request to the main backend and return the decoded JSON.

        Raises:
            MainBackendError: On a non-2xx response or a transport failure.
        """
        params: dict[str, str] | None = None
        if method == "GET":
            params = {"organizationId": self.organization_id}
        elif body is not None:
            body = {**body, "organizationId": self.organization_id}

        try:
            resp = self._http.request(
                method,
                endpoint,
                params=params,
                json=body if method != "GET" else None,
                headers=self._headers(auth_token),
            )
        except httpx.HTTPError as exc:
            logger.warning("Error calling main backend %s %s: %s", method, endpoint, exc)
            raise MainBackendError(status_code=502, message=str(exc)) from exc

        if not resp.is_success:
            message = _error_message(resp)
            logger.warning(
                "Main backend %s %s returned %d: %s",
                method,
                endpoint,
                resp.status_code,
                message,
            )
            raise MainBackendError(status_code=resp.status_code, message=message)

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # Organization and users

    def get_organization(self, auth_token: str | None = None) -> Any:
        return self.request("GET", "/api/organizations", auth_token=auth_token)

    def get_current_user(self, auth_token: str | None = None) -> Any:
        return self.request("GET", "/api/users/me", auth_token=auth_token)

    def get_member(self, member_id: str, auth_token: str | None = None) -> Any:
        return self.request("GET", f"/api/members/{member_id}", auth_token=auth_token)

    # Packages

    def get_packages(self, auth_token: str | None = None) -> Any:
        return self.request("GET", "/api/packages", auth_token=auth_token)

    def get_package(self, package_id: str, auth_token: str | None = None) -> Any:
        return self.request("GET", f"/api/packages/{package_id}", auth_token=auth_token)

    def create_package(self, data: dict[str, Any], auth_token: str | None = None) -> Any:
        return self.request("POST", "/api/packages", body=data, auth_token=auth_token)

    def update_package(
        self, package_id: str, data: dict[str, Any], auth_token: str | None = None
    ) -> Any:
        return self.request(
            "PATCH", f"/api/packages/{package_id}", body=data, auth_token=auth_token
        )

    def delete_package(self, package_id: str, auth_token: str | None = None) -> Any:
        return self.request("DELETE", f"/api/packages/{package_id}", auth_token=auth_token)

    def redeem_package(self, data: dict[str, Any], auth_token: str | None = None) -> Any:
        return self.request("POST", "/api/packages/redeem", body=data, auth_token=auth_token)

    # Coupons

    def get_coupons(self, auth_token: str | None = None) -> Any:
        return self.request("GET", "/api/coupons", auth_token=auth_token)

    def get_coupon(self, coupon_id: str, auth_token: str | None = None) -> Any:
        return self.request("GET", f"/api/coupons/{coupon_id}", auth_token=auth_token)

    def get_coupon_by_code(self, code: str, auth_token: str | None = None) -> Any:
        return self.request("GET", f"/api/coupons/code/{code}", auth_token=auth_token)

    def create_coupon(self, data: dict[str, Any], auth_token: str | None = None) -> Any:
        return self.request("POST", "/api/coupons", body=data, auth_token=auth_token)

    def update_coupon(
        self, coupon_id: str, data: dict[str, Any], auth_token: str | None = None
    ) -> Any:
        return self.request("PATCH", f"/api/coupons/{coupon_id}", body=data, auth_token=auth_token)

    def delete_coupon(self, coupon_id: str, auth_token: str | None = None) -> Any:
        return self.request("DELETE", f"/api/coupons/{coupon_id}", auth_token=auth_token)

    # Redemptions

    def get_redemptions(self, auth_token: str | None = None) -> Any:
        return self.request("GET", "/api/redemptions", auth_token=auth_token)

    def get_redemption(self, redemption_id: str, auth_token: str | None = None) -> Any:
        return self.request("GET", f"/api/redemptions/{redemption_id}", auth_token=auth_token)

    def get_all_access_daily_usage(
        self, redemption_id: str, auth_token: str | None = None
    ) -> Any:
        return self.request(
            "GET", f"/api/redemptions/{redemption_id}/all-access-usage", auth_token=auth_token
        )


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"HTTP {resp.status_code}: {resp.reason_phrase}"


def get_main_backend_client() -> Iterator[MainBackendClient]:
    """FastAPI dependency yielding a client closed after the request."""
    client = MainBackendClient()
    try:
        yield client
    finally:
        client.close()
