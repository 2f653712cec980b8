"""Tests for the coupon API endpoints."""

import json

from tests.conftest import DEFAULT_ORG_ID, coupon_data, package_data


class TestListCoupons:
    def test_list(self, client, backend, auth_headers):
        backend.set(
            "GET",
            "/api/coupons",
            [
                coupon_data(),
                coupon_data(id="cpn-2", code="VIP", couponType="PACKAGE", customPrice=500,
                            discountType=None, discountValue=None),
            ],
        )

        response = client.get("/v1/coupons/", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert [c["code"] for c in data] == ["SUMMER10", "VIP"]
        assert data[0]["discountValue"] == 10
        assert data[1]["customPrice"] == 500
        assert data[1]["maxRedemptionsPerMember"] == 1

    def test_requires_auth(self, client):
        assert client.get("/v1/coupons/").status_code == 401


class TestGetCouponByCode:
    def test_found(self, client, backend, auth_headers):
        backend.set("GET", "/api/coupons/code/SUMMER10", coupon_data())
        response = client.get("/v1/coupons/code/SUMMER10", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["couponType"] == "DISCOUNT"

    def test_not_found(self, client, backend, auth_headers):
        backend.set("GET", "/api/coupons/code/NOPE", {"error": "Coupon not found"}, status_code=404)
        response = client.get("/v1/coupons/code/NOPE", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Coupon not found"


class TestValidateCoupon:
    def test_applicable(self, client, backend, auth_headers):
        backend.set("GET", "/api/coupons/code/SUMMER10", coupon_data(applicablePackageIds=["pkg-10"]))
        backend.set("GET", "/api/packages/pkg-10", package_data())

        response = client.post(
            "/v1/coupons/code/SUMMER10/validate", json={"packageId": "pkg-10"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json() == {"valid": True, "reason": None}

    def test_not_applicable(self, client, backend, auth_headers):
        backend.set("GET", "/api/coupons/code/SUMMER10", coupon_data(applicablePackageIds=["pkg-a"]))
        backend.set("GET", "/api/packages/pkg-10", package_data())

        response = client.post(
            "/v1/coupons/code/SUMMER10/validate", json={"packageId": "pkg-10"}, headers=auth_headers
        )

        assert response.json() == {
            "valid": False,
            "reason": "Coupon does not apply to this package",
        }

    def test_expired(self, client, backend, auth_headers):
        backend.set(
            "GET", "/api/coupons/code/SUMMER10", coupon_data(validUntil="2020-01-01T00:00:00Z")
        )
        backend.set("GET", "/api/packages/pkg-10", package_data())

        response = client.post(
            "/v1/coupons/code/SUMMER10/validate", json={"packageId": "pkg-10"}, headers=auth_headers
        )

        assert response.json()["reason"] == "Coupon has expired"


class TestCouponCrud:
    def test_create(self, client, backend, auth_headers):
        backend.set("POST", "/api/coupons", coupon_data(id="cpn-new"), status_code=201)

        response = client.post(
            "/v1/coupons/",
            json={
                "code": "SUMMER10",
                "name": "Summer 10%",
                "couponType": "DISCOUNT",
                "discountType": "PERCENTAGE",
                "discountValue": 10,
                "applicablePackageIds": ["pkg-10"],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["id"] == "cpn-new"
        body = json.loads(backend.last_request("POST", "/api/coupons").content)
        assert body["discountValue"] == 10
        assert body["applicablePackageIds"] == ["pkg-10"]
        assert body["maxRedemptionsPerMember"] == 1
        assert body["organizationId"] == DEFAULT_ORG_ID
        assert "customPrice" not in body

    def test_create_rejects_unknown_type(self, client, auth_headers):
        response = client.post(
            "/v1/coupons/",
            json={"code": "X", "name": "X", "couponType": "FREEBIE"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_create_duplicate_code(self, client, backend, auth_headers):
        backend.set("POST", "/api/coupons", {"error": "Coupon code already exists"}, status_code=409)

        response = client.post(
            "/v1/coupons/",
            json={"code": "SUMMER10", "name": "Dup", "couponType": "DISCOUNT"},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Coupon code already exists"

    def test_update(self, client, backend, auth_headers):
        backend.set("PATCH", "/api/coupons/cpn-1", coupon_data(isActive=False))

        response = client.patch("/v1/coupons/cpn-1", json={"isActive": False}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["isActive"] is False
        body = json.loads(backend.last_request("PATCH", "/api/coupons/cpn-1").content)
        assert body == {"isActive": False, "organizationId": DEFAULT_ORG_ID}

    def test_delete(self, client, backend, auth_headers):
        backend.set("DELETE", "/api/coupons/cpn-1", None, status_code=204)
        assert client.delete("/v1/coupons/cpn-1", headers=auth_headers).status_code == 204
