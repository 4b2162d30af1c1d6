"""Integration tests for the HTTP surface via TestClient."""

import httpx
import pytest
from fastapi.testclient import TestClient

from tuition_relay import create_app
from tuition_relay.core import globals as app_globals
from tuition_relay.utils.pricing import FEE_SCHEDULE

from conftest import PAYMENT_URL, make_config, make_initiator, use_initiator


class TestFeesAPI:
    def test_returns_fee_structure(self, client):
        response = client.get("/api/fees")
        assert response.status_code == 200
        assert response.json() == {"feeStructure": dict(FEE_SCHEDULE)}


class TestCalculatePaymentAPI:
    def test_breakdown(self, client):
        response = client.post("/api/calculate-payment", json={"program": "MBA", "percentage": 50})
        assert response.status_code == 200
        assert response.json() == {
            "totalFee": 816450,
            "schoolFees": 408225,
            "bankCharges": 8164.5,
            "totalAmount": 416389.5,
        }

    def test_numeric_string_percentage(self, client):
        response = client.post("/api/calculate-payment", json={"program": "PGD_ACC", "percentage": "100"})
        assert response.status_code == 200
        assert response.json()["totalAmount"] == 280500

    def test_unknown_programme(self, client):
        response = client.post("/api/calculate-payment", json={"program": "NOPE", "percentage": 50})
        assert response.status_code == 200
        assert response.json()["totalAmount"] == 0

    def test_out_of_range_percentage_is_not_rejected(self, client):
        response = client.post("/api/calculate-payment", json={"program": "PGD_ACC", "percentage": 200})
        assert response.status_code == 200
        assert response.json()["schoolFees"] == 550000

    @pytest.mark.parametrize("body", [
        {"percentage": 50},
        {"program": "", "percentage": 50},
        {"program": "MBA"},
        {"program": "MBA", "percentage": "fifty"},
        {"program": "MBA", "percentage": None},
        {"program": "MBA", "percentage": 1e308},
    ])
    def test_missing_or_invalid_input(self, client, body):
        response = client.post("/api/calculate-payment", json=body)
        assert response.status_code == 400
        assert response.json() == {"message": "Program and percentage are required for calculation."}


class TestInitiatePaymentAPI:
    def test_returns_payment_url(self, client, gateway, payment_payload):
        response = client.post("/api/initiate-payment", json=payment_payload)
        assert response.status_code == 200
        assert response.json() == {"payment_url": PAYMENT_URL}
        assert len(gateway.requests) == 1

    def test_client_amount_is_ignored(self, client, gateway, payment_payload):
        payment_payload["amount"] = 1
        payment_payload["totalAmount"] = 1
        client.post("/api/initiate-payment", json=payment_payload)
        assert gateway.payloads()[0]["amount"] == 416390

    def test_missing_email(self, client, gateway, payment_payload):
        del payment_payload["email"]
        response = client.post("/api/initiate-payment", json=payment_payload)
        assert response.status_code == 400
        assert response.json() == {"message": "Missing required payment details."}
        assert gateway.requests == []

    def test_invalid_percentage(self, client, gateway, payment_payload):
        payment_payload["percentage"] = "abc"
        response = client.post("/api/initiate-payment", json=payment_payload)
        assert response.status_code == 400
        assert gateway.requests == []

    def test_percentage_overflowing_amount(self, client, gateway, payment_payload):
        payment_payload["percentage"] = 1e308
        response = client.post("/api/initiate-payment", json=payment_payload)
        assert response.status_code == 400
        assert response.json() == {"message": "Payment amount is out of range."}
        assert gateway.requests == []

    def test_missing_gateway_credentials(self, app, gateway, payment_payload):
        use_initiator(app, make_initiator(gateway, make_config(secret_key=None, zainbox_code=None)))
        response = TestClient(app).post("/api/initiate-payment", json=payment_payload)
        assert response.status_code == 500
        assert response.json() == {"message": "Server is not configured with payment keys."}
        assert gateway.requests == []

    def test_gateway_rejection_is_passed_through(self, client, gateway, payment_payload):
        body = {"code": "04", "message": "Unauthorized"}
        gateway.responder = lambda request: httpx.Response(401, json=body)

        response = client.post("/api/initiate-payment", json=payment_payload)

        assert response.status_code == 401
        assert response.json() == {
            "message": "ZainPay API Error: Unauthorized",
            "details": body,
        }

    def test_gateway_timeout(self, client, gateway, payment_payload):
        def timeout(request):
            raise httpx.ReadTimeout("The read operation timed out", request=request)
        gateway.responder = timeout

        response = client.post("/api/initiate-payment", json=payment_payload)

        assert response.status_code == 504
        assert response.json() == {"message": "Payment gateway did not respond. Please try again."}

    def test_gateway_without_payment_url(self, client, gateway, payment_payload):
        gateway.responder = lambda request: httpx.Response(200, json={"status": "ok"})

        response = client.post("/api/initiate-payment", json=payment_payload)

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to obtain payment URL from ZainPay. Invalid response."}

    @pytest.mark.parametrize("raw_body", [b"not json", b"[1, 2, 3]"])
    def test_malformed_body(self, client, gateway, raw_body):
        response = client.post(
            "/api/initiate-payment",
            content=raw_body,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request body."
        assert gateway.requests == []

    def test_wrong_field_type(self, client, gateway, payment_payload):
        payment_payload["phone"] = {"number": "0803"}
        response = client.post("/api/initiate-payment", json=payment_payload)
        assert response.status_code == 400
        assert gateway.requests == []


class TestApplicationWiring:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert "timestamp" in body

    def test_unknown_route_uses_message_body(self, client):
        response = client.get("/api/nowhere")
        assert response.status_code == 404
        assert "message" in response.json()

    def test_gateway_client_unavailable(self, payment_payload):
        app = create_app()
        app_globals.http_client = None
        response = TestClient(app).post("/api/initiate-payment", json=payment_payload)
        assert response.status_code == 503
        assert "unavailable" in response.json()["message"]

    def test_lifespan_opens_and_closes_gateway_client(self):
        with TestClient(create_app()) as client:
            assert isinstance(app_globals.http_client, httpx.AsyncClient)
            assert app_globals.gateway_config is not None
            assert client.get("/health").status_code == 200
        assert app_globals.http_client is None

    def test_cors_allows_configured_origin_only(self, client):
        allowed = client.get("/api/fees", headers={"Origin": "https://abs.ananuniversity.edu.ng"})
        assert allowed.headers["access-control-allow-origin"] == "https://abs.ananuniversity.edu.ng"

        other = client.get("/api/fees", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in other.headers
