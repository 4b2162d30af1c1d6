"""
Pytest configuration and fixtures.

The gateway is simulated with httpx.MockTransport, so no test touches the
network.
"""
import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tuition_relay import create_app
from tuition_relay.core.config import GatewayConfig
from tuition_relay.core.dependencies import get_initiator
from tuition_relay.utils.initiator import PaymentInitiator

GATEWAY_URL = "https://gateway.test/v1/merchant/initialize/payment"
PAYMENT_URL = "https://checkout.gateway.test/pay/abc123"
FIXED_NOW_MS = 1700000000000


class FakeGateway:
    """Records outbound requests and answers with `responder`"""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"paymentUrl": PAYMENT_URL})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


def make_config(**overrides: Any) -> GatewayConfig:
    values: Dict[str, Any] = {
        "secret_key": "sk_test_123",
        "zainbox_code": "box_001",
        "api_url": GATEWAY_URL,
        "callback_url": "https://school.test/payment-success",
        "logo_url": "https://school.test/logo.jpeg",
        "retry_backoff_seconds": 0,
    }
    values.update(overrides)
    return GatewayConfig(**values)


def make_initiator(
    gateway: FakeGateway,
    config: Optional[GatewayConfig] = None,
    clock: Callable[[], int] = lambda: FIXED_NOW_MS
) -> PaymentInitiator:
    return PaymentInitiator(config or make_config(), gateway.client(), clock=clock)


def use_initiator(app: FastAPI, initiator: PaymentInitiator) -> None:
    app.dependency_overrides[get_initiator] = lambda: initiator


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def payment_payload() -> Dict[str, Any]:
    return {
        "fullName": "Ada Obi",
        "email": "ada@example.com",
        "phone": "+234 803-123-4567",
        "gender": "female",
        "program": "MBA",
        "percentage": 50,
    }


@pytest.fixture
def app(gateway) -> FastAPI:
    app = create_app()
    use_initiator(app, make_initiator(gateway))
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
