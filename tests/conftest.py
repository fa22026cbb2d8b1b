"""Pytest configuration and shared fixtures."""

import httpx
import pytest
from fastapi.testclient import TestClient

from app_console.dependencies import obter_gateway
from app_console.gateway import RestGateway
from app_console.main import app

BACKEND_URL = "http://backend.test"


class FakeBackend:
    """Backend falso: uma resposta fixa por (método, caminho), registra as requisições."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, status_code=200, json=None, text=None):
        self.routes[(method, path)] = (status_code, json, text)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body, text = self.routes.get(
            (request.method, request.url.path), (404, None, None)
        )
        if body is not None:
            return httpx.Response(status_code, json=body)
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code)

    def last(self, method=None) -> httpx.Request:
        candidates = [r for r in self.requests if method is None or r.method == method]
        return candidates[-1]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def gateway(backend) -> RestGateway:
    return RestGateway(BACKEND_URL, transport=httpx.MockTransport(backend))


@pytest.fixture
def client(gateway):
    app.dependency_overrides[obter_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def evento_payload() -> dict:
    return {
        "id": "e1",
        "description": "Show da Banda XYZ",
        "type": 1,
        "date": [2025, 3, 10, 20, 0],
        "startSales": "2025-01-01T12:00:00",
        "endSales": [2025, 3, 10, 18, 30],
        "price": 150.0,
        "createdAt": "2024-12-01T09:15:00",
        "updatedAt": [2024, 12, 2, 10, 0],
    }


@pytest.fixture
def consumidor_payload() -> dict:
    return {"id": "c1", "name": "Maria Silva", "cpf": "12345678901", "gender": "F"}


@pytest.fixture
def venda_payload(evento_payload, consumidor_payload) -> dict:
    return {
        "id": "s1",
        "consumer": consumidor_payload,
        "event": evento_payload,
        "saleDate": [2025, 2, 14, 15, 45],
        "saleStatus": 1,
        "createdAt": "2025-02-14T15:45:00",
        "updatedAt": "2025-02-14T15:45:00",
    }
