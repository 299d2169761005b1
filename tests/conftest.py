"""Shared fixtures: explicit settings and a fake PayEvo behind MockTransport."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from pixgate.common.config import Settings
from pixgate.services.consultar_transacao.main import create_app as create_lookup_app
from pixgate.services.gerar_pix.main import create_app as create_charge_app


PAYEVO_URL = "https://payevo.test/functions/v1/transactions"


class FakePayEvo:
    """Records outbound requests and answers with a configurable reply."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = {"id": "tx_123", "status": "waiting_payment"}
        self.raw: bytes | None = None
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        service_name="pixgate",
        payevo_endpoint=PAYEVO_URL,
        payevo_auth="Basic c2stdGVzdDp4",
        allowed_origins="*",
    )


@pytest.fixture
def payevo() -> FakePayEvo:
    return FakePayEvo()


@pytest.fixture
def charge_client(settings, payevo) -> TestClient:
    return TestClient(create_charge_app(settings, payevo.transport))


@pytest.fixture
def lookup_client(settings, payevo) -> TestClient:
    return TestClient(create_lookup_app(settings, payevo.transport))


@pytest.fixture
def charge_body() -> dict:
    return {
        "items": [{"title": "Inscrição", "unitPrice": 15000, "quantity": 1}],
        "amount": 15000,
        "customer": {
            "name": "Maria Souza",
            "email": "maria@example.com",
            "phone": "(11) 98888-7777",
            "document": {"number": "123.456.789-09", "type": "CPF"},
        },
    }
