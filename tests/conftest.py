import os
import pytest
from typing import Callable, Generator, List

import httpx
from fastapi.testclient import TestClient

# Pas de Redis pendant les tests: le lifespan désactive le rate limiting
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

from storefront.app_setup.factory import create_app

CREDENTIAL_VARS = ("YOOKASSA_SHOP_ID", "YOOKASSA_SECRET_KEY", "TG_BOT_TOKEN", "TG_CHAT_ID")

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)


class UpstreamStub:
    """
    Faux service HTTP amont (YooKassa, Telegram) basé sur httpx.MockTransport.
    - requests: requêtes reçues (pour vérifier l'absence d'appel réseau)
    - responder: fonction request -> httpx.Response, modifiable par test
    """

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self.responder = responder

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self._handle))


@pytest.fixture(autouse=True)
def _clean_credentials(monkeypatch):
    # Chaque test part sans identifiants; les fixtures *_env les posent explicitement
    for name in CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)

@pytest.fixture
def gateway_env(monkeypatch):
    monkeypatch.setenv("YOOKASSA_SHOP_ID", "123456")
    monkeypatch.setenv("YOOKASSA_SECRET_KEY", "test_secret")

@pytest.fixture
def telegram_env(monkeypatch):
    monkeypatch.setenv("TG_BOT_TOKEN", "bot-token")
    monkeypatch.setenv("TG_CHAT_ID", "-100200300")

@pytest.fixture
def yookassa(monkeypatch) -> UpstreamStub:
    stub = UpstreamStub(lambda request: httpx.Response(
        200,
        json={
            "id": "2d1f5d6e-000f-5000-9000-1b2c3d4e5f60",
            "status": "pending",
            "confirmation": {"type": "redirect", "confirmation_url": "https://yoomoney.test/checkout?orderId=abc"},
        },
    ))
    monkeypatch.setattr("storefront.payments.yookassa_client._http_client", stub.client)
    return stub

@pytest.fixture
def telegram(monkeypatch) -> UpstreamStub:
    stub = UpstreamStub(lambda request: httpx.Response(200, json={"ok": True, "result": {"message_id": 1}}))
    monkeypatch.setattr("storefront.notifications.telegram_client._http_client", stub.client)
    return stub

@pytest.fixture()
def app():
    return create_app()

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
