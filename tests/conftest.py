from typing import Optional

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.price_store import PriceStore


@pytest.fixture
def make_client():
    """
    Factory: crea un TestClient su un'app nuova, con store opzionalmente
    precaricato. Tutti i client vengono chiusi a fine test.
    """
    clients = []

    def _make(initial: Optional[int] = None) -> TestClient:
        client = TestClient(create_app(PriceStore(initial)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
