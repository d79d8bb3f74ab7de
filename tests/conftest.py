from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from contactbook.config import Settings, get_settings
from contactbook.main import create_app
from contactbook.observability.metrics import reset_metrics
from contactbook.store.memory import MemoryContactStore, seed_contacts


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CONTACTBOOK_HOST", "CONTACTBOOK_PORT", "CONTACTBOOK_SEED", "CONTACTBOOK_ENABLE_METRICS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_metrics()

    yield

    get_settings.cache_clear()


@pytest.fixture
def store() -> MemoryContactStore:
    store = MemoryContactStore()
    seed_contacts(store)
    return store


@pytest.fixture
def app(store: MemoryContactStore) -> FastAPI:
    return create_app(store=store, settings=Settings(seed=False))


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
