from fastapi import FastAPI, Request
from structlog.testing import capture_logs

from contactbook.models.errors import ContactStoreError
from contactbook.observability.middleware import get_request_id


async def test_responses_include_x_request_id(api_client) -> None:
    resp = await api_client.get("/health")
    assert resp.status_code == 200
    assert resp.headers.get("x-request-id")


async def test_request_ids_are_unique(api_client) -> None:
    first = await api_client.get("/health")
    second = await api_client.get("/health")
    assert first.headers["x-request-id"] != second.headers["x-request-id"]


async def test_request_id_header_matches_handler_view(app: FastAPI, api_client) -> None:
    @app.get("/whoami")
    async def whoami(request: Request) -> dict[str, str]:
        return {"request_id": get_request_id(request)}

    resp = await api_client.get("/whoami")
    assert resp.status_code == 200
    assert resp.json()["request_id"] == resp.headers["x-request-id"]


async def test_recovery_turns_exceptions_into_500(app: FastAPI, api_client) -> None:
    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("handler exploded")

    resp = await api_client.get("/boom")
    assert resp.status_code == 500
    assert resp.text == "Internal Server Error"
    assert "exploded" not in resp.text
    assert resp.headers.get("x-request-id")

    # The app keeps serving afterwards.
    ok = await api_client.get("/health")
    assert ok.status_code == 200


async def test_access_log_records_error_status(app: FastAPI, api_client) -> None:
    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("handler exploded")

    with capture_logs() as logs:
        await api_client.get("/boom")

    access = [entry for entry in logs if entry["event"] == "http_request"]
    assert len(access) == 1
    assert access[0]["status_code"] == 500
    assert access[0]["method"] == "GET"
    assert access[0]["path"] == "/boom"
    assert any(entry["event"] == "panic_recovered" for entry in logs)


async def test_access_log_records_success(api_client) -> None:
    with capture_logs() as logs:
        await api_client.get("/contacts/999/edit")

    access = [entry for entry in logs if entry["event"] == "http_request"]
    assert access[0]["status_code"] == 404
    assert access[0]["elapsed_ms"] >= 0


async def test_store_errors_become_generic_500(app: FastAPI, api_client) -> None:
    class BrokenStore:
        def list(self, search: str = ""):
            raise ContactStoreError("disk on fire")

        def count(self) -> int:
            return 0

    app.state.store = BrokenStore()

    resp = await api_client.get("/contacts")
    assert resp.status_code == 500
    assert "disk on fire" not in resp.text


async def test_access_log_carries_request_id(api_client) -> None:
    with capture_logs() as logs:
        resp = await api_client.get("/contacts/1/edit")

    access = [entry for entry in logs if entry["event"] == "http_request"]
    assert len(access) == 1
    assert access[0]["request_id"] == resp.headers["x-request-id"]


async def test_access_log_carries_request_id_on_error_path(app: FastAPI, api_client) -> None:
    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("handler exploded")

    with capture_logs() as logs:
        resp = await api_client.get("/boom")

    access = [entry for entry in logs if entry["event"] == "http_request"]
    assert resp.status_code == 500
    assert access[0]["request_id"] == resp.headers["x-request-id"]
