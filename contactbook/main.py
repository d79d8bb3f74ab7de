from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from contactbook.api.contacts import router as contacts_router
from contactbook.api.metrics import router as metrics_router
from contactbook.config import Settings, get_settings
from contactbook.models.errors import ContactStoreError
from contactbook.observability.middleware import AccessLogMiddleware, RecoveryMiddleware, RequestIDMiddleware
from contactbook.store.base import ContactStore
from contactbook.store.memory import MemoryContactStore, seed_contacts
from contactbook.templating import STATIC_DIR, render_page

logger = structlog.get_logger(__name__)


async def _store_error_handler(request: Request, exc: ContactStoreError) -> PlainTextResponse:
    logger.error("contact_store_failed", path=request.url.path, error=str(exc))
    return PlainTextResponse("Internal Server Error", status_code=500)


def create_app(store: ContactStore | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = MemoryContactStore()
        if settings.seed:
            added = seed_contacts(store)
            logger.info("seeded_sample_contacts", count=added)

    app = FastAPI(title="contactbook", version="0.1.0")
    app.state.store = store
    app.state.settings = settings

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(contacts_router)
    app.include_router(metrics_router)
    app.add_exception_handler(ContactStoreError, _store_error_handler)

    # Added innermost first: RequestID -> Recovery -> AccessLog -> routes.
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        return render_page(request, "home")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
