"""Jinja2 rendering helpers for full pages and htmx partials."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import HTMLResponse

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def is_htmx(request: Request) -> bool:
    return request.headers.get("HX-Request") == "true"


def render_page(request: Request, name: str, context: dict[str, Any] | None = None, status_code: int = 200) -> HTMLResponse:
    """Render ``<name>.html``, which extends the site layout."""

    return templates.TemplateResponse(request, f"{name}.html", context or {}, status_code=status_code)


def render_partial(request: Request, name: str, context: dict[str, Any] | None = None, status_code: int = 200) -> HTMLResponse:
    """Render ``partials/<name>.html`` without the layout."""

    return templates.TemplateResponse(request, f"partials/{name}.html", context or {}, status_code=status_code)
