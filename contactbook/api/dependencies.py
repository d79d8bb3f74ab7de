from __future__ import annotations

from fastapi import Request

from contactbook.store.base import ContactStore


def get_store(request: Request) -> ContactStore:
    return request.app.state.store
