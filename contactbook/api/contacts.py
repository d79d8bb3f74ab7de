from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Form, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse

from contactbook.api.dependencies import get_store
from contactbook.models.contact import Contact, validate_contact
from contactbook.models.errors import ContactNotFoundError, ContactValidationError, DuplicateEmailError
from contactbook.store.base import ContactStore
from contactbook.templating import is_htmx, render_page, render_partial

router = APIRouter(prefix="/contacts", tags=["contacts"])

logger = structlog.get_logger(__name__)

_DUPLICATE_EMAIL_MESSAGE = "A contact with this email already exists"


def _contact_from_form(
    first_name: str = Form(default=""),
    last_name: str = Form(default=""),
    email: str = Form(default=""),
    phone: str = Form(default=""),
) -> Contact:
    return Contact(first_name=first_name, last_name=last_name, email=email, phone=phone)


def _ensure_valid(contact: Contact) -> None:
    errors = validate_contact(contact)
    if errors:
        raise ContactValidationError(errors)


def _form_with_errors(request: Request, contact: Contact, errors: dict[str, str]) -> HTMLResponse:
    return render_page(request, "contact_form", {"contact": contact, "errors": errors}, status_code=422)


def _redirect_to_list() -> RedirectResponse:
    return RedirectResponse(url="/contacts", status_code=303)


@router.get("", response_class=HTMLResponse)
def list_contacts(request: Request, q: str = "", store: ContactStore = Depends(get_store)) -> HTMLResponse:
    contacts = store.list(q)
    if is_htmx(request):
        return render_partial(request, "contact_rows", {"contacts": contacts})
    return render_page(
        request,
        "contacts",
        {"contacts": contacts, "count": store.count(), "search": q},
    )


@router.get("/search", response_class=HTMLResponse)
def search_contacts(request: Request, q: str = "", store: ContactStore = Depends(get_store)) -> HTMLResponse:
    return render_partial(request, "contact_rows", {"contacts": store.list(q)})


@router.get("/new", response_class=HTMLResponse)
def new_contact(request: Request) -> HTMLResponse:
    return render_page(request, "contact_form", {"contact": Contact(), "errors": {}})


@router.post("")
def create_contact(
    request: Request,
    contact: Contact = Depends(_contact_from_form),
    store: ContactStore = Depends(get_store),
) -> Response:
    try:
        _ensure_valid(contact)
        created = store.create(contact)
    except ContactValidationError as exc:
        return _form_with_errors(request, contact, exc.fields)
    except DuplicateEmailError:
        return _form_with_errors(request, contact, {"Email": _DUPLICATE_EMAIL_MESSAGE})

    logger.info("contact_created", contact_id=created.id, name=created.full_name)
    return _redirect_to_list()


@router.get("/{contact_id}/edit", response_class=HTMLResponse)
def edit_contact(request: Request, contact_id: str, store: ContactStore = Depends(get_store)) -> HTMLResponse:
    try:
        contact = store.get(contact_id)
    except ContactNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Contact not found") from exc
    return render_page(request, "contact_form", {"contact": contact, "errors": {}})


@router.post("/{contact_id}")
def update_contact(
    request: Request,
    contact_id: str,
    contact: Contact = Depends(_contact_from_form),
    store: ContactStore = Depends(get_store),
) -> Response:
    contact.id = contact_id
    try:
        _ensure_valid(contact)
        updated = store.update(contact)
    except ContactValidationError as exc:
        return _form_with_errors(request, contact, exc.fields)
    except DuplicateEmailError:
        return _form_with_errors(request, contact, {"Email": _DUPLICATE_EMAIL_MESSAGE})
    except ContactNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Contact not found") from exc

    logger.info("contact_updated", contact_id=updated.id, name=updated.full_name)
    return _redirect_to_list()


@router.delete("/{contact_id}")
def delete_contact(request: Request, contact_id: str, store: ContactStore = Depends(get_store)) -> Response:
    try:
        store.delete(contact_id)
    except ContactNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Contact not found") from exc

    logger.info("contact_deleted", contact_id=contact_id)
    if is_htmx(request):
        return Response(status_code=200)
    return _redirect_to_list()
