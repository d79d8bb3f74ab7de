from __future__ import annotations

import logging
from datetime import datetime, timezone

from contactbook.models.contact import Contact
from contactbook.models.errors import ContactNotFoundError, DuplicateEmailError
from contactbook.store.base import ContactStore
from contactbook.store.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

_SAMPLE_CONTACTS = [
    ("Alice", "Johnson", "alice@example.com", "555-0101"),
    ("Bob", "Smith", "bob@example.com", "555-0102"),
    ("Carol", "Williams", "carol@example.com", "555-0103"),
    ("David", "Brown", "david@example.com", "555-0104"),
    ("Eve", "Davis", "eve@example.com", "555-0105"),
]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _email_key(email: str) -> str:
    return email.strip().lower()


def _matches(contact: Contact, query: str) -> bool:
    fields = (contact.first_name, contact.last_name, contact.email, contact.phone)
    return any(query in field.lower() for field in fields)


class MemoryContactStore:
    """Thread-safe in-memory contact store.

    Contacts live in an id -> Contact map with a second map from lowercased
    email to id for uniqueness checks. Both maps and the id counter are only
    touched under the write lock.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._data: dict[str, Contact] = {}
        self._emails: dict[str, str] = {}
        self._counter = 0

    def _next_id(self) -> str:
        self._counter += 1
        return str(self._counter)

    def list(self, search: str = "") -> list[Contact]:
        query = search.strip().lower()
        with self._lock.read():
            result = [c.model_copy() for c in self._data.values() if not query or _matches(c, query)]
        result.sort(key=lambda c: (c.last_name, c.first_name))
        return result

    def get(self, contact_id: str) -> Contact:
        with self._lock.read():
            contact = self._data.get(contact_id)
            if contact is None:
                raise ContactNotFoundError(contact_id)
            return contact.model_copy()

    def create(self, contact: Contact) -> Contact:
        email = _email_key(contact.email)
        with self._lock.write():
            # A new record always gets a fresh id, so any owner of the email is another contact.
            if email in self._emails:
                raise DuplicateEmailError(contact.email)

            now = _now()
            stored = contact.model_copy(update={"id": self._next_id(), "created_at": now, "updated_at": now})
            self._data[stored.id] = stored
            self._emails[email] = stored.id
            return stored.model_copy()

    def update(self, contact: Contact) -> Contact:
        email = _email_key(contact.email)
        with self._lock.write():
            existing = self._data.get(contact.id)
            if existing is None:
                raise ContactNotFoundError(contact.id)

            owner_id = self._emails.get(email)
            if owner_id is not None and owner_id != contact.id:
                raise DuplicateEmailError(contact.email)

            self._emails.pop(_email_key(existing.email), None)
            stored = contact.model_copy(update={"created_at": existing.created_at, "updated_at": _now()})
            self._data[stored.id] = stored
            self._emails[email] = stored.id
            return stored.model_copy()

    def delete(self, contact_id: str) -> None:
        with self._lock.write():
            contact = self._data.pop(contact_id, None)
            if contact is None:
                raise ContactNotFoundError(contact_id)
            self._emails.pop(_email_key(contact.email), None)

    def count(self) -> int:
        with self._lock.read():
            return len(self._data)


def seed_contacts(store: ContactStore) -> int:
    """Add the sample contacts, skipping any whose email is taken."""

    added = 0
    for first_name, last_name, email, phone in _SAMPLE_CONTACTS:
        try:
            store.create(Contact(first_name=first_name, last_name=last_name, email=email, phone=phone))
        except DuplicateEmailError:
            logger.info("Sample contact %s already present", email)
            continue
        added += 1
    return added
