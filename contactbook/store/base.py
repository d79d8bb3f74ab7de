"""Storage port for contacts."""

from __future__ import annotations

from typing import Protocol

from contactbook.models.contact import Contact


class ContactStore(Protocol):
    """Capability set the HTTP layer relies on.

    Implementations own their Contact instances and hand out copies.
    Lookups of unknown ids raise ContactNotFoundError; email clashes raise
    DuplicateEmailError.
    """

    def list(self, search: str = "") -> list[Contact]:
        ...

    def get(self, contact_id: str) -> Contact:
        ...

    def create(self, contact: Contact) -> Contact:
        ...

    def update(self, contact: Contact) -> Contact:
        ...

    def delete(self, contact_id: str) -> None:
        ...

    def count(self) -> int:
        ...
