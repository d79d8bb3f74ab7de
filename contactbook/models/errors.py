from __future__ import annotations


class ContactError(Exception):
    """Base class for every error the contact layer reports."""


class ContactNotFoundError(ContactError):
    def __init__(self, contact_id: str) -> None:
        super().__init__(f"contact {contact_id!r} not found")
        self.contact_id = contact_id


class DuplicateEmailError(ContactError):
    def __init__(self, email: str) -> None:
        super().__init__(f"email {email!r} already exists")
        self.email = email


class ContactValidationError(ContactError):
    """Field-level problems with a candidate contact (field name -> message)."""

    def __init__(self, fields: dict[str, str]) -> None:
        super().__init__("invalid contact: " + ", ".join(sorted(fields)))
        self.fields = dict(fields)


class ContactStoreError(ContactError):
    """Unclassified backend failure; surfaced to clients as a generic 500."""
