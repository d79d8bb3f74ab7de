from __future__ import annotations

from datetime import datetime

import email_validator
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel

# Private-network hosts (user@localhost, user@printer.local) are syntactically
# valid addresses; keep rejecting the other reserved names.
for _name in ("localhost", "local"):
    if _name in email_validator.SPECIAL_USE_DOMAIN_NAMES:
        email_validator.SPECIAL_USE_DOMAIN_NAMES.remove(_name)


class Contact(BaseModel):
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


def _is_valid_email(value: str) -> bool:
    try:
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
            allow_quoted_local=True,
        )
    except EmailNotValidError:
        return False
    return True


def validate_contact(contact: Contact) -> dict[str, str]:
    """Check required fields and email syntax.

    Returns a mapping of field name to message; empty when the contact is valid.
    Only the address syntax is checked, not whether the domain can receive mail.
    Uniqueness is not checked here, the store reports it separately.
    """

    errors: dict[str, str] = {}
    if not contact.first_name.strip():
        errors["FirstName"] = "First name is required"
    if not contact.last_name.strip():
        errors["LastName"] = "Last name is required"
    if not contact.email.strip():
        errors["Email"] = "Email is required"
    elif not _is_valid_email(contact.email.strip()):
        errors["Email"] = f"Invalid email address: {contact.email}"
    return errors
