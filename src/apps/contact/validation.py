"""Contact form validation and normalization."""

import re
from dataclasses import dataclass

from apps.core.exceptions import InvalidEmail, MessageTooLong, MissingField, NameTooLong

NAME_MAX_LENGTH = 100
MESSAGE_MAX_LENGTH = 1000

# local@domain.tld, with single "." or "-" separators and 2-3 letter TLD parts
EMAIL_PATTERN = re.compile(r"\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+", re.ASCII)


@dataclass(frozen=True)
class ContactFields:
    name: str
    email: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email, "message": self.message}


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_contact(name, email, message) -> ContactFields:
    """
    Validate raw form fields and return them normalized.

    Checks run in a fixed order so the reported error is deterministic:
    presence, name length, message length, email format. Raises a
    ``ContactValidationError`` subclass on the first failure.
    """
    name = _clean(name)
    email = _clean(email).lower()
    message = _clean(message)

    if not name or not email or not message:
        raise MissingField
    if len(name) > NAME_MAX_LENGTH:
        raise NameTooLong
    if len(message) > MESSAGE_MAX_LENGTH:
        raise MessageTooLong
    if not EMAIL_PATTERN.fullmatch(email):
        raise InvalidEmail

    return ContactFields(name=name, email=email, message=message)
