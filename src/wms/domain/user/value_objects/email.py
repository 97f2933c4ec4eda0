"""Email value object.

Provides validated, normalized email addresses for user identification.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from wms.domain.user.exceptions import InvalidEmailError

# Validates: user@domain.tld (minimum requirements)
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
MAX_EMAIL_LENGTH = 255


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        normalized = self.value.strip().lower()

        if len(normalized) > MAX_EMAIL_LENGTH:
            msg = f"Email cannot exceed {MAX_EMAIL_LENGTH} characters"
            raise InvalidEmailError(msg)

        if not EMAIL_PATTERN.match(normalized):
            msg = "Invalid email format"
            raise InvalidEmailError(msg)

        # Replace value with normalized version (frozen dataclass workaround)
        object.__setattr__(self, "value", normalized)

    @classmethod
    def create(cls, value: str) -> Email:
        return cls(value)

    @classmethod
    def from_persistence(cls, value: str) -> Email:
        """Rebuild a stored address; only presence and normalization apply."""
        if not value or not value.strip():
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)
        instance = object.__new__(cls)
        object.__setattr__(instance, "value", value.strip().lower())
        return instance

    @property
    def local_part(self) -> str:
        return self.value.split("@", 1)[0]

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    def is_from_domain(self, domain: str) -> bool:
        return self.domain == domain.strip().lower()

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
