"""Username value object."""

from __future__ import annotations

import re
from dataclasses import dataclass

from wms.domain.user.exceptions import InvalidUsernameError

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.-]+$")
MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 50

RESERVED_USERNAMES = frozenset(
    {
        "admin",
        "administrator",
        "root",
        "system",
        "api",
        "www",
        "mail",
        "support",
        "help",
        "info",
        "contact",
        "security",
        "null",
        "undefined",
        "test",
    },
)


@dataclass(frozen=True)
class Username:
    """Trimmed login name. Case is preserved."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            msg = "Username cannot be empty"
            raise InvalidUsernameError(msg)

        trimmed = self.value.strip()

        if len(trimmed) < MIN_USERNAME_LENGTH:
            msg = f"Username must be at least {MIN_USERNAME_LENGTH} characters long"
            raise InvalidUsernameError(msg)
        if len(trimmed) > MAX_USERNAME_LENGTH:
            msg = f"Username cannot exceed {MAX_USERNAME_LENGTH} characters"
            raise InvalidUsernameError(msg)
        if not USERNAME_PATTERN.match(trimmed):
            msg = (
                "Username can only contain letters, numbers, "
                "dots, underscores, and hyphens"
            )
            raise InvalidUsernameError(msg)
        if self.is_reserved(trimmed):
            msg = "This username is reserved and cannot be used"
            raise InvalidUsernameError(msg)
        if trimmed.startswith(".") or trimmed.endswith("."):
            msg = "Username cannot start or end with a dot"
            raise InvalidUsernameError(msg)
        if ".." in trimmed:
            msg = "Username cannot contain consecutive dots"
            raise InvalidUsernameError(msg)

        object.__setattr__(self, "value", trimmed)

    @classmethod
    def create(cls, value: str) -> Username:
        return cls(value)

    @classmethod
    def from_persistence(cls, value: str) -> Username:
        """Rebuild a stored username without re-checking the naming rules."""
        if not value or not value.strip():
            msg = "Username cannot be empty"
            raise InvalidUsernameError(msg)
        instance = object.__new__(cls)
        object.__setattr__(instance, "value", value.strip())
        return instance

    @staticmethod
    def is_reserved(value: str) -> bool:
        return value.strip().lower() in RESERVED_USERNAMES

    @property
    def display_value(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Username('{self.value}')"
