"""RoleName value object."""

from __future__ import annotations

import re
from dataclasses import dataclass

from wms.domain.role.exceptions import InvalidRoleNameError

ROLE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-_]+$")
MIN_ROLE_NAME_LENGTH = 2
MAX_ROLE_NAME_LENGTH = 100

_WORD_START = re.compile(r"\b\w")


@dataclass(frozen=True)
class RoleName:
    """Human-readable role name, normalized to title case."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            msg = "Role name cannot be empty"
            raise InvalidRoleNameError(msg)

        trimmed = self.value.strip()

        if len(trimmed) < MIN_ROLE_NAME_LENGTH:
            msg = f"Role name must be at least {MIN_ROLE_NAME_LENGTH} characters long"
            raise InvalidRoleNameError(msg)
        if len(trimmed) > MAX_ROLE_NAME_LENGTH:
            msg = f"Role name cannot exceed {MAX_ROLE_NAME_LENGTH} characters"
            raise InvalidRoleNameError(msg)
        if not ROLE_NAME_PATTERN.match(trimmed):
            msg = (
                "Role name can only contain letters, numbers, spaces, "
                "hyphens, and underscores"
            )
            raise InvalidRoleNameError(msg)

        normalized = _WORD_START.sub(lambda m: m.group(0).upper(), trimmed.lower())
        object.__setattr__(self, "value", normalized)

    @classmethod
    def create(cls, value: str) -> RoleName:
        return cls(value)

    @classmethod
    def from_persistence(cls, value: str) -> RoleName:
        """Rebuild a stored name as-is, without the naming rules."""
        if not value or not value.strip():
            msg = "Role name cannot be empty"
            raise InvalidRoleNameError(msg)
        instance = object.__new__(cls)
        object.__setattr__(instance, "value", value.strip())
        return instance

    def to_kebab_case(self) -> str:
        return re.sub(r"\s+", "-", self.value.lower()).replace("_", "-")

    def to_snake_case(self) -> str:
        return re.sub(r"\s+", "_", self.value.lower()).replace("-", "_")

    def __str__(self) -> str:
        return self.value
