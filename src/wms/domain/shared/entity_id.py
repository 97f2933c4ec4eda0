"""EntityId value object - the identity of every aggregate."""

from __future__ import annotations

import re
from dataclasses import dataclass
from uuid import UUID, uuid4

from wms.domain.shared.exceptions import ErrorCode, ValidationError

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class EntityId:
    """Canonical, lowercase UUID string.

    Two ids are equal iff their string values match.
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not _UUID_PATTERN.match(self.value):
            msg = f"Invalid EntityId format: {self.value}"
            raise ValidationError(msg, code=ErrorCode.INVALID_FORMAT)
        object.__setattr__(self, "value", self.value.lower())

    @classmethod
    def generate(cls) -> EntityId:
        return cls(str(uuid4()))

    @classmethod
    def from_string(cls, value: str) -> EntityId:
        return cls(value.strip() if isinstance(value, str) else value)

    @classmethod
    def from_uuid(cls, value: UUID) -> EntityId:
        return cls(str(value))

    @staticmethod
    def is_valid(value: str | None) -> bool:
        """Check whether a string is a well-formed id without raising."""
        return isinstance(value, str) and bool(_UUID_PATTERN.match(value.strip()))

    def as_uuid(self) -> UUID:
        return UUID(self.value)

    def __str__(self) -> str:
        return self.value
