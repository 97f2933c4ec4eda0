"""UserProfile value object.

Personal details of a user. Copy-on-write: every change goes through
``update`` (or the avatar helpers) and returns a new, re-validated profile.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from wms.domain.shared.time import today_utc
from wms.domain.user.exceptions import InvalidProfileError

PHONE_PATTERN = re.compile(r"^\+?[\d\s\-\(\)]{7,20}$")
SUPPORTED_LANGUAGES = ("en", "es", "fr", "de", "it", "pt", "ja", "ko", "zh")
GENDER_OPTIONS = ("male", "female", "other", "prefer_not_to_say")
MAX_NAME_LENGTH = 100
MAX_AGE_YEARS = 120

DEFAULT_LANGUAGE = "en"
DEFAULT_TIME_ZONE = "UTC"

_COMPLETION_FIELDS = (
    "first_name",
    "last_name",
    "phone",
    "address",
    "birth_date",
    "gender",
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _years_ago(today: date, years: int) -> date:
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # Feb 29 on a non-leap target year
        return today.replace(year=today.year - years, day=28)


@dataclass(frozen=True)
class UserProfile:
    """Names, contact details and locale preferences of a user."""

    first_name: str
    last_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    avatar_url: Optional[str] = None
    language: str = DEFAULT_LANGUAGE
    time_zone: str = DEFAULT_TIME_ZONE

    def __post_init__(self) -> None:  # NOQA: PLR0912
        first_name = _clean(self.first_name)
        last_name = _clean(self.last_name)

        if not first_name:
            msg = "First name is required"
            raise InvalidProfileError(msg)
        if not last_name:
            msg = "Last name is required"
            raise InvalidProfileError(msg)
        if len(first_name) > MAX_NAME_LENGTH:
            msg = f"First name cannot exceed {MAX_NAME_LENGTH} characters"
            raise InvalidProfileError(msg)
        if len(last_name) > MAX_NAME_LENGTH:
            msg = f"Last name cannot exceed {MAX_NAME_LENGTH} characters"
            raise InvalidProfileError(msg)

        phone = _clean(self.phone)
        if phone is not None and not PHONE_PATTERN.match(phone):
            msg = "Invalid phone number format"
            raise InvalidProfileError(msg)

        gender = _clean(self.gender)
        if gender is not None:
            gender = gender.lower()
            if gender not in GENDER_OPTIONS:
                msg = "Invalid gender option"
                raise InvalidProfileError(msg)

        language = (_clean(self.language) or DEFAULT_LANGUAGE).lower()
        if language not in SUPPORTED_LANGUAGES:
            msg = "Unsupported language"
            raise InvalidProfileError(msg)

        birth_date = self.birth_date
        if isinstance(birth_date, datetime):
            birth_date = birth_date.date()
        if birth_date is not None:
            today = today_utc()
            if birth_date > today:
                msg = "Birth date cannot be in the future"
                raise InvalidProfileError(msg)
            if birth_date < _years_ago(today, MAX_AGE_YEARS):
                msg = "Invalid birth date"
                raise InvalidProfileError(msg)

        object.__setattr__(self, "first_name", first_name)
        object.__setattr__(self, "last_name", last_name)
        object.__setattr__(self, "phone", phone)
        object.__setattr__(self, "address", _clean(self.address))
        object.__setattr__(self, "birth_date", birth_date)
        object.__setattr__(self, "gender", gender)
        object.__setattr__(self, "avatar_url", _clean(self.avatar_url))
        object.__setattr__(self, "language", language)
        object.__setattr__(
            self,
            "time_zone",
            _clean(self.time_zone) or DEFAULT_TIME_ZONE,
        )

    @classmethod
    def create(cls, first_name: str, last_name: str, **optional: Any) -> UserProfile:
        return cls(first_name=first_name, last_name=last_name, **optional)

    @classmethod
    def from_persistence(
        cls,
        first_name: str,
        last_name: str,
        **optional: Any,
    ) -> UserProfile:
        """Rebuild a stored profile without re-running the profile rules.

        Rows that satisfied the rules when written (a birth date within
        ``MAX_AGE_YEARS``, a then-supported language) stay loadable.
        """
        instance = object.__new__(cls)
        values = {
            "first_name": (first_name or "").strip(),
            "last_name": (last_name or "").strip(),
            "phone": _clean(optional.get("phone")),
            "address": _clean(optional.get("address")),
            "birth_date": optional.get("birth_date"),
            "gender": _clean(optional.get("gender")),
            "avatar_url": _clean(optional.get("avatar_url")),
            "language": _clean(optional.get("language")) or DEFAULT_LANGUAGE,
            "time_zone": _clean(optional.get("time_zone")) or DEFAULT_TIME_ZONE,
        }
        if isinstance(values["birth_date"], datetime):
            values["birth_date"] = values["birth_date"].date()
        for name, value in values.items():
            object.__setattr__(instance, name, value)
        return instance

    def update(self, **changes: Any) -> UserProfile:
        """Return a new profile with ``changes`` applied and re-validated."""
        return dataclasses.replace(self, **changes)

    def update_avatar(self, avatar_url: str) -> UserProfile:
        return self.update(avatar_url=avatar_url)

    def remove_avatar(self) -> UserProfile:
        return self.update(avatar_url=None)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def display_name(self) -> str:
        """First name plus last initial, e.g. ``Alice D.``."""
        return f"{self.first_name} {self.last_name[0].upper()}."

    @property
    def initials(self) -> str:
        return f"{self.first_name[0]}{self.last_name[0]}".upper()

    @property
    def age(self) -> Optional[int]:
        if self.birth_date is None:
            return None
        today = today_utc()
        years = today.year - self.birth_date.year
        if (today.month, today.day) < (self.birth_date.month, self.birth_date.day):
            years -= 1
        return years

    def is_complete(self) -> bool:
        return bool(self.first_name and self.last_name and self.phone and self.address)

    def completion_percentage(self) -> int:
        filled = sum(1 for name in _COMPLETION_FIELDS if getattr(self, name))
        return round(filled / len(_COMPLETION_FIELDS) * 100)

    def to_dict(self) -> dict[str, Any]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "address": self.address,
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
            "gender": self.gender,
            "avatar_url": self.avatar_url,
            "language": self.language,
            "time_zone": self.time_zone,
        }
