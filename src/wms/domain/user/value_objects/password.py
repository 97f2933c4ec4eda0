"""Password value object.

Stores only a bcrypt hash. Strength rules apply when a new password is
created from plaintext, never when a stored hash is loaded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import ClassVar

import bcrypt

from wms.domain.user.exceptions import WeakPasswordError

SPECIAL_CHARACTER_PATTERN = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")
REPEATED_CHARACTER_PATTERN = re.compile(r"(.)\1{2,}")
SEQUENCE_PATTERN = re.compile(r"123|abc|qwe", re.IGNORECASE)
BCRYPT_HASH_PATTERN = re.compile(r"^\$2[abxy]\$\d{2}\$[./A-Za-z0-9]{53}$")

COMMON_PASSWORDS = frozenset(
    {
        "password",
        "123456",
        "123456789",
        "qwerty",
        "abc123",
        "password123",
        "admin",
        "letmein",
        "welcome",
        "monkey",
        "1234567890",
        "password1",
    },
)


@dataclass(frozen=True)
class Password:
    """Hashed password.

    Build instances with ``create`` (plaintext, strength-checked) or
    ``from_hash`` (stored hash); the constructor only accepts bcrypt hashes.

    Examples
    --------
    >>> password = Password.create("Str0ng!Pass")
    >>> password.compare("Str0ng!Pass")
    True
    >>> password.compare("wrong")
    False
    """

    MIN_LENGTH: ClassVar[int] = 8
    MAX_LENGTH: ClassVar[int] = 128
    SALT_ROUNDS: ClassVar[int] = 12

    hashed_value: str = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.hashed_value, str) or not self.hashed_value:
            msg = "Hashed password cannot be empty"
            raise WeakPasswordError(msg)
        if not BCRYPT_HASH_PATTERN.match(self.hashed_value):
            msg = "Password must be built with Password.create or Password.from_hash"
            raise WeakPasswordError(msg)

    @classmethod
    def create(cls, plaintext: str, rounds: int | None = None) -> Password:
        """Validate strength and hash a plaintext password.

        Parameters
        ----------
        plaintext
            The password as typed by the user
        rounds
            bcrypt work factor, defaults to ``SALT_ROUNDS``

        Raises
        ------
        WeakPasswordError
            If the password fails any strength rule
        """
        if not plaintext:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        cls._validate_strength(plaintext)

        salt = bcrypt.gensalt(rounds=rounds or cls.SALT_ROUNDS)
        hashed = bcrypt.hashpw(plaintext.encode("utf-8"), salt)
        return cls(hashed.decode("utf-8"))

    @classmethod
    def from_hash(cls, hashed_value: str) -> Password:
        """Rebuild from a persisted hash without re-checking strength."""
        if not hashed_value:
            msg = "Hashed password cannot be empty"
            raise WeakPasswordError(msg)
        instance = object.__new__(cls)
        object.__setattr__(instance, "hashed_value", hashed_value)
        return instance

    @classmethod
    def set_default_rounds(cls, rounds: int) -> None:
        cls.SALT_ROUNDS = rounds

    def compare(self, plaintext: str) -> bool:
        if not plaintext:
            return False
        try:
            return bcrypt.checkpw(
                plaintext.encode("utf-8"),
                self.hashed_value.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def needs_rehash(self) -> bool:
        """True when the stored cost factor differs from ``SALT_ROUNDS``."""
        try:
            # bcrypt format: $2b$XX$...
            parts = self.hashed_value.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self.SALT_ROUNDS
        except (ValueError, IndexError):
            pass
        return True

    @classmethod
    def _validate_strength(cls, password: str) -> None:
        if len(password) < cls.MIN_LENGTH:
            msg = f"Password must be at least {cls.MIN_LENGTH} characters long"
            raise WeakPasswordError(msg)

        if len(password) > cls.MAX_LENGTH:
            msg = f"Password cannot exceed {cls.MAX_LENGTH} characters"
            raise WeakPasswordError(msg)

        missing = []
        if not re.search(r"[A-Z]", password):
            missing.append("at least one uppercase letter")
        if not re.search(r"[a-z]", password):
            missing.append("at least one lowercase letter")
        if not re.search(r"\d", password):
            missing.append("at least one number")
        if not SPECIAL_CHARACTER_PATTERN.search(password):
            missing.append("at least one special character")

        if missing:
            msg = f"Password must contain {', '.join(missing)}"
            raise WeakPasswordError(msg)

        if cls.is_common(password):
            msg = "This password is too common. Please choose a more unique password"
            raise WeakPasswordError(msg)

    @staticmethod
    def is_common(password: str) -> bool:
        return password.lower() in COMMON_PASSWORDS

    @classmethod
    def validate_minimum_requirements(cls, password: str) -> tuple[bool, list[str]]:
        """Check strength without raising.

        Returns
        -------
        ``(is_valid, errors)`` where errors holds at most one message
        """
        if not password:
            return False, ["Password cannot be empty"]
        try:
            cls._validate_strength(password)
        except WeakPasswordError as e:
            return False, [e.message]
        return True, []

    @classmethod
    def calculate_strength(cls, password: str) -> int:
        """Heuristic strength score clamped to 0-100."""
        score = 0

        if len(password) >= 8:
            score += 25
        if len(password) >= 12:
            score += 10
        if len(password) >= 16:
            score += 10

        if re.search(r"[a-z]", password):
            score += 10
        if re.search(r"[A-Z]", password):
            score += 10
        if re.search(r"\d", password):
            score += 10
        if SPECIAL_CHARACTER_PATTERN.search(password):
            score += 15

        if REPEATED_CHARACTER_PATTERN.search(password):
            score -= 10
        if SEQUENCE_PATTERN.search(password):
            score -= 10
        if cls.is_common(password):
            score -= 20

        return max(0, min(100, score))

    @staticmethod
    def strength_description(score: int) -> str:
        if score < 30:
            return "Very Weak"
        if score < 50:
            return "Weak"
        if score < 70:
            return "Fair"
        if score < 90:
            return "Strong"
        return "Very Strong"

    def __str__(self) -> str:
        return "********"
