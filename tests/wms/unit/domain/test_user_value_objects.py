"""Unit tests for user value objects."""

from datetime import date, timedelta

import pytest

from wms.domain.shared import today_utc
from wms.domain.user import (
    Email,
    Password,
    UserProfile,
    Username,
)
from wms.domain.user.exceptions import (
    InvalidEmailError,
    InvalidProfileError,
    InvalidUsernameError,
    WeakPasswordError,
)


class TestEmail:
    """Test Email validation and normalization."""

    def test_normalizes_case_and_whitespace(self):
        """Email is trimmed and lowercased."""
        assert Email("  Alice@Example.COM ").value == "alice@example.com"

    def test_equal_after_normalization(self):
        """Two spellings of the same address are equal."""
        assert Email("ALICE@example.com") == Email("alice@EXAMPLE.com")

    def test_rejects_empty(self):
        """Empty email is rejected."""
        with pytest.raises(InvalidEmailError, match="cannot be empty"):
            Email("   ")

    def test_rejects_malformed(self):
        """Missing TLD is rejected."""
        with pytest.raises(InvalidEmailError, match="Invalid email format"):
            Email("alice@example")

    def test_rejects_too_long(self):
        """Addresses above 255 characters are rejected."""
        with pytest.raises(InvalidEmailError, match="cannot exceed 255 characters"):
            Email("a" * 250 + "@example.com")

    def test_domain_helpers(self):
        """Local part and domain are split at the @."""
        email = Email("alice@example.com")
        assert email.local_part == "alice"
        assert email.domain == "example.com"
        assert email.is_from_domain("EXAMPLE.com")


class TestUsername:
    """Test Username validation."""

    def test_preserves_case(self):
        """Case is kept, whitespace trimmed."""
        assert Username("  Alice01 ").value == "Alice01"

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("ab", "at least 3"),
            ("a" * 51, "cannot exceed 50"),
            ("alice smith", "can only contain"),
            ("Admin", "reserved"),
            (".alice", "start or end with a dot"),
            ("al..ice", "consecutive dots"),
        ],
    )
    def test_rejects_invalid(self, value, message):
        """Each rule produces its own message."""
        with pytest.raises(InvalidUsernameError, match=message):
            Username(value)


class TestPassword:
    """Test Password strength rules and hashing."""

    def test_create_hashes_and_compares(self):
        """A created password matches only its plaintext."""
        password = Password.create("Str0ng!Pass")
        assert password.hashed_value != "Str0ng!Pass"
        assert password.compare("Str0ng!Pass")
        assert not password.compare("Str0ng!Pas")
        assert not password.compare("")

    def test_rejects_short(self):
        """Fewer than 8 characters is too short."""
        with pytest.raises(WeakPasswordError, match="at least 8"):
            Password.create("S0!a")

    def test_reports_all_missing_classes(self):
        """Missing character classes are listed together."""
        with pytest.raises(WeakPasswordError) as exc_info:
            Password.create("alllowercase")
        message = str(exc_info.value)
        assert "uppercase" in message
        assert "number" in message
        assert "special character" in message

    def test_from_hash_skips_strength_rules(self):
        """Stored hashes are trusted as-is."""
        stored = Password.create("Str0ng!Pass").hashed_value
        assert Password.from_hash(stored).compare("Str0ng!Pass")

    def test_compare_with_corrupt_hash_is_false(self):
        """A malformed hash never matches."""
        assert not Password.from_hash("not-a-bcrypt-hash").compare("Str0ng!Pass")

    def test_constructor_rejects_plaintext(self):
        """Plaintext cannot bypass hashing through the constructor."""
        with pytest.raises(WeakPasswordError, match="Password.create"):
            Password("Str0ng!Pass")

    def test_constructor_accepts_bcrypt_hash(self):
        """The constructor takes an existing bcrypt hash."""
        stored = Password.create("Str0ng!Pass").hashed_value
        assert Password(stored).compare("Str0ng!Pass")


class TestUserProfile:
    """Test UserProfile validation and copy-on-write updates."""

    def test_requires_names(self):
        """First and last name are mandatory."""
        with pytest.raises(InvalidProfileError, match="First name is required"):
            UserProfile(first_name=" ", last_name="Doe")
        with pytest.raises(InvalidProfileError, match="Last name is required"):
            UserProfile(first_name="Alice", last_name="")

    def test_defaults_and_normalization(self):
        """Language and time zone default; gender is lowercased."""
        profile = UserProfile(first_name=" Alice ", last_name="Doe", gender="FEMALE")
        assert profile.first_name == "Alice"
        assert profile.language == "en"
        assert profile.time_zone == "UTC"
        assert profile.gender == "female"

    def test_rejects_future_birth_date(self):
        """Birth dates must lie in the past."""
        with pytest.raises(InvalidProfileError, match="cannot be in the future"):
            UserProfile(
                first_name="Alice",
                last_name="Doe",
                birth_date=today_utc() + timedelta(days=1),
            )

    def test_rejects_unsupported_language(self):
        """Only the supported language codes are accepted."""
        with pytest.raises(InvalidProfileError, match="Unsupported language"):
            UserProfile(first_name="Alice", last_name="Doe", language="xx")

    def test_update_returns_new_validated_profile(self):
        """update never mutates and re-runs validation."""
        profile = UserProfile(first_name="Alice", last_name="Doe")
        updated = profile.update(phone="+49 170 1234567")

        assert profile.phone is None
        assert updated.phone == "+49 170 1234567"
        with pytest.raises(InvalidProfileError, match="phone"):
            profile.update(phone="call me")

    def test_derived_names(self):
        """Full and display names derive from first and last name."""
        profile = UserProfile(first_name="Alice", last_name="doe")
        assert profile.full_name == "Alice doe"
        assert profile.display_name == "Alice D."
        assert profile.initials == "AD"

    def test_age(self):
        """Age counts completed years."""
        today = today_utc()
        birth = date(today.year - 30, 1, 1)
        profile = UserProfile(first_name="Alice", last_name="Doe", birth_date=birth)
        assert profile.age == 30


class TestFromPersistence:
    """Stored values are rebuilt without the current business rules."""

    def test_profile_keeps_out_of_range_values(self):
        """An old birth date and retired language survive a reload."""
        profile = UserProfile.from_persistence(
            first_name=" Alice ",
            last_name="Doe",
            birth_date=date(1890, 1, 1),
            language="tlh",
            phone="ext. 12",
        )
        assert profile.first_name == "Alice"
        assert profile.birth_date == date(1890, 1, 1)
        assert profile.language == "tlh"
        assert profile.phone == "ext. 12"
        assert profile.time_zone == "UTC"

    def test_profile_update_revalidates(self):
        """Changing a reloaded profile applies the rules again."""
        profile = UserProfile.from_persistence(
            first_name="Alice",
            last_name="Doe",
            birth_date=date(1890, 1, 1),
        )
        with pytest.raises(InvalidProfileError, match="Invalid birth date"):
            profile.update(first_name="Alicia")

    def test_username_allows_reserved(self):
        """A name reserved after it was registered still loads."""
        assert Username.from_persistence("admin").value == "admin"

    def test_email_is_normalized_only(self):
        """Stored addresses are lower-cased but not pattern-checked."""
        assert Email.from_persistence(" Legacy@Host ").value == "legacy@host"

    @pytest.mark.parametrize(
        "factory",
        [Username.from_persistence, Email.from_persistence],
    )
    def test_empty_values_still_fail(self, factory):
        """Presence is checked even for stored values."""
        with pytest.raises((InvalidUsernameError, InvalidEmailError)):
            factory("  ")
