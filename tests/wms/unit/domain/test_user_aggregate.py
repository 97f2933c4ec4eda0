"""Unit tests for the User aggregate."""

from datetime import timedelta

from wms.domain.shared import EntityId, utc_now
from wms.domain.user import (
    Email,
    Password,
    User,
    UserCreatedEvent,
    UserDeactivatedEvent,
    UserProfile,
    Username,
    UserUpdatedEvent,
)
from tests.shared.fixtures.factories import TestUserFactory


class TestUserCreation:
    """Test User.create and User.reconstitute."""

    def test_create_records_one_created_event(self):
        """A new user carries exactly one UserCreated event."""
        actor = EntityId.generate()
        user = TestUserFactory.create(created_by=actor)

        events = user.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], UserCreatedEvent)
        assert events[0].username == "alice01"
        assert events[0].created_by == actor
        assert user.created_by == actor

    def test_create_defaults(self):
        """New users are active and unverified."""
        user = TestUserFactory.create()
        assert user.is_active
        assert not user.is_email_verified
        assert user.last_login_at is None
        assert user.full_name == "Alice Doe"
        assert user.display_name == "Alice D."

    def test_reconstitute_records_no_events(self):
        """Loading from storage is silent."""
        now = utc_now()
        user = User.reconstitute(
            entity_id=EntityId.generate(),
            username=Username("alice01"),
            email=Email("alice@example.com"),
            profile=UserProfile(first_name="Alice", last_name="Doe"),
            password=Password.create("Str0ng!Pass"),
            is_active=False,
            is_email_verified=True,
            created_at=now,
            updated_at=now,
        )
        assert user.pull_events() == []
        assert not user.is_active

    def test_pull_events_drains(self):
        """pull_events empties the pending list."""
        user = TestUserFactory.create()
        assert len(user.pull_events()) == 1
        assert user.pull_events() == []


class TestUserStatus:
    """Test activate/deactivate toggles."""

    def test_activate_is_idempotent(self):
        """Activating an active user records nothing."""
        user = TestUserFactory.alice()
        before = user.updated_at
        user.activate()
        assert user.pull_events() == []
        assert user.updated_at == before

    def test_deactivate_then_activate(self):
        """One UserDeactivated followed by one UserUpdated."""
        user = TestUserFactory.alice()
        user.deactivate()
        user.deactivate()
        user.activate()

        events = user.pull_events()
        assert [type(e) for e in events] == [UserDeactivatedEvent, UserUpdatedEvent]
        assert events[1].changes == {"status": {"old": "inactive", "new": "active"}}
        assert user.is_active

    def test_deactivate_records_actor(self):
        """The acting user lands on the event and the audit fields."""
        actor = EntityId.generate()
        user = TestUserFactory.alice()
        user.deactivate(updated_by=actor)

        event = user.pull_events()[0]
        assert event.deactivated_by == actor
        assert user.updated_by == actor


class TestUserMutations:
    """Test profile, password, login and reset-token mutations."""

    def test_update_profile_records_old_and_new(self):
        """Profile changes carry both snapshots."""
        user = TestUserFactory.alice()
        user.update_profile(user.profile.update(first_name="Alicia"))

        event = user.pull_events()[0]
        assert isinstance(event, UserUpdatedEvent)
        assert event.changes["profile"]["old"]["first_name"] == "Alice"
        assert event.changes["profile"]["new"]["first_name"] == "Alicia"
        assert user.full_name == "Alicia Doe"

    def test_change_password(self):
        """The new password replaces the old one."""
        user = TestUserFactory.alice()
        user.change_password(Password.create("N3w!Secret"))
        assert user.password.compare("N3w!Secret")
        assert not user.password.compare("Str0ng!Pass")
        assert len(user.pull_events()) == 1

    def test_verify_email_once(self):
        """Verifying twice records a single event."""
        user = TestUserFactory.alice()
        user.verify_email()
        user.verify_email()
        assert user.is_email_verified
        assert user.email_verified_at is not None
        assert len(user.pull_events()) == 1

    def test_record_login(self):
        """Login timestamp is set and announced."""
        user = TestUserFactory.alice()
        user.record_login()
        assert user.last_login_at is not None
        assert len(user.pull_events()) == 1

    def test_reset_token_lifecycle(self):
        """A token is valid until it expires or is cleared."""
        user = TestUserFactory.alice()
        user.set_reset_token("hashed-token", utc_now() + timedelta(minutes=5))

        assert user.is_reset_token_valid("hashed-token")
        assert not user.is_reset_token_valid("other-token")
        assert not user.is_reset_token_valid("")

        user.clear_reset_token()
        assert user.reset_token is None
        assert not user.is_reset_token_valid("hashed-token")

    def test_expired_reset_token_is_invalid(self):
        """Expiry in the past invalidates the token."""
        user = TestUserFactory.alice()
        user.set_reset_token("hashed-token", utc_now() - timedelta(seconds=1))
        assert not user.is_reset_token_valid("hashed-token")

    def test_clear_reset_token_without_token_is_silent(self):
        """Clearing nothing records nothing."""
        user = TestUserFactory.alice()
        user.clear_reset_token()
        assert user.pull_events() == []

    def test_equality_by_id(self):
        """Users compare by identity."""
        user = TestUserFactory.alice()
        assert user == user
        assert user != TestUserFactory.alice()
