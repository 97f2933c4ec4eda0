"""User domain: identity, credentials and profile of warehouse staff."""

from wms.domain.user.aggregates import User
from wms.domain.user.events import (
    UserCreatedEvent,
    UserDeactivatedEvent,
    UserUpdatedEvent,
)
from wms.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InactiveUserError,
    InvalidEmailError,
    InvalidResetTokenError,
    InvalidProfileError,
    InvalidUsernameError,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    WeakPasswordError,
)
from wms.domain.user.repositories import (
    USER_SORT_FIELDS,
    UserRepository,
    UserSearchCriteria,
    UserSortOptions,
)
from wms.domain.user.value_objects import Email, Password, UserProfile, Username

__all__ = [
    # Aggregates
    "User",
    # Value objects
    "Email",
    "Password",
    "UserProfile",
    "Username",
    # Events
    "UserCreatedEvent",
    "UserDeactivatedEvent",
    "UserUpdatedEvent",
    # Repositories
    "USER_SORT_FIELDS",
    "UserRepository",
    "UserSearchCriteria",
    "UserSortOptions",
    # Exceptions
    "EmailAlreadyExistsError",
    "InactiveUserError",
    "InvalidEmailError",
    "InvalidResetTokenError",
    "InvalidProfileError",
    "InvalidUsernameError",
    "UsernameAlreadyExistsError",
    "UserNotFoundError",
    "WeakPasswordError",
]
