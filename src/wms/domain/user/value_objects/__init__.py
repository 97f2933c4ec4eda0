"""User value objects."""

from wms.domain.user.value_objects.email import Email
from wms.domain.user.value_objects.password import Password
from wms.domain.user.value_objects.user_profile import UserProfile
from wms.domain.user.value_objects.username import Username

__all__ = [
    "Email",
    "Password",
    "UserProfile",
    "Username",
]
