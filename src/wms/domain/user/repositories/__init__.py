from wms.domain.user.repositories.user_repository import (
    USER_SORT_FIELDS,
    UserRepository,
    UserSearchCriteria,
    UserSortOptions,
)

__all__ = [
    "USER_SORT_FIELDS",
    "UserRepository",
    "UserSearchCriteria",
    "UserSortOptions",
]
