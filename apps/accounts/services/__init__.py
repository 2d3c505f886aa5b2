"""Services for accounts business logic."""

from .user_directory import UserDirectory, user_exists

__all__ = [
    'UserDirectory',
    'user_exists',
]
