"""
User directory service.

Answers whether a user id refers to a real, active account before
board services trust it.
"""

from uuid import UUID

from django.contrib.auth import get_user_model

User = get_user_model()


def user_exists(*, user_id: UUID) -> bool:
    """Return True if an active user with this id exists."""
    if user_id is None:
        return False
    return User.objects.filter(id=user_id, is_active=True).exists()


class UserDirectory:
    """User-existence collaborator consumed by board services."""

    def exists(self, user_id: UUID) -> bool:
        return user_exists(user_id=user_id)
