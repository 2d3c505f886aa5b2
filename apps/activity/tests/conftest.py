import pytest
from apps.accounts.models import User


@pytest.fixture
def actor(db):
    """Create and return the acting user."""
    return User.objects.create_user(
        email='actor@example.com',
        password='TestPass123!',
        display_name='Actor',
    )
