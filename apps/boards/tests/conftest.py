import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.boards.models import Board, BoardList, BoardMember, Card, Label
from apps.boards.roles import BoardRole
from apps.boards.services import BoardDependencies


class RecordingSink:
    """Audit sink that keeps events in memory."""

    def __init__(self):
        self.events = []

    def record(self, event_type, actor_id, payload, board_id):
        self.events.append({
            'event_type': event_type,
            'actor_id': actor_id,
            'payload': dict(payload or {}),
            'board_id': board_id,
        })


def _make_user(email, display_name):
    return User.objects.create_user(
        email=email,
        password='TestPass123!',
        display_name=display_name,
    )


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def board_owner(db):
    """Create and return the board owner."""
    return _make_user('owner@example.com', 'Board Owner')


@pytest.fixture
def admin_user(db):
    return _make_user('admin@example.com', 'Board Admin')


@pytest.fixture
def editor_user(db):
    return _make_user('editor@example.com', 'Board Editor')


@pytest.fixture
def viewer_user(db):
    return _make_user('viewer@example.com', 'Board Viewer')


@pytest.fixture
def outsider(db):
    """Create and return a user with no access to any board."""
    return _make_user('outsider@example.com', 'Outsider')


@pytest.fixture
def board(db, board_owner):
    """Create and return a board with no members."""
    return Board.objects.create(
        title='Sprint Board',
        description='Work for the current sprint',
        owner=board_owner,
    )


@pytest.fixture
def board_with_members(board, admin_user, editor_user, viewer_user):
    """Board with owner, one admin, one editor and one viewer."""
    BoardMember.objects.create(board=board, user=admin_user, role=BoardRole.ADMIN)
    BoardMember.objects.create(board=board, user=editor_user, role=BoardRole.EDITOR)
    BoardMember.objects.create(board=board, user=viewer_user, role=BoardRole.VIEWER)
    return board


@pytest.fixture
def board_with_content(board_with_members):
    """Board with two lists, three cards and a label."""
    todo = BoardList.objects.create(board=board_with_members, title='To Do', position=0)
    done = BoardList.objects.create(board=board_with_members, title='Done', position=1)
    Card.objects.create(board_list=todo, title='Write docs', position=0)
    Card.objects.create(board_list=todo, title='Fix login', position=1)
    Card.objects.create(board_list=done, title='Set up CI', position=0)
    Label.objects.create(board=board_with_members, name='bug', color='#ff0000')
    return board_with_members


@pytest.fixture
def audit_sink():
    return RecordingSink()


@pytest.fixture
def deps(audit_sink):
    """Default stores with an in-memory audit sink."""
    return BoardDependencies(audit=audit_sink)


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(api_client, board_owner):
    """Return API client authenticated as the board owner."""
    return _authenticate(api_client, board_owner)


@pytest.fixture
def admin_client(api_client, admin_user):
    return _authenticate(api_client, admin_user)


@pytest.fixture
def editor_client(api_client, editor_user):
    return _authenticate(api_client, editor_user)


@pytest.fixture
def viewer_client(api_client, viewer_user):
    return _authenticate(api_client, viewer_user)


@pytest.fixture
def outsider_client(api_client, outsider):
    return _authenticate(api_client, outsider)
