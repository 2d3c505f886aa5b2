import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.boards.models import Board, BoardList, BoardMember, Card
from apps.boards.roles import BoardRole


def _detail(board_id):
    return reverse('boards:board-detail', kwargs={'pk': board_id})


def _members(board_id):
    return reverse('boards:board-members', kwargs={'pk': board_id})


def _member(board_id, user_id):
    return reverse('boards:board-member', kwargs={'pk': board_id, 'user_id': user_id})


# =============================================================================
# Board CRUD
# =============================================================================

@pytest.mark.django_db
class TestBoardList:
    """Tests for GET /api/boards/"""

    def test_lists_owned_and_member_boards(self, editor_client, board_with_members, board_owner):
        Board.objects.create(title='Private', owner=board_owner)

        response = editor_client.get(reverse('boards:board-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [b['title'] for b in response.data] == ['Sprint Board']

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('boards:board-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestBoardCreate:
    """Tests for POST /api/boards/"""

    def test_create_board(self, owner_client, board_owner):
        response = owner_client.post(
            reverse('boards:board-list'),
            {'title': 'Launch', 'description': 'Launch checklist'}
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['title'] == 'Launch'
        assert response.data['owner']['id'] == str(board_owner.id)
        assert response.data['member_count'] == 0

    def test_missing_title(self, owner_client):
        response = owner_client.post(reverse('boards:board-list'), {'description': 'x'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestBoardDetail:
    """Tests for GET/PATCH/DELETE /api/boards/{id}/"""

    def test_viewer_retrieves(self, viewer_client, board_with_members):
        response = viewer_client.get(_detail(board_with_members.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['member_count'] == 3

    def test_outsider_forbidden(self, outsider_client, board):
        response = outsider_client.get(_detail(board.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'NOT_BOARD_PARTICIPANT'

    def test_missing_board(self, owner_client):
        response = owner_client.get(_detail(uuid4()))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_editor_renames(self, editor_client, board_with_members):
        response = editor_client.patch(_detail(board_with_members.id), {'title': 'Renamed'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Renamed'

    def test_viewer_cannot_rename(self, viewer_client, board_with_members):
        response = viewer_client.patch(_detail(board_with_members.id), {'title': 'Renamed'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_archived_board_conflict(self, owner_client, board):
        board.is_archived = True
        board.save()

        response = owner_client.patch(_detail(board.id), {'title': 'Renamed'})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'BOARD_ARCHIVED'

    def test_owner_deletes(self, owner_client, board_with_content):
        response = owner_client.delete(_detail(board_with_content.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Board.objects.filter(id=board_with_content.id).exists()
        assert not BoardList.objects.filter(board_id=board_with_content.id).exists()
        assert not Card.objects.filter(board_list__board_id=board_with_content.id).exists()

    def test_admin_cannot_delete(self, admin_client, board_with_content):
        response = admin_client.delete(_detail(board_with_content.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Board.objects.filter(id=board_with_content.id).exists()


@pytest.mark.django_db
class TestBoardToggles:

    def test_admin_archives(self, admin_client, board_with_members):
        url = reverse('boards:board-archive', kwargs={'pk': board_with_members.id})
        response = admin_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_archived'] is True

    def test_unarchive(self, owner_client, board):
        board.is_archived = True
        board.save()

        url = reverse('boards:board-unarchive', kwargs={'pk': board.id})
        response = owner_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_archived'] is False

    def test_editor_stars(self, editor_client, board_with_members):
        url = reverse('boards:board-star', kwargs={'pk': board_with_members.id})
        response = editor_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_starred'] is True

    def test_viewer_cannot_unstar(self, viewer_client, board_with_members):
        url = reverse('boards:board-unstar', kwargs={'pk': board_with_members.id})
        response = viewer_client.post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Members
# =============================================================================

@pytest.mark.django_db
class TestBoardMembers:
    """Tests for /api/boards/{id}/members/"""

    def test_list_members(self, viewer_client, board_with_members):
        response = viewer_client.get(_members(board_with_members.id))

        assert response.status_code == status.HTTP_200_OK
        assert {m['role'] for m in response.data} == {'admin', 'editor', 'viewer'}

    def test_add_member(self, owner_client, board, outsider):
        response = owner_client.post(
            _members(board.id),
            {'user_id': str(outsider.id), 'role': 'editor'}
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['role'] == 'editor'
        assert response.data['user']['id'] == str(outsider.id)

    def test_add_member_defaults_to_viewer(self, owner_client, board, outsider):
        response = owner_client.post(_members(board.id), {'user_id': str(outsider.id)})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['role'] == 'viewer'

    def test_add_member_rejects_owner_role(self, owner_client, board, outsider):
        response = owner_client.post(
            _members(board.id),
            {'user_id': str(outsider.id), 'role': 'owner'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_existing_member_conflict(self, owner_client, board_with_members, editor_user):
        response = owner_client.post(
            _members(board_with_members.id),
            {'user_id': str(editor_user.id), 'role': 'viewer'}
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_add_board_owner_is_business_rule(self, admin_client, board_with_members, board_owner):
        response = admin_client.post(
            _members(board_with_members.id),
            {'user_id': str(board_owner.id), 'role': 'viewer'}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_add_unknown_user(self, owner_client, board):
        response = owner_client.post(_members(board.id), {'user_id': str(uuid4())})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_editor_cannot_add(self, editor_client, board_with_members, outsider):
        response = editor_client.post(
            _members(board_with_members.id),
            {'user_id': str(outsider.id)}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestBoardMember:
    """Tests for /api/boards/{id}/members/{user_id}/"""

    def test_change_role(self, owner_client, board_with_members, viewer_user):
        response = owner_client.patch(
            _member(board_with_members.id, viewer_user.id),
            {'role': 'editor'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['role'] == 'editor'

    def test_change_own_role_bad_request(self, admin_client, board_with_members, admin_user):
        response = admin_client.patch(
            _member(board_with_members.id, admin_user.id),
            {'role': 'viewer'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'SELF_ROLE_CHANGE_DENIED'

    def test_remove_member(self, owner_client, board_with_members, viewer_user):
        response = owner_client.delete(_member(board_with_members.id, viewer_user.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert BoardMember.objects.get(user=viewer_user).is_active is False

    def test_remove_owner(self, admin_client, board_with_members, board_owner):
        response = admin_client.delete(_member(board_with_members.id, board_owner.id))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data['code'] == 'OWNER_REMOVAL_DENIED'

    def test_remove_last_member(self, owner_client, board, editor_user):
        BoardMember.objects.create(board=board, user=editor_user, role=BoardRole.EDITOR)

        response = owner_client.delete(_member(board.id, editor_user.id))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data['code'] == 'LAST_MEMBER_REMOVAL_DENIED'

    def test_remove_unknown_member(self, owner_client, board_with_members, outsider):
        response = owner_client.delete(_member(board_with_members.id, outsider.id))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_remove_self_with_upper_case_id(self, admin_client, board_with_members, admin_user):
        response = admin_client.delete(_member(board_with_members.id, str(admin_user.id).upper()))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'SELF_REMOVAL_DENIED'
        assert BoardMember.objects.get(user=admin_user).is_active is True

    def test_change_own_role_with_upper_case_id(self, admin_client, board_with_members, admin_user):
        response = admin_client.patch(
            _member(board_with_members.id, str(admin_user.id).upper()),
            {'role': 'viewer'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert BoardMember.objects.get(user=admin_user).role == BoardRole.ADMIN

    def test_remove_owner_with_upper_case_id(self, admin_client, board_with_members, board_owner):
        response = admin_client.delete(_member(board_with_members.id, str(board_owner.id).upper()))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data['code'] == 'OWNER_REMOVAL_DENIED'

    def test_malformed_member_id_is_not_found(self, owner_client, board_with_members):
        url = _members(board_with_members.id) + '-' * 36 + '/'
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestMalformedBoardId:

    def test_dashes_only_board_id_is_not_found(self, owner_client):
        response = owner_client.get('/api/boards/' + '-' * 36 + '/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_non_hex_board_id_is_not_found(self, owner_client):
        response = owner_client.get('/api/boards/zzzzzzzz-zzzz-zzzz-zzzz-zzzzzzzzzzzz/')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestHealthCheck:

    def test_health_check_is_public(self, api_client):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok', 'database': 'ok'}
