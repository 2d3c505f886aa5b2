"""
Store tests for the membership operations the services do not call directly.
"""

import pytest
from uuid import uuid4
from unittest.mock import patch
from django.db import DatabaseError, IntegrityError

from apps.boards.models import BoardMember
from apps.boards.roles import BoardRole
from apps.boards.services.exceptions import BoardsInternalError
from apps.boards.services.stores import MembershipStore


@pytest.mark.django_db
class TestMembershipStore:

    def test_exists_by_board_and_user(self, board_with_members, editor_user, outsider):
        store = MembershipStore()

        assert store.exists_by_board_and_user(board_with_members.id, editor_user.id) is True
        assert store.exists_by_board_and_user(board_with_members.id, outsider.id) is False

    def test_exists_includes_inactive_rows(self, board_with_members, viewer_user):
        BoardMember.objects.filter(user=viewer_user).update(is_active=False)

        assert MembershipStore().exists_by_board_and_user(board_with_members.id, viewer_user.id) is True

    def test_delete_removes_one_row(self, board_with_members, editor_user):
        member = BoardMember.objects.get(board=board_with_members, user=editor_user)

        MembershipStore().delete(member.id)

        assert not BoardMember.objects.filter(id=member.id).exists()
        assert BoardMember.objects.filter(board=board_with_members).count() == 2

    def test_delete_missing_row_is_noop(self, board_with_members):
        MembershipStore().delete(uuid4())

        assert BoardMember.objects.filter(board=board_with_members).count() == 3

    def test_delete_database_failure(self, board_with_members):
        with patch.object(BoardMember.objects, 'filter', side_effect=DatabaseError("gone")):
            with pytest.raises(BoardsInternalError):
                MembershipStore().delete(uuid4())

    def test_save_passes_integrity_error_through(self, board_with_members, editor_user):
        duplicate = BoardMember(board=board_with_members, user=editor_user, role=BoardRole.VIEWER)

        with patch.object(BoardMember, 'save', side_effect=IntegrityError("unique board/user")):
            with pytest.raises(IntegrityError):
                MembershipStore().save(duplicate)
