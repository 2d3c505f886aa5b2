"""
ORM-backed persistence collaborators for the boards services.

Each store is a narrow wrapper over one collection. Lookups return None
for absent rows. Writes raise BoardsInternalError when the database
fails; IntegrityError from a constraint violation is raised unchanged.
Bulk deletes of an empty collection succeed as no-ops.
"""

from contextlib import contextmanager
from typing import List, Optional
from uuid import UUID

import structlog
from django.db import DatabaseError, IntegrityError

from apps.boards.models import Board, BoardList, BoardMember, Card
from apps.boards.services.exceptions import BoardsInternalError

logger = structlog.get_logger(__name__)


@contextmanager
def _persistence(action: str, **context):
    try:
        yield
    except IntegrityError:
        # Callers translate constraint violations themselves
        raise
    except DatabaseError as exc:
        logger.error("persistence_failed", action=action, error=str(exc), **context)
        raise BoardsInternalError(f"Failed to {action}") from exc


class BoardStore:

    def find_by_id(self, board_id: UUID, *, for_update: bool = False) -> Optional[Board]:
        queryset = Board.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.filter(id=board_id).first()

    def save(self, board: Board) -> Board:
        with _persistence("save board", board_id=str(board.id)):
            board.save()
        return board

    def delete(self, board_id: UUID) -> None:
        with _persistence("delete board", board_id=str(board_id)):
            Board.objects.filter(id=board_id).delete()


class MembershipStore:

    def find_by_board_and_user(
        self,
        board_id: UUID,
        user_id: UUID,
        *,
        for_update: bool = False
    ) -> Optional[BoardMember]:
        queryset = BoardMember.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.filter(board_id=board_id, user_id=user_id).first()

    def exists_by_board_and_user(self, board_id: UUID, user_id: UUID) -> bool:
        return BoardMember.objects.filter(board_id=board_id, user_id=user_id).exists()

    def count_active_by_board(self, board_id: UUID) -> int:
        return BoardMember.objects.filter(board_id=board_id, is_active=True).count()

    def list_active_by_board(self, board_id: UUID) -> List[BoardMember]:
        return list(
            BoardMember.objects
            .filter(board_id=board_id, is_active=True)
            .select_related('user')
            .order_by('created_at')
        )

    def save(self, member: BoardMember) -> BoardMember:
        with _persistence("save board member", member_id=str(member.id)):
            member.save()
        return member

    def delete_by_board(self, board_id: UUID) -> None:
        with _persistence("delete board members", board_id=str(board_id)):
            BoardMember.objects.filter(board_id=board_id).delete()

    def delete(self, member_id: UUID) -> None:
        with _persistence("delete board member", member_id=str(member_id)):
            BoardMember.objects.filter(id=member_id).delete()


class CardStore:

    def count_by_board(self, board_id: UUID) -> int:
        return Card.objects.filter(board_list__board_id=board_id).count()

    def delete_by_board(self, board_id: UUID) -> None:
        with _persistence("delete board cards", board_id=str(board_id)):
            Card.objects.filter(board_list__board_id=board_id).delete()


class ListStore:

    def count_by_board(self, board_id: UUID) -> int:
        return BoardList.objects.filter(board_id=board_id).count()

    def delete_by_board(self, board_id: UUID) -> None:
        with _persistence("delete board lists", board_id=str(board_id)):
            BoardList.objects.filter(board_id=board_id).delete()
