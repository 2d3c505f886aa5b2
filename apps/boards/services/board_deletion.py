"""
Board deletion service.

Deletes a board and everything it owns in a fixed order:

    cards -> lists -> members -> board

Each step must succeed before the next one runs; the first failure is
raised unchanged and nothing after it is attempted. Every step is a bulk
delete that succeeds on an empty collection, so a failed deletion can
simply be retried from the start. Labels are removed with the board row.
"""

from typing import Optional
from uuid import UUID

import structlog
from django.db import transaction

from apps.activity.models import ActivityType
from apps.boards.roles import Capability
from apps.boards.services.dependencies import BoardDependencies, default_dependencies
from apps.boards.services.permissions import PermissionResolver

logger = structlog.get_logger(__name__)


class BoardDeletionOrchestrator:
    """Owner-only cascading deletion of a board."""

    def __init__(
        self,
        deps: Optional[BoardDependencies] = None,
        resolver: Optional[PermissionResolver] = None
    ):
        self.deps = deps or default_dependencies()
        self.resolver = resolver or PermissionResolver(self.deps)

    def _steps(self):
        return (
            ('cards', self.deps.cards.delete_by_board),
            ('lists', self.deps.lists.delete_by_board),
            ('members', self.deps.memberships.delete_by_board),
            ('board', self.deps.boards.delete),
        )

    @transaction.atomic
    def delete_board(self, *, board_id: UUID, requested_by: UUID) -> None:
        """
        Delete a board and all of its cards, lists and memberships.

        Membership rows are hard-deleted here; the audit trail of a
        deleted board keeps only the board_delete entry.

        Args:
            board_id: UUID of the board
            requested_by: UUID of the acting user (must be the owner)

        Raises:
            BoardNotFoundError: If board doesn't exist
            BoardsPermissionDeniedError: If requester may not delete the board
            BoardsInternalError: If any deletion step fails
        """
        logger.info("board_delete_started", board_id=str(board_id), requested_by=str(requested_by))

        board = self.resolver.load_board(board_id, for_update=True)
        self.resolver.require(
            board, requested_by, Capability.DELETE,
            "Only the board owner can delete the board"
        )

        card_count = self.deps.cards.count_by_board(board.id)
        list_count = self.deps.lists.count_by_board(board.id)

        for name, step in self._steps():
            logger.debug("board_delete_step", board_id=str(board_id), step=name)
            try:
                step(board.id)
            except Exception:
                logger.error("board_delete_step_failed", board_id=str(board_id), step=name)
                raise

        logger.info(
            "board_deleted",
            board_id=str(board_id),
            title=board.title,
            cards=card_count,
            lists=list_count,
        )
        self.deps.audit.record(
            ActivityType.BOARD_DELETE,
            requested_by,
            {'board_title': board.title, 'card_count': card_count, 'list_count': list_count},
            board.id,
        )


def delete_board(*, board_id: UUID, requested_by: UUID) -> None:
    BoardDeletionOrchestrator().delete_board(board_id=board_id, requested_by=requested_by)
