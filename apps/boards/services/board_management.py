"""
Board management service.

Handles board CRUD and state toggles (archive, star). Every operation
resolves the actor's role through the PermissionResolver first.
"""

from typing import Optional
from uuid import UUID

import structlog
from django.db import transaction

from apps.activity.models import ActivityType
from apps.boards.models import Board
from apps.boards.roles import Capability
from apps.boards.services.dependencies import BoardDependencies, default_dependencies
from apps.boards.services.exceptions import (
    BoardArchivedError,
    BoardsInputError,
    UserNotFoundError,
)
from apps.boards.services.permissions import PermissionResolver

logger = structlog.get_logger(__name__)


def _clean_title(title: Optional[str]) -> str:
    title = (title or '').strip()
    if not title:
        raise BoardsInputError("Board title is required", code='TITLE_REQUIRED')
    return title


class BoardManager:
    """Board lifecycle operations other than membership and deletion."""

    def __init__(
        self,
        deps: Optional[BoardDependencies] = None,
        resolver: Optional[PermissionResolver] = None
    ):
        self.deps = deps or default_dependencies()
        self.resolver = resolver or PermissionResolver(self.deps)

    @transaction.atomic
    def create_board(self, *, title: str, owner_id: UUID, description: str = '') -> Board:
        """
        Create a new board owned by ``owner_id``.

        The owner gets no membership row; ownership alone grants every
        capability.

        Args:
            title: Board title (required, whitespace is stripped)
            owner_id: UUID of the creating user
            description: Optional board description

        Returns:
            Created Board instance

        Raises:
            BoardsInputError: If the title is blank
            UserNotFoundError: If the owner doesn't exist
        """
        title = _clean_title(title)

        if not self.deps.users.exists(owner_id):
            logger.warning("board_owner_not_found", owner_id=str(owner_id))
            raise UserNotFoundError(f"User {owner_id} not found")

        board = Board(title=title, description=description or '', owner_id=owner_id)
        board = self.deps.boards.save(board)

        logger.info("board_created", board_id=str(board.id), owner_id=str(owner_id), title=title)
        self.deps.audit.record(
            ActivityType.BOARD_CREATE, owner_id, {'board_title': title}, board.id
        )
        return board

    def get_board(self, *, board_id: UUID, requested_by: UUID) -> Board:
        """
        Get a board the requester can read.

        Raises:
            BoardNotFoundError: If board doesn't exist
            BoardsPermissionDeniedError: If requester cannot read the board
        """
        board = self.resolver.load_board(board_id)
        self.resolver.require(board, requested_by, Capability.READ)
        return board

    @transaction.atomic
    def update_board(
        self,
        *,
        board_id: UUID,
        requested_by: UUID,
        title: Optional[str] = None,
        description: Optional[str] = None
    ) -> Board:
        """
        Update board title and/or description.

        Fields left as None are not touched. When nothing actually changes
        the board is returned without a write or an audit entry.

        Raises:
            BoardNotFoundError: If board doesn't exist
            BoardsPermissionDeniedError: If requester cannot write to the board
            BoardArchivedError: If the board is archived
            BoardsInputError: If the new title is blank
        """
        board = self.resolver.load_board(board_id, for_update=True)
        self.resolver.require(
            board, requested_by, Capability.WRITE,
            "Viewers cannot modify the board"
        )

        if board.is_archived:
            logger.warning("archived_board_modification", board_id=str(board_id))
            raise BoardArchivedError()

        events = []

        if title is not None:
            title = _clean_title(title)
            if title != board.title:
                events.append((ActivityType.BOARD_RENAME, {'old_title': board.title, 'new_title': title}))
                board.title = title

        if description is not None and description != board.description:
            events.append((ActivityType.BOARD_UPDATE_DESCRIPTION, {'board_title': board.title}))
            board.description = description

        if not events:
            logger.debug("board_update_noop", board_id=str(board_id))
            return board

        board = self.deps.boards.save(board)
        logger.info(
            "board_updated",
            board_id=str(board_id),
            fields=[event_type.value for event_type, _ in events],
        )
        for event_type, payload in events:
            self.deps.audit.record(event_type, requested_by, payload, board.id)
        return board

    def _set_archived(self, board_id: UUID, requested_by: UUID, archived: bool) -> Board:
        board = self.resolver.load_board(board_id, for_update=True)
        self.resolver.require(
            board, requested_by, Capability.ARCHIVE,
            "Only board owners and admins can archive boards"
        )

        if board.is_archived == archived:
            return board

        if archived:
            board.archive()
        else:
            board.unarchive()
        board = self.deps.boards.save(board)

        event_type = ActivityType.BOARD_ARCHIVE if archived else ActivityType.BOARD_UNARCHIVE
        logger.info(event_type.value, board_id=str(board_id), requested_by=str(requested_by))
        self.deps.audit.record(event_type, requested_by, {'board_title': board.title}, board.id)
        return board

    @transaction.atomic
    def archive_board(self, *, board_id: UUID, requested_by: UUID) -> Board:
        return self._set_archived(board_id, requested_by, True)

    @transaction.atomic
    def unarchive_board(self, *, board_id: UUID, requested_by: UUID) -> Board:
        return self._set_archived(board_id, requested_by, False)

    def _set_starred(self, board_id: UUID, requested_by: UUID, starred: bool) -> Board:
        board = self.resolver.load_board(board_id, for_update=True)
        self.resolver.require(
            board, requested_by, Capability.TOGGLE_STAR,
            "Viewers cannot star boards"
        )

        if board.is_starred != starred:
            board.is_starred = starred
            board = self.deps.boards.save(board)
            logger.info("board_star_toggled", board_id=str(board_id), starred=starred)
        return board

    @transaction.atomic
    def star_board(self, *, board_id: UUID, requested_by: UUID) -> Board:
        return self._set_starred(board_id, requested_by, True)

    @transaction.atomic
    def unstar_board(self, *, board_id: UUID, requested_by: UUID) -> Board:
        return self._set_starred(board_id, requested_by, False)


def create_board(*, title: str, owner_id: UUID, description: str = '') -> Board:
    return BoardManager().create_board(title=title, owner_id=owner_id, description=description)


def get_board(*, board_id: UUID, requested_by: UUID) -> Board:
    return BoardManager().get_board(board_id=board_id, requested_by=requested_by)


def update_board(
    *,
    board_id: UUID,
    requested_by: UUID,
    title: Optional[str] = None,
    description: Optional[str] = None
) -> Board:
    return BoardManager().update_board(
        board_id=board_id, requested_by=requested_by, title=title, description=description
    )


def archive_board(*, board_id: UUID, requested_by: UUID) -> Board:
    return BoardManager().archive_board(board_id=board_id, requested_by=requested_by)


def unarchive_board(*, board_id: UUID, requested_by: UUID) -> Board:
    return BoardManager().unarchive_board(board_id=board_id, requested_by=requested_by)


def star_board(*, board_id: UUID, requested_by: UUID) -> Board:
    return BoardManager().star_board(board_id=board_id, requested_by=requested_by)


def unstar_board(*, board_id: UUID, requested_by: UUID) -> Board:
    return BoardManager().unstar_board(board_id=board_id, requested_by=requested_by)
