"""
Board permission resolver.

Every board use case asks this module who the actor is on the board
(owner sentinel or stored membership role) and whether that role grants
a capability. Resolution failures are never treated as "permitted".
"""

from typing import Optional
from uuid import UUID

import structlog

from apps.boards.models import Board
from apps.boards.roles import OWNER, Capability
from apps.boards.services.dependencies import BoardDependencies, default_dependencies
from apps.boards.services.exceptions import (
    BoardNotFoundError,
    InactiveMemberError,
    InsufficientPermissionsError,
    NotBoardParticipantError,
)

logger = structlog.get_logger(__name__)


_PREDICATES = {
    Capability.READ: Board.can_read,
    Capability.WRITE: Board.can_write,
    Capability.MANAGE_SETTINGS: Board.can_manage_settings,
    Capability.ARCHIVE: Board.can_archive,
    Capability.MANAGE_MEMBERS: Board.can_manage_members,
    Capability.TOGGLE_STAR: Board.can_toggle_star,
    Capability.DELETE: Board.can_delete,
}


class PermissionResolver:
    """Resolve an actor's effective role on a board and answer capability questions."""

    def __init__(self, deps: Optional[BoardDependencies] = None):
        self.deps = deps or default_dependencies()

    def load_board(self, board_id: UUID, *, for_update: bool = False) -> Board:
        board = self.deps.boards.find_by_id(board_id, for_update=for_update)
        if board is None:
            logger.warning("board_not_found", board_id=str(board_id))
            raise BoardNotFoundError(f"Board with ID {board_id} not found")
        return board

    def resolve_role_on(self, board: Board, user_id: UUID):
        """
        Resolve ``user_id``'s role on an already loaded board.

        Returns:
            OWNER for the board owner, otherwise the member's stored BoardRole

        Raises:
            NotBoardParticipantError: If the user has no membership row
            InactiveMemberError: If the membership row is inactive
        """
        if board.is_owner(user_id):
            return OWNER

        member = self.deps.memberships.find_by_board_and_user(board.id, user_id)
        if member is None:
            logger.warning("not_board_participant", board_id=str(board.id), user_id=str(user_id))
            raise NotBoardParticipantError()

        if not member.is_active:
            logger.warning("inactive_board_member", board_id=str(board.id), user_id=str(user_id))
            raise InactiveMemberError()

        return member.role

    def resolve_role(self, board_id: UUID, user_id: UUID):
        """Load the board and resolve the user's role on it."""
        return self.resolve_role_on(self.load_board(board_id), user_id)

    def has_capability_on(self, board: Board, user_id: UUID, capability: Capability) -> bool:
        role = self.resolve_role_on(board, user_id)
        return _PREDICATES[capability](board, user_id, role)

    def has_capability(self, board_id: UUID, user_id: UUID, capability: Capability) -> bool:
        return self.has_capability_on(self.load_board(board_id), user_id, capability)

    def require(
        self,
        board: Board,
        user_id: UUID,
        capability: Capability,
        message: Optional[str] = None
    ):
        """
        Assert that ``user_id`` holds ``capability`` on ``board``.

        Returns:
            The resolved role

        Raises:
            BoardsPermissionDeniedError: If the role cannot be resolved or
                does not grant the capability
        """
        role = self.resolve_role_on(board, user_id)
        if not _PREDICATES[capability](board, user_id, role):
            logger.warning(
                "capability_denied",
                board_id=str(board.id),
                user_id=str(user_id),
                role=str(role),
                capability=capability.value,
            )
            raise InsufficientPermissionsError(message)
        return role

    def can_read(self, board_id: UUID, user_id: UUID) -> bool:
        return self.has_capability(board_id, user_id, Capability.READ)

    def can_write(self, board_id: UUID, user_id: UUID) -> bool:
        return self.has_capability(board_id, user_id, Capability.WRITE)

    def can_admin(self, board_id: UUID, user_id: UUID) -> bool:
        return self.has_capability(board_id, user_id, Capability.MANAGE_SETTINGS)

    def can_manage_members(self, board_id: UUID, user_id: UUID) -> bool:
        return self.has_capability(board_id, user_id, Capability.MANAGE_MEMBERS)

    def can_archive(self, board_id: UUID, user_id: UUID) -> bool:
        return self.has_capability(board_id, user_id, Capability.ARCHIVE)

    def can_toggle_star(self, board_id: UUID, user_id: UUID) -> bool:
        return self.has_capability(board_id, user_id, Capability.TOGGLE_STAR)

    def can_delete(self, board_id: UUID, user_id: UUID) -> bool:
        return self.has_capability(board_id, user_id, Capability.DELETE)


def resolve_role(*, board_id: UUID, user_id: UUID):
    """Resolve a user's effective role on a board with the default stores."""
    return PermissionResolver().resolve_role(board_id, user_id)


def has_capability(*, board_id: UUID, user_id: UUID, capability: Capability) -> bool:
    """Capability check with the default stores."""
    return PermissionResolver().has_capability(board_id, user_id, capability)
