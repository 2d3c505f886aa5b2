"""
Membership management service.

Adds, removes and re-roles board members while enforcing the membership
invariants: the owner never holds a membership row, nobody removes or
re-roles themselves, and the last active member is never removed.
Removal is a soft delete so the audit trail keeps its subjects.
"""

from typing import List, Optional
from uuid import UUID

import structlog
from django.db import IntegrityError, transaction

from apps.activity.models import ActivityType
from apps.boards.models import Board, BoardMember, same_id
from apps.boards.roles import Capability, is_assignable_role
from apps.boards.services.dependencies import BoardDependencies, default_dependencies
from apps.boards.services.exceptions import (
    AlreadyMemberError,
    BoardArchivedError,
    CannotChangeOwnerRoleError,
    CannotRemoveOwnerError,
    InvalidRoleError,
    LastMemberRemovalError,
    MemberAlreadyInactiveError,
    MemberNotFoundError,
    OwnerMembershipError,
    SelfRemovalError,
    SelfRoleChangeError,
    UserNotFoundError,
)
from apps.boards.services.permissions import PermissionResolver

logger = structlog.get_logger(__name__)


class MembershipManager:
    """Membership lifecycle operations for a board."""

    def __init__(
        self,
        deps: Optional[BoardDependencies] = None,
        resolver: Optional[PermissionResolver] = None
    ):
        self.deps = deps or default_dependencies()
        self.resolver = resolver or PermissionResolver(self.deps)

    def _require_user(self, user_id: UUID, label: str) -> None:
        if not self.deps.users.exists(user_id):
            logger.warning("user_not_found", user_id=str(user_id), label=label)
            raise UserNotFoundError(f"{label.capitalize()} {user_id} not found")

    def _load_mutable_board(self, board_id: UUID) -> Board:
        # Row lock serializes concurrent membership changes on one board
        board = self.resolver.load_board(board_id, for_update=True)
        if board.is_archived:
            logger.warning("archived_board_modification", board_id=str(board_id))
            raise BoardArchivedError()
        return board

    def _load_active_member(self, board: Board, user_id: UUID) -> BoardMember:
        member = self.deps.memberships.find_by_board_and_user(board.id, user_id, for_update=True)
        if member is None:
            logger.warning("board_member_not_found", board_id=str(board.id), user_id=str(user_id))
            raise MemberNotFoundError()
        if not member.is_active:
            logger.warning("board_member_inactive", board_id=str(board.id), user_id=str(user_id))
            raise MemberAlreadyInactiveError()
        return member

    @transaction.atomic
    def add_member(
        self,
        *,
        board_id: UUID,
        user_id: UUID,
        role: str,
        requested_by: UUID
    ) -> BoardMember:
        """
        Grant a non-owner user access to a board.

        A previously removed (inactive) membership row is reactivated with
        the new role instead of creating a second row for the same user.

        Args:
            board_id: UUID of the board
            user_id: UUID of the user to add
            role: BoardRole to grant (admin, editor or viewer)
            requested_by: UUID of the acting user (must manage members)

        Returns:
            The active BoardMember

        Raises:
            InvalidRoleError: If role is not an assignable BoardRole
            UserNotFoundError: If the requester or target user doesn't exist
            BoardNotFoundError: If board doesn't exist
            BoardArchivedError: If the board is archived
            BoardsPermissionDeniedError: If requester cannot manage members
            OwnerMembershipError: If the target is the board owner
            AlreadyMemberError: If the target already has an active membership
        """
        logger.info(
            "board_member_add_started",
            board_id=str(board_id),
            user_id=str(user_id),
            role=str(role),
            requested_by=str(requested_by),
        )

        if not is_assignable_role(role):
            logger.warning("invalid_board_role", role=str(role))
            raise InvalidRoleError(f"Invalid role '{role}'")

        self._require_user(requested_by, "requesting user")
        board = self._load_mutable_board(board_id)
        self.resolver.require(
            board, requested_by, Capability.MANAGE_MEMBERS,
            "Only board owners and admins can add members"
        )
        self._require_user(user_id, "user")

        if board.is_owner(user_id):
            logger.warning("owner_membership_attempt", board_id=str(board_id))
            raise OwnerMembershipError()

        member = self.deps.memberships.find_by_board_and_user(board.id, user_id, for_update=True)
        reactivated = False
        if member is not None:
            if member.is_active:
                logger.warning("board_member_already_exists", board_id=str(board_id), user_id=str(user_id))
                raise AlreadyMemberError()
            member.activate(role=role)
            reactivated = True
        else:
            member = BoardMember(board=board, user_id=user_id, role=role, is_active=True)

        try:
            member = self.deps.memberships.save(member)
        except IntegrityError:
            # Concurrent add won the unique (board, user) constraint
            logger.warning("board_member_already_exists", board_id=str(board_id), user_id=str(user_id))
            raise AlreadyMemberError()

        logger.info(
            "board_member_added",
            member_id=str(member.id),
            board_id=str(board_id),
            user_id=str(user_id),
            role=str(role),
            reactivated=reactivated,
        )
        self.deps.audit.record(
            ActivityType.BOARD_ADD_MEMBER,
            requested_by,
            {'user_id': user_id, 'role': str(role), 'board_title': board.title},
            board.id,
        )
        return member

    @transaction.atomic
    def remove_member(
        self,
        *,
        board_id: UUID,
        user_id: UUID,
        requested_by: UUID
    ) -> BoardMember:
        """
        Remove a member from a board by deactivating the membership.

        The last-member floor counts membership rows only; the owner is not
        a row and so does not count toward it.

        Args:
            board_id: UUID of the board
            user_id: UUID of the member to remove
            requested_by: UUID of the acting user (must manage members)

        Returns:
            The deactivated BoardMember

        Raises:
            SelfRemovalError: If requested_by equals user_id
            BoardNotFoundError: If board doesn't exist
            BoardArchivedError: If the board is archived
            BoardsPermissionDeniedError: If requester cannot manage members
            CannotRemoveOwnerError: If the target is the board owner
            MemberNotFoundError: If the target has no membership
            MemberAlreadyInactiveError: If the membership is already inactive
            LastMemberRemovalError: If the target is the last active member
        """
        logger.info(
            "board_member_remove_started",
            board_id=str(board_id),
            user_id=str(user_id),
            requested_by=str(requested_by),
        )

        if same_id(user_id, requested_by):
            logger.warning("board_member_self_removal", user_id=str(user_id))
            raise SelfRemovalError()

        board = self._load_mutable_board(board_id)
        self.resolver.require(
            board, requested_by, Capability.MANAGE_MEMBERS,
            "Only board owners and admins can remove members"
        )

        # Owner has no membership row, so check identity before the lookup
        if board.is_owner(user_id):
            logger.warning("board_owner_removal_attempt", board_id=str(board_id))
            raise CannotRemoveOwnerError()

        member = self._load_active_member(board, user_id)

        if self.deps.memberships.count_active_by_board(board.id) <= 1:
            logger.warning("last_board_member_removal", board_id=str(board_id), member_id=str(member.id))
            raise LastMemberRemovalError()

        member.deactivate()
        member = self.deps.memberships.save(member)

        logger.info(
            "board_member_removed",
            member_id=str(member.id),
            board_id=str(board_id),
            user_id=str(user_id),
            role=str(member.role),
        )
        self.deps.audit.record(
            ActivityType.BOARD_REMOVE_MEMBER,
            requested_by,
            {'user_id': user_id, 'role': str(member.role), 'board_title': board.title},
            board.id,
        )
        return member

    @transaction.atomic
    def change_member_role(
        self,
        *,
        board_id: UUID,
        user_id: UUID,
        new_role: str,
        requested_by: UUID
    ) -> BoardMember:
        """
        Change a member's role.

        Changing to the current role succeeds without a write and is still
        recorded in the audit trail.

        Raises:
            SelfRoleChangeError: If requested_by equals user_id
            InvalidRoleError: If new_role is not an assignable BoardRole
            UserNotFoundError: If the requester doesn't exist
            BoardNotFoundError: If board doesn't exist
            BoardArchivedError: If the board is archived
            BoardsPermissionDeniedError: If requester cannot manage members
            CannotChangeOwnerRoleError: If the target is the board owner
            MemberNotFoundError: If the target has no membership
            MemberAlreadyInactiveError: If the membership is inactive
        """
        logger.info(
            "board_member_role_change_started",
            board_id=str(board_id),
            user_id=str(user_id),
            new_role=str(new_role),
            requested_by=str(requested_by),
        )

        if same_id(user_id, requested_by):
            logger.warning("board_member_self_role_change", user_id=str(user_id))
            raise SelfRoleChangeError()

        if not is_assignable_role(new_role):
            logger.warning("invalid_board_role", role=str(new_role))
            raise InvalidRoleError(f"Invalid role '{new_role}'")

        self._require_user(requested_by, "requesting user")
        board = self._load_mutable_board(board_id)
        self.resolver.require(
            board, requested_by, Capability.MANAGE_MEMBERS,
            "Only board owners and admins can change member roles"
        )

        if board.is_owner(user_id):
            logger.warning("board_owner_role_change_attempt", board_id=str(board_id))
            raise CannotChangeOwnerRoleError()

        member = self._load_active_member(board, user_id)
        old_role = member.role

        if old_role == new_role:
            logger.info("board_member_role_unchanged", member_id=str(member.id), role=str(old_role))
        else:
            member.change_role(new_role)
            member = self.deps.memberships.save(member)
            logger.info(
                "board_member_role_changed",
                member_id=str(member.id),
                board_id=str(board_id),
                old_role=str(old_role),
                new_role=str(new_role),
            )

        self.deps.audit.record(
            ActivityType.BOARD_UPDATE_MEMBER_ROLE,
            requested_by,
            {
                'user_id': user_id,
                'old_role': str(old_role),
                'new_role': str(new_role),
                'board_title': board.title,
            },
            board.id,
        )
        return member

    def get_board_members(self, *, board_id: UUID, requested_by: UUID) -> List[BoardMember]:
        """
        List the active members of a board (the owner is not included).

        Raises:
            BoardNotFoundError: If board doesn't exist
            BoardsPermissionDeniedError: If requester cannot read the board
        """
        board = self.resolver.load_board(board_id)
        self.resolver.require(board, requested_by, Capability.READ)
        return self.deps.memberships.list_active_by_board(board.id)


def add_member(*, board_id: UUID, user_id: UUID, role: str, requested_by: UUID) -> BoardMember:
    return MembershipManager().add_member(
        board_id=board_id, user_id=user_id, role=role, requested_by=requested_by
    )


def remove_member(*, board_id: UUID, user_id: UUID, requested_by: UUID) -> BoardMember:
    return MembershipManager().remove_member(
        board_id=board_id, user_id=user_id, requested_by=requested_by
    )


def change_member_role(
    *,
    board_id: UUID,
    user_id: UUID,
    new_role: str,
    requested_by: UUID
) -> BoardMember:
    return MembershipManager().change_member_role(
        board_id=board_id, user_id=user_id, new_role=new_role, requested_by=requested_by
    )


def get_board_members(*, board_id: UUID, requested_by: UUID) -> List[BoardMember]:
    return MembershipManager().get_board_members(board_id=board_id, requested_by=requested_by)
