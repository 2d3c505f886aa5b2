"""
Boards app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and row locks on the board.
"""

from .exceptions import (
    BoardsServiceError,
    BoardsNotFoundError,
    BoardsPermissionDeniedError,
    BoardsConflictError,
    BusinessRuleViolationError,
    BoardsInputError,
    BoardsInternalError,
    BoardNotFoundError,
    MemberNotFoundError,
    UserNotFoundError,
    NotBoardParticipantError,
    InactiveMemberError,
    InsufficientPermissionsError,
    BoardArchivedError,
    AlreadyMemberError,
    MemberAlreadyInactiveError,
    CannotRemoveOwnerError,
    CannotChangeOwnerRoleError,
    LastMemberRemovalError,
    OwnerMembershipError,
    SelfRemovalError,
    SelfRoleChangeError,
    InvalidRoleError,
)

from .dependencies import BoardDependencies, default_dependencies

from .permissions import (
    PermissionResolver,
    resolve_role,
    has_capability,
)

from .board_management import (
    BoardManager,
    create_board,
    get_board,
    update_board,
    archive_board,
    unarchive_board,
    star_board,
    unstar_board,
)

from .membership_management import (
    MembershipManager,
    add_member,
    remove_member,
    change_member_role,
    get_board_members,
)

from .board_deletion import (
    BoardDeletionOrchestrator,
    delete_board,
)


__all__ = [
    # Exceptions
    'BoardsServiceError',
    'BoardsNotFoundError',
    'BoardsPermissionDeniedError',
    'BoardsConflictError',
    'BusinessRuleViolationError',
    'BoardsInputError',
    'BoardsInternalError',
    'BoardNotFoundError',
    'MemberNotFoundError',
    'UserNotFoundError',
    'NotBoardParticipantError',
    'InactiveMemberError',
    'InsufficientPermissionsError',
    'BoardArchivedError',
    'AlreadyMemberError',
    'MemberAlreadyInactiveError',
    'CannotRemoveOwnerError',
    'CannotChangeOwnerRoleError',
    'LastMemberRemovalError',
    'OwnerMembershipError',
    'SelfRemovalError',
    'SelfRoleChangeError',
    'InvalidRoleError',

    # Collaborators
    'BoardDependencies',
    'default_dependencies',

    # Permissions
    'PermissionResolver',
    'resolve_role',
    'has_capability',

    # Board Management
    'BoardManager',
    'create_board',
    'get_board',
    'update_board',
    'archive_board',
    'unarchive_board',
    'star_board',
    'unstar_board',

    # Membership Management
    'MembershipManager',
    'add_member',
    'remove_member',
    'change_member_role',
    'get_board_members',

    # Deletion
    'BoardDeletionOrchestrator',
    'delete_board',
]
