"""
Domain-specific exceptions for boards app.

Every exception belongs to exactly one error kind (not found, permission
denied, conflict, business rule violation, input error, internal error).
Callers catch the kind, never a generic failure, because each kind maps
to a distinct HTTP status in the views.
"""


class BoardsServiceError(Exception):
    """Base exception for all boards service errors."""

    default_message = "Board operation failed"
    code = 'BOARD_ERROR'

    def __init__(self, message=None, *, code=None):
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(self.message)


# ---------------------------------------------------------------- not found

class BoardsNotFoundError(BoardsServiceError):
    """A board, member or user does not exist."""
    default_message = "Resource not found"
    code = 'NOT_FOUND'


class BoardNotFoundError(BoardsNotFoundError):
    default_message = "Board not found"
    code = 'BOARD_NOT_FOUND'


class MemberNotFoundError(BoardsNotFoundError):
    default_message = "Board member not found"
    code = 'MEMBER_NOT_FOUND'


class UserNotFoundError(BoardsNotFoundError):
    default_message = "User not found"
    code = 'USER_NOT_FOUND'


# -------------------------------------------------------- permission denied

class BoardsPermissionDeniedError(BoardsServiceError):
    """The actor's role could not be resolved or lacks the capability."""
    default_message = "Permission denied"
    code = 'PERMISSION_DENIED'


class NotBoardParticipantError(BoardsPermissionDeniedError):
    default_message = "User is not a board participant"
    code = 'NOT_BOARD_PARTICIPANT'


class InactiveMemberError(BoardsPermissionDeniedError):
    default_message = "Board member is inactive"
    code = 'MEMBER_INACTIVE'


class InsufficientPermissionsError(BoardsPermissionDeniedError):
    default_message = "Insufficient permissions for this board action"
    code = 'INSUFFICIENT_PERMISSIONS'


# ----------------------------------------------------------------- conflict

class BoardsConflictError(BoardsServiceError):
    """The current state conflicts with the request."""
    default_message = "Conflicting board state"
    code = 'CONFLICT'


class BoardArchivedError(BoardsConflictError):
    default_message = "Archived boards cannot be modified"
    code = 'BOARD_ARCHIVED'


class AlreadyMemberError(BoardsConflictError):
    default_message = "User is already a member of this board"
    code = 'MEMBER_ALREADY_EXISTS'


class MemberAlreadyInactiveError(BoardsConflictError):
    default_message = "Board member is already inactive"
    code = 'MEMBER_ALREADY_INACTIVE'


# -------------------------------------------------- business rule violation

class BusinessRuleViolationError(BoardsServiceError):
    """The request would break a structural membership invariant."""
    default_message = "Business rule violation"
    code = 'BUSINESS_RULE_VIOLATION'


class CannotRemoveOwnerError(BusinessRuleViolationError):
    default_message = "The board owner cannot be removed"
    code = 'OWNER_REMOVAL_DENIED'


class CannotChangeOwnerRoleError(BusinessRuleViolationError):
    default_message = "The board owner's role cannot be changed"
    code = 'OWNER_ROLE_CHANGE_DENIED'


class LastMemberRemovalError(BusinessRuleViolationError):
    default_message = "The last active board member cannot be removed"
    code = 'LAST_MEMBER_REMOVAL_DENIED'


class OwnerMembershipError(BusinessRuleViolationError):
    default_message = "The board owner cannot hold a membership"
    code = 'OWNER_MEMBERSHIP_DENIED'


# -------------------------------------------------------------- input error

class BoardsInputError(BoardsServiceError):
    """The command itself is malformed or self-targeting."""
    default_message = "Invalid input"
    code = 'INVALID_INPUT'


class SelfRemovalError(BoardsInputError):
    default_message = "You cannot remove yourself from a board"
    code = 'SELF_REMOVAL_DENIED'


class SelfRoleChangeError(BoardsInputError):
    default_message = "You cannot change your own role"
    code = 'SELF_ROLE_CHANGE_DENIED'


class InvalidRoleError(BoardsInputError):
    default_message = "Invalid board role"
    code = 'INVALID_ROLE'


# ----------------------------------------------------------- internal error

class BoardsInternalError(BoardsServiceError):
    """Unexpected persistence failure."""
    default_message = "Internal error while persisting board data"
    code = 'INTERNAL_ERROR'
