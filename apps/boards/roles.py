"""
Board roles and the capability table.

``CAPABILITY_TABLE`` is the single source of truth for what each role may
do on a board. Ownership is not a stored role: the board owner resolves
to the ``OWNER`` sentinel, which never appears on a membership row.
"""

from enum import Enum

from django.db import models


class BoardRole(models.TextChoices):
    """Roles that can be stored on a BoardMember row."""
    ADMIN = 'admin', 'Admin'
    EDITOR = 'editor', 'Editor'
    VIEWER = 'viewer', 'Viewer'


# Resolved role of the board's structural owner
OWNER = 'owner'


class Capability(Enum):
    READ = 'read'
    WRITE = 'write'
    MANAGE_SETTINGS = 'manage_settings'
    ARCHIVE = 'archive'
    MANAGE_MEMBERS = 'manage_members'
    TOGGLE_STAR = 'toggle_star'
    DELETE = 'delete'


CAPABILITY_TABLE = {
    Capability.READ: frozenset({OWNER, BoardRole.ADMIN, BoardRole.EDITOR, BoardRole.VIEWER}),
    Capability.WRITE: frozenset({OWNER, BoardRole.ADMIN, BoardRole.EDITOR}),
    Capability.MANAGE_SETTINGS: frozenset({OWNER, BoardRole.ADMIN}),
    Capability.ARCHIVE: frozenset({OWNER, BoardRole.ADMIN}),
    Capability.MANAGE_MEMBERS: frozenset({OWNER, BoardRole.ADMIN}),
    Capability.TOGGLE_STAR: frozenset({OWNER, BoardRole.ADMIN, BoardRole.EDITOR}),
    Capability.DELETE: frozenset({OWNER}),
}


def role_allows(role, capability: Capability) -> bool:
    """
    Return True if ``role`` grants ``capability``.

    Unknown roles and unknown capabilities grant nothing.
    """
    if role is None:
        return False
    try:
        return role in CAPABILITY_TABLE.get(capability, frozenset())
    except TypeError:
        # unhashable role value
        return False


def is_assignable_role(role) -> bool:
    """Return True if ``role`` may be stored on a membership row."""
    return role in BoardRole.values
