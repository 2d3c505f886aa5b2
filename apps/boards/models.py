# ==========================================
# apps/boards/models.py
# ==========================================

from django.db import models
import uuid

from apps.boards.roles import BoardRole, Capability, role_allows


def same_id(first, second) -> bool:
    """Compare two ids given as UUIDs or UUID strings in any letter case."""
    if first is None or second is None:
        return False
    try:
        return uuid.UUID(str(first)) == uuid.UUID(str(second))
    except ValueError:
        return False


class Board(models.Model):
    """
    Collaborative board.

    The owner is structural: it is never stored as a BoardMember row and
    always passes every capability check.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='owned_boards')
    is_archived = models.BooleanField(default=False)
    is_starred = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'boards'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='boards_owner_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    def is_owner(self, user_id) -> bool:
        return same_id(self.owner_id, user_id)

    def has_capability(self, user_id, role, capability: Capability) -> bool:
        """Owner passes unconditionally, everyone else goes through the capability table."""
        if self.is_owner(user_id):
            return True
        return role_allows(role, capability)

    def can_read(self, user_id, role) -> bool:
        return self.has_capability(user_id, role, Capability.READ)

    def can_write(self, user_id, role) -> bool:
        return self.has_capability(user_id, role, Capability.WRITE)

    def can_manage_settings(self, user_id, role) -> bool:
        return self.has_capability(user_id, role, Capability.MANAGE_SETTINGS)

    def can_archive(self, user_id, role) -> bool:
        return self.has_capability(user_id, role, Capability.ARCHIVE)

    def can_manage_members(self, user_id, role) -> bool:
        return self.has_capability(user_id, role, Capability.MANAGE_MEMBERS)

    def can_toggle_star(self, user_id, role) -> bool:
        return self.has_capability(user_id, role, Capability.TOGGLE_STAR)

    def can_delete(self, user_id, role) -> bool:
        return self.has_capability(user_id, role, Capability.DELETE)

    def archive(self):
        self.is_archived = True

    def unarchive(self):
        self.is_archived = False


class BoardMember(models.Model):
    """Non-owner participant of a board. Inactive rows are kept for the audit trail."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    board = models.ForeignKey(Board, on_delete=models.CASCADE, related_name='memberships')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='board_memberships')
    role = models.CharField(max_length=20, choices=BoardRole.choices, default=BoardRole.VIEWER)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'board_members'
        unique_together = [['board', 'user']]
        indexes = [
            models.Index(fields=['board', 'is_active'], name='board_members_active_idx'),
            models.Index(fields=['user', 'created_at'], name='board_members_user_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user_id} on {self.board_id} ({self.role})"

    def change_role(self, new_role):
        self.role = new_role

    def deactivate(self):
        self.is_active = False

    def activate(self, role=None):
        self.is_active = True
        if role is not None:
            self.role = role


class BoardList(models.Model):
    """Column of cards on a board."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    board = models.ForeignKey(Board, on_delete=models.CASCADE, related_name='lists')
    title = models.CharField(max_length=200)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'board_lists'
        ordering = ['position', 'created_at']

    def __str__(self):
        return self.title


class Card(models.Model):
    """Task card, owned by a board through its list."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    board_list = models.ForeignKey(BoardList, on_delete=models.CASCADE, related_name='cards')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'cards'
        ordering = ['position', 'created_at']

    def __str__(self):
        return self.title


class Label(models.Model):
    """Board-scoped card label."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    board = models.ForeignKey(Board, on_delete=models.CASCADE, related_name='labels')
    name = models.CharField(max_length=50)
    color = models.CharField(max_length=7, default='#000000')

    class Meta:
        db_table = 'labels'
        unique_together = [['board', 'name']]
        ordering = ['name']

    def __str__(self):
        return self.name
