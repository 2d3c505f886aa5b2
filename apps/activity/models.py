# ==========================================
# apps/activity/models.py
# ==========================================

from django.db import models
import uuid


class ActivityType(models.TextChoices):
    BOARD_CREATE = 'board_create', 'Board created'
    BOARD_RENAME = 'board_rename', 'Board renamed'
    BOARD_UPDATE_DESCRIPTION = 'board_update_description', 'Board description updated'
    BOARD_ARCHIVE = 'board_archive', 'Board archived'
    BOARD_UNARCHIVE = 'board_unarchive', 'Board unarchived'
    BOARD_DELETE = 'board_delete', 'Board deleted'
    BOARD_ADD_MEMBER = 'board_add_member', 'Member added'
    BOARD_REMOVE_MEMBER = 'board_remove_member', 'Member removed'
    BOARD_UPDATE_MEMBER_ROLE = 'board_update_member_role', 'Member role updated'


class Activity(models.Model):
    """Audit trail entry for a board-level action."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=40, choices=ActivityType.choices)
    actor = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='activities'
    )
    # Plain id, not a FK: entries outlive the board they describe
    board_id = models.UUIDField(null=True, blank=True, db_index=True)
    payload = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'activities'
        indexes = [
            models.Index(fields=['board_id', 'created_at'], name='activities_board_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.type} by {self.actor_id} on {self.board_id}"
