# ==========================================
# apps/activity/admin.py
# ==========================================

from django.contrib import admin
from apps.activity.models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    """Read-only audit trail."""

    list_display = ['type', 'actor', 'board_id', 'created_at']
    list_filter = ['type', 'created_at']
    search_fields = ['actor__email', 'board_id']
    readonly_fields = ['type', 'actor', 'board_id', 'payload', 'created_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False
