# ==========================================
# apps/boards/admin.py
# ==========================================

from django.contrib import admin
from apps.boards.models import Board, BoardMember, BoardList, Card, Label


class BoardMemberInline(admin.TabularInline):
    """Inline admin for board memberships."""
    model = BoardMember
    extra = 0
    fields = ['user', 'role', 'is_active', 'created_at']
    readonly_fields = ['created_at']


class BoardListInline(admin.TabularInline):
    model = BoardList
    extra = 0
    fields = ['title', 'position']


@admin.register(Board)
class BoardAdmin(admin.ModelAdmin):
    """Admin interface for Boards."""

    list_display = ['title', 'owner', 'is_archived', 'is_starred', 'created_at']
    list_filter = ['is_archived', 'is_starred', 'created_at']
    search_fields = ['title', 'description', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [BoardMemberInline, BoardListInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']


@admin.register(BoardMember)
class BoardMemberAdmin(admin.ModelAdmin):
    list_display = ['user', 'board', 'role', 'is_active', 'created_at']
    list_filter = ['role', 'is_active']
    search_fields = ['user__email', 'board__title']


@admin.register(Card)
class CardAdmin(admin.ModelAdmin):
    list_display = ['title', 'board_list', 'position', 'created_at']
    search_fields = ['title']


@admin.register(Label)
class LabelAdmin(admin.ModelAdmin):
    list_display = ['name', 'color', 'board']
