"""
Activity recording service.

Audit events are fire-and-forget: a failure to record one is logged and
never propagates into the business operation that triggered it.
"""

from typing import Any, Mapping, Optional
from uuid import UUID

import structlog
from django.db import transaction

from apps.activity.models import Activity, ActivityType

logger = structlog.get_logger(__name__)


def _jsonable(payload: Optional[Mapping[str, Any]]) -> dict:
    # JSONField cannot encode UUIDs
    return {
        key: str(value) if isinstance(value, UUID) else value
        for key, value in (payload or {}).items()
    }


def record_activity(
    *,
    event_type: ActivityType,
    actor_id: Optional[UUID],
    payload: Optional[Mapping[str, Any]] = None,
    board_id: Optional[UUID] = None
) -> Optional[Activity]:
    """
    Persist an activity entry.

    The insert runs in its own savepoint so that a failing write does not
    poison the caller's surrounding transaction.

    Returns:
        The created Activity, or None if recording failed
    """
    try:
        with transaction.atomic():
            activity = Activity.objects.create(
                type=event_type,
                actor_id=actor_id,
                payload=_jsonable(payload),
                board_id=board_id,
            )
    except Exception:
        logger.exception(
            "activity_record_failed",
            event_type=str(event_type),
            actor_id=str(actor_id),
            board_id=str(board_id),
        )
        return None

    logger.debug("activity_recorded", event_type=str(event_type), board_id=str(board_id))
    return activity


def get_board_activities(*, board_id: UUID):
    """Return the activity trail of a board, newest first."""
    return Activity.objects.filter(board_id=board_id).select_related('actor')


class ActivitySink:
    """Audit-sink collaborator consumed by board services."""

    def record(self, event_type, actor_id, payload, board_id) -> None:
        record_activity(
            event_type=event_type,
            actor_id=actor_id,
            payload=payload,
            board_id=board_id,
        )
