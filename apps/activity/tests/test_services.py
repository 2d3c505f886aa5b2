import pytest
from uuid import uuid4
from unittest.mock import patch

from apps.activity.models import Activity, ActivityType
from apps.activity.services import ActivitySink, get_board_activities, record_activity


@pytest.mark.django_db
class TestRecordActivity:

    def test_records_entry(self, actor):
        board_id = uuid4()
        target_id = uuid4()

        activity = record_activity(
            event_type=ActivityType.BOARD_ADD_MEMBER,
            actor_id=actor.id,
            payload={'user_id': target_id, 'role': 'editor'},
            board_id=board_id
        )

        assert activity is not None
        assert activity.type == ActivityType.BOARD_ADD_MEMBER
        assert activity.actor == actor
        # UUIDs are stored as strings
        assert activity.payload == {'user_id': str(target_id), 'role': 'editor'}

    def test_payload_defaults_to_empty(self, actor):
        activity = record_activity(event_type=ActivityType.BOARD_CREATE, actor_id=actor.id)

        assert activity.payload == {}
        assert activity.board_id is None

    def test_failure_is_swallowed(self, actor):
        with patch('apps.activity.services.Activity.objects.create', side_effect=RuntimeError("db down")):
            result = record_activity(
                event_type=ActivityType.BOARD_DELETE,
                actor_id=actor.id,
                board_id=uuid4()
            )

        assert result is None
        assert Activity.objects.count() == 0

    def test_sink_records_through_service(self, actor):
        board_id = uuid4()

        ActivitySink().record(ActivityType.BOARD_ARCHIVE, actor.id, {'board_title': 'Roadmap'}, board_id)

        entries = list(get_board_activities(board_id=board_id))
        assert len(entries) == 1
        assert entries[0].payload == {'board_title': 'Roadmap'}

    def test_entries_survive_actor_deletion(self, actor):
        board_id = uuid4()
        record_activity(event_type=ActivityType.BOARD_CREATE, actor_id=actor.id, board_id=board_id)

        actor.delete()

        entry = Activity.objects.get(board_id=board_id)
        assert entry.actor_id is None
