# Generated manually for the activity app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Activity',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('board_create', 'Board created'), ('board_rename', 'Board renamed'), ('board_update_description', 'Board description updated'), ('board_archive', 'Board archived'), ('board_unarchive', 'Board unarchived'), ('board_delete', 'Board deleted'), ('board_add_member', 'Member added'), ('board_remove_member', 'Member removed'), ('board_update_member_role', 'Member role updated')], max_length=40)),
                ('board_id', models.UUIDField(blank=True, db_index=True, null=True)),
                ('payload', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('actor', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activities', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'activities',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['board_id', 'created_at'], name='activities_board_created_idx')],
            },
        ),
    ]
