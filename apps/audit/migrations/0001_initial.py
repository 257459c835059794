import django.core.serializers.json
import django.db.models.deletion
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('action', models.CharField(choices=[('policy_updated', 'Policy updated'), ('user_profile_created', 'User profile created'), ('user_status_updated', 'User status updated'), ('slot_created', 'Slot created'), ('slot_updated', 'Slot updated'), ('slot_deleted', 'Slot deleted'), ('slots_autofilled_day', 'Day auto-filled with slots'), ('quota_window_created', 'Quota window created'), ('booking_created', 'Booking created'), ('booking_canceled', 'Booking canceled'), ('booking_no_show', 'Booking marked no-show'), ('booking_attended', 'Booking marked attended')], db_index=True, max_length=40)),
                ('entity', models.CharField(max_length=40)),
                ('entity_id', models.CharField(max_length=64)),
                ('payload', models.JSONField(blank=True, encoder=django.core.serializers.json.DjangoJSONEncoder, null=True)),
                ('at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('actor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='audit_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Audit Log',
                'verbose_name_plural': 'Audit Logs',
                'ordering': ['-at'],
            },
        ),
    ]
