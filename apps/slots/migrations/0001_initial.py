import django.db.models.deletion
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
            name='Slot',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('starts_at', models.DateTimeField(db_index=True)),
                ('ends_at', models.DateTimeField()),
                ('tz', models.CharField(help_text='Gym timezone at creation; display only', max_length=64)),
                ('capacity_total', models.PositiveIntegerField()),
                ('capacity_exp', models.PositiveIntegerField(help_text='Seats reserved for experienced lifters')),
                ('capacity_inexp', models.PositiveIntegerField(help_text='Seats reserved for inexperienced lifters')),
                ('status', models.CharField(choices=[('open', 'Open'), ('closed', 'Closed'), ('canceled', 'Canceled')], db_index=True, default='open', max_length=10)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_slots', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Slot',
                'verbose_name_plural': 'Slots',
                'ordering': ['starts_at'],
                'indexes': [models.Index(fields=['starts_at', 'ends_at'], name='slot_starts_ends_idx')],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('starts_at__lt', models.F('ends_at'))), name='slot_starts_before_ends'),
                    models.CheckConstraint(condition=models.Q(('capacity_total__gte', models.F('capacity_exp') + models.F('capacity_inexp'))), name='slot_level_capacity_within_total'),
                ],
            },
        ),
    ]
