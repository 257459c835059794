import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='QuotaWindow',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week_start', models.DateTimeField()),
                ('week_end', models.DateTimeField()),
                ('quota', models.PositiveIntegerField()),
                ('used', models.PositiveIntegerField(default=0)),
                ('lifter', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quota_windows', to='accounts.userprofile')),
            ],
            options={
                'verbose_name': 'Quota Window',
                'verbose_name_plural': 'Quota Windows',
                'ordering': ['-week_start'],
                'constraints': [
                    models.UniqueConstraint(fields=('lifter', 'week_start'), name='unique_quota_window_per_week'),
                    models.CheckConstraint(condition=models.Q(('used__gte', 0)), name='quota_window_used_non_negative'),
                ],
            },
        ),
    ]
