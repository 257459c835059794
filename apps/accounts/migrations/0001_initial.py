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
            name='UserProfile',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('role', models.CharField(choices=[('admin', 'Admin'), ('lifter', 'Lifter')], db_index=True, max_length=10)),
                ('experience_level', models.CharField(blank=True, choices=[('experienced', 'Experienced'), ('inexperienced', 'Inexperienced')], help_text='Required for lifters before they can book', max_length=20, null=True)),
                ('weekly_quota', models.PositiveIntegerField(blank=True, help_text='Defaulted from policy at creation; snapshotted into each new quota window', null=True)),
                ('status', models.CharField(choices=[('active', 'Active'), ('frozen', 'Frozen')], db_index=True, default='active', max_length=10)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='gym_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'User Profile',
                'verbose_name_plural': 'User Profiles',
                'ordering': ['joined_at'],
            },
        ),
    ]
