import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('slots', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('level', models.CharField(choices=[('experienced', 'Experienced'), ('inexperienced', 'Inexperienced')], help_text='Lifter experience level at booking time', max_length=20)),
                ('status', models.CharField(choices=[('booked', 'Booked'), ('canceled_by_lifter', 'Canceled by lifter'), ('canceled_by_admin', 'Canceled by admin'), ('no_show', 'No-show'), ('attended', 'Attended')], default='booked', max_length=20)),
                ('canceled_at', models.DateTimeField(blank=True, null=True)),
                ('cancel_reason', models.TextField(blank=True)),
                ('lifter', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='accounts.userprofile')),
                ('slot', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bookings', to='slots.slot')),
            ],
            options={
                'verbose_name': 'Booking',
                'verbose_name_plural': 'Bookings',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['slot', 'status'], name='booking_slot_status_idx'),
                    models.Index(fields=['lifter', 'created_at'], name='booking_lifter_created_idx'),
                    models.Index(fields=['lifter', 'slot'], name='booking_lifter_slot_idx'),
                    models.Index(fields=['status'], name='booking_status_idx'),
                ],
            },
        ),
    ]
