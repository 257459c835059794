"""
Gym profile attached to an auth user.
The auth user is the verified identity; the profile carries the role,
experience level, weekly quota and account status the booking engine reads.
"""
from django.conf import settings
from django.db import models
from apps.core.models import UUIDModel


class Role(models.TextChoices):
    ADMIN  = 'admin',  'Admin'
    LIFTER = 'lifter', 'Lifter'


class ExperienceLevel(models.TextChoices):
    EXPERIENCED   = 'experienced',   'Experienced'
    INEXPERIENCED = 'inexperienced', 'Inexperienced'


class ProfileStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    FROZEN = 'frozen', 'Frozen'


class UserProfile(UUIDModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='gym_profile',
    )
    role = models.CharField(max_length=10, choices=Role.choices, db_index=True)
    experience_level = models.CharField(
        max_length=20, choices=ExperienceLevel.choices, null=True, blank=True,
        help_text='Required for lifters before they can book',
    )
    weekly_quota = models.PositiveIntegerField(
        null=True, blank=True,
        help_text='Defaulted from policy at creation; snapshotted into each new quota window',
    )
    status = models.CharField(
        max_length=10, choices=ProfileStatus.choices,
        default=ProfileStatus.ACTIVE, db_index=True,
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'User Profile'
        verbose_name_plural = 'User Profiles'
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.display_name} ({self.role})"

    @property
    def display_name(self):
        return self.user.get_full_name() or self.user.username

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def is_lifter(self):
        return self.role == Role.LIFTER
