"""
Policy model: admin-configurable key/value parameters.
Values are stored as plain strings and parsed by whoever reads them.
"""
from django.db import models
from apps.core.models import UUIDModel


class Policy(UUIDModel):
    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Policy'
        verbose_name_plural = 'Policies'
        ordering = ['key']

    def __str__(self):
        return f"{self.key} = {self.value}"
