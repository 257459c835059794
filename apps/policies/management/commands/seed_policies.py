"""
Seed management command.

Inserts every default booking policy that is not stored yet. Existing
values are never overwritten, so it is safe to run on every deploy.

Usage:
    python manage.py seed_policies
"""
from django.core.management.base import BaseCommand
from apps.policies.store import default_policies, seed_defaults


class Command(BaseCommand):
    help = 'Seed default booking policies (only keys that are missing)'

    def handle(self, *args, **options):
        self.stdout.write('Seeding policies...')
        inserted = seed_defaults()
        total = len(default_policies())
        self.stdout.write(self.style.SUCCESS(
            f'seed_policies: inserted {inserted} of {total} default policies'
        ))
