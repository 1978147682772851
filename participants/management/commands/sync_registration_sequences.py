"""
Management command to bring registration sequences up to date with the
numbers already stored on participants (e.g. after importing records).

A sequence is only ever moved forward: if its last value is below the
highest issued number it is raised to that number, otherwise left alone.

Run: python manage.py sync_registration_sequences
Use --dry-run to only print what would be changed.
"""
from django.core.management.base import BaseCommand
from django.db import models, transaction
from django.db.models.functions import Greatest

from participants.classification import Category
from participants.models import RegistrationSequence
from participants.utils import get_highest_issued_value


class Command(BaseCommand):
    help = 'Raise registration sequences that lag behind issued registration numbers'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Only show what would be updated, do not save.',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        if dry_run:
            self.stdout.write(self.style.WARNING('Dry run: no changes will be saved.'))

        raised = 0
        for category in Category:
            highest = get_highest_issued_value(category)
            sequence, _ = RegistrationSequence.objects.get_or_create(
                category=category, defaults={'last_value': 0}
            )
            if sequence.last_value >= highest:
                self.stdout.write(f'  {category.label}: up to date (last {sequence.last_value}, highest issued {highest})')
                continue

            if not dry_run:
                with transaction.atomic():
                    # Greatest() keeps any numbers issued while this ran
                    RegistrationSequence.objects.filter(category=category).update(
                        last_value=Greatest('last_value', highest, output_field=models.PositiveIntegerField())
                    )
            raised += 1
            self.stdout.write(self.style.NOTICE(
                f'  {category.label}: {sequence.last_value} -> {highest}'
            ))

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS(f'Done. Sequences raised: {raised}'))
        if dry_run and raised:
            self.stdout.write(self.style.WARNING('Run without --dry-run to apply changes.'))
