"""
Management command to set up initial registration data.
Run this after migrations: python manage.py setup_initial_data
"""
import datetime

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from participants.classification import Category
from participants.models import Region, Majlis, RegistrationSequence, EventSettings


REGIONS = {
    'Nairobi': ['Nairobi Central', 'Eastleigh', 'Kibera'],
    'Coast': ['Mombasa', 'Malindi'],
    'Nyanza': ['Kisumu', 'Homa Bay'],
    'Western': ['Kakamega', 'Bungoma'],
}


class Command(BaseCommand):
    help = 'Sets up initial registration data (sequences, regions, majlis, event settings)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--no-sample-regions',
            action='store_true',
            help='Only create sequences and event settings.',
        )

    def handle(self, *args, **options):
        self.stdout.write('Setting up initial registration data...')

        try:
            with transaction.atomic():
                for category in Category:
                    sequence, created = RegistrationSequence.objects.get_or_create(
                        category=category, defaults={'last_value': 0}
                    )
                    if created:
                        self.stdout.write(self.style.SUCCESS(f'✓ Created sequence: {category.label}'))
                    else:
                        self.stdout.write(self.style.WARNING(
                            f'Sequence {category.label} already exists ({sequence.state}, last {sequence.last_value})'
                        ))

                if not options['no_sample_regions']:
                    for region_name, majlis_names in REGIONS.items():
                        region, created = Region.objects.get_or_create(name=region_name)
                        if created:
                            self.stdout.write(self.style.SUCCESS(f'✓ Created Region: {region.name}'))
                        else:
                            self.stdout.write(self.style.WARNING(f'Region {region.name} already exists'))
                        for majlis_name in majlis_names:
                            majlis, created = Majlis.objects.get_or_create(region=region, name=majlis_name)
                            if created:
                                self.stdout.write(self.style.SUCCESS(f'  ✓ Created Majlis: {majlis.name}'))

                if EventSettings.current() is None:
                    today = timezone.localdate()
                    start = today + datetime.timedelta(days=30)
                    event = EventSettings.objects.create(
                        year=start.year,
                        start_date=start,
                        end_date=start + datetime.timedelta(days=2),
                    )
                    self.stdout.write(self.style.SUCCESS(f'✓ Created Event Settings: {event}'))
                else:
                    self.stdout.write(self.style.WARNING('Event Settings already exist'))

        except Exception as e:
            self.stdout.write(self.style.ERROR(f'Error setting up initial data: {str(e)}'))
            raise

        self.stdout.write(self.style.SUCCESS('\n✓ Initial data setup complete!'))
