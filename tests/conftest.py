"""
Shared fixtures for the participants test suite.
"""
import datetime

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from participants.classification import Category
from participants.models import Region, Majlis, EventSettings, Participant, RegistrationSequence


@pytest.fixture
def years_ago():
    """Date `years` years (plus `days` days) before `today` (defaults to the local date)."""
    def _years_ago(years, days=0, today=None):
        today = today or timezone.localdate()
        try:
            birthday = today.replace(year=today.year - years)
        except ValueError:
            # 29 February in a non-leap year
            birthday = today.replace(year=today.year - years, day=28)
        return birthday - datetime.timedelta(days=days)
    return _years_ago


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='desk', password='desk-pass-123')


@pytest.fixture
def auth_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def api_client(user):
    api = APIClient()
    api.force_authenticate(user=user)
    return api


@pytest.fixture
def region(db):
    return Region.objects.create(name='Nairobi')


@pytest.fixture
def majlis(region):
    return Majlis.objects.create(name='Eastleigh', region=region)


@pytest.fixture
def other_region(db):
    return Region.objects.create(name='Coast')


@pytest.fixture
def other_majlis(other_region):
    return Majlis.objects.create(name='Mombasa', region=other_region)


@pytest.fixture
def event_settings(db):
    return EventSettings.objects.create(
        event_name='Annual Majlis Khudam-ul-Ahmadiyya Kenya Ijtemaa',
        khuddam_ordinal=51,
        atfal_ordinal=23,
        year=2025,
        venue='Nairobi, Kenya',
        theme='Serve humanity',
        start_date=datetime.date(2025, 8, 22),
        end_date=datetime.date(2025, 8, 24),
    )


@pytest.fixture
def make_participant(region, majlis):
    """Store a participant directly, as an imported record would be."""
    def _make_participant(registration_number, category=Category.KHUDDAM, **overrides):
        fields = {
            'registration_number': registration_number,
            'full_name': 'Imported Participant',
            'date_of_birth': datetime.date(2000, 1, 1),
            'age': 25,
            'category': category,
            'phone_number': '0712345678',
            'region': region,
            'majlis': majlis,
            'date_of_arrival': datetime.date(2025, 8, 22),
        }
        fields.update(overrides)
        return Participant.objects.create(**fields)
    return _make_participant


@pytest.fixture
def fresh_sequences(db):
    """Reset every category counter to UNINITIALIZED."""
    for category in Category:
        RegistrationSequence.objects.update_or_create(category=category, defaults={'last_value': 0})
