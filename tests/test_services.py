"""
Tests for the register_participant flow.
"""
import datetime
from unittest import mock

import pytest
from django.db import DatabaseError, IntegrityError, transaction

from participants.classification import Category
from participants.exceptions import InvalidDateError, SequenceUnavailableError, UnclassifiedAgeError
from participants.models import Participant, RegistrationSequence
from participants.services import register_participant

REFERENCE = datetime.date(2025, 8, 22)


@pytest.fixture
def register(region, majlis, user, fresh_sequences):
    def _register(date_of_birth, **overrides):
        fields = {
            'full_name': '  Ahmad Ali ',
            'date_of_birth': date_of_birth,
            'region': region,
            'majlis': majlis,
            'date_of_arrival': REFERENCE,
            'phone_number': '0712345678',
            'created_by': user,
            'reference_date': REFERENCE,
        }
        fields.update(overrides)
        return register_participant(**fields)
    return _register


@pytest.mark.django_db
class TestRegisterParticipant:

    def test_khuddam_registration(self, register, user):
        participant = register(datetime.date(2000, 1, 1), luggage_box_number=12)

        participant.refresh_from_db()
        assert participant.registration_number == 'K-0001'
        assert participant.full_name == 'Ahmad Ali'
        assert participant.category == Category.KHUDDAM
        assert participant.age == 25
        assert participant.luggage_box_number == 12
        assert participant.created_by == user

    def test_each_category_numbers_independently(self, register):
        assert register(datetime.date(2000, 1, 1)).registration_number == 'K-0001'
        assert register(datetime.date(2015, 1, 1)).registration_number == 'A-0001'
        assert register(datetime.date(2020, 1, 1)).registration_number == 'U-0001'
        assert register(datetime.date(1990, 1, 1)).registration_number == 'K-0002'

    def test_unclassified_age_issues_nothing(self, register):
        with pytest.raises(UnclassifiedAgeError):
            register(datetime.date(1980, 1, 1))

        assert Participant.objects.count() == 0
        assert not RegistrationSequence.objects.filter(last_value__gt=0).exists()

    def test_future_birth_date_issues_nothing(self, register):
        with pytest.raises(InvalidDateError):
            register(REFERENCE + datetime.timedelta(days=3))

        assert not RegistrationSequence.objects.filter(last_value__gt=0).exists()

    def test_failed_save_abandons_number(self, register):
        with mock.patch.object(Participant, 'save', side_effect=DatabaseError('insert failed')):
            with pytest.raises(DatabaseError):
                register(datetime.date(2000, 1, 1))

        assert Participant.objects.count() == 0
        assert RegistrationSequence.objects.get(category=Category.KHUDDAM).last_value == 1
        assert register(datetime.date(2000, 1, 1)).registration_number == 'K-0002'

    def test_deleted_number_is_not_reused(self, register):
        first = register(datetime.date(2000, 1, 1))
        first.delete()

        assert register(datetime.date(2000, 1, 1)).registration_number == 'K-0002'

    def test_sequence_unavailable_saves_nothing(self, register):
        with mock.patch(
            'participants.services.issue_registration_number',
            side_effect=SequenceUnavailableError('Registration number could not be allocated. Please try again.'),
        ):
            with pytest.raises(SequenceUnavailableError):
                register(datetime.date(2000, 1, 1))

        assert Participant.objects.count() == 0


@pytest.mark.django_db
class TestParticipantStorage:

    def test_birth_date_is_required(self, make_participant):
        with pytest.raises(IntegrityError), transaction.atomic():
            make_participant('K-0099', date_of_birth=None)
