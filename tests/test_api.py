"""
Tests for the JSON API.
"""
from unittest import mock

import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from participants.classification import Category
from participants.exceptions import SequenceUnavailableError
from participants.models import Participant


@pytest.mark.django_db
class TestClassifyEndpoint:

    def test_requires_authentication(self):
        response = APIClient().get(reverse('api_classify'), {'date_of_birth': '2010-01-01'})
        assert response.status_code == 403

    def test_classified(self, api_client):
        response = api_client.get(reverse('api_classify'), {'date_of_birth': '2015-08-23', 'now': '2025-08-22'})

        assert response.status_code == 200
        assert response.json() == {
            'age_years': 9,
            'category': 'Atfal',
            'category_code': 'ATFAL',
            'can_submit': True,
        }

    def test_age_fifteen(self, api_client):
        response = api_client.get(reverse('api_classify'), {'date_of_birth': '2010-08-22', 'now': '2025-08-22'})
        assert response.json()['category'] == 'Atfal'

    def test_unclassified(self, api_client):
        response = api_client.get(reverse('api_classify'), {'date_of_birth': '1984-08-22', 'now': '2025-08-22'})

        body = response.json()
        assert response.status_code == 200
        assert body['age_years'] == 41
        assert body['category'] is None
        assert body['can_submit'] is False
        assert 'outside all participant categories' in body['message']

    @pytest.mark.parametrize('params', [
        {},
        {'date_of_birth': 'yesterday'},
        {'date_of_birth': '2030-01-01', 'now': '2025-08-22'},
    ])
    def test_invalid_dates(self, api_client, params):
        response = api_client.get(reverse('api_classify'), params)

        assert response.status_code == 400
        assert response.json()['error'] == 'invalid_date'


@pytest.mark.django_db
class TestLookups:

    def test_regions(self, api_client, region, other_region):
        response = api_client.get(reverse('api_regions'))
        assert [r['name'] for r in response.json()] == ['Coast', 'Nairobi']

    def test_majlis_by_region(self, api_client, majlis, other_majlis):
        response = api_client.get(reverse('api_majlis'), {'region': majlis.region_id})
        assert response.json() == [{'id': majlis.id, 'name': 'Eastleigh', 'region': majlis.region_id}]

    def test_current_event_settings(self, api_client, event_settings):
        response = api_client.get(reverse('api_current_event_settings'))

        body = response.json()
        assert response.status_code == 200
        assert body['khuddam_event_title'] == '51st Annual Majlis Khudam-ul-Ahmadiyya Kenya Ijtemaa'
        assert body['atfal_event_title'] == '23rd Annual Majlis Atfal-ul-Ahmadiyya Kenya Ijtemaa'
        assert body['date_range'] == 'Aug 22 - Aug 24, 2025'

    def test_no_event_settings(self, api_client, db):
        response = api_client.get(reverse('api_current_event_settings'))
        assert response.status_code == 404


@pytest.mark.django_db
class TestParticipantsEndpoint:

    def _payload(self, region, majlis, date_of_birth, **overrides):
        payload = {
            'full_name': 'Ahmad Ali',
            'date_of_birth': date_of_birth.isoformat(),
            'phone_number': '0712345678',
            'region': region.id,
            'majlis': majlis.id,
            'date_of_arrival': '2025-08-22',
        }
        payload.update(overrides)
        return payload

    def test_register(self, api_client, user, region, majlis, years_ago, fresh_sequences):
        response = api_client.post(
            reverse('api_participants'), self._payload(region, majlis, years_ago(5)), format='json'
        )

        body = response.json()
        assert response.status_code == 201
        assert body['registration_number'] == 'U-0001'
        assert body['category'] == 'Under 7'
        assert body['age'] == 5
        assert body['majlis'] == {'id': majlis.id, 'name': 'Eastleigh'}
        assert Participant.objects.get().created_by == user

    def test_client_supplied_category_is_ignored(self, api_client, region, majlis, years_ago, fresh_sequences):
        payload = self._payload(region, majlis, years_ago(30), category='Atfal', registration_number='A-9999')

        response = api_client.post(reverse('api_participants'), payload, format='json')

        assert response.json()['registration_number'] == 'K-0001'

    def test_unclassified_is_rejected(self, api_client, region, majlis, years_ago, fresh_sequences):
        response = api_client.post(
            reverse('api_participants'), self._payload(region, majlis, years_ago(45)), format='json'
        )

        body = response.json()
        assert response.status_code == 400
        assert body['error'] == 'validation_failed'
        assert 'date_of_birth' in body['errors']
        assert Participant.objects.count() == 0

    def test_majlis_from_other_region(self, api_client, region, other_majlis, years_ago, fresh_sequences):
        response = api_client.post(
            reverse('api_participants'), self._payload(region, other_majlis, years_ago(20)), format='json'
        )

        assert response.status_code == 400
        assert 'majlis' in response.json()['errors']

    def test_sequence_unavailable(self, api_client, region, majlis, years_ago):
        with mock.patch(
            'participants.services.issue_registration_number',
            side_effect=SequenceUnavailableError('Registration number could not be allocated. Please try again.'),
        ):
            response = api_client.post(
                reverse('api_participants'), self._payload(region, majlis, years_ago(20)), format='json'
            )

        assert response.status_code == 503
        assert response.json() == {
            'error': 'sequence_unavailable',
            'message': 'Registration number could not be allocated. Please try again.',
            'retryable': True,
        }
        assert Participant.objects.count() == 0

    def test_list_with_filters(self, api_client, make_participant):
        make_participant('K-0001', full_name='Ahmad Ali')
        make_participant('A-0001', category=Category.ATFAL, age=10, full_name='Bilal Omar')

        response = api_client.get(reverse('api_participants'), {'category': 'Atfal'})
        assert [p['registration_number'] for p in response.json()] == ['A-0001']

        response = api_client.get(reverse('api_participants'), {'search': 'ahmad'})
        assert [p['registration_number'] for p in response.json()] == ['K-0001']
