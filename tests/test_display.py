"""
Tests for ordinals, event titles and WhatsApp share helpers.
"""
import datetime
from types import SimpleNamespace
from urllib.parse import unquote

import pytest

from participants.classification import Category
from participants.display import (
    build_share_message,
    build_whatsapp_share_url,
    format_date_range,
    format_display_date,
    format_event_name,
    format_long_date_range,
    format_ordinal,
    format_roster_subtitle,
    format_roster_title,
    get_ordinal_parts,
    normalize_whatsapp_phone,
)


@pytest.fixture
def settings_stub():
    return SimpleNamespace(
        event_name='Annual Majlis Khudam-ul-Ahmadiyya Kenya Ijtemaa',
        khuddam_ordinal=51,
        atfal_ordinal=23,
        venue='Nairobi, Kenya',
        start_date=datetime.date(2025, 8, 22),
        end_date=datetime.date(2025, 8, 24),
    )


class TestOrdinals:

    @pytest.mark.parametrize('num,expected', [
        (1, '1st'), (2, '2nd'), (3, '3rd'), (4, '4th'),
        (11, '11th'), (12, '12th'), (13, '13th'),
        (21, '21st'), (22, '22nd'), (23, '23rd'), (51, '51st'),
        (101, '101st'), (111, '111th'), (112, '112th'),
    ])
    def test_format_ordinal(self, num, expected):
        assert format_ordinal(num) == expected

    def test_none_is_zero(self):
        assert get_ordinal_parts(None) == ('0', 'th')

    def test_parts(self):
        assert get_ordinal_parts(51) == ('51', 'st')


class TestEventTitles:

    def test_khuddam(self, settings_stub):
        assert format_event_name(Category.KHUDDAM, settings_stub) == \
            '51st Annual Majlis Khudam-ul-Ahmadiyya Kenya Ijtemaa'

    def test_atfal(self, settings_stub):
        assert format_event_name(Category.ATFAL, settings_stub) == \
            '23rd Annual Majlis Atfal-ul-Ahmadiyya Kenya Ijtemaa'

    def test_under_seven(self, settings_stub):
        assert format_event_name(Category.UNDER_SEVEN, settings_stub) == 'Under 7 Children Program'

    def test_without_settings(self):
        assert format_event_name(Category.KHUDDAM, None) == 'MKA Kenya Ijtemaa'
        assert format_roster_title('', None) == 'MKA Kenya Ijtemaa'

    def test_roster_title_all_categories(self, settings_stub):
        assert format_roster_title('', settings_stub) == (
            '51st Annual Majlis Khudam-ul-Ahmadiyya Kenya Ijtemaa & '
            '23rd Atfal Ijtemaa & Under 7 Program'
        )

    def test_roster_title_single_category(self, settings_stub):
        assert format_roster_title('Atfal', settings_stub).startswith('23rd')

    def test_roster_subtitle(self):
        assert format_roster_subtitle('Khuddam') == 'Khuddam Participants (Ages 15-40)'
        assert format_roster_subtitle('') == 'All Participants'


class TestDates:

    def test_short_range(self, settings_stub):
        assert format_date_range(settings_stub) == 'Aug 22 - Aug 24, 2025'

    def test_long_range(self, settings_stub):
        assert format_long_date_range(settings_stub) == 'August 22, 2025 - August 24, 2025'

    def test_missing_dates(self, settings_stub):
        settings_stub.end_date = None
        assert format_date_range(settings_stub) == ''
        assert format_date_range(None) == ''

    def test_display_date(self):
        assert format_display_date(datetime.date(2025, 8, 2)) == '02/08/2025'
        assert format_display_date(None) == '-'


class TestWhatsApp:

    @pytest.mark.parametrize('raw,expected', [
        ('0712345678', '254712345678'),
        ('0712 345 678', '254712345678'),
        ('712345678', '254712345678'),
        ('+254712345678', '254712345678'),
        ('254712345678', '254712345678'),
        ('0112345678', '254112345678'),
        ('+44 20 7946 0958', '442079460958'),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_whatsapp_phone(raw) == expected

    @pytest.mark.parametrize('raw', ['', None, 'n/a'])
    def test_missing_phone(self, raw):
        with pytest.raises(ValueError):
            normalize_whatsapp_phone(raw)

    def _participant(self, **overrides):
        fields = dict(
            registration_number='K-0007',
            full_name='Ahmad Ali',
            age=25,
            category=Category.KHUDDAM,
            phone_number='0712345678',
            region_id=1,
            region=SimpleNamespace(name='Nairobi'),
            majlis_id=1,
            majlis=SimpleNamespace(name='Eastleigh'),
            date_of_arrival=datetime.date(2025, 8, 22),
            luggage_box_number=None,
        )
        fields.update(overrides)
        return SimpleNamespace(**fields)

    def test_share_message(self, settings_stub):
        message = build_share_message(self._participant(luggage_box_number=4), settings_stub)

        assert message.startswith('Welcome to 51st Annual Majlis Khudam-ul-Ahmadiyya Kenya Ijtemaa.')
        assert 'Registration Number: K-0007' in message
        assert 'Majlis: Eastleigh' in message
        assert 'Arrival Date: 22/08/2025' in message
        assert 'Luggage Box: 4' in message
        assert 'Venue: Nairobi, Kenya' in message
        assert 'Event Dates: Aug 22 - Aug 24, 2025' in message

    def test_share_message_without_settings(self):
        message = build_share_message(self._participant(), None)

        assert message.startswith('Welcome to MKA Kenya Ijtemaa.')
        assert 'Venue' not in message
        assert 'Luggage Box' not in message

    def test_share_url(self, settings_stub):
        url = build_whatsapp_share_url(self._participant(), settings_stub)

        assert url.startswith('https://wa.me/254712345678?text=')
        assert 'Registration Number: K-0007' in unquote(url.split('?text=', 1)[1])
        assert ' ' not in url
