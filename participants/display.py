"""
Display strings for rosters, ID cards and share messages.
"""
import re
from urllib.parse import quote

from .classification import Category

DEFAULT_EVENT_TITLE = 'MKA Kenya Ijtemaa'
ATFAL_EVENT_NAME = 'Annual Majlis Atfal-ul-Ahmadiyya Kenya Ijtemaa'
UNDER_SEVEN_EVENT_NAME = 'Under 7 Children Program'

ROSTER_SUBTITLES = {
    Category.KHUDDAM: 'Khuddam Participants (Ages 15-40)',
    Category.ATFAL: 'Atfal Participants (Ages 7-15)',
    Category.UNDER_SEVEN: 'Under 7 Participants (Below Age 7)',
}


def get_ordinal_parts(num):
    """
    Split a number into its digits and English ordinal suffix.
    None is treated as 0. 11, 12 and 13 always take "th".
    """
    if num is None:
        return "0", "th"
    num = int(num)
    last_two_digits = abs(num) % 100
    if 11 <= last_two_digits <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(abs(num) % 10, "th")
    return str(num), suffix


def format_ordinal(num):
    """51 -> "51st", 23 -> "23rd"."""
    number, suffix = get_ordinal_parts(num)
    return f"{number}{suffix}"


def format_event_name(category, event_settings):
    """Event title shown on a participant's ID card and share message."""
    if not event_settings:
        return DEFAULT_EVENT_TITLE
    if category == Category.KHUDDAM:
        return f"{format_ordinal(event_settings.khuddam_ordinal)} {event_settings.event_name}"
    if category == Category.ATFAL:
        return f"{format_ordinal(event_settings.atfal_ordinal)} {ATFAL_EVENT_NAME}"
    return UNDER_SEVEN_EVENT_NAME


def format_roster_title(category_filter, event_settings):
    """Heading of a roster report; an empty or unknown filter means all categories."""
    if not event_settings:
        return DEFAULT_EVENT_TITLE
    if category_filter in (Category.KHUDDAM, Category.ATFAL, Category.UNDER_SEVEN):
        return format_event_name(category_filter, event_settings)
    return (
        f"{format_ordinal(event_settings.khuddam_ordinal)} {event_settings.event_name} & "
        f"{format_ordinal(event_settings.atfal_ordinal)} Atfal Ijtemaa & Under 7 Program"
    )


def format_roster_subtitle(category_filter):
    return ROSTER_SUBTITLES.get(category_filter, 'All Participants')


def format_date_range(event_settings):
    """Short event dates, e.g. "Aug 22 - Aug 24, 2025". Empty without settings."""
    if not event_settings or not event_settings.start_date or not event_settings.end_date:
        return ''
    start, end = event_settings.start_date, event_settings.end_date
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"


def format_long_date_range(event_settings):
    """Roster heading dates, e.g. "August 22, 2025 - August 24, 2025"."""
    if not event_settings or not event_settings.start_date or not event_settings.end_date:
        return ''
    start, end = event_settings.start_date, event_settings.end_date
    return f"{start:%B} {start.day}, {start.year} - {end:%B} {end.day}, {end.year}"


def format_display_date(value):
    return f"{value:%d/%m/%Y}" if value else '-'


def normalize_whatsapp_phone(phone_number, country_code='254'):
    """
    Turn a local phone number into the digits-only international form that
    wa.me expects. Kenyan numbers are assumed:
      0712345678 -> 254712345678
      712345678  -> 254712345678
      254712345678 is kept as is.
    Raises ValueError when there are no digits at all.
    """
    digits = re.sub(r'[^0-9]', '', phone_number or '')
    if not digits:
        raise ValueError('Phone number is missing or invalid')
    if digits.startswith('0') and len(digits) >= 10:
        return f"{country_code}{digits[1:]}"
    if digits.startswith(country_code):
        return digits
    if len(digits) == 9 and digits[0] in ('7', '1'):
        return f"{country_code}{digits}"
    return digits


def build_share_message(participant, event_settings):
    """Welcome message sent to a participant after registration."""
    lines = [
        f"Welcome to {format_event_name(participant.category, event_settings)}.",
        "",
        f"Registration Number: {participant.registration_number}",
        f"Name: {participant.full_name}",
        f"Age: {participant.age} ({participant.category})",
        f"Region: {participant.region.name if participant.region_id else '-'}",
        f"Majlis: {participant.majlis.name if participant.majlis_id else '-'}",
        f"Arrival Date: {format_display_date(participant.date_of_arrival)}",
    ]
    if participant.luggage_box_number:
        lines.append(f"Luggage Box: {participant.luggage_box_number}")
    if event_settings and event_settings.venue:
        lines.append(f"Venue: {event_settings.venue}")
    dates_line = format_date_range(event_settings)
    if dates_line:
        lines.append(f"Event Dates: {dates_line}")
    lines.extend(["", "Thank you for registering."])
    return "\n".join(lines)


def build_whatsapp_share_url(participant, event_settings):
    phone = normalize_whatsapp_phone(participant.phone_number)
    message = build_share_message(participant, event_settings)
    return f"https://wa.me/{phone}?text={quote(message)}"
