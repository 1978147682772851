"""
Age-derived participant categories.

Categories are fixed bands: below 7 is Under 7, 7 to 15 is Atfal and 15 to 40
is Khuddam. The Atfal and Khuddam bands share age 15; the Atfal band is tested
first, so a 15 year old is Atfal. Anyone older than 40 is unclassified and
cannot be registered.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from django.db import models
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .exceptions import InvalidDateError, UnclassifiedAgeError


class Category(models.TextChoices):
    UNDER_SEVEN = 'Under 7', 'Under 7'
    ATFAL = 'Atfal', 'Atfal'
    KHUDDAM = 'Khuddam', 'Khuddam'


ATFAL_MIN_AGE = 7
ATFAL_MAX_AGE = 15
KHUDDAM_MIN_AGE = 15
KHUDDAM_MAX_AGE = 40


@dataclass(frozen=True)
class Classification:
    age_years: int
    category: Optional[Category]

    @property
    def is_classified(self) -> bool:
        return self.category is not None

    def require_category(self) -> Category:
        if self.category is None:
            raise UnclassifiedAgeError(self.age_years)
        return self.category


def parse_iso_date(value) -> date:
    """
    Coerce a date, datetime or ISO 8601 string into a date.

    Raises InvalidDateError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError('A date is required.')

    text = value.strip()
    try:
        parsed = parse_date(text)
        if parsed is None:
            parsed_dt = parse_datetime(text)
            if parsed_dt is not None:
                parsed = parsed_dt.date()
    except ValueError:
        # Well-formed but impossible dates such as 2020-02-30
        parsed = None
    if parsed is None:
        raise InvalidDateError(f'"{value}" is not a valid date.')
    return parsed


def calculate_age(birth_date: date, reference_date: date) -> int:
    """Whole years elapsed from birth_date to reference_date."""
    age = reference_date.year - birth_date.year
    if (reference_date.month, reference_date.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def category_for_age(age: int) -> Optional[Category]:
    if age < ATFAL_MIN_AGE:
        return Category.UNDER_SEVEN
    if ATFAL_MIN_AGE <= age <= ATFAL_MAX_AGE:
        return Category.ATFAL
    if KHUDDAM_MIN_AGE <= age <= KHUDDAM_MAX_AGE:
        return Category.KHUDDAM
    return None


def classify(birth_date: date, reference_date: date) -> Classification:
    """
    Derive age in whole years and the participant category.

    Raises InvalidDateError when birth_date is after reference_date.
    """
    if isinstance(birth_date, datetime):
        birth_date = birth_date.date()
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()
    if birth_date > reference_date:
        raise InvalidDateError('Date of birth cannot be in the future.')

    age = calculate_age(birth_date, reference_date)
    return Classification(age_years=age, category=category_for_age(age))


def classify_iso(birth_date, now=None) -> Classification:
    """Classify from ISO strings as sent by the registration form."""
    reference = timezone.localdate() if now is None else parse_iso_date(now)
    return classify(parse_iso_date(birth_date), reference)
