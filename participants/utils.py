"""
Registration number issuance.
"""
import logging
import re

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from .classification import Category
from .exceptions import SequenceUnavailableError

logger = logging.getLogger(__name__)


# Canonical registration number format: {prefix}-{counter} (e.g. K-0001)
# Counter is zero-padded to REGISTRATION_NUMBER_PADDING digits and keeps
# growing past it (K-10000).
CATEGORY_PREFIXES = {
    Category.UNDER_SEVEN: 'U',
    Category.ATFAL: 'A',
    Category.KHUDDAM: 'K',
}
PREFIX_CATEGORIES = {prefix: category for category, prefix in CATEGORY_PREFIXES.items()}

_REGISTRATION_NUMBER_RE = re.compile(r'^([A-Z])\s*[-/ ]?\s*(\d+)$')


def coerce_category(value):
    """
    Return the Category for an enum member, stored value ("Khuddam") or
    member name ("KHUDDAM"). Raises ValueError for anything else.
    """
    if isinstance(value, Category):
        return value
    text = str(value or '').strip()
    for category in Category:
        if text == category.value or text.upper() == category.name:
            return category
    raise ValueError(f'Unknown participant category: {value!r}')


def format_registration_number(category, value):
    """
    Return registration number in canonical form: K-0001.
    category: Category (or anything coerce_category accepts).
    value: positive integer counter.
    """
    category = coerce_category(category)
    padding = getattr(settings, 'REGISTRATION_NUMBER_PADDING', 4)
    return f"{CATEGORY_PREFIXES[category]}-{int(value):0{padding}d}"


def parse_registration_number(registration_number):
    """
    Parse a registration number into (Category, counter).
    Accepts K-0001, K-1, k 0001, K/0001 and K0001.
    Returns None if it is not a registration number.
    """
    if not registration_number or not isinstance(registration_number, str):
        return None
    match = _REGISTRATION_NUMBER_RE.match(registration_number.strip().upper())
    if not match:
        return None
    category = PREFIX_CATEGORIES.get(match.group(1))
    value = int(match.group(2))
    if category is None or value < 1:
        return None
    return category, value


def get_highest_issued_value(category):
    """
    Return the highest counter found among stored participants for a
    category (0 if none). Used to resynchronise sequences after imports.
    """
    from .models import Participant

    category = coerce_category(category)
    prefix = f"{CATEGORY_PREFIXES[category]}-"
    highest = 0
    numbers = Participant.objects.filter(
        registration_number__startswith=prefix
    ).values_list('registration_number', flat=True)
    for number in numbers:
        parsed = parse_registration_number(number)
        if parsed and parsed[0] == category:
            highest = max(highest, parsed[1])
    return highest


def _increment_sequence(category):
    """Bump the counter in place and return the new value, or None if the row is missing."""
    from .models import RegistrationSequence

    updated = RegistrationSequence.objects.filter(category=category).update(
        last_value=F('last_value') + 1,
        updated_at=timezone.now(),
    )
    if not updated:
        return None
    return RegistrationSequence.objects.filter(
        category=category
    ).values_list('last_value', flat=True).get()


def _initialize_sequence(category):
    """Create the first row for a category (UNINITIALIZED -> ACTIVE) and return 1."""
    from .models import RegistrationSequence

    try:
        with transaction.atomic():
            RegistrationSequence.objects.create(category=category, last_value=1)
        return 1
    except IntegrityError:
        # Another request created the row first
        value = _increment_sequence(category)
        if value is None:
            raise
        return value


def issue_registration_number(category):
    """
    Allocate the next registration number for a category.

    The counter is incremented with a single UPDATE and read back inside the
    same transaction, so the row lock taken by the UPDATE serialises
    concurrent issuers. The allocation commits on its own: if the caller then
    fails to save the participant the number is abandoned and leaves a gap.
    Call this outside any enclosing transaction.

    Not idempotent. Raises SequenceUnavailableError when the database cannot
    allocate a number (unreachable, locked past the timeout, ...).
    """
    category = coerce_category(category)
    try:
        with transaction.atomic():
            value = _increment_sequence(category)
            if value is None:
                value = _initialize_sequence(category)
    except DatabaseError as e:
        logger.error(f"Could not allocate registration number for {category.label}: {str(e)}")
        raise SequenceUnavailableError(
            'Registration number could not be allocated. Please try again.'
        ) from e

    registration_number = format_registration_number(category, value)
    logger.info(f"Issued registration number {registration_number}")
    return registration_number
