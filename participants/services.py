"""
Participant registration: classify, issue a number, persist.
"""
import logging

from django.utils import timezone

from .classification import classify
from .models import Participant
from .utils import issue_registration_number

logger = logging.getLogger(__name__)


def register_participant(*, full_name, date_of_birth, region, majlis, date_of_arrival,
                         phone_number='', luggage_box_number=None, created_by=None,
                         reference_date=None):
    """
    Register a participant and return the saved Participant.

    The category is derived from date_of_birth, a registration number is
    issued exactly once, and only then is the record saved. Errors are
    propagated unchanged:
      InvalidDateError / UnclassifiedAgeError - nothing was issued.
      SequenceUnavailableError - nothing was issued or saved.
      Any error while saving - the issued number is abandoned (a gap).
    """
    reference_date = reference_date or timezone.localdate()
    classification = classify(date_of_birth, reference_date)
    category = classification.require_category()

    registration_number = issue_registration_number(category)

    participant = Participant(
        registration_number=registration_number,
        full_name=full_name.strip(),
        date_of_birth=date_of_birth,
        age=classification.age_years,
        category=category,
        phone_number=phone_number or '',
        region=region,
        majlis=majlis,
        date_of_arrival=date_of_arrival,
        luggage_box_number=luggage_box_number or None,
        created_by=created_by,
    )
    try:
        participant.save()
    except Exception:
        logger.error(
            f"Registration number {registration_number} abandoned: participant {full_name!r} could not be saved"
        )
        raise

    logger.info(f"Registered {participant.full_name} as {registration_number} ({category.label})")
    return participant
