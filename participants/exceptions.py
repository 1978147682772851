"""
Errors raised while classifying and registering participants.
"""


class RegistrationError(Exception):
    """Base class for registration failures."""


class InvalidDateError(RegistrationError):
    """Birth date could not be parsed or lies in the future."""


class UnclassifiedAgeError(RegistrationError):
    """Age falls outside every participant category."""

    def __init__(self, age_years):
        self.age_years = age_years
        super().__init__(
            f'Age {age_years} is outside all participant categories (maximum age is 40).'
        )


class SequenceUnavailableError(RegistrationError):
    """
    A registration number could not be allocated.

    Retrying is left to the user: issuance is not idempotent, so a blind
    retry after a timeout may consume a second number.
    """
