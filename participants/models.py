"""
Database models for Ijtemaa participant registration.
"""
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from .classification import Category


class Region(models.Model):
    """
    Administrative region a majlis belongs to.
    """
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Region'
        verbose_name_plural = 'Regions'

    def __str__(self):
        return self.name


class Majlis(models.Model):
    """
    Local chapter within a region.
    """
    name = models.CharField(max_length=100)
    region = models.ForeignKey(Region, on_delete=models.PROTECT, related_name='majlis')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Majlis'
        verbose_name_plural = 'Majlis'
        constraints = [
            models.UniqueConstraint(fields=['region', 'name'], name='unique_majlis_per_region'),
        ]

    def __str__(self):
        return f"{self.name} ({self.region.name})"


class RegistrationSequence(models.Model):
    """
    Per-category counter behind registration numbers.

    last_value is the most recently issued counter; 0 means nothing has been
    issued yet. The counter only ever moves forward, so numbers abandoned by a
    failed registration or freed by a deleted participant are never reissued.
    """
    UNINITIALIZED = 'UNINITIALIZED'
    ACTIVE = 'ACTIVE'

    category = models.CharField(max_length=10, choices=Category.choices, primary_key=True)
    last_value = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['category']
        verbose_name = 'Registration Sequence'
        verbose_name_plural = 'Registration Sequences'

    def __str__(self):
        return f"{self.get_category_display()}: {self.last_value}"

    @property
    def state(self):
        return self.ACTIVE if self.last_value > 0 else self.UNINITIALIZED


class Participant(models.Model):
    """
    A registered attendee. The registration number and category are fixed at
    registration time.
    """
    registration_number = models.CharField(max_length=20, unique=True, editable=False)
    full_name = models.CharField(max_length=200)
    date_of_birth = models.DateField()
    age = models.PositiveIntegerField()
    category = models.CharField(max_length=10, choices=Category.choices, db_index=True)
    phone_number = models.CharField(max_length=20, blank=True, default='')
    region = models.ForeignKey(Region, on_delete=models.PROTECT, related_name='participants')
    majlis = models.ForeignKey(Majlis, on_delete=models.PROTECT, related_name='participants')
    date_of_arrival = models.DateField()
    luggage_box_number = models.CharField(max_length=50, blank=True, null=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='registered_participants'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = 'Participant'
        verbose_name_plural = 'Participants'

    def __str__(self):
        return f"{self.registration_number} - {self.full_name}"

    def clean(self):
        if self.majlis_id and self.region_id and self.majlis.region_id != self.region_id:
            raise ValidationError({'majlis': 'Selected majlis does not belong to the selected region.'})


def _default_event_year():
    return timezone.now().year


class EventSettings(models.Model):
    """
    Edition details of the gathering. The most recently created row is the
    current event.
    """
    DEFAULT_EVENT_NAME = 'Annual Majlis Khudam-ul-Ahmadiyya Kenya Ijtemaa'

    event_name = models.CharField(max_length=200, default=DEFAULT_EVENT_NAME)
    khuddam_ordinal = models.PositiveIntegerField(default=51, help_text="Edition number of the Khuddam Ijtemaa")
    atfal_ordinal = models.PositiveIntegerField(default=23, help_text="Edition number of the Atfal Ijtemaa")
    year = models.PositiveIntegerField(default=_default_event_year)
    venue = models.CharField(max_length=200, default='Nairobi, Kenya')
    theme = models.CharField(max_length=300, blank=True, null=True)
    start_date = models.DateField()
    end_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-id']
        verbose_name = 'Event Settings'
        verbose_name_plural = 'Event Settings'

    def __str__(self):
        return f"{self.event_name} {self.year}"

    def clean(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({'end_date': 'End date cannot be before the start date.'})

    @classmethod
    def current(cls):
        """Most recently created event, or None."""
        return cls.objects.order_by('-id').first()
