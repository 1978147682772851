"""
Django forms for participant registration.
"""
from django import forms
from django.utils import timezone

from .classification import classify
from .exceptions import InvalidDateError, UnclassifiedAgeError
from .models import Participant, Region, Majlis


class ParticipantRegistrationForm(forms.ModelForm):
    """
    Registration desk form.
    Age and category are derived from the date of birth and cannot be typed in.
    """

    class Meta:
        model = Participant
        fields = [
            'full_name', 'date_of_birth', 'phone_number',
            'region', 'majlis', 'date_of_arrival', 'luggage_box_number',
        ]
        widgets = {
            'full_name': forms.TextInput(attrs={
                'class': 'form-input',
                'placeholder': 'e.g. Ahmad Juma'
            }),
            'date_of_birth': forms.DateInput(attrs={
                'class': 'form-input',
                'type': 'date'
            }),
            'phone_number': forms.TextInput(attrs={
                'class': 'form-input',
                'placeholder': 'e.g. 0712 345 678',
                'inputmode': 'tel',
                'autocomplete': 'tel'
            }),
            'region': forms.Select(attrs={
                'class': 'form-input',
                'style': 'cursor: pointer'
            }),
            'majlis': forms.Select(attrs={
                'class': 'form-input',
                'style': 'cursor: pointer'
            }),
            'date_of_arrival': forms.DateInput(attrs={
                'class': 'form-input',
                'type': 'date'
            }),
            'luggage_box_number': forms.TextInput(attrs={
                'class': 'form-input',
                'placeholder': 'Optional'
            }),
        }

    def __init__(self, *args, reference_date=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.reference_date = reference_date or timezone.localdate()
        self.classification = None
        self.fields['phone_number'].required = False
        self.fields['luggage_box_number'].required = False
        self.fields['region'].queryset = Region.objects.order_by('name')
        self.fields['majlis'].queryset = Majlis.objects.select_related('region').order_by('name')

    def clean_date_of_birth(self):
        """Classify the birth date; unclassified ages block submission."""
        date_of_birth = self.cleaned_data.get('date_of_birth')
        if not date_of_birth:
            return date_of_birth
        try:
            classification = classify(date_of_birth, self.reference_date)
            classification.require_category()
        except (InvalidDateError, UnclassifiedAgeError) as e:
            raise forms.ValidationError(str(e))
        self.classification = classification
        return date_of_birth

    def registration_kwargs(self):
        """Arguments for services.register_participant."""
        data = self.cleaned_data
        return {
            'full_name': data['full_name'],
            'date_of_birth': data['date_of_birth'],
            'phone_number': data.get('phone_number') or '',
            'region': data['region'],
            'majlis': data['majlis'],
            'date_of_arrival': data['date_of_arrival'],
            'luggage_box_number': data.get('luggage_box_number') or None,
            'reference_date': self.reference_date,
        }
