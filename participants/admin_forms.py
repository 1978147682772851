"""
Forms for editing records in the registration panel.
"""
from django import forms
from django.contrib.auth import get_user_model
from django.utils import timezone

from .classification import classify
from .exceptions import InvalidDateError, UnclassifiedAgeError
from .models import Participant, Region, Majlis, EventSettings


class ParticipantEditForm(forms.ModelForm):
    """
    Form for editing participants in the panel.
    Registration number and category are fixed. A changed date of birth is
    classified as of the registration date and rejected if it would move the
    participant into another category.
    """
    class Meta:
        model = Participant
        fields = [
            'full_name', 'date_of_birth', 'phone_number',
            'region', 'majlis', 'date_of_arrival', 'luggage_box_number',
        ]
        widgets = {
            'full_name': forms.TextInput(attrs={
                'class': 'admin-form-input',
                'placeholder': 'Full name'
            }),
            'date_of_birth': forms.DateInput(attrs={
                'class': 'admin-form-input',
                'type': 'date'
            }, format='%Y-%m-%d'),
            'phone_number': forms.TextInput(attrs={
                'class': 'admin-form-input',
                'placeholder': 'Phone number'
            }),
            'region': forms.Select(attrs={
                'class': 'admin-form-input',
            }),
            'majlis': forms.Select(attrs={
                'class': 'admin-form-input',
            }),
            'date_of_arrival': forms.DateInput(attrs={
                'class': 'admin-form-input',
                'type': 'date'
            }, format='%Y-%m-%d'),
            'luggage_box_number': forms.TextInput(attrs={
                'class': 'admin-form-input',
                'placeholder': 'Luggage box number'
            }),
        }

    def __init__(self, *args, reference_date=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.reference_date = reference_date or timezone.localdate()
        self.fields['phone_number'].required = False
        self.fields['luggage_box_number'].required = False
        self.fields['region'].queryset = Region.objects.order_by('name')
        self.fields['majlis'].queryset = Majlis.objects.select_related('region').order_by('name')

    def registration_date(self):
        """Date the participant was registered; category and age are fixed as of this day."""
        if self.instance.pk and self.instance.created_at:
            return timezone.localdate(self.instance.created_at)
        return self.reference_date

    def clean_date_of_birth(self):
        date_of_birth = self.cleaned_data.get('date_of_birth')
        if not date_of_birth or 'date_of_birth' not in self.changed_data:
            return date_of_birth
        try:
            classification = classify(date_of_birth, self.registration_date())
            category = classification.require_category()
        except (InvalidDateError, UnclassifiedAgeError) as e:
            raise forms.ValidationError(str(e))
        if category != self.instance.category:
            raise forms.ValidationError(
                f'This date of birth places the participant in {category.label}, '
                f'but {self.instance.registration_number} is a {self.instance.category} number. '
                f'Delete and register the participant again to change category.'
            )
        self.instance.age = classification.age_years
        return date_of_birth


class EventSettingsForm(forms.ModelForm):
    """
    Form for creating and editing event editions.
    """
    class Meta:
        model = EventSettings
        fields = [
            'event_name', 'khuddam_ordinal', 'atfal_ordinal', 'year',
            'venue', 'theme', 'start_date', 'end_date',
        ]
        widgets = {
            'event_name': forms.TextInput(attrs={
                'class': 'admin-form-input',
            }),
            'khuddam_ordinal': forms.NumberInput(attrs={
                'class': 'admin-form-input',
                'min': '1'
            }),
            'atfal_ordinal': forms.NumberInput(attrs={
                'class': 'admin-form-input',
                'min': '1'
            }),
            'year': forms.NumberInput(attrs={
                'class': 'admin-form-input',
                'min': '2000'
            }),
            'venue': forms.TextInput(attrs={
                'class': 'admin-form-input',
                'placeholder': 'e.g. Nairobi, Kenya'
            }),
            'theme': forms.TextInput(attrs={
                'class': 'admin-form-input',
                'placeholder': 'Optional'
            }),
            'start_date': forms.DateInput(attrs={
                'class': 'admin-form-input',
                'type': 'date'
            }, format='%Y-%m-%d'),
            'end_date': forms.DateInput(attrs={
                'class': 'admin-form-input',
                'type': 'date'
            }, format='%Y-%m-%d'),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['theme'].required = False


class ProfileForm(forms.ModelForm):
    """
    Display name of the signed-in desk user.
    """
    class Meta:
        model = get_user_model()
        fields = ['first_name', 'last_name', 'email']
        widgets = {
            'first_name': forms.TextInput(attrs={
                'class': 'admin-form-input',
            }),
            'last_name': forms.TextInput(attrs={
                'class': 'admin-form-input',
            }),
            'email': forms.EmailInput(attrs={
                'class': 'admin-form-input',
                'placeholder': 'Optional'
            }),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['first_name'].required = True
