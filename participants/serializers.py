"""
REST framework serializers for the participants API.
"""
from django.utils import timezone
from rest_framework import serializers

from .classification import Category, classify
from .display import format_date_range, format_event_name
from .exceptions import InvalidDateError, UnclassifiedAgeError
from .models import Region, Majlis, Participant, EventSettings


class RegionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Region
        fields = ['id', 'name']


class MajlisSerializer(serializers.ModelSerializer):
    class Meta:
        model = Majlis
        fields = ['id', 'name', 'region']


class ParticipantSerializer(serializers.ModelSerializer):
    region = RegionSerializer(read_only=True)
    majlis = serializers.SerializerMethodField()

    class Meta:
        model = Participant
        fields = [
            'id', 'registration_number', 'full_name', 'date_of_birth', 'age', 'category',
            'phone_number', 'region', 'majlis', 'date_of_arrival', 'luggage_box_number',
            'created_at',
        ]
        read_only_fields = fields

    def get_majlis(self, obj):
        return {'id': obj.majlis_id, 'name': obj.majlis.name}


class ParticipantRegistrationSerializer(serializers.Serializer):
    """
    Input for a new registration. Age and category are never accepted from
    the client; they are derived from date_of_birth.
    """
    full_name = serializers.CharField(max_length=200)
    date_of_birth = serializers.DateField()
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    region = serializers.PrimaryKeyRelatedField(queryset=Region.objects.all())
    majlis = serializers.PrimaryKeyRelatedField(queryset=Majlis.objects.all())
    date_of_arrival = serializers.DateField()
    luggage_box_number = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)

    def validate_date_of_birth(self, value):
        try:
            classify(value, self.reference_date).require_category()
        except (InvalidDateError, UnclassifiedAgeError) as e:
            raise serializers.ValidationError(str(e))
        return value

    def validate(self, attrs):
        if attrs['majlis'].region_id != attrs['region'].id:
            raise serializers.ValidationError({'majlis': 'Selected majlis does not belong to the selected region.'})
        return attrs

    @property
    def reference_date(self):
        return self.context.get('reference_date') or timezone.localdate()


class EventSettingsSerializer(serializers.ModelSerializer):
    khuddam_event_title = serializers.SerializerMethodField()
    atfal_event_title = serializers.SerializerMethodField()
    date_range = serializers.SerializerMethodField()

    class Meta:
        model = EventSettings
        fields = [
            'id', 'event_name', 'khuddam_ordinal', 'atfal_ordinal', 'year', 'venue', 'theme',
            'start_date', 'end_date', 'khuddam_event_title', 'atfal_event_title', 'date_range',
        ]

    def get_khuddam_event_title(self, obj):
        return format_event_name(Category.KHUDDAM, obj)

    def get_atfal_event_title(self, obj):
        return format_event_name(Category.ATFAL, obj)

    def get_date_range(self, obj):
        return format_date_range(obj)
