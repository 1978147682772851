"""
JSON API for the registration form and roster clients.
"""
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .classification import classify_iso
from .exceptions import InvalidDateError, RegistrationError, SequenceUnavailableError
from .models import Region, Majlis, EventSettings
from .serializers import (
    EventSettingsSerializer,
    MajlisSerializer,
    ParticipantRegistrationSerializer,
    ParticipantSerializer,
    RegionSerializer,
)
from .services import register_participant
from .views import get_filtered_participants_queryset


@api_view(['GET'])
def classify_birth_date(request):
    """
    API: Derive age and category from a birth date so the form can pre-fill
    the read-only category field and enable or disable submission.
    Query: date_of_birth (ISO date), optional now (ISO date or timestamp).
    """
    try:
        classification = classify_iso(
            request.query_params.get('date_of_birth'),
            request.query_params.get('now') or None,
        )
    except InvalidDateError as e:
        return Response({'error': 'invalid_date', 'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    data = {
        'age_years': classification.age_years,
        'category': classification.category.value if classification.is_classified else None,
        'category_code': classification.category.name if classification.is_classified else None,
        'can_submit': classification.is_classified,
    }
    if not classification.is_classified:
        data['message'] = f'Age {classification.age_years} is outside all participant categories.'
    return Response(data)


@api_view(['GET'])
def region_list(request):
    return Response(RegionSerializer(Region.objects.order_by('name'), many=True).data)


@api_view(['GET'])
def majlis_list(request):
    """API: Majlis, optionally limited to one region (?region=<id>)."""
    majlis = Majlis.objects.order_by('name')
    region = request.query_params.get('region', '')
    if region.isdigit():
        majlis = majlis.filter(region_id=region)
    return Response(MajlisSerializer(majlis, many=True).data)


@api_view(['GET', 'POST'])
def participants(request):
    """
    GET: roster, filtered by search / category / region / majlis.
    POST: register a participant. A 503 means no number was allocated and
    the submission may be repeated; it is never retried here.
    """
    if request.method == 'GET':
        queryset = get_filtered_participants_queryset(request.query_params)
        return Response(ParticipantSerializer(queryset, many=True).data)

    serializer = ParticipantRegistrationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({
            'error': 'validation_failed',
            'errors': serializer.errors,
        }, status=status.HTTP_400_BAD_REQUEST)

    try:
        participant = register_participant(created_by=request.user, **serializer.validated_data)
    except SequenceUnavailableError as e:
        return Response({
            'error': 'sequence_unavailable',
            'message': str(e),
            'retryable': True,
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    except RegistrationError as e:
        return Response({'error': 'invalid_registration', 'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(ParticipantSerializer(participant).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def current_event_settings(request):
    event = EventSettings.current()
    if event is None:
        return Response({'error': 'not_found', 'message': 'No event has been configured.'},
                        status=status.HTTP_404_NOT_FOUND)
    return Response(EventSettingsSerializer(event).data)
