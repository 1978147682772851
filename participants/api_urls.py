"""
API URL patterns for the participants app.
"""
from django.urls import path
from . import api_views

urlpatterns = [
    path('classify/', api_views.classify_birth_date, name='api_classify'),
    path('regions/', api_views.region_list, name='api_regions'),
    path('majlis/', api_views.majlis_list, name='api_majlis'),
    path('participants/', api_views.participants, name='api_participants'),
    path('event-settings/current/', api_views.current_event_settings, name='api_current_event_settings'),
]
