"""
URL patterns for the registration desk panel.
"""
from django.urls import path
from django.views.generic import RedirectView
from . import views

urlpatterns = [
    path('', RedirectView.as_view(pattern_name='dashboard', permanent=False)),
    path('login/', views.panel_login, name='panel_login'),
    path('logout/', views.panel_logout, name='panel_logout'),
    path('dashboard/', views.dashboard, name='dashboard'),
    path('register/', views.register, name='register'),
    path('register/<int:participant_id>/success/', views.registration_success, name='registration_success'),
    path('participants/', views.participant_list, name='participant_list'),
    path('participants/export/', views.export_participants, name='export_participants'),
    path('participants/<int:participant_id>/card/', views.participant_card, name='participant_card'),
    path('participants/<int:participant_id>/share/', views.share_participant, name='share_participant'),
    path('participants/<int:participant_id>/edit/', views.edit_participant, name='edit_participant'),
    path('participants/<int:participant_id>/delete/', views.delete_participant, name='delete_participant'),
    path('profile/', views.profile, name='profile'),
    path('settings/', views.event_settings_list, name='event_settings'),
    path('settings/<int:event_id>/edit/', views.edit_event_settings, name='edit_event_settings'),
    path('settings/<int:event_id>/delete/', views.delete_event_settings, name='delete_event_settings'),
]
