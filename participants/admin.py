"""
Django admin configuration for participants app.
"""
import csv

from django.contrib import admin
from django.http import HttpResponse

from .admin_forms import ParticipantEditForm
from .models import Region, Majlis, Participant, RegistrationSequence, EventSettings


class MajlisInline(admin.TabularInline):
    model = Majlis
    extra = 0
    fields = ['name']


@admin.register(Region)
class RegionAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_at']
    search_fields = ['name']
    inlines = [MajlisInline]


@admin.register(Majlis)
class MajlisAdmin(admin.ModelAdmin):
    list_display = ['name', 'region', 'created_at']
    list_filter = ['region']
    search_fields = ['name', 'region__name']


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    """
    Admin interface for managing participants.
    Registration number, age and category are assigned at registration and
    cannot be edited here.
    """
    form = ParticipantEditForm
    list_display = [
        'registration_number', 'full_name', 'age', 'category', 'phone_number',
        'region', 'majlis', 'date_of_arrival', 'created_at'
    ]
    list_filter = ['category', 'region', 'majlis', 'date_of_arrival']
    search_fields = ['registration_number', 'full_name', 'phone_number']
    readonly_fields = ['registration_number', 'age', 'category', 'created_by', 'created_at', 'updated_at']
    fieldsets = (
        ('Registration', {
            'fields': ('registration_number', 'category', 'age')
        }),
        ('Participant', {
            'fields': ('full_name', 'date_of_birth', 'phone_number')
        }),
        ('Affiliation', {
            'fields': ('region', 'majlis')
        }),
        ('Arrival', {
            'fields': ('date_of_arrival', 'luggage_box_number')
        }),
        ('Additional Information', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['export_as_csv']

    def has_add_permission(self, request):
        # Participants get their numbers through the registration desk
        return False

    def export_as_csv(self, request, queryset):
        """
        Export selected participants as CSV.
        """
        field_names = [
            'registration_number', 'full_name', 'date_of_birth', 'age', 'category',
            'phone_number', 'region', 'majlis', 'date_of_arrival', 'luggage_box_number',
            'created_at'
        ]

        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename=participants.csv'
        writer = csv.writer(response)

        writer.writerow(field_names)
        for obj in queryset.select_related('region', 'majlis'):
            writer.writerow([getattr(obj, field) for field in field_names])

        return response

    export_as_csv.short_description = "Export selected participants as CSV"


@admin.register(RegistrationSequence)
class RegistrationSequenceAdmin(admin.ModelAdmin):
    """
    Read-only view of the per-category counters.
    """
    list_display = ['category', 'last_value', 'state', 'updated_at']
    readonly_fields = ['category', 'last_value', 'updated_at']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(EventSettings)
class EventSettingsAdmin(admin.ModelAdmin):
    list_display = ['event_name', 'year', 'khuddam_ordinal', 'atfal_ordinal', 'venue', 'start_date', 'end_date']
    fieldsets = (
        ('Event', {
            'fields': ('event_name', 'year', 'theme', 'venue')
        }),
        ('Editions', {
            'fields': (('khuddam_ordinal', 'atfal_ordinal'),)
        }),
        ('Dates', {
            'fields': ('start_date', 'end_date')
        }),
    )
