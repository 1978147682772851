"""
Registration desk views: dashboard, registration, roster, exports and event settings.
"""
import csv
import logging

from django.conf import settings as django_settings
from django.contrib import messages, auth
from django.contrib.auth.decorators import login_required
from django.contrib.auth.forms import PasswordChangeForm
from django.core.paginator import Paginator, EmptyPage, PageNotAnInteger
from django.db.models import Count, Q
from django.http import HttpResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_POST

from .admin_forms import ParticipantEditForm, EventSettingsForm, ProfileForm
from .classification import Category
from .display import (
    build_whatsapp_share_url,
    format_date_range,
    format_display_date,
    format_event_name,
    format_long_date_range,
    format_roster_subtitle,
    format_roster_title,
)
from .exceptions import RegistrationError, SequenceUnavailableError
from .forms import ParticipantRegistrationForm
from .models import Participant, Region, Majlis, EventSettings
from .services import register_participant

logger = logging.getLogger(__name__)

PAGINATE_BY = 25
RECENT_PARTICIPANTS = 5


def panel_login(request):
    """
    Registration desk login page.
    """
    if request.user.is_authenticated:
        return redirect('dashboard')

    if request.method == 'POST':
        username = request.POST.get('username')
        password = request.POST.get('password')

        user = auth.authenticate(request, username=username, password=password)
        if user is not None and user.is_active:
            auth.login(request, user)
            next_url = request.GET.get('next', '')
            if next_url.startswith('/'):
                return redirect(next_url)
            return redirect('dashboard')
        messages.error(request, 'Invalid username or password.')

    return render(request, 'participants/login.html')


@login_required
def panel_logout(request):
    auth.logout(request)
    messages.success(request, 'You have been logged out successfully.')
    return redirect('panel_login')


@login_required
def dashboard(request):
    """
    Overview: participant counts per category, region coverage and the most
    recent registrations.
    """
    counts = dict(
        Participant.objects.values_list('category').annotate(count=Count('id')).order_by()
    )
    context = {
        'total_participants': sum(counts.values()),
        'khuddam_count': counts.get(Category.KHUDDAM, 0),
        'atfal_count': counts.get(Category.ATFAL, 0),
        'under_seven_count': counts.get(Category.UNDER_SEVEN, 0),
        'regions_count': Region.objects.count(),
        'regions_with_participants': Participant.objects.order_by().values('region_id').distinct().count(),
        'recent_participants': Participant.objects.select_related(
            'region', 'majlis'
        ).order_by('-created_at', '-id')[:RECENT_PARTICIPANTS],
        'event_settings': EventSettings.current(),
    }
    return render(request, 'participants/dashboard.html', context)


@login_required
def register(request):
    """
    Register a new participant. The registration number is issued only once
    the form is valid, and exactly once per submission.
    """
    if request.method == 'POST':
        form = ParticipantRegistrationForm(request.POST)
        if form.is_valid():
            try:
                participant = register_participant(created_by=request.user, **form.registration_kwargs())
            except SequenceUnavailableError as e:
                # Surface the failure; re-submitting starts a fresh issuance.
                messages.error(request, str(e))
            except RegistrationError as e:
                form.add_error('date_of_birth', str(e))
            else:
                messages.success(request, f'Participant registered as {participant.registration_number}.')
                return redirect('registration_success', participant_id=participant.id)
    else:
        form = ParticipantRegistrationForm()

    context = {
        'form': form,
        'classification': form.classification,
        'majlis_by_region': _majlis_by_region(),
    }
    return render(request, 'participants/register.html', context)


def _majlis_by_region():
    """{region_id: [(majlis_id, name), ...]} for the dependent majlis select."""
    grouped = {}
    for majlis in Majlis.objects.order_by('name'):
        grouped.setdefault(majlis.region_id, []).append((majlis.id, majlis.name))
    return grouped


@login_required
def registration_success(request, participant_id):
    participant = get_object_or_404(Participant.objects.select_related('region', 'majlis'), id=participant_id)
    return render(request, 'participants/success.html', {'participant': participant})


def get_filtered_participants_queryset(params):
    """
    Roster queryset filtered the same way for the list page, CSV export and API.
    params: a QueryDict / dict with optional search, category, region, majlis.
    Search matches name and registration number (case-insensitive) or phone.
    """
    participants = Participant.objects.select_related(
        'region', 'majlis'
    ).order_by('-created_at', '-id')
    search_query = (params.get('search') or '').strip()
    category_filter = params.get('category') or ''
    region_filter = params.get('region') or ''
    majlis_filter = params.get('majlis') or ''
    if search_query:
        participants = participants.filter(
            Q(full_name__icontains=search_query) |
            Q(registration_number__icontains=search_query) |
            Q(phone_number__contains=search_query)
        )
    if category_filter in Category.values:
        participants = participants.filter(category=category_filter)
    if str(region_filter).isdigit():
        participants = participants.filter(region_id=region_filter)
    if str(majlis_filter).isdigit():
        participants = participants.filter(majlis_id=majlis_filter)
    return participants


@login_required
def participant_list(request):
    """
    Roster with search, category/region/majlis filters and pagination.
    """
    participants = get_filtered_participants_queryset(request.GET)
    category_filter = request.GET.get('category', '')
    region_filter = request.GET.get('region', '')

    paginator = Paginator(participants, PAGINATE_BY)
    page_number = request.GET.get('page', 1)
    try:
        page_obj = paginator.page(page_number)
    except PageNotAnInteger:
        page_obj = paginator.page(1)
    except EmptyPage:
        page_obj = paginator.page(paginator.num_pages)

    # Preserve filters in pagination links
    q = request.GET.copy()
    q.pop('page', None)

    majlis_choices = Majlis.objects.order_by('name')
    if str(region_filter).isdigit():
        majlis_choices = majlis_choices.filter(region_id=region_filter)

    event_settings = EventSettings.current()
    context = {
        'page_obj': page_obj,
        'participants': page_obj.object_list,
        'query_string': q.urlencode(),
        'categories': Category.choices,
        'regions': Region.objects.order_by('name'),
        'majlis_choices': majlis_choices,
        'search_query': request.GET.get('search', ''),
        'category_filter': category_filter,
        'region_filter': region_filter,
        'majlis_filter': request.GET.get('majlis', ''),
        'result_count': paginator.count,
        'roster_title': format_roster_title(category_filter, event_settings),
        'roster_subtitle': format_roster_subtitle(category_filter),
        'event_settings': event_settings,
    }
    return render(request, 'participants/participants.html', context)


EXPORT_HEADERS = [
    'Reg. No.', 'Full Name', 'Date of Birth', 'Age', 'Category', 'Phone',
    'Region', 'Majlis', 'Arrival Date', 'Luggage Box',
]


@login_required
def export_participants(request):
    """
    Export the roster as CSV, respecting current filters.
    """
    participants = get_filtered_participants_queryset(request.GET)
    category_filter = request.GET.get('category', '')
    category_prefix = category_filter if category_filter in Category.values else 'All'
    filename = 'MKA-Kenya-Ijtemaa-%s-Participants-%s.csv' % (
        category_prefix.replace(' ', '-'), timezone.localdate().isoformat()
    )
    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'

    event_settings = EventSettings.current()
    writer = csv.writer(response)
    writer.writerow([format_roster_title(category_filter, event_settings)])
    date_range = format_long_date_range(event_settings)
    if date_range:
        writer.writerow([date_range])
    writer.writerow([format_roster_subtitle(category_filter)])
    writer.writerow([])
    writer.writerow(EXPORT_HEADERS)
    count = 0
    for p in participants:
        writer.writerow([
            p.registration_number,
            p.full_name,
            format_display_date(p.date_of_birth),
            p.age,
            p.category,
            p.phone_number or '-',
            p.region.name if p.region_id else '-',
            p.majlis.name if p.majlis_id else '-',
            format_display_date(p.date_of_arrival),
            p.luggage_box_number or '-',
        ])
        count += 1
    writer.writerow([])
    writer.writerow([f'Total Participants: {count}'])
    logger.info(f"{request.user} exported {count} participants ({category_prefix})")
    return response


@login_required
def participant_card(request, participant_id):
    """
    Printable ID card for one participant.
    """
    participant = get_object_or_404(Participant.objects.select_related('region', 'majlis'), id=participant_id)
    event_settings = EventSettings.current()
    context = {
        'participant': participant,
        'event_settings': event_settings,
        'organization_name': django_settings.ORGANIZATION_NAME,
        'event_title': format_event_name(participant.category, event_settings),
        'event_year': event_settings.year if event_settings else timezone.localdate().year,
        'date_range': format_date_range(event_settings),
    }
    return render(request, 'participants/participant_card.html', context)


@login_required
def share_participant(request, participant_id):
    """
    Hand the welcome message off to WhatsApp.
    """
    participant = get_object_or_404(Participant.objects.select_related('region', 'majlis'), id=participant_id)
    try:
        url = build_whatsapp_share_url(participant, EventSettings.current())
    except ValueError as e:
        messages.error(request, str(e))
        return redirect('participant_list')
    return redirect(url)


@login_required
def edit_participant(request, participant_id):
    participant = get_object_or_404(Participant, id=participant_id)

    if request.method == 'POST':
        form = ParticipantEditForm(request.POST, instance=participant)
        if form.is_valid():
            form.save()
            messages.success(request, f'Participant {participant.registration_number} updated successfully!')
            return redirect('participant_list')
    else:
        form = ParticipantEditForm(instance=participant)

    context = {
        'form': form,
        'participant': participant,
    }
    return render(request, 'participants/edit_participant.html', context)


@login_required
def delete_participant(request, participant_id):
    """
    Delete a participant. The registration number is not reused.
    """
    participant = get_object_or_404(Participant, id=participant_id)

    if request.method == 'POST':
        registration_number = participant.registration_number
        participant.delete()
        logger.info(f"{request.user} deleted participant {registration_number}")
        messages.success(request, f'Participant {registration_number} deleted successfully!')
        return redirect('participant_list')

    context = {
        'object': participant,
        'object_label': f'{participant.full_name} ({participant.registration_number})',
        'cancel_url': 'participant_list',
    }
    return render(request, 'participants/confirm_delete.html', context)


@login_required
def event_settings_list(request):
    """
    List event editions and create a new one. The newest is the current event.
    """
    if request.method == 'POST':
        form = EventSettingsForm(request.POST)
        if form.is_valid():
            event = form.save()
            messages.success(request, f'Event "{event}" saved successfully!')
            return redirect('event_settings')
    else:
        current = EventSettings.current()
        initial = {}
        if current is None:
            initial['year'] = timezone.localdate().year
        form = EventSettingsForm(initial=initial)

    context = {
        'form': form,
        'events': EventSettings.objects.order_by('-id'),
        'current_event': EventSettings.current(),
    }
    return render(request, 'participants/event_settings.html', context)


@login_required
def edit_event_settings(request, event_id):
    event = get_object_or_404(EventSettings, id=event_id)

    if request.method == 'POST':
        form = EventSettingsForm(request.POST, instance=event)
        if form.is_valid():
            form.save()
            messages.success(request, 'Event settings updated successfully!')
            return redirect('event_settings')
    else:
        form = EventSettingsForm(instance=event)

    return render(request, 'participants/edit_event_settings.html', {'form': form, 'event': event})


@login_required
@require_POST
def delete_event_settings(request, event_id):
    event = get_object_or_404(EventSettings, id=event_id)
    event.delete()
    messages.success(request, 'Event deleted successfully!')
    return redirect('event_settings')


@login_required
def profile(request):
    """
    Update the signed-in user's name or change their password.
    The two forms post separately; `change_password` marks the password form.
    """
    profile_form = ProfileForm(instance=request.user)
    password_form = PasswordChangeForm(request.user)

    if request.method == 'POST':
        if 'change_password' in request.POST:
            password_form = PasswordChangeForm(request.user, request.POST)
            if password_form.is_valid():
                user = password_form.save()
                # Keep this session signed in after the hash changes
                auth.update_session_auth_hash(request, user)
                logger.info(f"{user} changed their password")
                messages.success(request, 'Password updated successfully!')
                return redirect('profile')
        else:
            profile_form = ProfileForm(request.POST, instance=request.user)
            if profile_form.is_valid():
                profile_form.save()
                messages.success(request, 'Profile updated successfully!')
                return redirect('profile')

    context = {
        'profile_form': profile_form,
        'password_form': password_form,
    }
    return render(request, 'participants/profile.html', context)
