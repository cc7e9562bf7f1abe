"""
Views for events app - event management, guests, custom fields and RSVP.
"""
import logging

from django.contrib import messages
from django.db.models import Count, Sum
from django.http import Http404, HttpResponse
from django.shortcuts import get_object_or_404, redirect
from django.template.loader import render_to_string
from django.urls import reverse, reverse_lazy
from django.utils import timezone
from django.views import View
from django.views.generic import CreateView, DeleteView, DetailView, ListView, UpdateView

from core.mixins import OwnerViewMixin, ensure_owner

from . import client_session
from .forms import (
    ClientAccessForm, ClientLoginForm, CustomFieldForm, EventForm, GuestForm, GuestImportForm,
    InvitationForm, RsvpForm,
)
from .models import CustomField, Event, Guest, Invitation
from .rsvp_window import describe, normalize_language
from .services import (
    GuestImportError, authenticate_client, export_submissions_csv, find_event_by_code,
    find_guest, generate_event_code, generate_guest_code, generate_missing_codes,
    import_guests_csv, save_invitation, set_client_access, submit_rsvp,
)

logger = logging.getLogger(__name__)


def get_owned_event(request, pk):
    event = get_object_or_404(Event, pk=pk)
    ensure_owner(request.user, event)
    return event


def submission_totals(event):
    return event.submissions.values('status').annotate(
        count=Count('id'),
        men=Sum('men_count'),
        women=Sum('women_count'),
    ).order_by('status')


# --- Authenticated views ---

class EventListView(OwnerViewMixin, ListView):
    model = Event
    template_name = 'events/event_list.html'
    context_object_name = 'events'


class EventCreateView(OwnerViewMixin, CreateView):
    model = Event
    form_class = EventForm
    template_name = 'events/event_form.html'

    def get_initial(self):
        return {'default_language': self.request.user.default_event_language}

    def form_valid(self, form):
        form.instance.short_code = generate_event_code()
        return super().form_valid(form)

    def get_success_url(self):
        return reverse('events:detail', kwargs={'pk': self.object.pk})


class EventDetailView(OwnerViewMixin, DetailView):
    model = Event
    template_name = 'events/event_detail.html'
    context_object_name = 'event'

    def get_context_data(self, **kwargs):
        from apps.links.forms import EventLinkForm

        context = super().get_context_data(**kwargs)
        decision = self.object.rsvp_window()
        context['guests'] = self.object.guests.all()
        context['guest_form'] = GuestForm()
        context['import_form'] = GuestImportForm()
        context['custom_fields'] = self.object.custom_fields.all()
        context['custom_field_form'] = CustomFieldForm()
        context['invitations'] = self.object.invitations.all()
        context['invitation_form'] = InvitationForm(initial={'language': self.object.default_language})
        context['links'] = self.object.links.select_related('guest')
        context['link_form'] = EventLinkForm(event=self.object)
        context['client_access_form'] = ClientAccessForm(
            event=self.object,
            initial={'username': self.object.client_username},
        )
        context['rsvp_decision'] = decision
        context['rsvp_message'] = describe(
            decision, 'en', tz=timezone.get_current_timezone(),
        )
        return context


class EventUpdateView(OwnerViewMixin, UpdateView):
    model = Event
    form_class = EventForm
    template_name = 'events/event_form.html'

    def get_success_url(self):
        return reverse('events:detail', kwargs={'pk': self.object.pk})


class EventDeleteView(OwnerViewMixin, DeleteView):
    model = Event
    success_url = reverse_lazy('events:list')

    def form_valid(self, form):
        self.object.delete(user=self.request.user)
        messages.success(self.request, f'Event "{self.object.title}" deleted.')
        return redirect(self.success_url)


class GuestListPartialMixin:
    """Render the guest list partial for HTMX requests, redirect otherwise."""

    def guest_list_response(self, request, event):
        if request.htmx:
            html = render_to_string('events/partials/guest_list.html', {
                'event': event,
                'guests': event.guests.all(),
                'guest_form': GuestForm(),
            }, request=request)
            return HttpResponse(html)
        return redirect('events:detail', pk=event.pk)


class AddGuestView(OwnerViewMixin, GuestListPartialMixin, View):
    """Manually add a single guest."""

    def post(self, request, pk):
        event = get_owned_event(request, pk)
        form = GuestForm(request.POST)

        if form.is_valid():
            phone = form.cleaned_data['phone']
            if phone and event.guests.filter(phone=phone).exists():
                messages.warning(request, f'A guest with phone {phone} already exists.')
            else:
                guest = form.save(commit=False)
                guest.event = event
                guest.short_code = generate_guest_code(event)
                guest.created_by = request.user
                guest.save()
                messages.success(request, f'{guest.full_name} added.')
        else:
            messages.error(request, 'Please correct the guest details.')

        return self.guest_list_response(request, event)


class RemoveGuestView(OwnerViewMixin, GuestListPartialMixin, View):
    """Remove a guest from an event."""

    def post(self, request, pk, guest_pk):
        event = get_owned_event(request, pk)
        guest = get_object_or_404(Guest, pk=guest_pk, event=event)
        guest_name = guest.full_name
        guest.delete(user=request.user)
        messages.success(request, f'{guest_name} removed.')
        return self.guest_list_response(request, event)


class ImportGuestsView(OwnerViewMixin, GuestListPartialMixin, View):
    """Bulk add guests from an uploaded CSV file."""

    def post(self, request, pk):
        event = get_owned_event(request, pk)
        form = GuestImportForm(request.POST, request.FILES)
        if not form.is_valid():
            for error in form.errors.values():
                messages.error(request, error.as_text())
            return self.guest_list_response(request, event)

        try:
            created, skipped = import_guests_csv(event, form.cleaned_data['file'], user=request.user)
        except GuestImportError as e:
            for error in e.errors[:5]:
                messages.error(request, error)
            if len(e.errors) > 5:
                messages.error(request, f'...and {len(e.errors) - 5} more errors.')
            return self.guest_list_response(request, event)

        generate_missing_codes([event])
        message = f'Imported {created} guest(s).'
        if skipped:
            message += f' Skipped {skipped} already on the list.'
        messages.success(request, message)
        return self.guest_list_response(request, event)


class AddCustomFieldView(OwnerViewMixin, View):

    def post(self, request, pk):
        event = get_owned_event(request, pk)
        form = CustomFieldForm(request.POST)
        if form.is_valid():
            key = form.cleaned_data['key']
            link_type = form.cleaned_data['link_type']
            if event.custom_fields.filter(key=key, link_type=link_type).exists():
                messages.warning(request, f'A field with key "{key}" already exists.')
            else:
                field = form.save(commit=False)
                field.event = event
                field.created_by = request.user
                field.save()
                messages.success(request, f'Field "{field.label}" added.')
        else:
            for error in form.errors.values():
                messages.error(request, error.as_text())
        return redirect('events:detail', pk=pk)


class RemoveCustomFieldView(OwnerViewMixin, View):

    def post(self, request, pk, field_pk):
        event = get_owned_event(request, pk)
        field = get_object_or_404(CustomField, pk=field_pk, event=event)
        field.delete()
        messages.success(request, f'Field "{field.label}" removed.')
        return redirect('events:detail', pk=pk)


class UploadInvitationView(OwnerViewMixin, View):
    """Upload the invitation image for one of the event's languages."""

    def post(self, request, pk):
        event = get_owned_event(request, pk)
        form = InvitationForm(request.POST, request.FILES)
        if not form.is_valid():
            messages.error(request, 'Please upload a valid image file.')
            return redirect('events:detail', pk=pk)

        invitation = save_invitation(
            event,
            form.cleaned_data['language'],
            form.cleaned_data['image'],
            user=request.user,
        )
        messages.success(request, f'{invitation.get_language_display()} invitation saved.')
        return redirect('events:detail', pk=pk)


class DeleteInvitationView(OwnerViewMixin, View):

    def post(self, request, pk, invitation_pk):
        event = get_owned_event(request, pk)
        invitation = get_object_or_404(Invitation, pk=invitation_pk, event=event)
        invitation.image.delete(save=False)
        invitation.delete()
        messages.success(request, f'{invitation.get_language_display()} invitation removed.')
        return redirect('events:detail', pk=pk)


class GenerateCodesView(OwnerViewMixin, View):
    """Assign short codes to the event and guests that lack one."""

    def post(self, request, pk):
        event = get_owned_event(request, pk)
        event_count, guest_count = generate_missing_codes([event])
        messages.success(request, f'Generated {event_count + guest_count} code(s).')
        return redirect('events:detail', pk=pk)


class ClientAccessView(OwnerViewMixin, View):
    """Set the client dashboard credentials for an event."""

    def post(self, request, pk):
        event = get_owned_event(request, pk)
        if request.POST.get('disable'):
            event.client_access_enabled = False
            event.save(update_fields=['client_access_enabled', 'updated_at'])
            messages.success(request, 'Client access disabled.')
            return redirect('events:detail', pk=pk)

        form = ClientAccessForm(request.POST, event=event)
        if form.is_valid():
            set_client_access(event, form.cleaned_data['username'], form.cleaned_data['password'])
            messages.success(request, 'Client access enabled.')
        else:
            for error in form.errors.values():
                messages.error(request, error.as_text())
        return redirect('events:detail', pk=pk)


class SubmissionListView(OwnerViewMixin, DetailView):
    """Dashboard of RSVP submissions and head counts."""
    model = Event
    template_name = 'events/submissions.html'
    context_object_name = 'event'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['submissions'] = self.object.submissions.select_related('guest')
        context['totals'] = submission_totals(self.object)
        context['custom_fields'] = self.object.custom_fields.filter(is_active=True)
        return context


class ExportSubmissionsView(OwnerViewMixin, View):

    def get(self, request, pk):
        event = get_owned_event(request, pk)
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        filename = f'{event.display_code}-rsvp-{timezone.now():%Y%m%d}.csv'
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        # BOM so spreadsheet apps detect UTF-8 (Hebrew names)
        response.write('\ufeff')
        export_submissions_csv(event, response)
        return response


# --- Public RSVP views (no auth required) ---

class RsvpBaseView(View):
    """
    Shared handling for the public RSVP pages.

    Every request is gated by the event's RSVP window; a closed window
    renders the status message instead of the form.
    """
    link_type = CustomField.LinkType.OPEN

    def get_event(self, code):
        event = find_event_by_code(code)
        if event is None:
            raise Http404('Event not found')
        return event

    def get_language(self, event, guest=None):
        language = self.request.GET.get('lang') or (guest.language if guest else '')
        return normalize_language(language or event.default_language)

    def get_custom_fields(self, event):
        return event.custom_fields.filter(is_active=True, link_type=self.link_type)

    def render(self, template_name, context, status=200):
        html = render_to_string(template_name, context, request=self.request)
        return HttpResponse(html, status=status)

    def render_closed(self, event, decision, language):
        return self.render('events/rsvp_closed.html', {
            'event': event,
            'decision': decision,
            'message': describe(decision, language, tz=timezone.get_current_timezone()),
            'language': language,
        })

    def handle(self, request, event, guest=None, link=None):
        language = self.get_language(event, guest)
        decision = event.rsvp_window()
        if not decision.is_open:
            logger.debug(f"RSVP blocked for event {event.pk}: {decision.reason}")
            return self.render_closed(event, decision, language)

        custom_fields = self.get_custom_fields(event)
        initial = {'full_name': guest.full_name} if guest else None

        if request.method == 'POST':
            form = RsvpForm(request.POST, custom_fields=custom_fields, language=language)
            if form.is_valid():
                submission = submit_rsvp(
                    event,
                    form.cleaned_data,
                    guest=guest,
                    link=link,
                    answers=form.get_answers(),
                )
                return self.render('events/rsvp_thankyou.html', {
                    'event': event,
                    'submission': submission,
                    'language': language,
                })
        else:
            form = RsvpForm(initial=initial, custom_fields=custom_fields, language=language)

        return self.render('events/rsvp_form.html', {
            'event': event,
            'guest': guest,
            'form': form,
            'language': language,
            'title': event.get_text(['rsvp.eventTitle', 'event.title'], language, event.title),
        })


class OpenRsvpView(RsvpBaseView):
    """RSVP page for an open link: anyone may submit."""

    def get(self, request, code):
        return self.handle(request, self.get_event(code))

    def post(self, request, code):
        return self.handle(request, self.get_event(code))


class PersonalRsvpView(RsvpBaseView):
    """RSVP page for one guest, addressed by link slug, phone or guest code."""
    link_type = CustomField.LinkType.PERSONAL

    def get_guest(self, event, guest_ref):
        guest, link = find_guest(event, guest_ref.strip('/'))
        if guest is None:
            raise Http404('Guest not found')
        return guest, link

    def get(self, request, code, guest_ref):
        event = self.get_event(code)
        guest, link = self.get_guest(event, guest_ref)
        return self.handle(request, event, guest, link)

    def post(self, request, code, guest_ref):
        event = self.get_event(code)
        guest, link = self.get_guest(event, guest_ref)
        return self.handle(request, event, guest, link)


# --- Client dashboard (per-event credentials) ---

class ClientLoginView(View):

    def get(self, request):
        if client_session.get_event(request) is not None:
            return redirect('client:dashboard')
        return HttpResponse(render_to_string('events/client_login.html', {
            'form': ClientLoginForm(),
        }, request=request))

    def post(self, request):
        form = ClientLoginForm(request.POST)
        if form.is_valid():
            event = authenticate_client(
                form.cleaned_data['username'],
                form.cleaned_data['password'],
            )
            if event is not None:
                client_session.start(request, event)
                return redirect('client:dashboard')
            form.add_error(None, 'Invalid username or password.')

        return HttpResponse(render_to_string('events/client_login.html', {
            'form': form,
        }, request=request), status=401)


class ClientDashboardView(View):

    def get(self, request):
        event = client_session.get_event(request)
        if event is None:
            return redirect('client:login')
        return HttpResponse(render_to_string('events/client_dashboard.html', {
            'event': event,
            'submissions': event.submissions.select_related('guest'),
            'totals': submission_totals(event),
            'custom_fields': event.custom_fields.filter(is_active=True),
        }, request=request))


class ClientLogoutView(View):

    def post(self, request):
        client_session.clear(request)
        return redirect('client:login')
