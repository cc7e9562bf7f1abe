"""
Views for links app.

The public short link endpoint runs the link resolver; the remaining views
let organizers manage short URLs and event links.
"""
import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import HttpResponse, HttpResponseRedirect
from django.shortcuts import get_object_or_404, redirect
from django.template.loader import render_to_string
from django.views import View
from django.views.generic import ListView

from apps.events.services import find_event_by_code
from apps.events.views import get_owned_event

from .forms import EventLinkForm, ShortUrlForm
from .models import EventLink, ShortUrl
from .resolver import ExternalRedirect, InternalPath
from .services import (
    build_link_slug, event_code_from_path, extract_language_from_slug,
    has_language_segment, is_preview_bot,
)
from .stores import get_resolver

logger = logging.getLogger(__name__)

OG_LOCALES = {
    'he': 'he_IL',
    'en': 'en_US',
    'de': 'de_DE',
}

TITLE_PREFIXES = {
    'he': 'הזמנה ל',
    'en': 'Invitation to ',
    'de': 'Einladung zu ',
}

RTL_LANGUAGES = {'he', 'ar'}


class ShortLinkView(View):
    """
    Public entry point for short links.

    External short URLs redirect straight to their target. Event links
    redirect to the RSVP page, except for link preview bots which get a page
    of Open Graph tags describing the event.
    """

    def get(self, request, slug):
        resolution = get_resolver().resolve(slug)

        if isinstance(resolution, ExternalRedirect):
            return HttpResponseRedirect(resolution.target_url)

        if isinstance(resolution, InternalPath):
            language = extract_language_from_slug(slug)
            target = resolution.path
            if has_language_segment(slug):
                target = f'{target}?lang={language}'

            if is_preview_bot(request.headers.get('User-Agent')):
                event = find_event_by_code(event_code_from_path(resolution.path))
                if event is not None:
                    return self.render_preview(request, event, target, language)
            return HttpResponseRedirect(target)

        logger.info(f"Short link not found: {slug!r}")
        html = render_to_string('links/not_found.html', {'slug': slug}, request=request)
        return HttpResponse(html, status=404)

    def render_preview(self, request, event, target, language):
        title = event.get_text(['rsvp.eventTitle', 'event.title'], language, event.site_title or event.title)
        description = event.get_text(
            ['rsvp.eventDescription', 'event.description'],
            language,
            event.site_description or event.description,
        )
        invitation = event.get_invitation(language)
        html = render_to_string('links/social_preview.html', {
            'event': event,
            'image_url': request.build_absolute_uri(invitation.image.url) if invitation else '',
            'title': f'{TITLE_PREFIXES.get(language, TITLE_PREFIXES["he"])}{title}',
            'description': description,
            'redirect_url': request.build_absolute_uri(target),
            'language': language,
            'direction': 'rtl' if language in RTL_LANGUAGES else 'ltr',
            'og_locale': OG_LOCALES.get(language, OG_LOCALES['he']),
        }, request=request)
        response = HttpResponse(html)
        response['Cache-Control'] = 'public, max-age=300'
        return response


class ShortUrlListView(LoginRequiredMixin, ListView):
    model = ShortUrl
    template_name = 'links/short_url_list.html'
    context_object_name = 'short_urls'

    def get_queryset(self):
        return super().get_queryset().owned_by(self.request.user)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['form'] = kwargs.get('form') or ShortUrlForm()
        return context


class ShortUrlCreateView(LoginRequiredMixin, View):

    def post(self, request):
        form = ShortUrlForm(request.POST)
        if form.is_valid():
            short_url = form.save(commit=False)
            short_url.save(user=request.user)
            messages.success(request, f'Short link /{short_url.slug} created.')
        else:
            for error in form.errors.values():
                messages.error(request, error.as_text())
        return redirect('links:short_urls')


class ShortUrlDeactivateView(LoginRequiredMixin, View):

    def post(self, request, pk):
        short_url = get_object_or_404(ShortUrl.objects.owned_by(request.user), pk=pk)
        short_url.deactivate(user=request.user)
        messages.success(request, f'Short link /{short_url.slug} deactivated.')
        return redirect('links:short_urls')


class EventLinkCreateView(LoginRequiredMixin, View):
    """Create an open or personal link for an event."""

    def post(self, request, pk):
        event = get_owned_event(request, pk)
        form = EventLinkForm(request.POST, event=event)
        if form.is_valid():
            link = form.save(commit=False)
            link.event = event
            if not link.slug:
                link.slug = self.generate_slug(event, link, form.cleaned_data.get('language'))
            link.save(user=request.user)
            messages.success(request, f'Link /{link.slug} created.')
        else:
            for error in form.errors.values():
                messages.error(request, error.as_text())
        return redirect('events:detail', pk=pk)

    @staticmethod
    def generate_slug(event, link, language):
        language = language or event.default_language
        slug = build_link_slug(event.display_code, language)
        if link.type == EventLink.Type.PERSONAL and link.guest is not None:
            slug = f'{slug}/{link.guest.guest_ref}'
        return slug


class EventLinkDeleteView(LoginRequiredMixin, View):

    def post(self, request, pk, link_pk):
        event = get_owned_event(request, pk)
        link = get_object_or_404(EventLink, pk=link_pk, event=event)
        link.delete()
        messages.success(request, f'Link /{link.slug} deleted.')
        return redirect('events:detail', pk=pk)
