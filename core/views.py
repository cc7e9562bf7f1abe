"""
Core views including dashboard.
"""
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db.models import Sum
from django.views.generic import TemplateView

from apps.events.models import Guest, RsvpSubmission
from apps.links.models import ShortUrl


class DashboardView(LoginRequiredMixin, TemplateView):
    """Organizer dashboard with event and RSVP totals."""
    template_name = 'dashboard.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        events = self.request.user.get_events()

        submissions = RsvpSubmission.objects.filter(event__in=events)
        head_counts = submissions.filter(
            status=RsvpSubmission.Status.ATTENDING,
        ).aggregate(men=Sum('men_count'), women=Sum('women_count'))

        context['events'] = events[:10]
        context['event_count'] = events.count()
        context['guest_count'] = Guest.objects.filter(event__in=events).count()
        context['submission_count'] = submissions.count()
        context['attending_count'] = (head_counts['men'] or 0) + (head_counts['women'] or 0)
        context['recent_submissions'] = submissions.select_related('event')[:5]

        short_urls = ShortUrl.objects.owned_by(self.request.user)
        context['short_url_clicks'] = short_urls.aggregate(total=Sum('clicks_count'))['total'] or 0
        return context
