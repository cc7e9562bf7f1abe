"""
Forms for links app.
"""
from django import forms

from apps.events.forms import INPUT_CLASS

from .models import EventLink, ShortUrl
from .services import is_reserved_slug


class ShortUrlForm(forms.ModelForm):
    class Meta:
        model = ShortUrl
        fields = ['slug', 'target_url']
        widgets = {
            'slug': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'summer-party',
            }),
            'target_url': forms.URLInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'https://...',
            }),
        }

    def clean_slug(self):
        slug = self.cleaned_data['slug'].strip()
        if is_reserved_slug(slug):
            raise forms.ValidationError(f'"{slug}" is reserved, choose another slug.')
        if EventLink.objects.filter(slug=slug).exists():
            raise forms.ValidationError('An event link already uses this slug.')
        return slug


class EventLinkForm(forms.ModelForm):
    """Create an open or personal link for an event."""

    language = forms.ChoiceField(
        required=False,
        choices=[('', 'No language')] + [('he', 'Hebrew'), ('en', 'English'), ('de', 'German')],
        widget=forms.Select(attrs={'class': INPUT_CLASS}),
    )

    class Meta:
        model = EventLink
        fields = ['type', 'slug', 'guest', 'max_uses', 'expires_at']
        widgets = {
            'type': forms.Select(attrs={'class': INPUT_CLASS}),
            'slug': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'Leave blank to generate',
            }),
            'guest': forms.Select(attrs={'class': INPUT_CLASS}),
            'max_uses': forms.NumberInput(attrs={'class': INPUT_CLASS}),
            'expires_at': forms.DateTimeInput(attrs={
                'class': INPUT_CLASS,
                'type': 'datetime-local',
            }),
        }

    def __init__(self, *args, event=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.event = event
        self.fields['slug'].required = False
        self.fields['guest'].required = False
        if event is not None:
            self.fields['guest'].queryset = event.guests.all()

    def clean_slug(self):
        slug = (self.cleaned_data.get('slug') or '').strip().strip('/')
        if slug and ShortUrl.objects.filter(slug=slug).exists():
            raise forms.ValidationError('A short URL already uses this slug.')
        return slug

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('type') == EventLink.Type.PERSONAL and not cleaned_data.get('guest'):
            self.add_error('guest', 'Personal links need a guest.')
        if cleaned_data.get('type') == EventLink.Type.OPEN:
            for name in ('max_uses', 'expires_at'):
                if cleaned_data.get(name) is not None:
                    self.add_error(name, 'Usage limits and expiry apply to personal links only.')
        return cleaned_data
