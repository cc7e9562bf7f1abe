"""
Forms for events app.
"""
import io

from django import forms

from .models import CustomField, Event, Guest, Invitation, RsvpSubmission

INPUT_CLASS = 'block w-full rounded-md border-0 py-1.5 text-gray-900 shadow-sm ring-1 ring-inset ring-gray-300 placeholder:text-gray-400 focus:ring-2 focus:ring-inset focus:ring-primary-600 sm:text-sm sm:leading-6'
RADIO_CLASS = 'h-4 w-4 border-gray-300 text-primary-600 focus:ring-primary-600'
CHECKBOX_CLASS = 'h-4 w-4 rounded border-gray-300 text-primary-600 focus:ring-primary-600'


class EventForm(forms.ModelForm):
    class Meta:
        model = Event
        fields = [
            'title', 'event_date', 'location', 'description', 'default_language',
            'rsvp_enabled', 'rsvp_open_date', 'rsvp_close_date',
            'site_title', 'site_description',
        ]
        widgets = {
            'title': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'Dana & Yoav Wedding',
            }),
            'event_date': forms.DateTimeInput(attrs={
                'class': INPUT_CLASS,
                'type': 'datetime-local',
            }),
            'location': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'Venue, City',
            }),
            'description': forms.Textarea(attrs={
                'class': INPUT_CLASS,
                'rows': 3,
                'placeholder': 'Shown on the RSVP page. Markdown is supported.',
            }),
            'default_language': forms.Select(attrs={'class': INPUT_CLASS}),
            'rsvp_enabled': forms.NullBooleanSelect(attrs={'class': INPUT_CLASS}),
            'rsvp_open_date': forms.DateTimeInput(attrs={
                'class': INPUT_CLASS,
                'type': 'datetime-local',
            }),
            'rsvp_close_date': forms.DateTimeInput(attrs={
                'class': INPUT_CLASS,
                'type': 'datetime-local',
            }),
            'site_title': forms.TextInput(attrs={'class': INPUT_CLASS}),
            'site_description': forms.Textarea(attrs={
                'class': INPUT_CLASS,
                'rows': 2,
            }),
        }

    def clean(self):
        cleaned_data = super().clean()
        open_date = cleaned_data.get('rsvp_open_date')
        close_date = cleaned_data.get('rsvp_close_date')
        if open_date and close_date and close_date < open_date:
            self.add_error('rsvp_close_date', 'RSVP cannot close before it opens.')
        return cleaned_data


class GuestForm(forms.ModelForm):
    class Meta:
        model = Guest
        fields = ['full_name', 'phone', 'email', 'group_name', 'language']
        widgets = {
            'full_name': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'Full name',
            }),
            'phone': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': '0501234567',
            }),
            'email': forms.EmailInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'email@example.com',
            }),
            'group_name': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'Family, friends, work...',
            }),
            'language': forms.Select(attrs={'class': INPUT_CLASS}),
        }

    def clean_phone(self):
        phone = self.cleaned_data.get('phone', '')
        return ''.join(ch for ch in phone if ch.isdigit() or ch == '+')


FILE_INPUT_CLASS = 'block w-full text-sm text-gray-500 file:mr-4 file:py-2 file:px-4 file:rounded-md file:border-0 file:text-sm file:font-semibold file:bg-primary-50 file:text-primary-700 hover:file:bg-primary-100'
MAX_IMPORT_SIZE = 2 * 1024 * 1024


class InvitationForm(forms.ModelForm):
    class Meta:
        model = Invitation
        fields = ['language', 'image']
        widgets = {
            'language': forms.Select(attrs={'class': INPUT_CLASS}),
            'image': forms.FileInput(attrs={
                'class': FILE_INPUT_CLASS,
                'accept': 'image/*',
            }),
        }


class GuestImportForm(forms.Form):
    file = forms.FileField(
        widget=forms.FileInput(attrs={
            'class': FILE_INPUT_CLASS,
            'accept': '.csv',
        }),
        help_text='CSV with "First Name", "Last Name" and "Phone" columns (Hebrew headers work too)',
    )

    def clean_file(self):
        uploaded = self.cleaned_data['file']
        if not uploaded.name.lower().endswith('.csv'):
            raise forms.ValidationError('Upload a .csv file.')
        if uploaded.size > MAX_IMPORT_SIZE:
            raise forms.ValidationError('The file is larger than 2 MB.')
        try:
            content = uploaded.read().decode('utf-8-sig')
        except UnicodeDecodeError:
            raise forms.ValidationError('The file must be UTF-8 encoded.')
        return io.StringIO(content, newline='')


class CustomFieldForm(forms.ModelForm):
    options_text = forms.CharField(
        required=False,
        label='Options',
        help_text='One option per line (select fields only)',
        widget=forms.Textarea(attrs={'class': INPUT_CLASS, 'rows': 3}),
    )

    class Meta:
        model = CustomField
        fields = ['key', 'label', 'field_type', 'link_type', 'required', 'order_index']
        widgets = {
            'key': forms.TextInput(attrs={'class': INPUT_CLASS, 'placeholder': 'meal'}),
            'label': forms.TextInput(attrs={'class': INPUT_CLASS, 'placeholder': 'Meal preference'}),
            'field_type': forms.Select(attrs={'class': INPUT_CLASS}),
            'link_type': forms.Select(attrs={'class': INPUT_CLASS}),
            'required': forms.CheckboxInput(attrs={'class': CHECKBOX_CLASS}),
            'order_index': forms.NumberInput(attrs={'class': INPUT_CLASS}),
        }

    def clean(self):
        cleaned_data = super().clean()
        options = [
            line.strip()
            for line in cleaned_data.get('options_text', '').splitlines()
            if line.strip()
        ]
        if cleaned_data.get('field_type') == CustomField.FieldType.SELECT and not options:
            self.add_error('options_text', 'Select fields need at least one option.')
        cleaned_data['options'] = options
        return cleaned_data

    def save(self, commit=True):
        self.instance.options = self.cleaned_data.get('options', [])
        return super().save(commit=commit)


class ClientAccessForm(forms.Form):
    username = forms.CharField(
        max_length=150,
        widget=forms.TextInput(attrs={'class': INPUT_CLASS}),
    )
    password = forms.CharField(
        min_length=8,
        widget=forms.PasswordInput(attrs={'class': INPUT_CLASS}),
    )

    def __init__(self, *args, event=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.event = event

    def clean_username(self):
        username = self.cleaned_data['username'].strip()
        taken = Event.all_objects.filter(client_username=username)
        if self.event is not None:
            taken = taken.exclude(pk=self.event.pk)
        if taken.exists():
            raise forms.ValidationError('This username is already in use.')
        return username


class ClientLoginForm(forms.Form):
    username = forms.CharField(
        max_length=150,
        widget=forms.TextInput(attrs={'class': INPUT_CLASS, 'autocomplete': 'username'}),
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={'class': INPUT_CLASS, 'autocomplete': 'current-password'}),
    )


class RsvpForm(forms.Form):
    """Public RSVP form - no authentication required."""

    full_name = forms.CharField(
        max_length=255,
        widget=forms.TextInput(attrs={'class': INPUT_CLASS}),
    )
    status = forms.ChoiceField(
        choices=RsvpSubmission.Status.choices,
        initial=RsvpSubmission.Status.ATTENDING,
        widget=forms.RadioSelect(attrs={'class': RADIO_CLASS}),
    )
    men_count = forms.IntegerField(
        min_value=0,
        max_value=50,
        initial=0,
        required=False,
        widget=forms.NumberInput(attrs={'class': INPUT_CLASS}),
    )
    women_count = forms.IntegerField(
        min_value=0,
        max_value=50,
        initial=0,
        required=False,
        widget=forms.NumberInput(attrs={'class': INPUT_CLASS}),
    )

    def __init__(self, *args, custom_fields=None, language='en', **kwargs):
        super().__init__(*args, **kwargs)
        self.custom_fields = list(custom_fields or [])
        for field in self.custom_fields:
            self.fields[f'field_{field.key}'] = self._build_field(field, language)

    @staticmethod
    def _build_field(field, language):
        label = field.get_label(language)
        kind = field.field_type
        if kind == CustomField.FieldType.CHECKBOX:
            return forms.BooleanField(
                required=field.required,
                label=label,
                widget=forms.CheckboxInput(attrs={'class': CHECKBOX_CLASS}),
            )
        if kind == CustomField.FieldType.SELECT:
            return forms.ChoiceField(
                required=field.required,
                label=label,
                choices=[('', '---')] + [(option, option) for option in field.options],
                widget=forms.Select(attrs={'class': INPUT_CLASS}),
            )
        if kind == CustomField.FieldType.NUMBER:
            return forms.IntegerField(
                required=field.required,
                label=label,
                widget=forms.NumberInput(attrs={'class': INPUT_CLASS}),
            )
        if kind == CustomField.FieldType.TEXTAREA:
            return forms.CharField(
                required=field.required,
                label=label,
                widget=forms.Textarea(attrs={'class': INPUT_CLASS, 'rows': 3}),
            )
        return forms.CharField(
            required=field.required,
            label=label,
            widget=forms.TextInput(attrs={'class': INPUT_CLASS}),
        )

    def clean(self):
        cleaned_data = super().clean()
        status = cleaned_data.get('status')
        total = (cleaned_data.get('men_count') or 0) + (cleaned_data.get('women_count') or 0)
        if status == RsvpSubmission.Status.ATTENDING and total == 0:
            raise forms.ValidationError('Please tell us how many people are coming.')
        return cleaned_data

    def get_answers(self):
        """Custom field values keyed by field key."""
        return {
            field.key: self.cleaned_data.get(f'field_{field.key}')
            for field in self.custom_fields
        }
