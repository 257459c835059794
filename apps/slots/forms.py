from django import forms

from .models import SlotStatus


class InstantField(forms.DateTimeField):
    """ISO 8601 string from a JSON body; naive values are read as UTC (TIME_ZONE)."""

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)


class SlotCreateForm(forms.Form):
    starts_at = InstantField()
    ends_at = InstantField()
    capacity_total = forms.IntegerField(min_value=0)
    capacity_exp = forms.IntegerField(min_value=0)
    capacity_inexp = forms.IntegerField(min_value=0)


class SlotUpdateForm(forms.Form):
    """Every field is optional; anything left out keeps its current value."""
    capacity_total = forms.IntegerField(min_value=0, required=False)
    capacity_exp = forms.IntegerField(min_value=0, required=False)
    capacity_inexp = forms.IntegerField(min_value=0, required=False)
    status = forms.ChoiceField(choices=SlotStatus.choices, required=False)

    def clean_status(self):
        return self.cleaned_data.get('status') or None


class FillDayForm(forms.Form):
    day_start = InstantField()
