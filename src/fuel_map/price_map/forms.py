"""
Upload form for the map page
"""
from django import forms
from django.conf import settings
from django.template.defaultfilters import filesizeformat


def validate_upload_size(uploaded_file):
    limit = settings.FUEL_CSV_MAX_UPLOAD_BYTES
    if uploaded_file.size > limit:
        raise forms.ValidationError(
            f"File is too large ({filesizeformat(uploaded_file.size)}). "
            f"The limit is {filesizeformat(limit)}."
        )


class CsvUploadForm(forms.Form):
    csv_file = forms.FileField(
        label='Fuel price CSV',
        validators=[validate_upload_size],
        widget=forms.ClearableFileInput(attrs={'accept': '.csv'}),
        error_messages={
            'required': 'Choose a CSV file to upload',
            'empty': 'The uploaded file is empty',
        },
    )
