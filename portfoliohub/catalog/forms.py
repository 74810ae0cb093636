from django import forms
from .models import Template


class TemplateForm(forms.ModelForm):
    """Scalar template fields; the JSON documents are validated in catalog.schemas."""

    class Meta:
        model = Template
        fields = ['name', 'slug', 'category', 'is_premium', 'price', 'is_active']


# JSON field name -> model field name
TEMPLATE_FIELD_MAP = {
    'name': 'name',
    'slug': 'slug',
    'category': 'category',
    'isPremium': 'is_premium',
    'price': 'price',
    'isActive': 'is_active',
}
