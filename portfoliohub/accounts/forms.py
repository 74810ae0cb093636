from django import forms
from django.contrib.auth.models import User
from .models import UserProfile


class AccountForm(forms.ModelForm):
    class Meta:
        model = User
        fields = ['username', 'email']


class UserProfileForm(forms.ModelForm):
    class Meta:
        model = UserProfile
        fields = ['full_name', 'bio', 'phone', 'location', 'website', 'profile_picture']


class SubscriptionForm(forms.Form):
    plan = forms.ChoiceField(choices=UserProfile.PLAN_CHOICES, required=False)
    status = forms.ChoiceField(choices=UserProfile.STATUS_CHOICES, required=False)
    expiresAt = forms.DateTimeField(required=False)


# JSON field name -> model field name, for the partial profile update
PROFILE_FIELD_MAP = {
    'fullName': 'full_name',
    'bio': 'bio',
    'phone': 'phone',
    'location': 'location',
    'website': 'website',
    'profilePicture': 'profile_picture',
}

# professionalInfo lists are replaced wholesale, everything else merges
PROFESSIONAL_LIST_FIELDS = ('skills', 'education', 'certifications', 'awards', 'languages')
