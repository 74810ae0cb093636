from django.db import models
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver

from portfoliohub.fields import ObjectIdField


def default_social_links():
    return {'linkedin': '', 'github': '', 'twitter': '', 'instagram': ''}


def default_professional_info():
    return {
        'title': '',
        'company': '',
        'experience': '',
        'skills': [],
        'education': [],
        'certifications': [],
        'awards': [],
        'languages': [],
    }


class UserProfile(models.Model):
    PLAN_FREE = 'free'
    PLAN_PREMIUM = 'premium'
    PLAN_CHOICES = [
        (PLAN_FREE, 'Free'),
        (PLAN_PREMIUM, 'Premium'),
    ]
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
        ('canceled', 'Canceled'),
        ('trial', 'Trial'),
    ]

    _id = ObjectIdField(primary_key=True)
    user = models.OneToOneField(User, on_delete=models.CASCADE)
    full_name = models.CharField(max_length=255, blank=True, default='')
    bio = models.TextField(blank=True, default='')
    phone = models.CharField(max_length=50, blank=True, default='')
    location = models.CharField(max_length=255, blank=True, default='')
    website = models.URLField(blank=True, default='')
    profile_picture = models.URLField(max_length=500, blank=True, default='')
    social_links = models.JSONField(default=default_social_links, blank=True)
    professional_info = models.JSONField(default=default_professional_info, blank=True)
    # Subscription is mocked: no billing provider is wired in
    plan = models.CharField(max_length=20, choices=PLAN_CHOICES, default=PLAN_FREE)
    subscription_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    subscription_expires_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.user.username

    @property
    def is_free_tier(self):
        return self.plan == self.PLAN_FREE

    @property
    def display_name(self):
        return self.full_name or self.user.get_full_name() or self.user.username

    def subscription(self):
        return {
            'plan': self.plan,
            'status': self.subscription_status,
            'expiresAt': self.subscription_expires_at,
        }

    def to_document(self):
        user = self.user
        return {
            '_id': self._id,
            'username': user.username,
            'email': user.email,
            'fullName': self.full_name,
            'bio': self.bio,
            'phone': self.phone,
            'location': self.location,
            'website': self.website,
            'profilePicture': self.profile_picture,
            'socialLinks': {**default_social_links(), **(self.social_links or {})},
            'professionalInfo': {**default_professional_info(), **(self.professional_info or {})},
            'subscription': self.subscription(),
            'isAdmin': user.is_staff,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    # profile fields are only ever saved through the profile itself
    if created:
        UserProfile.objects.create(user=instance)


def get_profile(user):
    profile, _ = UserProfile.objects.get_or_create(user=user)
    return profile
