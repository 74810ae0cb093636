from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone

from portfoliohub.fields import ObjectIdField
from catalog.models import Template


def default_styling():
    return {
        'colors': {
            'primary': '#6366f1',
            'secondary': '#8b5cf6',
            'accent': '#10b981',
            'background': '#ffffff',
            'text': '#1f2937',
            'muted': '#6b7280',
        },
        'fonts': {'heading': 'Inter', 'body': 'Inter', 'accent': 'Inter'},
        'spacing': {'section': 'normal', 'element': 'normal'},
        'animations': {'enabled': True, 'type': 'fade', 'duration': 'normal'},
        'layout': {'containerWidth': 'normal', 'sectionAlignment': 'center'},
    }


def default_seo_settings():
    return {'title': '', 'description': '', 'keywords': [], 'ogImage': '', 'customMeta': {}}


def default_settings():
    return {
        'customDomain': '',
        'password': '',
        'analytics': True,
        'allowComments': False,
        'showBranding': True,
        'customCSS': '',
    }


class Portfolio(models.Model):
    _id = ObjectIdField(primary_key=True)
    owner = models.ForeignKey(User, on_delete=models.CASCADE, related_name='portfolios')
    template = models.ForeignKey(Template, on_delete=models.PROTECT, related_name='portfolios')
    title = models.CharField(max_length=200)
    slug = models.CharField(max_length=200)
    # Ordered section ids, always a subset of the template's section ids
    active_sections = models.JSONField(default=list, blank=True)
    # Section type -> object (singular sections) or list (repeatable sections)
    custom_data = models.JSONField(default=dict, blank=True)
    custom_styling = models.JSONField(default=default_styling, blank=True)
    seo_settings = models.JSONField(default=default_seo_settings, blank=True)
    settings = models.JSONField(default=default_settings, blank=True)
    is_published = models.BooleanField(default=False)
    is_draft = models.BooleanField(default=True)
    published_at = models.DateTimeField(blank=True, null=True)
    version = models.PositiveIntegerField(default=1)
    views = models.PositiveIntegerField(default=0)
    unique_visitors = models.PositiveIntegerField(default=0)
    last_viewed = models.DateTimeField(blank=True, null=True)
    shares = models.PositiveIntegerField(default=0)
    contact_forms = models.PositiveIntegerField(default=0)
    last_edited_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at']
        constraints = [
            models.UniqueConstraint(fields=['owner', 'slug'], name='unique_portfolio_slug_per_owner'),
        ]

    def __str__(self):
        return f"{self.owner.username}/{self.slug}"

    def save(self, *args, **kwargs):
        self.last_edited_at = timezone.now()
        if self.is_published and not self.published_at:
            self.published_at = timezone.now()
        super().save(*args, **kwargs)

    @property
    def state(self):
        if self.is_published:
            return 'published'
        return 'unpublished' if self.published_at else 'draft'

    @property
    def has_password(self):
        return bool((self.settings or {}).get('password'))

    def public_settings(self):
        data = {**default_settings(), **(self.settings or {})}
        data.pop('password', None)
        data['hasPassword'] = self.has_password
        data['isPublished'] = self.is_published
        return data

    def stats(self):
        return {
            'views': self.views,
            'uniqueVisitors': self.unique_visitors,
            'lastViewed': self.last_viewed,
            'shares': self.shares,
            'contactForms': self.contact_forms,
        }

    def to_document(self, include_template=False):
        data = {
            '_id': self._id,
            'userId': self.owner_id,
            'templateId': self.template_id,
            'title': self.title,
            'slug': self.slug,
            'activeSections': list(self.active_sections or []),
            'customData': self.custom_data or {},
            'customStyling': self.custom_styling or {},
            'seoSettings': {**default_seo_settings(), **(self.seo_settings or {})},
            'settings': self.public_settings(),
            'stats': self.stats(),
            'state': self.state,
            'version': self.version,
            'isDraft': self.is_draft,
            'publishedAt': self.published_at,
            'lastEditedAt': self.last_edited_at,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }
        if include_template:
            data['template'] = self.template.to_document()
        return data
