from django.db import models
from django.contrib.auth.models import User
from django.core.validators import MinValueValidator, MaxValueValidator

from portfoliohub.fields import ObjectIdField
from .schemas import parse_sections, parse_customization_options


class Template(models.Model):
    CATEGORY_CHOICES = [
        ('developer', 'Developer'),
        ('designer', 'Designer'),
        ('photographer', 'Photographer'),
        ('writer', 'Writer'),
        ('architect', 'Architect'),
        ('artist', 'Artist'),
        ('other', 'Other'),
    ]

    _id = ObjectIdField(primary_key=True)
    name = models.CharField(max_length=200, unique=True)
    slug = models.SlugField(max_length=200, unique=True)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    is_premium = models.BooleanField(default=False)
    price = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    thumbnail = models.URLField(max_length=500, blank=True, default='')
    preview_images = models.JSONField(default=list, blank=True)
    # Ordered section declarations, see catalog.schemas.TemplateSection
    sections = models.JSONField(default=list)
    customization_options = models.JSONField(default=dict, blank=True)
    tags = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    downloads = models.PositiveIntegerField(default=0)
    rating = models.FloatField(default=0, validators=[MinValueValidator(0), MaxValueValidator(5)])
    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='templates_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def section_list(self):
        return parse_sections(self.sections)

    def section_ids(self):
        return [section.id for section in self.section_list()]

    def options(self):
        return parse_customization_options(self.customization_options)

    def to_document(self):
        return {
            '_id': self._id,
            'name': self.name,
            'slug': self.slug,
            'category': self.category,
            'isPremium': self.is_premium,
            'price': float(self.price),
            'thumbnail': self.thumbnail,
            'previewImages': list(self.preview_images or []),
            'sections': [section.to_document() for section in self.section_list()],
            'customizationOptions': self.options().to_document(),
            'tags': list(self.tags or []),
            'isActive': self.is_active,
            'downloads': self.downloads,
            'rating': self.rating,
            'createdBy': self.created_by_id,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    def summary(self):
        """Fields embedded in portfolio listings."""
        return {
            '_id': self._id,
            'name': self.name,
            'thumbnail': self.thumbnail,
            'category': self.category,
            'isPremium': self.is_premium,
        }
