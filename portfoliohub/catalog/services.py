# catalog/services.py
import logging

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Count, ProtectedError, Q, Sum

from assets.cdn import CdnError
from assets.services import upload_images, validate_images
from assets.transforms import transformation_for
from portfoliohub.api import parse_bool, parse_json_field
from portfoliohub.errors import NotFound, ValidationFailed
from portfoliohub.fields import is_object_id
from portfolio.models import Portfolio
from .forms import TEMPLATE_FIELD_MAP, TemplateForm
from .models import Template
from .schemas import parse_customization_options, parse_sections

logger = logging.getLogger(__name__)


def get_template(template_id, message='Template not found'):
    if not is_object_id(template_id):
        raise NotFound(message)
    try:
        return Template.objects.get(pk=template_id)
    except Template.DoesNotExist:
        raise NotFound(message)


def filter_templates(params):
    """Active templates, optionally narrowed by category, premium flag and a name search."""
    queryset = Template.objects.filter(is_active=True)
    if params.get('category'):
        queryset = queryset.filter(category=params['category'])
    if params.get('isPremium') is not None:
        queryset = queryset.filter(is_premium=params['isPremium'] == 'true')
    if params.get('search'):
        queryset = queryset.filter(name__icontains=params['search'])
    return queryset.order_by('-created_at')


def categories():
    return list(Template.objects.order_by('category').values_list('category', flat=True).distinct())


def templates_with_usage(user, params):
    used = {}
    for template_id, portfolio_id in (
        Portfolio.objects.filter(owner=user).order_by('created_at').values_list('template_id', '_id')
    ):
        used.setdefault(template_id, portfolio_id)
    return [
        {
            **template.to_document(),
            'isUsedByUser': template.pk in used,
            'userPortfolioId': used.get(template.pk),
        }
        for template in filter_templates(params)
    ]


def _form_data(data, instance=None):
    # an absent checkbox reads as False, so new templates start active explicitly
    values = {'is_active': True}
    if instance is not None:
        values = {field: getattr(instance, field) for field in TEMPLATE_FIELD_MAP.values()}
    for key, field in TEMPLATE_FIELD_MAP.items():
        value = data.get(key)
        if value is None or value == '':
            continue
        values[field] = parse_bool(value) if field in ('is_premium', 'is_active') else value
    if not values.get('is_premium'):
        values['price'] = 0
    return values


def _validated_form(data, instance=None):
    form = TemplateForm(_form_data(data, instance), instance=instance)
    if not form.is_valid():
        invalid = sorted(form.errors)
        codes = {error.code for errors in form.errors.as_data().values() for error in errors}
        if 'unique' in codes:
            raise ValidationFailed('Template with this name or slug already exists', invalid=invalid)
        raise ValidationFailed(f'Invalid template fields: {", ".join(invalid)}', invalid=invalid)
    return form


def _documents(data, partial=False):
    """Parse the JSON-string documents an admin form sends alongside the scalars."""
    parsed = {}
    sections = parse_json_field(data.get('sections'), 'sections')
    if sections is not None or not partial:
        parsed['sections'] = [s.to_document() for s in parse_sections(sections)]
    options = parse_json_field(data.get('customizationOptions'), 'customizationOptions')
    if options is not None or not partial:
        parsed['customization_options'] = parse_customization_options(options).to_document()
    tags = parse_json_field(data.get('tags'), 'tags')
    if tags is not None or not partial:
        if not isinstance(tags or [], list):
            raise ValidationFailed('tags must be a list', invalid=['tags'])
        parsed['tags'] = [str(tag) for tag in tags or []]
    previews = parse_json_field(data.get('previewImages'), 'previewImages')
    if previews is not None:
        if not isinstance(previews, list):
            raise ValidationFailed('previewImages must be a list', invalid=['previewImages'])
        parsed['preview_images'] = previews
    return parsed


def _upload_images(client, files):
    """Thumbnail and preview uploads; returns (thumbnail url or None, preview urls, public ids)."""
    root = getattr(settings, 'PORTFOLIOHUB_CDN_ROOT_FOLDER', 'portfoliohub')
    max_bytes = settings.PORTFOLIOHUB_TEMPLATE_UPLOAD_MAX_BYTES
    thumbnail = None
    uploaded = []
    thumbnails = files.getlist('thumbnail')[:1] if files else []
    preview_files = files.getlist('previewImages') if files else []
    if thumbnails:
        validate_images(thumbnails, max_bytes=max_bytes)
        uploaded += upload_images(
            client, thumbnails, f'{root}/templates/thumbnails', transformation_for('template-thumbnail')
        )
        thumbnail = uploaded[0]['url']
    if preview_files:
        validate_images(preview_files, max_bytes=max_bytes)
        uploaded += upload_images(
            client, preview_files, f'{root}/templates/previews', transformation_for('template-preview')
        )
    previews = [image['url'] for image in uploaded[1 if thumbnail else 0:]]
    return thumbnail, previews, [image['publicId'] for image in uploaded]


def _save_with_images(template, files, client):
    """Upload any images, then save; a failed save removes what was just uploaded."""
    public_ids = []
    if files:
        thumbnail, previews, public_ids = _upload_images(client, files)
        if thumbnail:
            template.thumbnail = thumbnail
        template.preview_images = list(template.preview_images or []) + previews
    try:
        template.save()
    except DatabaseError:
        for public_id in public_ids:
            try:
                client.destroy(public_id)
            except CdnError:
                logger.warning('Could not remove orphaned upload %s', public_id, exc_info=True)
        raise
    return template


def create_template(user, data, files=None, client=None):
    missing = [key for key in ('name', 'slug', 'category', 'sections') if not data.get(key)]
    if missing:
        raise ValidationFailed(
            'Please provide name, slug, category, and sections for the template', invalid=missing
        )
    if Template.objects.filter(Q(name=data['name']) | Q(slug=data['slug'])).exists():
        raise ValidationFailed('Template with this name or slug already exists')

    form = _validated_form(data)
    documents = _documents(data)
    template = form.save(commit=False)
    for field, value in documents.items():
        setattr(template, field, value)
    template.created_by = user
    _save_with_images(template, files, client)
    logger.info('Template %s created by %s', template.slug, user.username)
    return template


def update_template(template, data, files=None, client=None):
    form = _validated_form(data, instance=template)
    documents = _documents(data, partial=True)
    template = form.save(commit=False)
    for field, value in documents.items():
        setattr(template, field, value)
    if not files and data.get('thumbnail') is not None:
        template.thumbnail = data['thumbnail']
    _save_with_images(template, files, client)
    logger.info('Template %s updated', template.slug)
    return template


def delete_template(template):
    in_use = template.portfolios.count()
    if in_use:
        raise ValidationFailed(
            f'Template is used by {in_use} portfolio(s) and cannot be deleted'
        )
    try:
        template.delete()
    except ProtectedError:
        raise ValidationFailed('Template is in use and cannot be deleted')
    logger.info('Template %s deleted', template.slug)


def template_stats():
    totals = Template.objects.aggregate(
        total=Count('pk'),
        active=Count('pk', filter=Q(is_active=True)),
        premium=Count('pk', filter=Q(is_premium=True)),
        downloads=Sum('downloads'),
    )
    popular = (
        Template.objects.order_by().values('category')
        .annotate(count=Count('pk'))
        .order_by('-count', 'category')[:3]
    )
    return {
        'totalTemplates': totals['total'],
        'activeTemplates': totals['active'],
        'premiumTemplates': totals['premium'],
        'freeTemplates': totals['total'] - totals['premium'],
        'totalDownloads': totals['downloads'] or 0,
        'popularCategories': [{'_id': row['category'], 'count': row['count']} for row in popular],
    }
