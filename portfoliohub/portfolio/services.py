# portfolio/services.py
"""
Portfolio lifecycle: creation, customization, publishing and public reads.

Views stay thin and call into this module; every failure is raised as an
``ApiError`` so nothing here knows about HTTP.
"""
import copy
import logging

from django.conf import settings as django_settings
from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.models import User
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, F, Sum
from django.utils import timezone

from accounts.models import get_profile
from accounts.profile import profile_snapshot
from catalog.models import Template
from catalog.services import get_template
from portfoliohub.errors import Forbidden, NotFound, ValidationFailed
from portfoliohub.fields import is_object_id
from . import autofill
from .merge import (
    declared_shapes, merge_custom_data, merge_custom_styling, shallow_merge,
    validate_active_sections,
)
from .models import Portfolio, default_settings, default_styling
from .schemas import CustomizationPatch
from .slugs import claim_slug, save_with_unique_slug, slugify_title

logger = logging.getLogger(__name__)

PASSWORD_HEADER = 'HTTP_X_PORTFOLIO_PASSWORD'
SLUG_TAKEN = 'This custom URL is already in use by another of your portfolios.'


def free_published_limit():
    return getattr(django_settings, 'PORTFOLIOHUB_FREE_PUBLISHED_LIMIT', 1)


def owned_portfolio(user, portfolio_id, allow_admin=False):
    """Fetch a portfolio the user owns (or any portfolio, for admins when allowed)."""
    message = 'Portfolio not found or unauthorized access'
    if not is_object_id(portfolio_id):
        raise NotFound(message)
    queryset = Portfolio.objects.select_related('template', 'owner')
    if not (allow_admin and user.is_staff):
        queryset = queryset.filter(owner=user)
    try:
        return queryset.get(pk=portfolio_id)
    except Portfolio.DoesNotExist:
        raise NotFound(message)


def prepare_settings(existing, patch):
    """
    Shallow-merge a settings patch. Publication is only changed through the
    publish endpoints and passwords are stored hashed.
    """
    patch = dict(patch or {})
    if patch.pop('isPublished', None) is not None:
        logger.debug('Ignoring isPublished in settings patch')
    if 'password' in patch:
        password = patch['password'] or ''
        patch['password'] = make_password(password) if password else ''
    return shallow_merge(existing, patch)


def initial_styling(options):
    """Default styling seeded with the template's first suggested colors and font."""
    styling = default_styling()
    if options.colors:
        styling['colors'].update({
            'primary': options.colors[0],
            'secondary': options.colors[1] if len(options.colors) > 1 else '#ffffff',
        })
    font = options.fonts[0] if options.fonts else 'Inter'
    styling['fonts'].update({'heading': font, 'body': font})
    return styling


def list_portfolios(user):
    return Portfolio.objects.filter(owner=user).select_related('template').order_by('-updated_at')


def create_portfolio(user, data):
    template_id = data.get('templateId')
    title = (data.get('title') or '').strip()
    if not template_id or not title:
        raise ValidationFailed('Please provide templateId and title for the portfolio')
    template = get_template(template_id, 'Selected template not found')

    portfolio = Portfolio(
        owner=user,
        template=template,
        title=title,
        custom_data=data.get('customData') or {},
        custom_styling=data.get('customStyling') or default_styling(),
        seo_settings=data.get('seoSettings') or {},
        settings=prepare_settings(default_settings(), data.get('settings')),
        active_sections=template.section_ids(),
    )
    save_with_unique_slug(portfolio, slugify_title(title))
    logger.info('Portfolio %s created for %s', portfolio.slug, user.username)
    return portfolio


def create_from_template(user, template_id, title=None):
    template = get_template(template_id)
    profile = get_profile(user)

    if profile.is_free_tier:
        published = Portfolio.objects.filter(owner=user, is_published=True).count()
        if published >= free_published_limit():
            raise Forbidden(
                'Free users can only have 1 published portfolio. '
                'Upgrade to Premium for unlimited portfolios.'
            )
    if template.is_premium and profile.is_free_tier:
        raise Forbidden('This is a premium template. Upgrade to access premium templates.')

    sections = template.section_list()
    snapshot = profile_snapshot(user)
    name = snapshot.display_name
    title = (title or '').strip()

    portfolio = Portfolio(
        owner=user,
        template=template,
        title=title or f'My {template.name} Portfolio',
        custom_data=autofill.generate(snapshot, sections),
        custom_styling=initial_styling(template.options()),
        seo_settings={
            'title': f'{name} - Portfolio',
            'description': snapshot.bio or f'Professional portfolio of {name}',
            'keywords': list(snapshot.skills),
        },
        settings=default_settings(),
        active_sections=[section.id for section in sections],
    )
    with transaction.atomic():
        save_with_unique_slug(portfolio, slugify_title(title))
        Template.objects.filter(pk=template.pk).update(downloads=F('downloads') + 1)
    logger.info('Portfolio %s created from template %s for %s', portfolio.slug, template.slug, user.username)
    return portfolio


def customize(portfolio, data):
    """
    Apply an editor patch. Every part is validated before anything is
    assigned, so a rejected patch leaves the portfolio untouched.
    """
    patch = CustomizationPatch.parse(data)
    sections = portfolio.template.section_list()

    changes = {}
    if patch.active_sections is not None:
        changes['active_sections'] = validate_active_sections(
            patch.active_sections, [section.id for section in sections]
        )
    if patch.slug is not None and patch.slug != portfolio.slug:
        changes['slug'] = claim_slug(portfolio, patch.slug)
    if patch.custom_data is not None:
        changes['custom_data'] = merge_custom_data(
            portfolio.custom_data, patch.custom_data, declared_shapes(sections)
        )
    if patch.custom_styling is not None:
        changes['custom_styling'] = merge_custom_styling(portfolio.custom_styling, patch.custom_styling)
    if patch.seo_settings is not None:
        changes['seo_settings'] = shallow_merge(portfolio.seo_settings, patch.seo_settings)
    if patch.settings is not None:
        changes['settings'] = prepare_settings(portfolio.settings, patch.settings)
    if patch.title is not None:
        changes['title'] = patch.title

    for name, value in changes.items():
        setattr(portfolio, name, value)
    # edits never republish on their own
    portfolio.is_draft = True
    try:
        with transaction.atomic():
            portfolio.save()
    except IntegrityError:
        raise ValidationFailed(SLUG_TAKEN)
    return portfolio


def replace_fields(portfolio, data):
    """Whole-field update kept for older clients; customize() is preferred."""
    title = data.get('title')
    if title:
        portfolio.title = title
    for key, attr in (('customData', 'custom_data'), ('customStyling', 'custom_styling'),
                      ('seoSettings', 'seo_settings')):
        if data.get(key):
            setattr(portfolio, attr, data[key])
    if data.get('settings'):
        portfolio.settings = prepare_settings({}, data['settings'])
    portfolio.save()
    return portfolio


def publish(portfolio):
    profile = get_profile(portfolio.owner)
    with transaction.atomic():
        if profile.is_free_tier:
            others = (
                Portfolio.objects.filter(owner_id=portfolio.owner_id, is_published=True)
                .exclude(pk=portfolio.pk)
                .order_by('-published_at')
            )
            keep = free_published_limit() - 1
            if keep > 0:
                others = others.exclude(pk__in=list(others.values_list('pk', flat=True)[:keep]))
            count = others.update(is_published=False)
            if count:
                logger.info('Unpublished %d portfolio(s) of free user %s', count, portfolio.owner_id)
        portfolio.is_published = True
        portfolio.is_draft = False
        if not portfolio.published_at:
            portfolio.published_at = timezone.now()
        portfolio.save()
    return portfolio


def unpublish(portfolio):
    portfolio.is_published = False
    portfolio.save()
    return portfolio


def toggle_publish(portfolio):
    return unpublish(portfolio) if portfolio.is_published else publish(portfolio)


def duplicate(portfolio):
    copy_ = Portfolio(
        owner_id=portfolio.owner_id,
        template_id=portfolio.template_id,
        title=f'{portfolio.title} (Copy)',
        custom_data=copy.deepcopy(portfolio.custom_data),
        custom_styling=copy.deepcopy(portfolio.custom_styling),
        seo_settings=copy.deepcopy(portfolio.seo_settings),
        active_sections=list(portfolio.active_sections or []),
        settings={**copy.deepcopy(portfolio.settings or {}), 'customDomain': ''},
        is_published=False,
        is_draft=True,
        version=1,
    )
    save_with_unique_slug(copy_, f'{portfolio.slug}-copy')
    return copy_


def delete_portfolio(portfolio):
    logger.info('Deleting portfolio %s of %s', portfolio.pk, portfolio.owner_id)
    portfolio.delete()


def template_usage(user, template_id):
    portfolio = Portfolio.objects.filter(owner=user, template_id=template_id).first()
    return {'hasUsed': portfolio is not None, 'portfolioId': portfolio.pk if portfolio else None}


def find_published(username, slug):
    user = User.objects.filter(username=username).first()
    if user is None:
        logger.warning('Public portfolio lookup for unknown user %s', username)
        raise NotFound('User not found')
    portfolio = (
        Portfolio.objects.select_related('template', 'owner')
        .filter(owner=user, slug=slug, is_published=True)
        .first()
    )
    if portfolio is None:
        logger.info('No published portfolio %s for %s', slug, username)
        raise NotFound('Public portfolio not found or not published')
    return portfolio


def check_access(portfolio, supplied):
    stored = (portfolio.settings or {}).get('password')
    if stored and not (supplied and check_password(supplied, stored)):
        raise Forbidden('This portfolio is password protected')


def supplied_password(request):
    return request.META.get(PASSWORD_HEADER) or request.GET.get('password') or ''


def record_view(portfolio):
    """Atomically count a public view. Failures are logged and ignored."""
    now = timezone.now()
    try:
        with transaction.atomic():
            Portfolio.objects.filter(pk=portfolio.pk).update(views=F('views') + 1, last_viewed=now)
    except DatabaseError:
        logger.warning('Could not record view for portfolio %s', portfolio.pk, exc_info=True)
        return False
    portfolio.views += 1
    portfolio.last_viewed = now
    return True


def fetch_public(username, slug, password=''):
    portfolio = find_published(username, slug)
    check_access(portfolio, password)
    record_view(portfolio)
    logger.info('Public view of %s/%s', username, slug)
    return portfolio


def analytics(portfolio):
    if not (portfolio.settings or {}).get('analytics', True):
        raise Forbidden('Analytics are disabled for this portfolio.')
    return {
        'portfolioId': portfolio.pk,
        'title': portfolio.title,
        'state': portfolio.state,
        'publishedAt': portfolio.published_at,
        'currentStats': portfolio.stats(),
    }


def admin_stats():
    total = Portfolio.objects.count()
    published = Portfolio.objects.filter(is_published=True).count()
    total_views = Portfolio.objects.aggregate(total=Sum('views'))['total'] or 0
    most_viewed = Portfolio.objects.select_related('owner').order_by('-views', '-created_at')[:3]
    by_template = (
        Portfolio.objects.values('template__name')
        .annotate(count=Count('pk'))
        .order_by('-count', 'template__name')
    )
    return {
        'totalPortfolios': total,
        'publishedPortfolios': published,
        'draftPortfolios': total - published,
        'totalViews': total_views,
        'averageViews': round(total_views / total, 2) if total else 0,
        'mostViewedPortfolios': [
            {
                '_id': p.pk,
                'title': p.title,
                'slug': p.slug,
                'views': p.views,
                'username': p.owner.username,
            }
            for p in most_viewed
        ],
        'portfoliosByTemplate': [
            {'templateName': row['template__name'], 'count': row['count']} for row in by_template
        ],
    }
