import logging
import re

from django.conf import settings
from django.db import IntegrityError, transaction

from portfoliohub.errors import ValidationFailed

logger = logging.getLogger(__name__)

_NON_SLUG = re.compile(r'[^a-z0-9]+')


def slugify_title(title, fallback='portfolio'):
    """Lower-case, collapse every run of non [a-z0-9] into one hyphen, trim hyphens."""
    slug = _NON_SLUG.sub('-', (title or '').lower()).strip('-')
    return slug or fallback


def candidate_slugs(base, limit):
    yield base
    for counter in range(1, limit + 1):
        yield f'{base}-{counter}'


def save_with_unique_slug(portfolio, base):
    """
    Insert ``portfolio`` under the first free slug in ``base, base-1, base-2...``.

    Uniqueness is per owner and enforced by the (owner, slug) constraint; a
    collision rolls back to a savepoint and the next suffix is tried, so two
    concurrent creates cannot end up sharing a slug.
    """
    limit = getattr(settings, 'PORTFOLIOHUB_SLUG_RETRIES', 50)
    model = type(portfolio)
    for slug in candidate_slugs(base, limit):
        portfolio.slug = slug
        try:
            with transaction.atomic():
                portfolio.save(force_insert=True)
            return portfolio
        except IntegrityError:
            if not model.objects.filter(owner_id=portfolio.owner_id, slug=slug).exists():
                raise
            logger.debug('Slug %s taken for owner %s, trying next', slug, portfolio.owner_id)
    raise ValidationFailed(f'Could not find a free URL for "{base}"')


def claim_slug(portfolio, requested):
    """Rename an existing portfolio's slug; collisions are reported, never suffixed."""
    slug = slugify_title(requested, fallback='')
    if not slug:
        raise ValidationFailed('Custom URL must contain letters or digits')
    taken = type(portfolio).objects.filter(
        owner_id=portfolio.owner_id, slug=slug
    ).exclude(pk=portfolio.pk).exists()
    if taken:
        raise ValidationFailed('This custom URL is already in use by another of your portfolios.')
    return slug
