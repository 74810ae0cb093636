import pytest
from django.contrib.auth.models import User

from accounts.models import UserProfile
from catalog.models import Template
from portfoliohub.testing import FakeCdnClient

STARTER_SECTIONS = [
    {'id': 'hero', 'type': 'hero', 'fields': ['name', 'title'], 'styling': {'bgColor': '#ffffff'}},
    {'id': 'about', 'type': 'about', 'fields': ['description']},
    {'id': 'projects', 'type': 'projects', 'fields': ['title', 'image'], 'isRepeatable': True},
    {'id': 'skills', 'type': 'skills', 'fields': ['skillName'], 'isRepeatable': True},
    {'id': 'contact', 'type': 'contact', 'fields': ['email'], 'styling': {'textAlign': 'center'}},
]


@pytest.fixture(autouse=True)
def fast_hashing(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def fake_cdn(settings):
    FakeCdnClient.reset()
    settings.PORTFOLIOHUB_CDN_CLIENT = 'portfoliohub.testing.FakeCdnClient'
    yield FakeCdnClient
    FakeCdnClient.reset()


@pytest.fixture
def make_user(db):
    def make(username='alice', plan=UserProfile.PLAN_FREE, **extra):
        user = User.objects.create_user(
            username=username, email=f'{username}@example.com', password='secret-pass-1', **extra
        )
        profile = UserProfile.objects.get(user=user)
        profile.plan = plan
        profile.save()
        return user
    return make


@pytest.fixture
def user(make_user):
    return make_user('alice')


@pytest.fixture
def admin_user(make_user):
    return make_user('root', is_staff=True)


@pytest.fixture
def make_template(db):
    counter = {'n': 0}

    def make(sections=None, is_premium=False, options=None, **extra):
        counter['n'] += 1
        n = counter['n']
        return Template.objects.create(
            name=extra.pop('name', f'Starter {n}'),
            slug=extra.pop('slug', f'starter-{n}'),
            category=extra.pop('category', 'developer'),
            is_premium=is_premium,
            price=29 if is_premium else 0,
            sections=sections if sections is not None else STARTER_SECTIONS,
            customization_options=options or {'colors': ['#111111', '#222222'], 'fonts': ['Poppins']},
            **extra,
        )
    return make


@pytest.fixture
def template(make_template):
    return make_template()


@pytest.fixture
def auth_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client
