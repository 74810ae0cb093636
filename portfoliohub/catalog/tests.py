import json
from io import StringIO
from unittest import mock

import pytest
from django.contrib.auth.models import User
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.db import IntegrityError
from django.utils.datastructures import MultiValueDict

from portfolio.services import create_portfolio
from portfoliohub.testing import FakeCdnClient
from . import services
from .models import Template
from .schemas import parse_sections
from portfoliohub.errors import ValidationFailed

SECTIONS = [
    {'id': 'hero', 'type': 'hero', 'fields': ['name']},
    {'id': 'contact', 'type': 'contact'},
]


def template_payload(**overrides):
    data = {
        'name': 'Minimal',
        'slug': 'minimal',
        'category': 'writer',
        'sections': SECTIONS,
        'customizationOptions': {'colors': ['#000000'], 'fonts': ['Lora']},
        'tags': ['clean'],
    }
    data.update(overrides)
    return data


def test_parse_sections_rejects_duplicates_and_blanks():
    with pytest.raises(ValidationFailed) as exc:
        parse_sections([SECTIONS[0], SECTIONS[0]])
    assert exc.value.invalid == ['hero']
    with pytest.raises(ValidationFailed):
        parse_sections([{'id': ' ', 'type': 'hero'}])
    with pytest.raises(ValidationFailed):
        parse_sections([])


def test_section_shapes_follow_type_then_repeatable_flag():
    hero, projects, gallery, quotes = parse_sections([
        {'id': 'a', 'type': 'hero', 'isRepeatable': True},
        {'id': 'b', 'type': 'portfolio'},
        {'id': 'c', 'type': 'gallery'},
        {'id': 'd', 'type': 'quotes', 'isRepeatable': True},
    ])
    assert hero.shape == 'object'
    assert (projects.data_key, projects.shape) == ('projects', 'list')
    assert gallery.shape == 'object'
    assert quotes.shape == 'list'


def test_list_filters(client, make_template):
    make_template(name='Dev One', category='developer')
    make_template(name='Designer Pro', category='designer', is_premium=True)
    make_template(name='Hidden', is_active=False)

    names = lambda params: sorted(t['name'] for t in client.get('/api/templates/', params).json())
    assert names({}) == ['Designer Pro', 'Dev One']
    assert names({'category': 'designer'}) == ['Designer Pro']
    assert names({'isPremium': 'true'}) == ['Designer Pro']
    assert names({'isPremium': 'false'}) == ['Dev One']
    assert names({'search': 'pro'}) == ['Designer Pro']


def test_categories(client, make_template):
    make_template(category='developer')
    make_template(category='developer')
    make_template(category='artist')
    assert client.get('/api/templates/categories').json() == ['artist', 'developer']


def test_detail_and_unknown_id(client, template):
    body = client.get(f'/api/templates/{template.pk}').json()
    assert body['name'] == template.name
    assert body['sections'][0]['id'] == 'hero'
    assert body['price'] == 0.0
    assert client.get('/api/templates/not-an-id').status_code == 404
    assert client.get('/api/templates/0123456789abcdef01234567').status_code == 404


def test_with_usage_marks_used_templates(auth_client, user, make_template):
    used = make_template()
    make_template()
    portfolio = create_portfolio(user, {'templateId': used.pk, 'title': 'Mine'})
    rows = {row['_id']: row for row in auth_client.get('/api/templates/with-usage').json()}
    assert rows[used.pk]['isUsedByUser'] is True
    assert rows[used.pk]['userPortfolioId'] == portfolio.pk
    assert sum(row['isUsedByUser'] for row in rows.values()) == 1


@pytest.mark.django_db
def test_with_usage_requires_login(client):
    assert client.get('/api/templates/with-usage').status_code == 401


def test_create_requires_admin(auth_client):
    response = auth_client.post('/api/templates/', template_payload(), content_type='application/json')
    assert response.status_code == 403


def test_admin_creates_template_from_json(admin_client, admin_user):
    response = admin_client.post('/api/templates/', template_payload(), content_type='application/json')
    assert response.status_code == 201
    body = response.json()
    assert body['isActive'] is True
    assert body['isPremium'] is False
    assert body['customizationOptions']['fonts'] == ['Lora']
    assert body['createdBy'] == admin_user.pk
    assert Template.objects.get(slug='minimal').sections[1]['id'] == 'contact'


def test_admin_creates_template_from_multipart(admin_client, fake_cdn):
    data = template_payload(
        sections=json.dumps(SECTIONS),
        customizationOptions=json.dumps({'colors': ['#fff']}),
        tags=json.dumps(['a', 'b']),
        isPremium='true',
        price='19.99',
        thumbnail=SimpleUploadedFile('cover.png', b'png-bytes', content_type='image/png'),
    )
    response = admin_client.post('/api/templates/', data)
    assert response.status_code == 201
    body = response.json()
    assert body['isPremium'] is True
    assert body['price'] == 19.99
    assert body['tags'] == ['a', 'b']
    assert body['thumbnail'] == 'https://cdn.example.test/portfoliohub/templates/thumbnails/cover.jpg'
    assert fake_cdn.uploads[0]['transformation'] == 'w_400,h_225,c_fill,q_auto:best'


def test_failed_save_removes_fresh_uploads(admin_user, fake_cdn):
    files = MultiValueDict({
        'thumbnail': [SimpleUploadedFile('cover.png', b'png-bytes', content_type='image/png')],
        'previewImages': [SimpleUploadedFile('one.png', b'png-bytes', content_type='image/png')],
    })
    with mock.patch.object(Template, 'save', side_effect=IntegrityError):
        with pytest.raises(IntegrityError):
            services.create_template(admin_user, template_payload(), files, FakeCdnClient())
    assert fake_cdn.destroyed == [
        'portfoliohub/templates/thumbnails/cover',
        'portfoliohub/templates/previews/one',
    ]
    assert not Template.objects.filter(slug='minimal').exists()


def test_create_rejects_missing_and_malformed_fields(admin_client):
    missing = admin_client.post('/api/templates/', {'name': 'x'}, content_type='application/json')
    assert missing.status_code == 400
    assert set(missing.json()['invalid']) == {'slug', 'category', 'sections'}

    malformed = admin_client.post(
        '/api/templates/', template_payload(sections='[{not json', customizationOptions='{}', tags='[]')
    )
    assert malformed.status_code == 400
    assert 'sections' in malformed.json()['message']
    assert not Template.objects.exists()


def test_create_rejects_duplicate_name(admin_client, make_template):
    make_template(name='Minimal')
    response = admin_client.post('/api/templates/', template_payload(), content_type='application/json')
    assert response.status_code == 400
    assert response.json()['message'] == 'Template with this name or slug already exists'


def test_update_template(admin_client, make_template):
    template = make_template(name='Before')
    taken = make_template(name='Taken')
    response = admin_client.put(
        f'/api/templates/{template.pk}',
        {'name': 'After', 'isActive': False, 'sections': SECTIONS},
        content_type='application/json',
    )
    assert response.status_code == 200
    template.refresh_from_db()
    assert template.name == 'After'
    assert template.is_active is False
    assert [s['id'] for s in template.sections] == ['hero', 'contact']

    clash = admin_client.put(
        f'/api/templates/{template.pk}', {'name': taken.name}, content_type='application/json'
    )
    assert clash.status_code == 400
    assert clash.json()['message'] == 'Template with this name or slug already exists'


def test_delete_refused_while_in_use(admin_client, user, template, make_template):
    create_portfolio(user, {'templateId': template.pk, 'title': 'Uses it'})
    response = admin_client.delete(f'/api/templates/{template.pk}')
    assert response.status_code == 400
    assert Template.objects.filter(pk=template.pk).exists()

    unused = make_template()
    assert admin_client.delete(f'/api/templates/{unused.pk}').json() == {'message': 'Template removed'}
    assert not Template.objects.filter(pk=unused.pk).exists()


def test_stats(admin_client, make_template):
    make_template(category='developer', downloads=3)
    make_template(category='developer', is_premium=True)
    make_template(category='artist', is_active=False, downloads=2)
    stats = admin_client.get('/api/templates/stats').json()
    assert stats['totalTemplates'] == 3
    assert stats['activeTemplates'] == 2
    assert stats['premiumTemplates'] == 1
    assert stats['freeTemplates'] == 2
    assert stats['totalDownloads'] == 5
    assert stats['popularCategories'][0] == {'_id': 'developer', 'count': 2}


@pytest.mark.django_db
def test_seed_templates_is_idempotent():
    out = StringIO()
    call_command('seed_templates', stdout=out)
    call_command('seed_templates', stdout=out)
    assert Template.objects.count() == 4
    admin = User.objects.get(username='admin')
    assert admin.is_staff and not admin.has_usable_password()
    assert 'Seeded 4 templates' in out.getvalue()
    basic = Template.objects.get(slug='basic-portfolio')
    assert [s.data_key for s in basic.section_list()] == ['hero', 'projects', 'contact']
