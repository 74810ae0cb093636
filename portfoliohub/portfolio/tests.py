import json

import pytest
from django.core.serializers.json import DjangoJSONEncoder
from django.db.models import ProtectedError

from accounts.models import UserProfile
from accounts.profile import ProfileSnapshot
from catalog import services as catalog_services
from catalog.models import Template
from catalog.schemas import parse_sections
from portfoliohub.errors import Forbidden, ValidationFailed
from . import autofill, services
from .merge import merge_custom_data, merge_custom_styling
from .models import Portfolio
from .renderer import RenderMode, render, render_html, render_sections
from .sections import Shape
from .slugs import slugify_title

HERO = {'id': 'hero', 'type': 'hero'}
CONTACT = {'id': 'contact', 'type': 'contact'}
PROJECTS = {'id': 'projects', 'type': 'projects', 'isRepeatable': True}
SKILLS = {'id': 'skills', 'type': 'skills', 'isRepeatable': True}


def create(user, template, title='My Site'):
    return services.create_portfolio(user, {'templateId': template.pk, 'title': title})


def as_dicts(sections):
    return [section.as_dict() for section in sections]


# slugs

@pytest.mark.parametrize('title,expected', [
    ('My Site', 'my-site'),
    ('  Hello,  World!! ', 'hello-world'),
    ('--Already-Slugged--', 'already-slugged'),
    ('Ünïcode Ärt 2024', 'n-code-rt-2024'),
    ('!!!', 'portfolio'),
])
def test_slugify_title(title, expected):
    assert slugify_title(title) == expected


def test_same_title_gets_numbered_slugs_within_owner(user, make_user, template):
    slugs = [create(user, template, 'My Site!').slug for _ in range(3)]
    assert slugs == ['my-site', 'my-site-1', 'my-site-2']
    assert create(make_user('bob'), template, 'My Site').slug == 'my-site'
    assert Portfolio.objects.filter(owner=user).values('slug').distinct().count() == 3


def test_slug_retries_are_bounded(user, template, settings):
    settings.PORTFOLIOHUB_SLUG_RETRIES = 1
    create(user, template, 'Same')
    create(user, template, 'Same')
    with pytest.raises(ValidationFailed):
        create(user, template, 'Same')


# auto-fill

def test_autofill_maps_skills_and_leaves_projects_empty():
    sections = parse_sections([HERO, PROJECTS, SKILLS])
    data = autofill.generate(ProfileSnapshot(username='ada', skills=['Go', 'Rust']), sections)
    assert data['skills'] == [
        {'skillName': 'Go', 'proficiency': 'intermediate'},
        {'skillName': 'Rust', 'proficiency': 'intermediate'},
    ]
    assert data['projects'] == []
    assert set(data) == {'hero', 'projects', 'skills'}


def test_autofill_hero_falls_back_to_placeholders():
    data = autofill.generate(ProfileSnapshot(username='ada', email='ada@example.com'), parse_sections([HERO]))
    assert data['hero']['name'] == 'ada'
    assert data['hero']['title'] == 'Professional'
    assert data['hero']['description'] == "Welcome to my portfolio. I'm ada."
    assert data['hero']['email'] == 'ada@example.com'


def test_autofill_copies_profile_lists_and_contact_fields():
    profile = ProfileSnapshot(
        username='ada',
        full_name='Ada Lovelace',
        phone='555',
        website='https://ada.dev',
        experience='10 years',
        education=[{'degree': 'BSc'}],
        certifications=[{'name': 'AWS'}],
    )
    sections = parse_sections([
        {'id': 'about', 'type': 'about'},
        CONTACT,
        {'id': 'experience', 'type': 'experience'},
        {'id': 'education', 'type': 'education'},
        {'id': 'certs', 'type': 'certifications'},
    ])
    data = autofill.generate(profile, sections)
    assert data['about']['experience'] == '10 years'
    assert data['experience'] == []
    assert data['education'] == [{'degree': 'BSc'}]
    assert data['certifications'] == [{'name': 'AWS'}]
    assert data['contact']['website'] == 'https://ada.dev'


def test_autofill_other_types_start_empty_in_their_shape():
    sections = parse_sections([
        {'id': 'gallery', 'type': 'gallery'},
        {'id': 'quotes', 'type': 'quotes', 'isRepeatable': True},
        {'id': 'testimonials', 'type': 'testimonials'},
        {'id': 'portfolio', 'type': 'portfolio'},
    ])
    data = autofill.generate(ProfileSnapshot(username='ada'), sections)
    assert data == {'gallery': {}, 'quotes': [], 'testimonials': [], 'projects': []}


# merge engine

def test_list_content_is_replaced_not_unioned():
    first = merge_custom_data({}, {'skills': [{'skillName': 'Go'}, {'skillName': 'C'}]})
    second = merge_custom_data(first, {'skills': [{'skillName': 'Rust'}]})
    assert second['skills'] == [{'skillName': 'Rust'}]


def test_object_content_is_shallow_merged():
    merged = merge_custom_data({'hero': {'name': 'A', 'title': 'T'}}, {'hero': {'name': 'B'}})
    assert merged == {'hero': {'name': 'B', 'title': 'T'}}


def test_scalars_and_null_replace():
    merged = merge_custom_data({'hero': {'name': 'A'}, 'tagline': 'x'}, {'hero': None, 'tagline': 'y'})
    assert merged == {'hero': None, 'tagline': 'y'}


def test_shape_mismatch_is_rejected():
    with pytest.raises(ValidationFailed) as exc:
        merge_custom_data({}, {'projects': {'title': 'not a list'}}, {'projects': Shape.LIST})
    assert exc.value.invalid == ['projects']
    with pytest.raises(ValidationFailed):
        merge_custom_data({}, {'hero': [1, 2]})


def test_undeclared_keys_follow_the_patch_value():
    merged = merge_custom_data({'extra': {'a': 1}}, {'extra': {'b': 2}, 'more': [1]})
    assert merged == {'extra': {'a': 1, 'b': 2}, 'more': [1]}


def test_styling_merge_keeps_sibling_keys():
    existing = {'colors': {'primary': '#fff', 'secondary': '#eee'}, 'fonts': {'body': 'Inter'}}
    merged = merge_custom_styling(existing, {'colors': {'primary': '#000'}, 'theme': 'dark'})
    assert merged['colors'] == {'primary': '#000', 'secondary': '#eee'}
    assert merged['fonts'] == {'body': 'Inter'}
    assert merged['theme'] == 'dark'
    assert existing['colors']['primary'] == '#fff'


# customization

def test_invalid_active_sections_reject_the_whole_patch(user, make_template):
    tpl = make_template(sections=[HERO, CONTACT])
    portfolio = create(user, tpl, 'Site')
    with pytest.raises(ValidationFailed) as exc:
        services.customize(portfolio, {
            'title': 'Renamed',
            'activeSections': ['hero', 'bogus'],
            'customData': {'hero': {'name': 'X'}},
        })
    assert exc.value.invalid == ['bogus']
    assert portfolio.title == 'Site'
    portfolio.refresh_from_db()
    assert portfolio.title == 'Site'
    assert portfolio.custom_data == {}


def test_customize_applies_patch_and_marks_draft(user, template):
    portfolio = services.publish(create(user, template))
    portfolio = services.customize(portfolio, {
        'title': 'New Title',
        'activeSections': ['contact', 'hero'],
        'seoSettings': {'description': 'About me'},
        'settings': {'customDomain': 'me.dev', 'isPublished': False},
        'customStyling': {'colors': {'primary': '#000'}},
    })
    portfolio.refresh_from_db()
    assert portfolio.title == 'New Title'
    assert portfolio.active_sections == ['contact', 'hero']
    assert portfolio.seo_settings['description'] == 'About me'
    assert portfolio.settings['customDomain'] == 'me.dev'
    assert portfolio.custom_styling['colors']['primary'] == '#000'
    assert portfolio.custom_styling['colors']['secondary'] == '#8b5cf6'
    assert portfolio.is_draft is True
    assert portfolio.is_published is True


def test_customize_slug_collision(user, template):
    create(user, template, 'Taken')
    portfolio = create(user, template, 'Mine')
    with pytest.raises(ValidationFailed) as exc:
        services.customize(portfolio, {'slug': 'Taken'})
    assert 'already in use' in exc.value.message
    services.customize(portfolio, {'slug': 'Fresh URL'})
    portfolio.refresh_from_db()
    assert portfolio.slug == 'fresh-url'


def test_customize_hashes_password(user, template):
    portfolio = services.customize(create(user, template), {'settings': {'password': 'open-sesame'}})
    assert portfolio.settings['password'] != 'open-sesame'
    assert portfolio.has_password
    assert 'password' not in portfolio.to_document()['settings']


# publishing

def test_free_tier_publish_is_exclusive_and_idempotent(user, template):
    first = services.publish(create(user, template, 'One'))
    second = create(user, template, 'Two')
    services.publish(second)
    first.refresh_from_db()
    assert first.is_published is False
    assert second.is_published is True and second.is_draft is False
    stamped = second.published_at

    services.publish(second)
    first.refresh_from_db()
    second.refresh_from_db()
    assert first.is_published is False
    assert second.is_published is True
    assert second.published_at == stamped


def test_premium_owner_keeps_several_published(make_user, template):
    owner = make_user('pro', plan=UserProfile.PLAN_PREMIUM)
    first = services.publish(create(owner, template, 'One'))
    services.publish(create(owner, template, 'Two'))
    first.refresh_from_db()
    assert first.is_published is True


def test_unpublish_only_touches_itself(make_user, template):
    owner = make_user('pro', plan=UserProfile.PLAN_PREMIUM)
    first = services.publish(create(owner, template, 'One'))
    second = services.publish(create(owner, template, 'Two'))
    services.unpublish(second)
    first.refresh_from_db()
    assert first.is_published is True
    assert second.state == 'unpublished'
    assert create(owner, template, 'Three').state == 'draft'


# renderer

def test_empty_active_sections_render_every_template_section(user, make_template):
    tpl = make_template(sections=[HERO, CONTACT])
    portfolio = create(user, tpl)
    portfolio.active_sections = []
    fallback = as_dicts(render(portfolio))
    portfolio.active_sections = ['hero', 'contact']
    explicit = as_dicts(render(portfolio))
    assert fallback == explicit
    assert [s['sectionId'] for s in fallback] == ['hero', 'contact']


def test_render_round_trips_through_json(user, make_template):
    tpl = make_template(sections=[
        {'id': 'hero', 'type': 'hero', 'styling': {'bgColor': '#fff', 'textAlign': 'center'}},
        PROJECTS,
        CONTACT,
    ])
    portfolio = services.create_from_template(user, tpl.pk, 'Round Trip')
    services.customize(portfolio, {
        'activeSections': ['projects', 'hero'],
        'customData': {'projects': [{'title': 'Compiler'}]},
        'customStyling': {'hero': {'bgColor': '#000'}},
    })
    before = as_dicts(render(portfolio, mode=RenderMode.EDIT))

    doc = json.loads(json.dumps(portfolio.to_document(include_template=True), cls=DjangoJSONEncoder))
    after = as_dicts(render_sections(
        doc['activeSections'],
        doc['customData'],
        doc['customStyling'],
        parse_sections(doc['template']['sections']),
        RenderMode.EDIT,
    ))
    assert after == before
    assert [s['sectionId'] for s in after] == ['projects', 'hero']


def test_effective_styling_layers(user, make_template):
    tpl = make_template(sections=[
        {'id': 'hero', 'type': 'hero', 'styling': {'bgColor': '#fff', 'textAlign': 'center'}},
        CONTACT,
    ])
    portfolio = create(user, tpl)
    portfolio.custom_styling = {'colors': {'primary': '#123'}, 'hero': {'bgColor': '#000'}}
    hero, contact = render(portfolio)
    assert hero.styling == {'colors': {'primary': '#123'}, 'bgColor': '#000', 'textAlign': 'center'}
    assert contact.styling == {'colors': {'primary': '#123'}}


def test_overrides_for_dropped_sections_stay_scoped(user, make_template):
    portfolio = create(user, make_template(sections=[HERO, CONTACT]))
    portfolio.active_sections = ['hero', 'contact', 'old']
    portfolio.custom_styling = {
        'colors': {'primary': '#123'},
        'old': {'bgColor': 'red'},
        'skills': {'bgColor': 'blue'},
    }
    hero = render(portfolio)[0]
    assert hero.styling == {'colors': {'primary': '#123'}}


def test_portfolio_section_id_resolves_to_projects(user, make_template):
    tpl = make_template(sections=[HERO, {'id': 'portfolio', 'type': 'portfolio', 'isRepeatable': True}])
    portfolio = create(user, tpl)
    portfolio.custom_data = {'projects': [{'title': 'X'}]}
    section = render(portfolio)[1]
    assert (section.section_id, section.data_key, section.component) == ('portfolio', 'projects', 'projects')
    assert section.data == [{'title': 'X'}]


def test_sections_without_component(user, make_template):
    tpl = make_template(sections=[HERO, {'id': 'gallery', 'type': 'gallery'}])
    portfolio = create(user, tpl)
    assert [s.section_id for s in render(portfolio, mode=RenderMode.VIEW)] == ['hero']
    edit = render(portfolio, mode=RenderMode.EDIT)
    assert [s.section_id for s in edit] == ['hero', 'gallery']
    assert edit[1].as_dict()['placeholder'] == 'gallery section coming soon'


def test_edit_patches_go_through_merge(user, template):
    portfolio = services.create_from_template(user, template.pk, 'Edit')
    services.customize(portfolio, {'customData': {'projects': [{'title': 'A'}, {'title': 'B'}]}})
    sections = {s.section_id: s for s in render(portfolio, mode=RenderMode.EDIT)}

    services.customize(portfolio, sections['hero'].field_patch('name', 'Ada'))
    services.customize(portfolio, sections['projects'].item_patch(1, 'title', 'C'))
    portfolio.refresh_from_db()
    assert portfolio.custom_data['hero']['name'] == 'Ada'
    assert portfolio.custom_data['hero']['title'] == 'Professional'
    assert portfolio.custom_data['projects'] == [{'title': 'A'}, {'title': 'C'}]


def test_item_patch_addresses(user, make_template):
    portfolio = create(user, make_template(sections=[HERO, SKILLS]))
    portfolio.custom_data = {'skills': ['Go']}
    skills = render(portfolio, mode=RenderMode.EDIT)[1]
    assert skills.item_patch(0, 'level', 3) == {'customData': {'skills': [{'value': 'Go', 'level': 3}]}}
    assert skills.item_patch(2, 'name', 'Rust')['customData']['skills'][1:] == [{}, {'name': 'Rust'}]
    for index in (-1, '1'):
        with pytest.raises(ValidationFailed):
            skills.item_patch(index, 'level', 3)


def test_render_html(user, template):
    portfolio = services.create_from_template(user, template.pk, 'Html')
    services.customize(portfolio, {'customData': {'hero': {'name': 'Ada Lovelace'}}})
    html = render_html(portfolio)
    assert 'Ada Lovelace' in html
    assert 'id="contact"' in html
    assert 'background-color: #ffffff' in html


# create from template

def test_create_from_template_autofills_and_counts_download(user, template):
    profile = UserProfile.objects.get(user=user)
    profile.bio = 'Builder of things'
    profile.professional_info = {'skills': ['Go']}
    profile.save()

    portfolio = services.create_from_template(user, template.pk)
    template.refresh_from_db()
    assert template.downloads == 1
    assert portfolio.title == f'My {template.name} Portfolio'
    assert portfolio.slug == 'portfolio'
    assert portfolio.active_sections == ['hero', 'about', 'projects', 'skills', 'contact']
    assert portfolio.custom_data['skills'] == [{'skillName': 'Go', 'proficiency': 'intermediate'}]
    assert portfolio.custom_styling['colors']['primary'] == '#111111'
    assert portfolio.custom_styling['colors']['secondary'] == '#222222'
    assert portfolio.custom_styling['fonts']['heading'] == 'Poppins'
    assert portfolio.seo_settings == {
        'title': 'alice - Portfolio',
        'description': 'Builder of things',
        'keywords': ['Go'],
    }


def test_free_user_cannot_use_premium_template(user, make_template):
    with pytest.raises(Forbidden):
        services.create_from_template(user, make_template(is_premium=True).pk)


def test_free_user_with_published_portfolio_is_blocked(user, template):
    services.publish(create(user, template))
    with pytest.raises(Forbidden):
        services.create_from_template(user, template.pk)


def test_premium_user_can_use_premium_template(make_user, make_template):
    owner = make_user('pro', plan=UserProfile.PLAN_PREMIUM)
    assert services.create_from_template(owner, make_template(is_premium=True).pk).pk


# endpoints

@pytest.mark.django_db
def test_endpoints_require_login(client):
    assert client.get('/api/portfolios/my-portfolios').status_code == 401


def test_create_and_list(auth_client, template):
    response = auth_client.post(
        '/api/portfolios/', {'templateId': template.pk, 'title': 'Hello'}, content_type='application/json'
    )
    assert response.status_code == 201
    assert response.json()['slug'] == 'hello'
    listing = auth_client.get('/api/portfolios/my-portfolios').json()
    assert [p['title'] for p in listing] == ['Hello']
    assert listing[0]['template']['name'] == template.name


def test_unknown_template_is_not_found(auth_client):
    response = auth_client.post(
        '/api/portfolios/', {'templateId': 'a' * 24, 'title': 'x'}, content_type='application/json'
    )
    assert response.status_code == 404
    assert response.json()['message'] == 'Selected template not found'
    assert services.get_template is catalog_services.get_template


def test_create_requires_template_and_title(auth_client):
    response = auth_client.post('/api/portfolios/', {'title': 'x'}, content_type='application/json')
    assert response.status_code == 400


def test_malformed_json_is_a_400(auth_client):
    response = auth_client.post('/api/portfolios/', '{not json', content_type='application/json')
    assert response.status_code == 400


def test_create_from_template_endpoint_gates(auth_client, make_template):
    premium = make_template(is_premium=True)
    response = auth_client.post(
        '/api/portfolios/create-from-template', {'templateId': premium.pk}, content_type='application/json'
    )
    assert response.status_code == 403
    missing = auth_client.post(
        '/api/portfolios/create-from-template',
        {'templateId': '0123456789abcdef01234567'},
        content_type='application/json',
    )
    assert missing.status_code == 404


def test_customize_endpoint_rejects_invalid_sections(auth_client, user, template):
    portfolio = create(user, template)
    response = auth_client.put(
        f'/api/portfolios/{portfolio.pk}/customize',
        {'title': 'Nope', 'activeSections': ['hero', 'bogus']},
        content_type='application/json',
    )
    assert response.status_code == 400
    assert response.json()['invalid'] == ['bogus']
    portfolio.refresh_from_db()
    assert portfolio.title == 'My Site'


def test_other_users_portfolio_is_not_found(client, make_user, user, template):
    portfolio = create(user, template)
    client.force_login(make_user('mallory'))
    assert client.get(f'/api/portfolios/{portfolio.pk}').status_code == 404
    assert client.delete(f'/api/portfolios/{portfolio.pk}').status_code == 404
    assert Portfolio.objects.filter(pk=portfolio.pk).exists()


def test_admin_can_read_any_portfolio(admin_client, user, template):
    portfolio = create(user, template)
    response = admin_client.get(f'/api/portfolios/{portfolio.pk}')
    assert response.status_code == 200
    assert response.json()['owner']['username'] == 'alice'


def test_toggle_publish_and_duplicate(auth_client, user, template):
    portfolio = create(user, template)
    toggled = auth_client.post(f'/api/portfolios/{portfolio.pk}/toggle-publish').json()
    assert toggled['portfolio']['settings']['isPublished'] is True

    first = auth_client.post(f'/api/portfolios/{portfolio.pk}/duplicate')
    second = auth_client.post(f'/api/portfolios/{portfolio.pk}/duplicate')
    assert first.status_code == 201
    assert first.json()['slug'] == 'my-site-copy'
    assert second.json()['slug'] == 'my-site-copy-1'
    assert first.json()['title'] == 'My Site (Copy)'
    assert first.json()['settings']['isPublished'] is False
    assert first.json()['settings']['customDomain'] == ''
    assert first.json()['isDraft'] is True

    toggled = auth_client.post(f'/api/portfolios/{portfolio.pk}/toggle-publish').json()
    assert toggled['portfolio']['state'] == 'unpublished'


def test_delete(auth_client, user, template):
    portfolio = create(user, template)
    assert auth_client.delete(f'/api/portfolios/{portfolio.pk}').json() == {'message': 'Portfolio removed'}
    assert not Portfolio.objects.filter(pk=portfolio.pk).exists()


def test_deleting_user_cascades(user, template):
    create(user, template)
    user.delete()
    assert Portfolio.objects.count() == 0


def test_public_fetch_counts_views(client, user, template):
    portfolio = services.publish(create(user, template))
    response = client.get(f'/api/portfolios/public/alice/{portfolio.slug}')
    assert response.status_code == 200
    body = response.json()
    assert body['template']['name'] == template.name
    assert body['settings']['hasPassword'] is False
    assert 'password' not in body['settings']
    client.get(f'/api/portfolios/public/alice/{portfolio.slug}')
    portfolio.refresh_from_db()
    assert portfolio.views == 2
    assert portfolio.last_viewed is not None


def test_public_fetch_of_unpublished_or_unknown(client, user, template):
    portfolio = create(user, template)
    assert client.get(f'/api/portfolios/public/alice/{portfolio.slug}').status_code == 404
    assert client.get('/api/portfolios/public/nobody/anything').status_code == 404


def test_public_fetch_password_gate(client, user, template):
    portfolio = services.customize(create(user, template), {'settings': {'password': 'open-sesame'}})
    services.publish(portfolio)
    url = f'/api/portfolios/public/alice/{portfolio.slug}'
    assert client.get(url).status_code == 403
    assert client.get(url, HTTP_X_PORTFOLIO_PASSWORD='wrong').status_code == 403
    assert client.get(url, HTTP_X_PORTFOLIO_PASSWORD='open-sesame').status_code == 200
    assert client.get(url, {'password': 'open-sesame'}).status_code == 200
    portfolio.refresh_from_db()
    assert portfolio.views == 2


def test_public_page_renders_html(client, user, template):
    portfolio = services.publish(services.create_from_template(user, template.pk, 'Page'))
    response = client.get(f'/api/portfolios/public/alice/{portfolio.slug}/page')
    assert response.status_code == 200
    assert response['Content-Type'].startswith('text/html')
    assert b'alice' in response.content


def test_admin_public_fetch_does_not_count(admin_client, user, template):
    portfolio = services.publish(create(user, template))
    assert admin_client.get(f'/api/portfolios/admin/public/alice/{portfolio.slug}').status_code == 200
    portfolio.refresh_from_db()
    assert portfolio.views == 0


def test_analytics(auth_client, user, template):
    portfolio = create(user, template)
    response = auth_client.get(f'/api/portfolios/{portfolio.pk}/analytics')
    assert response.status_code == 200
    assert response.json()['currentStats']['views'] == 0
    services.customize(portfolio, {'settings': {'analytics': False}})
    assert auth_client.get(f'/api/portfolios/{portfolio.pk}/analytics').status_code == 403


def test_render_endpoint(auth_client, user, make_template):
    tpl = make_template(sections=[HERO, {'id': 'gallery', 'type': 'gallery'}])
    portfolio = create(user, tpl)
    view = auth_client.get(f'/api/portfolios/{portfolio.pk}/render').json()
    edit = auth_client.get(f'/api/portfolios/{portfolio.pk}/render', {'mode': 'edit'}).json()
    assert [s['sectionId'] for s in view['sections']] == ['hero']
    assert [s['sectionId'] for s in edit['sections']] == ['hero', 'gallery']


def test_template_usage(auth_client, user, make_template):
    used = make_template()
    unused = make_template()
    portfolio = create(user, used)
    assert auth_client.get(f'/api/portfolios/template-usage/{used.pk}').json() == {
        'hasUsed': True, 'portfolioId': portfolio.pk,
    }
    assert auth_client.get(f'/api/portfolios/template-usage/{unused.pk}').json()['hasUsed'] is False


def test_admin_stats(client, admin_user, user, make_user, make_template):
    popular = make_template(name='Popular')
    other = make_template(name='Other')
    first = create(user, popular, 'One')
    services.publish(first)
    Portfolio.objects.filter(pk=first.pk).update(views=10)
    create(make_user('bob'), popular, 'Two')
    create(user, other, 'Three')

    client.force_login(user)
    assert client.get('/api/portfolios/stats').status_code == 403

    client.force_login(admin_user)
    stats = client.get('/api/portfolios/stats').json()
    assert stats['totalPortfolios'] == 3
    assert stats['publishedPortfolios'] == 1
    assert stats['draftPortfolios'] == 2
    assert stats['totalViews'] == 10
    assert stats['averageViews'] == 3.33
    assert stats['mostViewedPortfolios'][0]['title'] == 'One'
    assert stats['portfoliosByTemplate'][0] == {'templateName': 'Popular', 'count': 2}


def test_template_in_use_cannot_be_deleted_directly(user, template):
    create(user, template)
    with pytest.raises(ProtectedError):
        Template.objects.filter(pk=template.pk).delete()
