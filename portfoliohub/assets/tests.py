from unittest import mock

import pytest
from cloudinary.exceptions import Error as CloudinaryError
from django.core.files.uploadedfile import SimpleUploadedFile

from portfolio.services import create_from_template, customize
from portfoliohub.errors import Forbidden, NotFound, ValidationFailed
from portfoliohub.testing import FakeCdnClient

from .cdn import CdnError, CloudinaryClient, UploadResult, get_cdn_client
from .services import (
    attach_image, clear_image, delete_portfolio_image, parse_index, portfolio_folder, portfolio_root,
    set_image_detail, validate_images,
)
from .transforms import DEFAULT_TRANSFORMATION, transformation_for


def image(name='shot.png', size=16, content_type='image/png'):
    return SimpleUploadedFile(name, b'x' * size, content_type=content_type)


# validation

def test_validate_images_accepts_common_types():
    validate_images([image('a.jpg', content_type='image/jpeg'), image('b.webp', content_type='image/webp')])


@pytest.mark.parametrize('upload', [
    image('a.txt', content_type='text/plain'),
    image('a.png', content_type='application/octet-stream'),
    image('noext', content_type='image/png'),
])
def test_validate_images_rejects_non_images(upload):
    with pytest.raises(ValidationFailed) as exc:
        validate_images([upload])
    assert exc.value.invalid == [upload.name]


def test_validate_images_limits():
    with pytest.raises(ValidationFailed):
        validate_images([])
    with pytest.raises(ValidationFailed):
        validate_images([image(size=11)], max_bytes=10)
    with pytest.raises(ValidationFailed):
        validate_images([image(), image()], max_files=1)


def test_parse_index():
    assert parse_index(None) is None
    assert parse_index('') is None
    assert parse_index('2') == 2
    with pytest.raises(ValidationFailed):
        parse_index('two')
    with pytest.raises(ValidationFailed):
        parse_index(-1)


# customData addressing

def test_attach_to_list_item_uses_default_key():
    data = {'projects': [{'title': 'A'}, {'title': 'B'}]}
    updated = attach_image(data, 'projects', 'u', item_index=1)
    assert updated['projects'][1] == {'title': 'B', 'image': 'u'}
    assert 'image' not in data['projects'][1]


def test_attach_to_object_requires_image_key():
    assert attach_image({}, 'hero', 'u', image_key='profileImage') == {'hero': {'profileImage': 'u'}}
    with pytest.raises(ValidationFailed):
        attach_image({'hero': {}}, 'hero', 'u')


def test_attach_rejects_bad_addresses():
    with pytest.raises(ValidationFailed):
        attach_image({'hero': {}}, 'hero', 'u', item_index=0)
    with pytest.raises(ValidationFailed):
        attach_image({'projects': []}, 'projects', 'u', item_index=0)
    with pytest.raises(ValidationFailed):
        attach_image({'projects': [{}]}, 'projects', 'u', image_key='cover')


def test_set_image_detail():
    data, target = set_image_detail({'projects': [{'image': 'u'}]}, 'projects', 'alt', 'Cover', item_index=0)
    assert data['projects'][0] == {'image': 'u', 'alt': 'Cover'}
    assert target == {'image': 'u', 'alt': 'Cover'}
    with pytest.raises(NotFound):
        set_image_detail({'projects': []}, 'projects', 'alt', 'x', item_index=3)


def test_clear_image():
    data, cleared = clear_image({'hero': {'profileImage': 'u'}}, 'hero', image_key='profileImage')
    assert cleared and data['hero']['profileImage'] == ''
    data, cleared = clear_image({'hero': {}}, 'hero', image_key='profileImage')
    assert not cleared and data == {'hero': {}}


def test_transformations():
    assert transformation_for('hero') == 'w_1920,h_1080,c_fill,q_auto:good'
    assert transformation_for('gallery') == DEFAULT_TRANSFORMATION


# endpoints

@pytest.fixture
def portfolio(user, template):
    portfolio = create_from_template(user, template.pk, 'Gallery')
    return customize(portfolio, {'customData': {'projects': [{'title': 'A'}, {'title': 'B'}]}})


def test_upload_into_list_item(auth_client, portfolio, fake_cdn):
    response = auth_client.post(f'/api/portfolios/{portfolio.pk}/upload-section-images', {
        'images': [image('one.png'), image('two.png')],
        'section': 'projects',
        'itemIndex': '1',
    })
    assert response.status_code == 200
    body = response.json()
    folder = f'portfoliohub/portfolios/{portfolio.owner_id}/{portfolio.pk}/projects'
    assert body['uploadedUrl'] == f'https://cdn.example.test/{folder}/one.jpg'
    assert [img['title'] for img in body['images']] == ['one', 'two']
    assert {u['transformation'] for u in fake_cdn.uploads} == {'w_600,h_400,c_fill,q_auto:good'}

    portfolio.refresh_from_db()
    assert portfolio.custom_data['projects'] == [
        {'title': 'A'},
        {'title': 'B', 'image': body['uploadedUrl']},
    ]


def test_upload_into_object_section(auth_client, portfolio, fake_cdn):
    response = auth_client.post(f'/api/portfolios/{portfolio.pk}/upload-section-images', {
        'images': image(),
        'section': 'hero',
        'imageKey': 'profileImage',
    })
    assert response.status_code == 200
    portfolio.refresh_from_db()
    assert portfolio.custom_data['hero']['profileImage'] == response.json()['uploadedUrl']
    assert portfolio.custom_data['hero']['name'] == 'alice'


def test_bad_address_is_rejected_before_uploading(auth_client, portfolio, fake_cdn):
    response = auth_client.post(f'/api/portfolios/{portfolio.pk}/upload-section-images', {
        'images': image(), 'section': 'projects', 'itemIndex': '7',
    })
    assert response.status_code == 400
    assert fake_cdn.uploads == []


def test_upload_failure_is_a_502(auth_client, portfolio, fake_cdn):
    fake_cdn.fail = True
    response = auth_client.post(f'/api/portfolios/{portfolio.pk}/upload-section-images', {
        'images': image(), 'section': 'hero', 'imageKey': 'profileImage',
    })
    assert response.status_code == 502
    portfolio.refresh_from_db()
    assert portfolio.custom_data['hero']['profileImage'] == ''


def test_upload_to_someone_elses_portfolio(client, make_user, portfolio, fake_cdn):
    client.force_login(make_user('mallory'))
    response = client.post(f'/api/portfolios/{portfolio.pk}/upload-section-images', {
        'images': image(), 'section': 'hero', 'imageKey': 'profileImage',
    })
    assert response.status_code == 404


def test_update_image_details(auth_client, portfolio):
    response = auth_client.put(
        f'/api/portfolios/{portfolio.pk}/update-image-details',
        {'section': 'projects', 'itemIndex': 0, 'imageKey': 'alt', 'value': 'Screenshot'},
        content_type='application/json',
    )
    assert response.json()['data'] == {'title': 'A', 'alt': 'Screenshot'}
    missing = auth_client.put(
        f'/api/portfolios/{portfolio.pk}/update-image-details',
        {'section': 'projects', 'itemIndex': 9, 'imageKey': 'alt', 'value': 'x'},
        content_type='application/json',
    )
    assert missing.status_code == 404


def test_delete_image(auth_client, portfolio, fake_cdn):
    public_id = f'{portfolio_folder(portfolio, "hero")}/me'
    customize(portfolio, {'customData': {'hero': {'profileImage': f'https://cdn.example.test/{public_id}.jpg'}}})
    response = auth_client.delete(
        f'/api/portfolios/{portfolio.pk}/delete-image/{public_id}',
        {'section': 'hero', 'imageKey': 'profileImage'},
        content_type='application/json',
    )
    assert response.json() == {'message': 'Image deleted successfully', 'cleared': True}
    assert fake_cdn.destroyed == [public_id]
    portfolio.refresh_from_db()
    assert portfolio.custom_data['hero']['profileImage'] == ''


def test_cannot_delete_images_outside_own_portfolio(client, make_user, template, portfolio, fake_cdn):
    client.force_login(portfolio.owner)
    uploaded = client.post(f'/api/portfolios/{portfolio.pk}/upload-section-images', {
        'images': image('alice.png'), 'section': 'hero', 'imageKey': 'profileImage',
    }).json()['imageDetails']['publicId']

    bob = make_user('bob')
    own = create_from_template(bob, template.pk, 'Bob')
    client.force_login(bob)
    for public_id in (uploaded, 'portfoliohub/avatars/alice'):
        response = client.delete(
            f'/api/portfolios/{own.pk}/delete-image/{public_id}',
            {'section': 'hero', 'imageKey': 'profileImage'},
            content_type='application/json',
        )
        assert response.status_code == 403
    assert fake_cdn.destroyed == []
    portfolio.refresh_from_db()
    assert portfolio.custom_data['hero']['profileImage'].endswith('/alice.jpg')


# Cloudinary client

UPLOAD_RESPONSE = {
    'secure_url': 'https://res.cloudinary.com/demo/x.jpg', 'public_id': 'f/x', 'width': 10, 'height': 5,
}


@mock.patch('cloudinary.uploader.upload', return_value=UPLOAD_RESPONSE)
def test_cloudinary_upload_passes_credentials_per_call(upload):
    client = CloudinaryClient('demo', 'key', 'secret', timeout=7)
    result = client.upload(b'bytes', folder='f', filename='x.png', transformation='w_10')

    assert result == UploadResult('https://res.cloudinary.com/demo/x.jpg', 'f/x', 10, 5)
    assert result.to_document('x.png')['id'] == 'x'
    args, kwargs = upload.call_args
    assert args == (b'bytes',)
    assert kwargs['folder'] == 'f'
    assert kwargs['transformation'] == 'w_10'
    assert (kwargs['cloud_name'], kwargs['api_key'], kwargs['api_secret']) == ('demo', 'key', 'secret')
    assert kwargs['timeout'] == 7


@mock.patch('cloudinary.uploader.destroy', return_value={'result': 'ok'})
def test_cloudinary_destroy(destroy):
    assert CloudinaryClient('demo', 'key', 'secret').destroy('f/x') is True
    assert destroy.call_args.args == ('f/x',)
    assert destroy.call_args.kwargs['api_key'] == 'key'


@mock.patch('cloudinary.uploader.destroy', side_effect=CloudinaryError('down'))
def test_cloudinary_errors_become_upstream_failures(destroy):
    with pytest.raises(CdnError) as exc:
        CloudinaryClient('demo', 'key', 'secret').destroy('f/x')
    assert exc.value.status == 502


@mock.patch('cloudinary.uploader.upload')
def test_unconfigured_cloudinary_client(upload):
    with pytest.raises(CdnError):
        CloudinaryClient('', '', '').upload(b'x', folder='f')
    upload.assert_not_called()


def test_cdn_client_built_from_settings(settings):
    settings.CLOUDINARY_CLOUD_NAME = 'demo'
    settings.CLOUDINARY_API_KEY = 'key'
    settings.CLOUDINARY_API_SECRET = 'secret'
    client = get_cdn_client()
    assert isinstance(client, CloudinaryClient)
    assert client.cloud_name == 'demo'


def test_delete_rejects_parent_segments(portfolio, fake_cdn):
    with pytest.raises(Forbidden):
        delete_portfolio_image(
            FakeCdnClient(), portfolio, f'{portfolio_root(portfolio)}/../../other/x', 'hero', image_key='profileImage'
        )
    assert fake_cdn.destroyed == []
