import pytest
from django.contrib.auth.models import User
from django.core.files.uploadedfile import SimpleUploadedFile

from portfolio.models import Portfolio
from portfolio.services import create_portfolio
from .models import UserProfile
from .profile import profile_snapshot


def put_json(client, url, data):
    return client.put(url, data, content_type='application/json')


def test_profile_created_with_user(user):
    profile = UserProfile.objects.get(user=user)
    assert profile.plan == UserProfile.PLAN_FREE
    assert profile.social_links['github'] == ''


def test_get_profile(auth_client):
    body = auth_client.get('/api/user/profile').json()
    assert body['username'] == 'alice'
    assert body['email'] == 'alice@example.com'
    assert body['subscription']['plan'] == 'free'
    assert body['isAdmin'] is False


@pytest.mark.django_db
def test_profile_requires_login(client):
    assert client.get('/api/user/profile').status_code == 401


def test_update_profile_merges_nested_documents(auth_client, user):
    first = put_json(auth_client, '/api/user/profile', {
        'fullName': 'Alice Liddell',
        'socialLinks': {'github': 'https://github.com/alice'},
        'professionalInfo': {'title': 'Engineer', 'skills': ['Go', 'Rust']},
    })
    assert first.status_code == 200
    second = put_json(auth_client, '/api/user/profile', {
        'bio': 'Writes compilers',
        'socialLinks': {'twitter': '@alice'},
        'professionalInfo': {'skills': ['Zig']},
    }).json()
    assert second['fullName'] == 'Alice Liddell'
    assert second['bio'] == 'Writes compilers'
    assert second['socialLinks']['github'] == 'https://github.com/alice'
    assert second['socialLinks']['twitter'] == '@alice'
    assert second['professionalInfo']['title'] == 'Engineer'
    assert second['professionalInfo']['skills'] == ['Zig']


def test_update_profile_validation(auth_client, make_user):
    make_user('bob')
    taken = put_json(auth_client, '/api/user/profile', {'username': 'bob'})
    assert taken.status_code == 400
    assert taken.json()['invalid'] == ['username']

    bad_list = put_json(auth_client, '/api/user/profile', {'professionalInfo': {'skills': 'Go'}})
    assert bad_list.status_code == 400
    assert put_json(auth_client, '/api/user/profile', {'website': 'not a url'}).status_code == 400


def test_update_password(auth_client, user):
    put_json(auth_client, '/api/user/profile', {'password': 'a-new-secret'})
    user.refresh_from_db()
    assert user.check_password('a-new-secret')


def test_subscription(auth_client, user):
    assert auth_client.get('/api/user/subscription').json()['plan'] == 'free'
    response = put_json(auth_client, '/api/user/subscription', {'plan': 'premium', 'status': 'trial'})
    assert response.json()['subscription'] == {'plan': 'premium', 'status': 'trial', 'expiresAt': None}
    assert UserProfile.objects.get(user=user).plan == 'premium'
    assert put_json(auth_client, '/api/user/subscription', {'plan': 'gold'}).status_code == 400


def test_upload_avatar(auth_client, user, fake_cdn):
    image = SimpleUploadedFile('me.png', b'png-bytes', content_type='image/png')
    response = auth_client.post('/api/user/upload-avatar', {'avatar': image})
    assert response.status_code == 200
    url = 'https://cdn.example.test/portfoliohub/avatars/me.jpg'
    assert response.json()['profilePicture'] == url
    assert UserProfile.objects.get(user=user).profile_picture == url
    assert fake_cdn.uploads[0]['transformation'] == 'w_150,h_150,c_fill,q_auto:eco'


def test_upload_avatar_rejects_non_images(auth_client, fake_cdn):
    text = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
    assert auth_client.post('/api/user/upload-avatar', {'avatar': text}).status_code == 400
    assert auth_client.post('/api/user/upload-avatar', {}).status_code == 400
    assert fake_cdn.uploads == []


def test_delete_account_cascades(auth_client, user, template):
    create_portfolio(user, {'templateId': template.pk, 'title': 'Gone soon'})
    response = auth_client.delete('/api/user/account')
    assert response.json() == {'message': 'User account deleted successfully'}
    assert not User.objects.filter(username='alice').exists()
    assert not UserProfile.objects.exists()
    assert not Portfolio.objects.exists()
    assert auth_client.get('/api/user/profile').status_code == 401


def test_admin_routes_are_admin_only(auth_client):
    assert auth_client.get('/api/user/').status_code == 403
    assert auth_client.get('/api/user/stats').status_code == 403


def test_admin_lists_and_counts_users(admin_client, user, make_user):
    make_user('pro', plan=UserProfile.PLAN_PREMIUM)
    names = {row['username'] for row in admin_client.get('/api/user/').json()}
    assert names == {'alice', 'root', 'pro'}
    assert admin_client.get('/api/user/stats').json() == {
        'totalUsers': 3,
        'totalAdmins': 1,
        'totalFreeUsers': 2,
        'totalPremiumUsers': 1,
        'activeUsers': 3,
    }


def test_admin_updates_user(admin_client, user):
    response = put_json(admin_client, f'/api/user/{user.pk}', {
        'fullName': 'Alice A.',
        'isAdmin': True,
        'subscription': {'plan': 'premium'},
    })
    assert response.status_code == 200
    assert response.json()['isAdmin'] is True
    user.refresh_from_db()
    assert user.is_staff
    assert UserProfile.objects.get(user=user).plan == 'premium'


def test_admin_update_stores_profile_fields(admin_client, user):
    response = put_json(admin_client, f'/api/user/{user.pk}', {
        'fullName': 'Alice A.',
        'bio': 'new bio',
        'location': 'Paris',
        'isActive': True,
    })
    assert response.status_code == 200
    assert response.json()['bio'] == 'new bio'
    stored = UserProfile.objects.get(user=user)
    assert stored.full_name == 'Alice A.'
    assert (stored.bio, stored.location) == ('new bio', 'Paris')


def test_saving_user_keeps_profile_changes(user):
    # user.userprofile is cached from creation and must not be written back
    UserProfile.objects.filter(user=user).update(bio='fresh')
    user.first_name = 'Alice'
    user.save()
    assert UserProfile.objects.get(user=user).bio == 'fresh'


def test_admin_deletes_user_but_not_self(admin_client, admin_user, user):
    assert admin_client.delete(f'/api/user/{admin_user.pk}').status_code == 403
    assert admin_client.delete(f'/api/user/{user.pk}').status_code == 200
    assert not User.objects.filter(pk=user.pk).exists()
    assert admin_client.delete(f'/api/user/{user.pk}').status_code == 404


def test_profile_snapshot(user):
    profile = UserProfile.objects.get(user=user)
    profile.social_links = {'github': 'gh'}
    profile.professional_info = {'skills': ['Go'], 'experience': '5 years'}
    profile.save()
    user.first_name, user.last_name = 'Alice', 'Liddell'
    user.save()

    snapshot = profile_snapshot(user)
    assert snapshot.display_name == 'Alice Liddell'
    assert snapshot.social_links == {'linkedin': '', 'github': 'gh', 'twitter': '', 'instagram': ''}
    assert snapshot.skills == ['Go']
    assert snapshot.experience == '5 years'
    assert snapshot.education == []
