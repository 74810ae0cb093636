from django.contrib.auth import logout

from assets.cdn import get_cdn_client
from portfoliohub.api import api_view
from . import services
from .models import get_profile


@api_view(methods=('GET', 'PUT'), auth=True)
def profile(request):
    if request.method == 'PUT':
        return services.update_profile(request.user, request.data).to_document()
    return get_profile(request.user).to_document()


@api_view(methods=('POST',), auth=True)
def upload_avatar(request):
    profile = services.upload_avatar(get_cdn_client(), request.user, request.FILES.getlist('avatar'))
    return {'message': 'Avatar uploaded successfully', 'profilePicture': profile.profile_picture}


@api_view(methods=('DELETE',), auth=True)
def delete_account(request):
    user = request.user
    logout(request)
    services.delete_account(user)
    return {'message': 'User account deleted successfully'}


@api_view(methods=('GET', 'PUT'), auth=True)
def subscription(request):
    profile = get_profile(request.user)
    if request.method == 'PUT':
        profile = services.update_subscription(profile, request.data)
        return {'message': 'Subscription updated successfully', 'subscription': profile.subscription()}
    return profile.subscription()


@api_view(admin=True)
def user_list(request):
    return services.list_users()


@api_view(admin=True)
def user_stats(request):
    return services.user_stats()


@api_view(methods=('PUT', 'DELETE'), admin=True)
def user_detail(request, user_id):
    target = services.get_user(user_id)
    if request.method == 'DELETE':
        services.admin_delete_user(request.user, target)
        return {'message': 'User and associated data deleted successfully'}
    return services.admin_update_user(target, request.data).to_document()
