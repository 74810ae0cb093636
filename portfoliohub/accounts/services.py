# accounts/services.py
import logging

from django.conf import settings
from django.contrib.auth.models import User
from django.db.models import Count, Q

from assets.services import upload_images, validate_images
from assets.transforms import transformation_for
from portfoliohub.errors import Forbidden, NotFound, ValidationFailed
from .forms import (
    AccountForm, PROFESSIONAL_LIST_FIELDS, PROFILE_FIELD_MAP, SubscriptionForm, UserProfileForm,
)
from .models import UserProfile, default_professional_info, default_social_links, get_profile

logger = logging.getLogger(__name__)


def _check(form):
    if not form.is_valid():
        invalid = sorted(form.errors)
        raise ValidationFailed(f'Invalid fields: {", ".join(invalid)}', invalid=invalid)
    return form


def _merge_professional_info(current, patch):
    if not isinstance(patch, dict):
        raise ValidationFailed('professionalInfo must be an object', invalid=['professionalInfo'])
    for key in PROFESSIONAL_LIST_FIELDS:
        if key in patch and not isinstance(patch[key], list):
            raise ValidationFailed(f'professionalInfo.{key} must be a list', invalid=[key])
    return {**default_professional_info(), **(current or {}), **patch}


def update_profile(user, data):
    profile = get_profile(user)

    account = {'username': user.username, 'email': user.email}
    account.update({k: data[k] for k in ('username', 'email') if data.get(k)})
    account_form = _check(AccountForm(account, instance=user))

    values = {field: getattr(profile, field) for field in PROFILE_FIELD_MAP.values()}
    values.update({field: data[key] for key, field in PROFILE_FIELD_MAP.items() if data.get(key) is not None})
    profile_form = _check(UserProfileForm(values, instance=profile))

    social = data.get('socialLinks')
    if social is not None and not isinstance(social, dict):
        raise ValidationFailed('socialLinks must be an object', invalid=['socialLinks'])
    professional = data.get('professionalInfo')
    if professional is not None:
        professional = _merge_professional_info(profile.professional_info, professional)

    user = account_form.save(commit=False)
    if data.get('password'):
        user.set_password(data['password'])
    user.save()
    profile = profile_form.save(commit=False)
    if social:
        profile.social_links = {**default_social_links(), **(profile.social_links or {}), **social}
    if professional is not None:
        profile.professional_info = professional
    profile.save()
    return profile


def update_subscription(profile, data):
    form = _check(SubscriptionForm(data))
    cleaned = form.cleaned_data
    if cleaned.get('plan'):
        profile.plan = cleaned['plan']
    if cleaned.get('status'):
        profile.subscription_status = cleaned['status']
    if cleaned.get('expiresAt'):
        profile.subscription_expires_at = cleaned['expiresAt']
    profile.save()
    logger.info('Subscription for %s set to %s/%s', profile.user.username, profile.plan, profile.subscription_status)
    return profile


def upload_avatar(client, user, files):
    validate_images(files, max_files=1)
    profile = get_profile(user)
    folder = f"{getattr(settings, 'PORTFOLIOHUB_CDN_ROOT_FOLDER', 'portfoliohub')}/avatars"
    image = upload_images(client, files, folder, transformation_for('profile-avatar'))[0]
    profile.profile_picture = image['url']
    profile.save(update_fields=['profile_picture', 'updated_at'])
    return profile


def delete_account(user):
    # portfolios and profile go with the user
    logger.info('Deleting account %s', user.username)
    user.delete()


def get_user(user_id):
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError):
        raise NotFound('User not found')


def list_users():
    return [get_profile(user).to_document() for user in User.objects.order_by('-date_joined')]


def admin_update_user(target, data):
    """Admin edit of another user: account flags, subscription and profile fields."""
    profile = update_profile(target, data)
    if data.get('isAdmin') is not None:
        target.is_staff = bool(data['isAdmin'])
    if data.get('isActive') is not None:
        target.is_active = bool(data['isActive'])
    target.save(update_fields=['is_staff', 'is_active'])
    subscription = data.get('subscription')
    if isinstance(subscription, dict):
        update_subscription(profile, subscription)
    return profile


def admin_delete_user(admin, target):
    if admin.pk == target.pk:
        raise Forbidden('Admins cannot delete their own account via this route.')
    delete_account(target)


def user_stats():
    totals = User.objects.aggregate(
        total=Count('pk'),
        admins=Count('pk', filter=Q(is_staff=True)),
        active=Count('pk', filter=Q(is_active=True)),
    )
    premium = UserProfile.objects.filter(plan=UserProfile.PLAN_PREMIUM).count()
    return {
        'totalUsers': totals['total'],
        'totalAdmins': totals['admins'],
        'totalFreeUsers': totals['total'] - premium,
        'totalPremiumUsers': premium,
        'activeUsers': totals['active'],
    }
