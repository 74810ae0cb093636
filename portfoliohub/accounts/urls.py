from django.urls import path
from . import views

urlpatterns = [
    path('', views.user_list, name='user_list'),
    path('profile', views.profile, name='profile'),
    path('upload-avatar', views.upload_avatar, name='upload_avatar'),
    path('account', views.delete_account, name='delete_account'),
    path('subscription', views.subscription, name='subscription'),
    path('stats', views.user_stats, name='user_stats'),
    path('<int:user_id>', views.user_detail, name='user_detail'),
]
