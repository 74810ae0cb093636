from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'full_name', 'plan', 'subscription_status')
    list_filter = ('plan', 'subscription_status')
    search_fields = ('user__username', 'user__email', 'full_name')
    readonly_fields = ('_id', 'created_at', 'updated_at')
