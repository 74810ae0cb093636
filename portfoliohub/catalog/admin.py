from django.contrib import admin
from .models import Template


@admin.register(Template)
class TemplateAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'is_premium', 'is_active', 'downloads', 'created_at']
    list_filter = ['category', 'is_premium', 'is_active']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['_id', 'downloads', 'created_at', 'updated_at']
