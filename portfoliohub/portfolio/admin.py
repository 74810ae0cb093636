from django.contrib import admin
from .models import Portfolio

@admin.register(Portfolio)
class PortfolioAdmin(admin.ModelAdmin):
    list_display = ['title', 'owner', 'template', 'slug', 'is_published', 'views', 'updated_at']
    list_filter = ['is_published', 'is_draft', 'template']
    search_fields = ['title', 'slug', 'owner__username']
    readonly_fields = ['_id', 'views', 'unique_visitors', 'last_viewed', 'published_at', 'last_edited_at']

    def get_readonly_fields(self, request, obj=None):
        if obj:  # owner and template are fixed once created
            return self.readonly_fields + ['owner', 'template']
        return self.readonly_fields
