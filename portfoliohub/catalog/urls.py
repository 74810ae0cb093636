from django.urls import path
from . import views

urlpatterns = [
    path('', views.template_collection, name='template_collection'),
    path('categories', views.template_categories, name='template_categories'),
    path('with-usage', views.templates_with_usage, name='templates_with_usage'),
    path('stats', views.template_stats, name='template_stats'),
    path('<str:template_id>', views.template_detail, name='template_detail'),
]
