from django.urls import path
from . import views

urlpatterns = [
    path('', views.portfolio_collection, name='portfolio_collection'),
    path('my-portfolios', views.my_portfolios, name='my_portfolios'),
    path('create-from-template', views.create_from_template, name='create_from_template'),
    path('template-usage/<str:template_id>', views.template_usage, name='template_usage'),
    path('stats', views.portfolio_stats, name='portfolio_stats'),
    path('public/<str:username>/<str:slug>', views.public_portfolio, name='public_portfolio'),
    path('public/<str:username>/<str:slug>/page', views.public_portfolio_page, name='public_portfolio_page'),
    path('admin/public/<str:username>/<str:slug>', views.admin_public_portfolio, name='admin_public_portfolio'),
    path('<str:portfolio_id>', views.portfolio_detail, name='portfolio_detail'),
    path('<str:portfolio_id>/customize', views.customize_portfolio, name='customize_portfolio'),
    path('<str:portfolio_id>/toggle-publish', views.toggle_publish, name='toggle_publish'),
    path('<str:portfolio_id>/publish', views.publish_portfolio, name='publish_portfolio'),
    path('<str:portfolio_id>/unpublish', views.unpublish_portfolio, name='unpublish_portfolio'),
    path('<str:portfolio_id>/duplicate', views.duplicate_portfolio, name='duplicate_portfolio'),
    path('<str:portfolio_id>/analytics', views.portfolio_analytics, name='portfolio_analytics'),
    path('<str:portfolio_id>/render', views.render_portfolio, name='render_portfolio'),
]
