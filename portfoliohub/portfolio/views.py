from django.http import HttpResponse

from portfoliohub.api import api_view
from . import services
from .renderer import RenderMode, render, render_html


def _listing(portfolios):
    return [{**p.to_document(), 'template': p.template.summary()} for p in portfolios]


@api_view(methods=('GET', 'POST'), auth=True)
def portfolio_collection(request):
    """GET lists the user's portfolios, POST creates one from a templateId and title."""
    if request.method == 'POST':
        portfolio = services.create_portfolio(request.user, request.data)
        return portfolio.to_document(), 201
    return _listing(services.list_portfolios(request.user))


@api_view(auth=True)
def my_portfolios(request):
    return _listing(services.list_portfolios(request.user))


@api_view(methods=('POST',), auth=True)
def create_from_template(request):
    portfolio = services.create_from_template(
        request.user, request.data.get('templateId'), request.data.get('title')
    )
    return portfolio.to_document(), 201


@api_view(auth=True)
def template_usage(request, template_id):
    return services.template_usage(request.user, template_id)


@api_view(admin=True)
def portfolio_stats(request):
    return services.admin_stats()


@api_view()
def public_portfolio(request, username, slug):
    portfolio = services.fetch_public(username, slug, services.supplied_password(request))
    return portfolio.to_document(include_template=True)


@api_view()
def public_portfolio_page(request, username, slug):
    portfolio = services.fetch_public(username, slug, services.supplied_password(request))
    return HttpResponse(render_html(portfolio))


@api_view(admin=True)
def admin_public_portfolio(request, username, slug):
    # admins preview without counting a view or needing the password
    portfolio = services.find_published(username, slug)
    return portfolio.to_document(include_template=True)


@api_view(methods=('GET', 'PUT', 'DELETE'), auth=True)
def portfolio_detail(request, portfolio_id):
    if request.method == 'GET':
        portfolio = services.owned_portfolio(request.user, portfolio_id, allow_admin=True)
        data = portfolio.to_document(include_template=True)
        data['owner'] = {'_id': portfolio.owner_id, 'username': portfolio.owner.username}
        return data

    portfolio = services.owned_portfolio(request.user, portfolio_id)
    if request.method == 'DELETE':
        services.delete_portfolio(portfolio)
        return {'message': 'Portfolio removed'}
    return services.replace_fields(portfolio, request.data).to_document()


@api_view(methods=('PUT',), auth=True)
def customize_portfolio(request, portfolio_id):
    portfolio = services.owned_portfolio(request.user, portfolio_id)
    return services.customize(portfolio, request.data).to_document()


@api_view(methods=('POST',), auth=True)
def toggle_publish(request, portfolio_id):
    portfolio = services.toggle_publish(services.owned_portfolio(request.user, portfolio_id))
    state = 'published' if portfolio.is_published else 'unpublished'
    return {'message': f'Portfolio {state} successfully', 'portfolio': portfolio.to_document()}


@api_view(methods=('POST',), auth=True)
def publish_portfolio(request, portfolio_id):
    portfolio = services.publish(services.owned_portfolio(request.user, portfolio_id))
    return {'message': 'Portfolio published successfully', 'portfolio': portfolio.to_document()}


@api_view(methods=('POST',), auth=True)
def unpublish_portfolio(request, portfolio_id):
    portfolio = services.unpublish(services.owned_portfolio(request.user, portfolio_id))
    return {'message': 'Portfolio unpublished successfully', 'portfolio': portfolio.to_document()}


@api_view(methods=('POST',), auth=True)
def duplicate_portfolio(request, portfolio_id):
    portfolio = services.duplicate(services.owned_portfolio(request.user, portfolio_id))
    return portfolio.to_document(), 201


@api_view(auth=True)
def portfolio_analytics(request, portfolio_id):
    return services.analytics(services.owned_portfolio(request.user, portfolio_id))


@api_view(auth=True)
def render_portfolio(request, portfolio_id):
    portfolio = services.owned_portfolio(request.user, portfolio_id, allow_admin=True)
    mode = RenderMode.parse(request.GET.get('mode'))
    return {
        'portfolioId': portfolio.pk,
        'mode': mode.value,
        'sections': [section.as_dict() for section in render(portfolio, mode=mode)],
    }
