from portfolio.services import owned_portfolio
from portfoliohub.api import api_view
from . import services
from .cdn import get_cdn_client


@api_view(methods=('POST',), auth=True)
def upload_section_images(request, portfolio_id):
    """Multipart upload of ``images`` into one section's image field."""
    portfolio = owned_portfolio(request.user, portfolio_id)
    return services.upload_section_images(
        get_cdn_client(),
        portfolio,
        request.FILES.getlist('images'),
        request.data.get('section'),
        image_key=request.data.get('imageKey') or None,
        item_index=services.parse_index(request.data.get('itemIndex')),
    )


@api_view(methods=('PUT',), auth=True)
def update_image_details(request, portfolio_id):
    portfolio = owned_portfolio(request.user, portfolio_id)
    data = request.data
    return services.update_image_details(
        portfolio,
        data.get('section'),
        data.get('imageKey'),
        data.get('value'),
        item_index=services.parse_index(data.get('itemIndex')),
    )


@api_view(methods=('DELETE',), auth=True)
def delete_image(request, portfolio_id, public_id):
    portfolio = owned_portfolio(request.user, portfolio_id)
    data = request.data
    return services.delete_portfolio_image(
        get_cdn_client(),
        portfolio,
        public_id,
        data.get('section'),
        image_key=data.get('imageKey') or None,
        item_index=services.parse_index(data.get('itemIndex')),
    )
