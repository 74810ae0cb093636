from assets.cdn import get_cdn_client
from portfoliohub.api import api_view, require_admin
from . import services


def _client_for(request):
    return get_cdn_client() if request.FILES else None


@api_view(methods=('GET', 'POST'))
def template_collection(request):
    if request.method == 'POST':
        require_admin(request)
        template = services.create_template(
            request.user, request.data, request.FILES, _client_for(request)
        )
        return template.to_document(), 201
    return [template.to_document() for template in services.filter_templates(request.GET)]


@api_view()
def template_categories(request):
    return services.categories()


@api_view(auth=True)
def templates_with_usage(request):
    return services.templates_with_usage(request.user, request.GET)


@api_view(admin=True)
def template_stats(request):
    return services.template_stats()


@api_view(methods=('GET', 'PUT', 'POST', 'DELETE'))
def template_detail(request, template_id):
    """
    GET is public. PUT (JSON) and POST (multipart, for image uploads) update
    the template and DELETE removes it; those are admin only.
    """
    template = services.get_template(template_id)
    if request.method == 'GET':
        return template.to_document()

    require_admin(request)
    if request.method == 'DELETE':
        services.delete_template(template)
        return {'message': 'Template removed'}
    template = services.update_template(template, request.data, request.FILES, _client_for(request))
    return template.to_document()
