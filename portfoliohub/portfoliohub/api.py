import json
import logging
from functools import wraps

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt

from .errors import ApiError, NotAuthenticated, Forbidden, ValidationFailed

logger = logging.getLogger(__name__)


def api_view(methods=('GET',), auth=False, admin=False):
    """
    Wrap a JSON endpoint.

    Enforces the allowed methods, optional session authentication and admin
    access, decodes a JSON body into ``request.data`` and maps ``ApiError``
    subclasses onto JSON error responses. Views may return a dict/list (200),
    a ``(payload, status)`` tuple or a ready ``HttpResponse``.
    """
    allowed = {m.upper() for m in methods}

    def decorator(view):
        @csrf_exempt
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if request.method not in allowed:
                return JsonResponse({'message': 'Method not allowed'}, status=405)
            try:
                if (auth or admin) and not request.user.is_authenticated:
                    raise NotAuthenticated()
                if admin and not request.user.is_staff:
                    raise Forbidden('Not authorized as an admin')
                request.data = parse_body(request)
                result = view(request, *args, **kwargs)
            except ApiError as exc:
                if exc.status >= 500:
                    logger.error('%s %s failed: %s', request.method, request.path, exc.message)
                return JsonResponse(exc.payload(), status=exc.status)
            return to_response(result)
        return wrapper
    return decorator


def parse_body(request):
    if request.method in ('GET', 'HEAD'):
        return {}
    content_type = request.content_type or ''
    if content_type.startswith('multipart/') or content_type == 'application/x-www-form-urlencoded':
        return request.POST.dict()
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationFailed('Malformed JSON body')
    if not isinstance(data, dict):
        raise ValidationFailed('JSON body must be an object')
    return data


def to_response(result):
    if isinstance(result, tuple):
        payload, status = result
        return JsonResponse(payload, status=status, safe=False)
    if isinstance(result, (dict, list)):
        return JsonResponse(result, safe=False)
    return result


def parse_json_field(value, field_name, default=None):
    """Admin forms send nested documents as JSON strings."""
    if value is None:
        return default
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError:
        raise ValidationFailed(f'Malformed JSON in field "{field_name}"')


def parse_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).lower() in ('1', 'true', 'yes', 'on')


def require_admin(request):
    """For views where only some methods are admin-only."""
    if not request.user.is_authenticated:
        raise NotAuthenticated()
    if not request.user.is_staff:
        raise Forbidden('Not authorized as an admin')
