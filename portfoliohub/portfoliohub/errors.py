class ApiError(Exception):
    """Base for failures reported back to the caller as JSON."""

    status = 500
    default_message = 'Server error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def payload(self):
        return {'message': self.message}


class NotAuthenticated(ApiError):
    status = 401
    default_message = 'Not authorized, no session'


class Forbidden(ApiError):
    status = 403
    default_message = 'Not authorized'


class NotFound(ApiError):
    status = 404
    default_message = 'Not found'


class ValidationFailed(ApiError):
    status = 400
    default_message = 'Invalid request'

    def __init__(self, message=None, invalid=None):
        super().__init__(message)
        self.invalid = list(invalid or [])

    def payload(self):
        data = super().payload()
        if self.invalid:
            data['invalid'] = self.invalid
        return data


class UpstreamFailure(ApiError):
    status = 502
    default_message = 'Upstream service failed'
