from rest_framework import exceptions, status


class ValidationError(exceptions.ValidationError):
    """Malformed or non-positive numeric input."""

    default_detail = "Invalid input."
    default_code = "invalid"


class InvalidRateError(exceptions.ValidationError):
    """Exchange rate or fee percentage out of bounds."""

    default_detail = "Invalid exchange rate or fee percentage."
    default_code = "invalid_rate"


class NotFoundError(exceptions.NotFound):
    default_detail = "Not found."
    default_code = "not_found"


class Unauthorized(exceptions.NotAuthenticated):
    default_detail = "Authentication credentials were not provided."
    default_code = "not_authenticated"


class Forbidden(exceptions.PermissionDenied):
    default_detail = "You do not have permission to perform this action."
    default_code = "permission_denied"


class IllegalTransitionError(exceptions.APIException):
    """Status move not allowed by the transaction status graph."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Illegal status transition."
    default_code = "illegal_transition"
