# novacart/domain/errors.py


class ServiceError(Exception):
    """Base for errors raised by services and mapped to HTTP at the router."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request."


class EmptyCartError(ValidationError):
    default_message = "Cart is empty"


class ConflictError(ServiceError):
    status_code = 409
    default_message = "Resource already exists."


class AuthError(ServiceError):
    status_code = 401
    default_message = "Not authorized"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found."


class StoreUnavailable(Exception):
    """Catalog store can't serve the query. Handled by the snapshot fallback."""
