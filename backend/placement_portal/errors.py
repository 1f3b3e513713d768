"""
Domain errors raised by the service layer.

Routers never build HTTP responses for these themselves; ``main.py`` maps
each subclass to its ``status_code`` with a ``{"detail": ...}`` body.
"""


class PortalError(Exception):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class InvalidRequestError(PortalError):
    status_code = 400


class AuthenticationError(PortalError):
    status_code = 401


class ForbiddenError(PortalError):
    status_code = 403


class NotFoundError(PortalError):
    status_code = 404


class ConflictError(PortalError):
    status_code = 409


class PayloadTooLargeError(PortalError):
    status_code = 413
