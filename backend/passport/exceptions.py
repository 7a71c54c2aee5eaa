class PassportError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(PassportError):
    """No verified identity is attached to the request."""

    status_code = 401


class AuthorizationError(PassportError):
    """The identity is known but lacks rights over the resource."""

    status_code = 403


class NotFoundError(PassportError):
    status_code = 404


class BadRequestError(PassportError):
    """Malformed or missing request parameter."""

    status_code = 400


class ConflictError(PassportError):
    """A uniqueness rule would be violated."""

    status_code = 409


class UpstreamError(PassportError):
    """The identity provider could not complete a delegated call."""

    status_code = 500
