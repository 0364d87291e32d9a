"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to so the API layer can render it
without a lookup table. Services raise these and never catch them.
"""


class FlatmateError(Exception):
    status_code = 400
    code = "error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(FlatmateError):
    status_code = 422
    code = "validation_error"


class AuthorizationError(FlatmateError):
    status_code = 403
    code = "forbidden"


class AuthenticationRequired(AuthorizationError):
    status_code = 401
    code = "authentication_required"

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail)


class NotFoundError(FlatmateError):
    status_code = 404
    code = "not_found"


class PreconditionError(FlatmateError):
    status_code = 409
    code = "not_contactable"
