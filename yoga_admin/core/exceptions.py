"""
Domain errors raised by services and the authorization core.

Each error carries the HTTP status it maps to; ``main.py`` installs a single
handler that renders them as ``{"detail": ...}`` responses.
"""


class AuthzError(Exception):
    status_code = 500
    default_detail = "Authorization backend error"

    def __init__(self, detail=None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(AuthzError):
    status_code = 404
    default_detail = "Not found"


class UnknownRole(NotFound):
    """Role name is not part of the role catalog."""

    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(f"Role not found: {role_name}")


class Unauthorized(AuthzError):
    status_code = 403
    default_detail = "Insufficient privileges"


class Conflict(AuthzError):
    status_code = 409
    default_detail = "Conflicting change"


class StoreUnavailable(AuthzError):
    status_code = 503
    default_detail = "Data store unavailable"
