"""
Error taxonomy shared by the store, the auth layer and the routes.

Every error carries the HTTP status it maps to; ``api.middleware`` renders
them as ``{"msg": ...}`` bodies.
"""

from __future__ import annotations


class BlogError(Exception):
    status_code = 500
    default_msg = "internal server error"

    def __init__(self, msg: str | None = None):
        self.msg = msg or self.default_msg
        super().__init__(self.msg)


class ValidationError(BlogError):
    status_code = 400
    default_msg = "missing required field"


class DuplicateEmail(BlogError):
    status_code = 400
    default_msg = "user exist already"


class Unauthorized(BlogError):
    status_code = 401
    default_msg = "unauthorized"


class Forbidden(BlogError):
    status_code = 403
    default_msg = "forbidden"


class NotFound(BlogError):
    status_code = 404
    default_msg = "not found"


class InternalError(BlogError):
    pass


class InvalidTokenError(Exception):
    """Raised by ``auth.jwt.verify_token``; the auth gate maps it to 401."""
