"""
Domain errors raised by the auth components.

Each carries the HTTP status and error code the API reports for it, so the
components stay free of Flask while the error handlers stay generic.
"""
from __future__ import annotations


class AuthError(Exception):
    status = 400
    error = "BAD_REQUEST"
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(AuthError):
    """Malformed or missing input."""


class InvalidCredentials(AuthError):
    """Unknown username or wrong password. The message never says which."""

    status = 401
    error = "INVALID_CREDENTIALS"
    default_message = "Invalid username or password"

    def __init__(self):
        super().__init__(self.default_message)


class Unauthorized(AuthError):
    status = 401
    error = "UNAUTHORIZED"
    default_message = "Unauthorized"


class Conflict(AuthError):
    status = 409
    error = "CONFLICT"
    default_message = "Conflict"
