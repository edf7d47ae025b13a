"""Service-level errors; mapped to HTTP responses in main.py."""
from __future__ import annotations


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(StorefrontError):
    status_code = 400


class AuthError(StorefrontError):
    status_code = 401


class ForbiddenError(StorefrontError):
    status_code = 403


class NotFoundError(StorefrontError):
    status_code = 404


class ConflictError(StorefrontError):
    status_code = 409
