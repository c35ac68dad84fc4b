"""Error taxonomy shared by services, the store and the HTTP layer."""

from __future__ import annotations


class AtypeError(Exception):
    """Base class; carries the HTTP status used when rendered as {"error": message}."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AtypeError):
    """A required field is missing or a business rule on input failed."""


class ConflictError(AtypeError):
    """Identity already taken (duplicate login)."""


class AuthError(AtypeError):
    status_code = 401


class UnknownReferenceError(AtypeError):
    """A login/author/recipient does not resolve to an existing user."""


class StoreError(AtypeError):
    status_code = 500


class StoreCorruptedError(StoreError):
    pass


class StoreWriteError(StoreError):
    pass
