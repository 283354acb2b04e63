# core/errors.py
from typing import Optional


class StorefrontError(Exception):
    """Base class for errors raised by the delivery and library core.

    Each subclass carries the HTTP status the API layer renders it with and
    a message that is safe to show to the client.
    """
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class UnauthorizedError(StorefrontError):
    status_code = 401
    default_message = "Not authorized"


class SecurityViolationError(StorefrontError):
    """A file reference resolved outside the content root.

    Rendered as a plain 404 so the response does not reveal anything about
    the filesystem layout.
    """
    status_code = 404
    default_message = "File not found"


class RangeNotSatisfiableError(StorefrontError):
    status_code = 416
    default_message = "Requested range not satisfiable"

    def __init__(self, file_size: int, message: Optional[str] = None):
        self.file_size = file_size
        super().__init__(message)


class AlreadyOwnedError(StorefrontError):
    status_code = 400
    default_message = "Product already in your library"


class InvalidSignatureError(StorefrontError):
    status_code = 400
    default_message = "Invalid payment signature"


class InternalError(StorefrontError):
    status_code = 500
    default_message = "Internal server error"
