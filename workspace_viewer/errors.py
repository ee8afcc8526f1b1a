from __future__ import annotations


class ViewerError(Exception):
    """Failure that maps onto an HTTP status with a JSON `{error}` body."""

    status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(ViewerError):
    status = 400


class Forbidden(ViewerError):
    status = 403


class NotFound(ViewerError):
    status = 404


class Internal(ViewerError):
    status = 500
