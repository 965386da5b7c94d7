"""Error taxonomy shared by the services and the HTTP layer.

Each error carries the HTTP status it maps to, a stable code, and a message
that is safe to show to the caller.
"""


class PagetrailError(Exception):
    status_code = 500
    code = "Internal"
    default_message = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(PagetrailError):
    status_code = 400
    code = "InvalidInput"
    default_message = "Invalid input."


class Unauthorized(PagetrailError):
    status_code = 401
    code = "Unauthorized"
    default_message = "Unauthorized: Please log in."


class Forbidden(PagetrailError):
    status_code = 403
    code = "Forbidden"
    default_message = "Unauthorized or book not found in your library."


class NotFound(PagetrailError):
    status_code = 404
    code = "NotFound"
    default_message = "Book not found in your library or you are not authorized."


class Conflict(PagetrailError):
    status_code = 409
    code = "Conflict"
    default_message = "Book already added to your library."


class Internal(PagetrailError):
    pass


class UpstreamUnavailable(PagetrailError):
    status_code = 502
    code = "UpstreamUnavailable"
    default_message = "The book catalog is unavailable."
