"""Domain exceptions for the tale service layer.

Service code raises these instead of ``HTTPException`` so it stays
independent of the web framework. Each carries the HTTP-equivalent status
code that the handlers registered in ``main.py`` respond with.
"""


class TaleError(Exception):
    """Base class for tale service errors."""

    default_status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = (
            status_code if status_code is not None else self.default_status_code
        )


class ValidationError(TaleError):
    """A required field is missing, malformed, or outside its allowed values (HTTP 400)."""

    default_status_code = 400


class NotFound(TaleError):
    """No tale exists for the given id (HTTP 404)."""

    default_status_code = 404

    def __init__(self, message: str = "Tale not found"):
        super().__init__(message)


class Forbidden(TaleError):
    """The requester may not see or change this tale (HTTP 403)."""

    default_status_code = 403


class GenerationFailed(TaleError):
    """The narrative generator could not produce a tale (HTTP 500)."""

    default_status_code = 500
