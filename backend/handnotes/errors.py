"""
Error taxonomy shared by the API and the client.

Every error carries the user-facing message and the HTTP status the API
answers with. The API renders them as ``{"error": message}``; the client
maps such bodies back onto the same classes with :func:`error_for_status`.
"""


class HandnotesError(Exception):
    status_code = 500
    default_message = "Unknown error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ExtractionError(HandnotesError):
    """Base for everything the note extraction gateway can fail with."""


class InvalidInput(ExtractionError):
    status_code = 400
    default_message = "No image provided"


class RateLimited(ExtractionError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again in a moment."


class QuotaExhausted(ExtractionError):
    status_code = 402
    default_message = "AI credits exhausted. Please add credits to continue."


class MalformedModelOutput(ExtractionError):
    default_message = "AI did not return structured data"


class UpstreamFailure(ExtractionError):
    default_message = "Failed to process notes"


class Misconfigured(ExtractionError):
    default_message = "AI gateway API key is not configured"


class NotFound(HandnotesError):
    status_code = 404
    default_message = "Note not found"


class PersistenceError(HandnotesError):
    default_message = "Failed to save notes"


class AuthError(HandnotesError):
    status_code = 401
    default_message = "Invalid login credentials"


_BY_STATUS = {
    400: InvalidInput,
    401: AuthError,
    402: QuotaExhausted,
    403: AuthError,
    404: NotFound,
    429: RateLimited,
}


def error_for_status(status_code: int, message: str | None = None) -> HandnotesError:
    """Rebuild the closest error class from an HTTP error response."""
    cls = _BY_STATUS.get(status_code, UpstreamFailure if status_code >= 500 else HandnotesError)
    err = cls(message)
    if cls is HandnotesError:
        err.status_code = status_code
    return err
