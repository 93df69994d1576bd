"""
Error types raised while handling gateway requests.

Each error carries the HTTP status it is reported with; the Flask app
renders them as ``{"error": message}`` JSON responses.
"""


class GatewayError(Exception):
    """Base class for errors surfaced to the caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(GatewayError):
    """Client input could not be accepted; no backend call was made."""

    status_code = 400


class BackendUnavailableError(GatewayError):
    """The backend could not be reached (connection refused, DNS failure, ...)."""

    status_code = 502


class BackendReadError(GatewayError):
    """The backend replied but its response body could not be read."""

    status_code = 500
