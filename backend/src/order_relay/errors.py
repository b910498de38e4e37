"""Relay error taxonomy.

Every failure the relay reports to a caller is a RelayError subclass carrying
the HTTP status and the ``error`` label of the response body. The exception
handler in ``main`` renders them as ``{"error": ..., "details": ...}``.
"""

from typing import Any, Optional


class RelayError(Exception):
    """Base exception for failures surfaced to the caller."""

    status_code: int = 500
    error: str = "Server error"

    def __init__(self, error: Optional[str] = None, details: Any = None):
        self.error = error or self.error
        self.details = details
        super().__init__(self.error if details is None else f"{self.error}: {details}")

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class UnauthorizedError(RelayError):
    """Missing or mismatched inbound API key."""
    status_code = 401
    error = "Unauthorized"


class RequestValidationFailed(RelayError):
    """Inbound order is missing a required field or has the wrong shape."""
    status_code = 400
    error = "Invalid request body"


class PayloadTooLarge(RelayError):
    status_code = 413
    error = "Payload too large"


class UpstreamRejectedError(RelayError):
    """Shopify answered with a non-OK status or reported user errors."""
    status_code = 400
    error = "Shopify error"


class ServerError(RelayError):
    """Failures that are not the caller's fault.

    ``details`` holds the stringified diagnostic, matching what the generic
    exception handler reports for unexpected exceptions.
    """
    status_code = 500
    error = "Server error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(details=message)

    def __str__(self) -> str:
        return self.message


class TokenExchangeError(ServerError):
    """The client-credentials exchange failed or returned no access_token."""
    pass


class UpstreamResponseError(ServerError):
    """Shopify returned a body the relay could not interpret."""
    pass


class UpstreamUnavailableError(ServerError):
    """The request to Shopify failed at the transport level."""
    pass
