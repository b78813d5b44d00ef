from typing import Optional


class WatsonXError(Exception):
    """Base exception for all wxclient errors."""
    pass


class SetupError(WatsonXError):
    """Raised when no usable credential could be acquired. Nothing was sent to the generation endpoint."""
    pass


class TransportError(WatsonXError):
    """Raised when the generation stream could not be opened."""
    retryable = False

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Raised when the credential is rejected (401/403)."""
    pass


class InvalidRequestError(TransportError):
    """Raised when the request is malformed (400)."""
    pass


class RateLimitError(TransportError):
    """Raised when the service rate limit is exceeded (429)."""
    retryable = True


class ProviderError(TransportError):
    """Raised when the service returns a 5xx error."""
    retryable = True


class NetworkError(TransportError):
    """Raised when the network connection fails."""
    retryable = True


class EmptyResponseError(TransportError):
    """Raised when a successful response carries no body."""
    pass
