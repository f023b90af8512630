# openrouter_flow/llm/errors.py
from typing import Optional


class OpenRouterError(Exception):
    """Base class for every failure raised while talking to OpenRouter."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NoKeyConfigured(OpenRouterError):
    """No API key is available for the call."""

    def __init__(self, message: str = "API key not configured"):
        super().__init__(message)


class AuthError(OpenRouterError):
    """The API key was rejected."""


class RateLimited(OpenRouterError):
    """OpenRouter answered 429."""


class ServerError(OpenRouterError):
    """OpenRouter answered with a 5xx status."""


class NetworkError(OpenRouterError):
    """The request never produced an HTTP response."""


class UnexpectedFormat(OpenRouterError):
    """A success response did not have the expected shape."""


class ApiError(OpenRouterError):
    """An application-level error, either embedded in a 2xx body or an unclassified status."""


class EmptyResponse(OpenRouterError):
    """The completion carried no message content."""

    def __init__(self, message: str = "No response content received"):
        super().__init__(message)


class Unavailable(OpenRouterError):
    """An optional endpoint is not supported for this account."""


def error_for_status(status_code: int, detail: str = "") -> OpenRouterError:
    """
    Map a non-success HTTP status to the matching error class.

    Args:
        status_code: HTTP status returned by OpenRouter
        detail: Optional response text appended to the message

    Returns:
        An OpenRouterError subclass instance (not raised)
    """
    message = f"API request failed: {status_code}"
    if detail:
        message = f"{message} ({detail})"

    if status_code in (401, 403):
        return AuthError(message, status_code)
    if status_code == 429:
        return RateLimited(message, status_code)
    if status_code >= 500:
        return ServerError(message, status_code)
    return ApiError(message, status_code)
