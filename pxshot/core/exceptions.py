from typing import Optional, Dict, Any, Mapping, Type


class PxshotError(Exception):
    """Base exception for all pxshot client errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = dict(details or {})
        super().__init__(self.message)


class ValidationError(PxshotError):
    """Request failed local validation; nothing was sent."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.field = field
        validation_details = dict(details or {})
        if field:
            validation_details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", validation_details)


class RequestError(PxshotError):
    """Network-layer failure: DNS, connect, TLS or timeout."""

    def __init__(self, message: str, url: Optional[str] = None, timeout: bool = False):
        self.url = url
        self.timeout = timeout
        details: Dict[str, Any] = {"timeout": timeout}
        if url:
            details["url"] = url
        super().__init__(message, "REQUEST_ERROR", details)


class APIError(PxshotError):
    """The API answered with a non-2xx status."""

    error_code = "API_ERROR"

    def __init__(self, status: int, message: str, details: Optional[Dict[str, Any]] = None):
        self.status = status
        api_details = dict(details or {})
        api_details["status"] = status
        super().__init__(message, type(self).error_code, api_details)

    def __str__(self) -> str:
        return f"API error ({self.status}): {self.message}"


class AuthenticationError(APIError):
    """API key missing, unknown or revoked (401)."""

    error_code = "AUTHENTICATION_ERROR"


class AuthorizationError(APIError):
    """API key not allowed to perform the operation (403)."""

    error_code = "AUTHORIZATION_ERROR"


class QuotaExceededError(APIError):
    """Plan quota used up for the current period (402)."""

    error_code = "QUOTA_EXCEEDED"


class RateLimitError(APIError):
    """Too many requests (429)."""

    error_code = "RATE_LIMIT_ERROR"

    def __init__(self, status: int, message: str, retry_after: Optional[int] = None):
        self.retry_after = retry_after
        details = {}
        if retry_after is not None:
            details["retry_after"] = retry_after
        super().__init__(status, message, details)


class DeserializationError(PxshotError):
    """A 2xx response body did not match the expected schema."""

    def __init__(self, message: str, body: Optional[str] = None):
        self.body = body
        details = {}
        if body is not None:
            # Keep details small enough to log
            details["body"] = body[:500]
        super().__init__(message, "DESERIALIZATION_ERROR", details)


class ConfigurationError(PxshotError):
    """Client constructed with unusable configuration."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, "CONFIGURATION_ERROR", details)


class ClientClosedError(PxshotError):
    """Call made on a client after close() or aclose()."""

    def __init__(self, message: str = "client is closed"):
        super().__init__(message, "CLIENT_CLOSED")


# Mapping of HTTP status codes to API error types
API_ERROR_CLASSES: Dict[int, Type[APIError]] = {
    401: AuthenticationError,
    402: QuotaExceededError,
    403: AuthorizationError,
    429: RateLimitError,
}


def _parse_retry_after(headers: Optional[Mapping[str, str]]) -> Optional[int]:
    if not headers:
        return None
    value = headers.get("retry-after") or headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(0, int(value.strip()))
    except ValueError:
        # HTTP-date form is not interpreted
        return None


def api_error_for_status(
    status: int,
    message: str,
    headers: Optional[Mapping[str, str]] = None
) -> APIError:
    """
    Build the API error matching an HTTP status code.

    Args:
        status: HTTP status code of the response
        message: Error message reported by the API (or a fallback)
        headers: Response headers, consulted for Retry-After

    Returns:
        APIError instance (a subclass for well-known statuses)
    """
    error_class = API_ERROR_CLASSES.get(status, APIError)
    if error_class is RateLimitError:
        return RateLimitError(status, message, retry_after=_parse_retry_after(headers))
    return error_class(status, message)
