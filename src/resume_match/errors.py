"""Error taxonomy for the analysis gateway.

Every error carries the HTTP status it maps to and the message that is safe
to show the caller. Internal details (upstream status, response body) stay
on the exception for logging.
"""

from __future__ import annotations

from enum import Enum


class UpstreamErrorKind(str, Enum):
    RATE_LIMITED = "RATE_LIMITED"
    QUOTA_EXHAUSTED = "QUOTA_EXHAUSTED"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"


class GatewayError(Exception):
    """Base class for errors converted into ``{"error": ...}`` responses."""

    status_code: int = 500
    public_message: str = "Unknown error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class ValidationError(GatewayError):
    """Required input missing or malformed. The message is shown verbatim."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.public_message = message


class ConfigurationError(GatewayError):
    status_code = 500
    public_message = "AI service not configured"


class EmptyExtractionError(GatewayError):
    status_code = 400
    public_message = "Could not extract text from PDF"


class UpstreamError(GatewayError):
    """Non-success response from (or no response at all from) the model endpoint."""

    status_code = 500
    public_message = "AI analysis failed"
    kind = UpstreamErrorKind.UPSTREAM_FAILURE

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        detail: str = "",
        public_message: str | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.detail = detail
        if public_message is not None:
            self.public_message = public_message


class RateLimitedError(UpstreamError):
    status_code = 429
    public_message = "Rate limit exceeded. Please try again later."
    kind = UpstreamErrorKind.RATE_LIMITED


class QuotaExhaustedError(UpstreamError):
    status_code = 402
    public_message = "AI credits exhausted. Please add credits to continue."
    kind = UpstreamErrorKind.QUOTA_EXHAUSTED


_ERRORS_BY_KIND: dict[UpstreamErrorKind, type[UpstreamError]] = {
    UpstreamErrorKind.RATE_LIMITED: RateLimitedError,
    UpstreamErrorKind.QUOTA_EXHAUSTED: QuotaExhaustedError,
    UpstreamErrorKind.UPSTREAM_FAILURE: UpstreamError,
}


def classify_status(status: int | None) -> UpstreamErrorKind:
    """Map an upstream HTTP status (None when unreachable) to an error kind."""
    if status == 429:
        return UpstreamErrorKind.RATE_LIMITED
    if status == 402:
        return UpstreamErrorKind.QUOTA_EXHAUSTED
    return UpstreamErrorKind.UPSTREAM_FAILURE


def upstream_error(status: int | None, detail: str = "") -> UpstreamError:
    """Build the typed error for an upstream failure."""
    error_cls = _ERRORS_BY_KIND[classify_status(status)]
    label = f"status {status}" if status is not None else "unreachable"
    return error_cls(f"Upstream model call failed ({label})", status=status, detail=detail)
