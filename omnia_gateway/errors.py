"""Error types and the JSON error envelope"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from .messages import localize

# Vendor statuses worth retrying from the client side
RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


def is_retryable(status: int) -> bool:
    """Whether a vendor status code is transient"""
    return status in RETRYABLE_STATUSES


class VendorError(Exception):
    """A vendor answered with a non-2xx status or could not be reached"""

    def __init__(self, vendor: str, status_code: int, details: str = ""):
        super().__init__(f"{vendor} API error {status_code}: {details}")
        self.vendor = vendor
        self.status_code = status_code
        self.details = details

    @property
    def retryable(self) -> bool:
        return is_retryable(self.status_code)


class GatewayError(Exception):
    """Error raised by a route, rendered as the JSON error envelope"""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: Any = None,
        retryable: Optional[bool] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        self.retryable = retryable
        self.extra = extra or {}

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "success": False,
            "error": self.error,
            "message": self.message,
        }
        if self.details is not None:
            body["details"] = self.details
        if self.retryable is not None:
            body["retryable"] = self.retryable
        body.update(self.extra)
        return body

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.to_dict())


def configuration_error(service: str) -> GatewayError:
    """Missing vendor credentials"""
    return GatewayError(
        status_code=500,
        error="Configuration error",
        message=localize("config_missing", service=service),
    )


def speech_error_message(status: int, service: str) -> str:
    """Localized message for a failed speech-to-text call"""
    if status == 400:
        return localize("stt_bad_format")
    if status == 413:
        return localize("stt_too_large")
    if status == 429:
        return localize("rate_limited")
    if status in (500, 502, 503):
        return localize("vendor_server_error", service=service)
    return localize("stt_generic_error", status=status)
