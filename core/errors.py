from typing import Any, Dict, Optional


class EduPayError(Exception):
    """Base class for failures surfaced to the caller as ``{error, details}``."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class ConfigurationError(EduPayError):
    """Gateway credentials are not configured."""


class GatewayError(EduPayError):
    """The payment provider rejected the request or could not be reached."""

    def __init__(
        self,
        message: str,
        http_status_code: Optional[int] = None,
        api_response: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=api_response or http_status_code)
        self.http_status_code = http_status_code
        self.api_response = api_response


class NetworkError(EduPayError):
    """The relay service could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, details=status_code)
        self.status_code = status_code


class ScriptLoadError(EduPayError):
    """The hosted checkout script could not be loaded."""
