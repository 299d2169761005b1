"""Error taxonomy shared by the handlers.

Every error a handler raises on purpose derives from `ProxyError` and is
rendered as `{"error": ..., "details"?: ...}` by the app's exception handler.
"""

from typing import Any


class ProxyError(Exception):
    """Base class for errors converted into JSON error responses."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def body(self) -> dict[str, Any]:
        return {"error": self.message}


class MethodNotAllowed(ProxyError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed") -> None:
        super().__init__(message)


class ConfigurationError(ProxyError):
    status_code = 500


class BadRequest(ProxyError):
    status_code = 400


class UpstreamError(ProxyError):
    """PayEvo answered with a non-2xx status; its status and body are relayed."""

    def __init__(self, message: str, status_code: int, details: Any = None) -> None:
        super().__init__(message, status_code)
        self.details = details

    def body(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class UpstreamUnreachable(ProxyError):
    status_code = 502

    def __init__(self, message: str = "Falha na comunicação com PayEvo") -> None:
        super().__init__(message)
