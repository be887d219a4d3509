"""
Error taxonomy for the gift proxy.

Each failure is raised where it happens and turned into a response by the handler.
"""

from typing import Any, Dict, Optional

_UNSET = object()


class ProxyError(Exception):
    status_code = 500
    code = "proxy_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        raw: Any = _UNSET,
        details: Optional[str] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.raw = raw
        self.details = details
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.raw is not _UNSET:
            body["raw"] = self.raw
        if self.details is not None:
            body["details"] = self.details
        return body


class MethodNotAllowed(ProxyError):
    status_code = 405
    code = "method_not_allowed"

    def __init__(self, method: str = ""):
        self.method = method
        super().__init__("Method Not Allowed")


class MissingConfiguration(ProxyError):
    status_code = 500
    code = "missing_configuration"


class InvalidInputBody(ProxyError):
    status_code = 400
    code = "invalid_input_body"


class BackendUnreachable(ProxyError):
    status_code = 500
    code = "backend_unreachable"


class BackendRejected(ProxyError):
    status_code = 502
    code = "backend_rejected"


class UpstreamFormat(ProxyError):
    status_code = 502
    code = "upstream_format"


class UpstreamShape(ProxyError):
    status_code = 502
    code = "upstream_shape"
