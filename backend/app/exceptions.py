"""
Copenhagen Beaches Proxy — Custom Exception Hierarchy
======================================================

What:  Defines application-specific exceptions for each way a request can fail.
Why:   Custom exceptions let the global handlers in main.py pick the right
       HTTP status and body shape without try/except blocks in every route.
How:   Each exception class carries a message and optional context dict.
       The message is returned to the client; the context is only logged.
Who:   Raised by the upstream client and the beach service; caught by handlers.

Exception Hierarchy:
    BeachProxyError (base)
    ├── UpstreamError               → 500 failure envelope
    │   ├── UpstreamNetworkError    → connection failure or timeout
    │   ├── UpstreamStatusError     → non-2xx status from api.badevand.dk
    │   └── UpstreamParseError      → body is not valid JSON or not an array
    └── MethodNotAllowedError       → 405 (distinct, non-envelope body)

    All upstream failures share one HTTP status. Only the message differs,
    so the device can treat any 500 the same way.
"""

from typing import Any, Dict, Optional


class BeachProxyError(Exception):
    """
    Base exception for all proxy errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UpstreamError(BeachProxyError):
    """
    Raised when the beach dataset could not be fetched or processed.

    HTTP:    500 Internal Server Error, failure envelope:
        {
            "success": false,
            "error": "Failed to fetch beach data",
            "message": "<this exception's message>",
            "timestamp": "2024-06-01T10:15:30.123Z"
        }

    Also used directly to wrap unexpected filter/projection errors.
    """

    def __init__(
        self,
        message: str = "Failed to fetch beach data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpstreamNetworkError(UpstreamError):
    """
    Raised when the upstream request never produced a response.

    When:    DNS failure, connection refused, TLS error, or the configured
             timeout (default 30s) elapsed.
    """


class UpstreamStatusError(UpstreamError):
    """
    Raised when api.badevand.dk answers with a non-2xx status.

    The message embeds the numeric status and reason phrase, e.g.
    "Danish API returned 503: Service Unavailable".
    """

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Danish API returned {status_code}: {reason}"
        ctx = context or {}
        ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
        self.reason = reason


class UpstreamParseError(UpstreamError):
    """
    Raised when the upstream body is not valid JSON or not a JSON array.

    Non-object elements inside the array do not raise; the client skips them.
    """


class MethodNotAllowedError(BeachProxyError):
    """
    Raised for any HTTP method other than GET or OPTIONS.

    HTTP:    405 Method Not Allowed
    Body:    {"error": "Method not allowed", "message": "Only GET requests are supported"}

    Why not the failure envelope:
        Clients already rely on this shorter shape; it carries no
        success/timestamp fields.
    """

    error = "Method not allowed"

    def __init__(
        self,
        method: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if method:
            ctx["method"] = method
        super().__init__(message="Only GET requests are supported", context=ctx)
        self.method = method
