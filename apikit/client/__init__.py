"""
Client module boundary for apikit.

Design intent:
- Issue outbound JSON requests against one configured base URL.
- Keep the HTTP library behind a narrow transport seam so tests can stub it.
"""
from .api import API, AsyncAPI, FailureResponseCallback
from .options import APIOptions, APIRequestOptions, HTTPMethod, MultipartForm
from .transport import (
    AsyncHTTPXTransport,
    AsyncTransport,
    HTTPXTransport,
    RawResponse,
    Transport,
    TransportError,
    TransportRequest,
)

__all__ = [
    "API",
    "AsyncAPI",
    "FailureResponseCallback",
    "APIOptions",
    "APIRequestOptions",
    "HTTPMethod",
    "MultipartForm",
    "AsyncHTTPXTransport",
    "AsyncTransport",
    "HTTPXTransport",
    "RawResponse",
    "Transport",
    "TransportError",
    "TransportRequest",
]
