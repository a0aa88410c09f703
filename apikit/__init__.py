"""
apikit: JSON envelope exchange between API clients and servers.

Design intent:
- Share one envelope contract (success/messages/data/info) across both sides.
- Keep client and server failure modes inside the envelope, never as exceptions.
"""
from .client import API, APIOptions, APIRequestOptions, AsyncAPI, MultipartForm
from .envelope import APIMessage, APIResponse
from .server import APIEndpoint, EndpointContext, ResponseSink

__all__ = [
    "API",
    "APIOptions",
    "APIRequestOptions",
    "AsyncAPI",
    "MultipartForm",
    "APIMessage",
    "APIResponse",
    "APIEndpoint",
    "EndpointContext",
    "ResponseSink",
]
