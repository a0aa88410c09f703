"""
Server module boundary for apikit.

Design intent:
- Wrap endpoint handlers so every response is a well-formed envelope.
- Keep status-code derivation in one place instead of in each route.
"""
from .endpoint import (
    NOT_IMPLEMENTED_CODE,
    NOT_IMPLEMENTED_MESSAGE,
    UNKNOWN_ERROR_CODE,
    UNKNOWN_ERROR_MESSAGE,
    APIEndpoint,
    EndpointCallback,
    EndpointContext,
    ResponseSink,
)

__all__ = [
    "NOT_IMPLEMENTED_CODE",
    "NOT_IMPLEMENTED_MESSAGE",
    "UNKNOWN_ERROR_CODE",
    "UNKNOWN_ERROR_MESSAGE",
    "APIEndpoint",
    "EndpointCallback",
    "EndpointContext",
    "ResponseSink",
]
