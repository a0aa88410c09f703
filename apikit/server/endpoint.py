from __future__ import annotations

"""
Server-side endpoint adapter that always answers with an APIResponse envelope.

Design intent:
- Let handlers mutate a fresh envelope instead of building framework responses.
- Derive the status code from the envelope when the handler does not set one.
- Never let a handler exception escape to the surrounding Starlette/FastAPI stack.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from starlette.requests import Request
from starlette.responses import Response

from apikit.envelope import APIMessage, APIResponse
from apikit.internal_core.diagnostics import log_event

NOT_IMPLEMENTED_CODE = "NOT_IMPLEMENTED"
NOT_IMPLEMENTED_MESSAGE = "This endpoint is not implemented yet."
UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"
UNKNOWN_ERROR_MESSAGE = "An unknown error occured."


@dataclass
class ResponseSink:
    """Mutable response state filled in by `APIEndpoint.execute`."""

    status_code: int = 200
    media_type: str | None = None
    body: str | bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    def to_response(self) -> Response:
        return Response(
            content=self.body,
            status_code=self.status_code,
            media_type=self.media_type,
            headers=self.headers or None,
        )


@dataclass(frozen=True)
class EndpointContext:
    request: Request | Any
    response: ResponseSink


# Handlers may be plain functions or coroutines.
EndpointCallback = Callable[[EndpointContext, APIResponse], Any]


class APIEndpoint:
    def __init__(
        self,
        callback: EndpointCallback | None = None,
        *,
        name: str = "APIEndpoint",
        logger: logging.Logger | None = None,
    ) -> None:
        self.callback = callback
        self.name = name
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    def set_callback(self, callback: EndpointCallback | None) -> None:
        self.callback = callback

    async def execute(self, request: Request | Any, sink: ResponseSink) -> None:
        """Run the handler and write the envelope into `sink`.

        The status starts at 200 and is raised to 400 when the handler leaves
        the envelope unsuccessful. A handler exception replaces the body with a
        fresh UNKNOWN_ERROR envelope and raises the status to 500 unless the
        handler already chose an error status.
        """
        sink.status_code = 200
        context = EndpointContext(request=request, response=sink)

        try:
            response = APIResponse()

            if self.callback is not None:
                result = self.callback(context, response)
                if inspect.isawaitable(result):
                    await result
            else:
                response.add_message(APIMessage(code=NOT_IMPLEMENTED_CODE, message=NOT_IMPLEMENTED_MESSAGE))

            if not response.success and sink.status_code < 400:
                sink.status_code = 400

            response.write_to(sink)
        except Exception as exc:
            log_event(self._logger, self.name, "An error occured", level=logging.ERROR, error=exc)

            if sink.status_code < 400:
                sink.status_code = 500

            APIResponse().add_message(
                APIMessage(code=UNKNOWN_ERROR_CODE, message=UNKNOWN_ERROR_MESSAGE)
            ).write_to(sink)

    async def handle(self, request: Request) -> Response:
        """Starlette endpoint: `app.add_route(path, endpoint.handle, methods=[...])`."""
        sink = ResponseSink()
        await self.execute(request, sink)
        return sink.to_response()
