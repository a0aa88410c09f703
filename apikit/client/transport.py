from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from apikit.internal_core.config import CredentialsMode

from .options import MultipartForm


class TransportError(RuntimeError):
    """Raised by a transport when a request cannot be completed."""


@dataclass(frozen=True)
class TransportRequest:
    method: str
    url: str
    credentials: CredentialsMode
    headers: httpx.Headers
    body: str | MultipartForm | None = None


class RawResponse(Protocol):
    def json(self) -> Any: ...


class Transport(ABC):
    @abstractmethod
    def send(self, request: TransportRequest) -> RawResponse: ...


class AsyncTransport(ABC):
    @abstractmethod
    async def send(self, request: TransportRequest) -> RawResponse: ...


def _field_parts(data: dict[str, Any]) -> list[tuple[str, tuple[None, bytes]]]:
    parts: list[tuple[str, tuple[None, bytes]]] = []
    for name, value in data.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        parts.extend((name, (None, str(item).encode("utf-8"))) for item in values)
    return parts


def _body_kwargs(body: str | MultipartForm | None) -> dict[str, Any]:
    if body is None:
        return {}
    if isinstance(body, MultipartForm):
        if body.files:
            return {"data": body.data or None, "files": body.files}
        # httpx only builds multipart bodies from `files`; send the fields as file-less parts.
        return {"files": _field_parts(body.data)}
    return {"content": body}


def _build_request(client: httpx.Client | httpx.AsyncClient, request: TransportRequest) -> httpx.Request:
    outbound = client.build_request(
        request.method,
        request.url,
        headers=request.headers,
        **_body_kwargs(request.body),
    )
    if request.credentials == "omit":
        # build_request attaches the client's cookie jar.
        outbound.headers.pop("Cookie", None)
    return outbound


class HTTPXTransport(Transport):
    def __init__(self, client: httpx.Client | None = None) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=None)

    def send(self, request: TransportRequest) -> httpx.Response:
        return self._client.send(_build_request(self._client, request))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class AsyncHTTPXTransport(AsyncTransport):
    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=None)

    async def send(self, request: TransportRequest) -> httpx.Response:
        return await self._client.send(_build_request(self._client, request))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
