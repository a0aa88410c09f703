from __future__ import annotations

"""
Outbound JSON API client.

Design intent:
- Build every request from the client's base URL plus explicit per-call options.
- Normalize any outcome, including transport failures, into an APIResponse.
- Fan failures out to registered callbacks without letting one callback break the rest.
"""

import json
import logging
from typing import Any, Callable, Mapping, TypeVar

import httpx

from apikit.envelope import APIMessage, APIResponse, JSON_MEDIA_TYPE
from apikit.internal_core.config import APIKitConfig, CredentialsMode
from apikit.internal_core.diagnostics import log_event

from .options import BODY_METHODS, APIOptions, APIRequestOptions, MultipartForm
from .transport import (
    AsyncHTTPXTransport,
    AsyncTransport,
    HTTPXTransport,
    RawResponse,
    Transport,
    TransportRequest,
)

FailureResponseCallback = Callable[[list[APIMessage]], Any]
_APIType = TypeVar("_APIType", bound="_BaseAPI")


def _coerce_request_options(options: APIRequestOptions | Mapping[str, Any]) -> APIRequestOptions:
    if isinstance(options, APIRequestOptions):
        return options
    return APIRequestOptions.model_validate(options)


def _query_string(parameters: Any) -> str:
    if parameters is None:
        return ""
    if isinstance(parameters, str):
        parameters = parameters.lstrip("?")
    return str(httpx.QueryParams(parameters))


class _BaseAPI:
    def __init__(
        self,
        options: APIOptions | Mapping[str, Any] | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        if options is None:
            options = APIOptions()
        elif not isinstance(options, APIOptions):
            options = APIOptions.model_validate(options)
        self.options = options
        self.failure_callbacks: list[FailureResponseCallback] = []
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    @classmethod
    def _options_from_config(cls, config: APIKitConfig) -> APIOptions:
        return APIOptions(
            name=config.APIKIT_API_NAME,
            base_url=config.APIKIT_BASE_URL,
            default_credentials_mode=config.APIKIT_CREDENTIALS_MODE,
            failure_message=APIMessage.model_validate(config.failure_message()),
        )

    @property
    def name(self) -> str:
        return self.options.name

    @property
    def base_url(self) -> str:
        return self.options.base_url

    @property
    def default_credentials_mode(self) -> CredentialsMode:
        return self.options.default_credentials_mode

    @property
    def failure_message(self) -> APIMessage:
        return self.options.failure_message

    def add_failure_response_callback(self: _APIType, callback: FailureResponseCallback) -> _APIType:
        self.failure_callbacks.append(callback)
        return self

    def _execute_failure_callbacks(self, messages: list[APIMessage]) -> None:
        # Iterate a snapshot; callbacks registered mid-flight apply to later requests.
        for callback in list(self.failure_callbacks):
            try:
                callback(messages)
            except Exception as exc:
                log_event(
                    self._logger,
                    self.name,
                    "Error executing failure callback",
                    level=logging.ERROR,
                    error=exc,
                )

    def _build_transport_request(self, options: APIRequestOptions | Mapping[str, Any]) -> TransportRequest:
        options = _coerce_request_options(options)

        url = self.base_url + options.endpoint
        query = _query_string(options.parameters)
        if query != "":
            url += "?" + query

        method = options.method
        credentials = options.credentials_mode or self.default_credentials_mode

        headers = httpx.Headers(options.headers or {})
        is_multipart = isinstance(options.body, MultipartForm)
        if method != "GET" and not is_multipart and "Content-Type" not in headers:
            headers["Content-Type"] = JSON_MEDIA_TYPE

        body: str | MultipartForm | None = None
        if method in BODY_METHODS:
            body = options.body if is_multipart else json.dumps(options.body if options.body is not None else {})

        return TransportRequest(
            method=method,
            url=url,
            credentials=credentials,
            headers=headers,
            body=body,
        )

    def _parse_response(self, raw_response: RawResponse) -> APIResponse:
        response = APIResponse.from_payload(raw_response.json())
        if not response.success:
            self._execute_failure_callbacks(response.messages)
        return response

    def _failure_response(self, error: Exception) -> APIResponse:
        response = APIResponse().add_message(self.failure_message.model_copy())
        self._execute_failure_callbacks(response.messages)
        log_event(self._logger, self.name, "An error occured", level=logging.ERROR, error=error)
        return response


class API(_BaseAPI):
    """Blocking client for JSON-oriented APIs.

    `request` never raises: transport errors, malformed bodies and invalid
    options all come back as an unsuccessful APIResponse carrying the
    configured failure message.
    """

    def __init__(
        self,
        options: APIOptions | Mapping[str, Any] | None = None,
        *,
        transport: Transport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(options, logger=logger)
        self.transport = transport if transport is not None else HTTPXTransport()

    @classmethod
    def from_config(cls, config: APIKitConfig, transport: Transport | None = None) -> "API":
        return cls(cls._options_from_config(config), transport=transport)

    def request(self, options: APIRequestOptions | Mapping[str, Any]) -> APIResponse:
        try:
            transport_request = self._build_transport_request(options)
            log_event(
                self._logger,
                self.name,
                "request",
                f"{transport_request.method} {transport_request.url}",
                level=logging.DEBUG,
            )
            raw_response = self.transport.send(transport_request)
            return self._parse_response(raw_response)
        except Exception as exc:
            return self._failure_response(exc)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "API":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncAPI(_BaseAPI):
    """`async` twin of `API` with the same never-raise contract."""

    def __init__(
        self,
        options: APIOptions | Mapping[str, Any] | None = None,
        *,
        transport: AsyncTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(options, logger=logger)
        self.transport = transport if transport is not None else AsyncHTTPXTransport()

    @classmethod
    def from_config(cls, config: APIKitConfig, transport: AsyncTransport | None = None) -> "AsyncAPI":
        return cls(cls._options_from_config(config), transport=transport)

    async def request(self, options: APIRequestOptions | Mapping[str, Any]) -> APIResponse:
        try:
            transport_request = self._build_transport_request(options)
            log_event(
                self._logger,
                self.name,
                "request",
                f"{transport_request.method} {transport_request.url}",
                level=logging.DEBUG,
            )
            raw_response = await self.transport.send(transport_request)
            return self._parse_response(raw_response)
        except Exception as exc:
            return self._failure_response(exc)

    async def aclose(self) -> None:
        aclose = getattr(self.transport, "aclose", None)
        if callable(aclose):
            await aclose()

    async def __aenter__(self) -> "AsyncAPI":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
