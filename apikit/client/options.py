from __future__ import annotations

"""
Typed option contracts for outbound API requests.

Design intent:
- Validate client configuration once at construction time.
- Keep per-request options explicit so URL/header/body resolution is predictable.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field

from apikit.envelope import APIMessage
from apikit.internal_core.config import CredentialsMode

HTTPMethod = Literal["HEAD", "GET", "PUT", "POST", "PATCH", "DELETE"]

BODY_METHODS: set[str] = {"POST", "PUT", "PATCH"}

DEFAULT_FAILURE_CODE = "API_ERROR"
DEFAULT_FAILURE_MESSAGE = "An error occured while contacting the API."


def _default_failure_message() -> APIMessage:
    return APIMessage(code=DEFAULT_FAILURE_CODE, message=DEFAULT_FAILURE_MESSAGE)


@dataclass(frozen=True)
class MultipartForm:
    """Form payload passed to the transport untouched.

    The transport owns the content type: it is always sent as
    multipart/form-data with a boundary, even when `files` is empty.
    """

    data: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)


class APIOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = "API"
    base_url: str = ""
    default_credentials_mode: CredentialsMode = "omit"
    failure_message: APIMessage = Field(default_factory=_default_failure_message)


class APIRequestOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    method: HTTPMethod = "GET"
    endpoint: str
    credentials_mode: CredentialsMode | None = None
    headers: httpx.Headers | dict[str, str] | list[tuple[str, str]] | None = None
    parameters: httpx.QueryParams | str | dict[str, Any] | list[tuple[str, Any]] | None = None
    body: Any = None
