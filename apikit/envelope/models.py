from __future__ import annotations

"""
Envelope data contracts shared by the client and server components.

Design intent:
- Keep the wire shape fixed to success/messages/data/info.
- Normalize messages at insertion so every stored message has display text.
- Return the envelope from each mutator so handlers can chain calls.
"""

import json
from typing import Any, Mapping, Protocol

from pydantic import BaseModel, ConfigDict, Field

ENVELOPE_FIELDS: tuple[str, ...] = ("success", "messages", "data", "info")
JSON_MEDIA_TYPE = "application/json"
MISSING_CODE = "UNKNOWN"


class APIMessage(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    code: str | int
    message: str | None = None


def _seed_messages(raw: Any) -> list[Any]:
    items = raw if isinstance(raw, list) else [raw]
    seeded: list[Any] = []
    for item in items:
        if isinstance(item, APIMessage):
            item = item.model_dump()
        if isinstance(item, Mapping):
            item = dict(item)
            if item.get("code") is None:
                item["code"] = MISSING_CODE
        else:
            item = {"code": item if isinstance(item, (str, int)) else MISSING_CODE}
        seeded.append(item)
    return seeded


class EnvelopeSink(Protocol):
    media_type: str | None
    body: str | bytes


class APIResponse(BaseModel):
    success: bool = False
    messages: list[APIMessage] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    info: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "APIResponse":
        """Seed a fresh envelope from an envelope-like mapping.

        Missing or null fields keep their defaults. Remote messages are kept as
        sent, extra keys included; a message without a code gets `MISSING_CODE`
        and display text is filled in the same way `add_message` fills it.
        Only a non-object payload or non-object data/info is rejected.
        """
        if isinstance(payload, APIResponse):
            payload = payload.serialize()
        if not isinstance(payload, Mapping):
            raise TypeError(f"Envelope payload must be a JSON object, got {type(payload).__name__}.")
        seed = {name: payload[name] for name in ENVELOPE_FIELDS if payload.get(name) is not None}
        if "messages" in seed:
            seed["messages"] = _seed_messages(seed["messages"])
        response = cls.model_validate(seed)
        for item in response.messages:
            if item.message is None:
                item.message = str(item.code)
        return response

    def set_success(self) -> "APIResponse":
        self.success = True
        return self

    def add_message(self, message: APIMessage | Mapping[str, Any]) -> "APIResponse":
        if not isinstance(message, APIMessage):
            message = APIMessage.model_validate(message)
        if message.message is None:
            message.message = str(message.code)
        self.messages.append(message)
        return self

    def merge_data(self, values: Mapping[str, Any]) -> "APIResponse":
        self.data = {**self.data, **values}
        return self

    def merge_info(self, values: Mapping[str, Any]) -> "APIResponse":
        self.info = {**self.info, **values}
        return self

    def serialize(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return json.dumps(self.serialize())

    def write_to(self, sink: EnvelopeSink) -> None:
        # Call last: the body is a snapshot of the envelope at this point.
        sink.media_type = JSON_MEDIA_TYPE
        sink.body = self.to_json()
