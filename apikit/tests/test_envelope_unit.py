import json

import pytest
from pydantic import ValidationError

from apikit.envelope import MISSING_CODE, APIMessage, APIResponse
from apikit.server import ResponseSink


def test_add_message_defaults_display_text_to_stringified_code() -> None:
    response = APIResponse()
    response.add_message({"code": 404})
    response.add_message(APIMessage(code="MISSING_FIELD"))

    assert [item.message for item in response.messages] == ["404", "MISSING_FIELD"]
    assert response.messages[0].code == 404


def test_add_message_keeps_explicit_text_and_insertion_order() -> None:
    response = (
        APIResponse()
        .add_message({"code": "B", "message": "second"})
        .add_message({"code": "A", "message": "first"})
    )
    assert [item.code for item in response.messages] == ["B", "A"]
    assert response.messages[0].message == "second"


def test_mutators_chain_on_the_same_instance() -> None:
    response = APIResponse()
    chained = response.set_success().merge_data({"id": 1}).merge_info({"page": 2}).add_message({"code": "OK"})
    assert chained is response
    assert response.success is True
    assert response.messages[0].message == "OK"


def test_merge_data_is_idempotent_and_later_keys_win() -> None:
    response = APIResponse()
    response.merge_data({"a": 1, "b": 2})
    response.merge_data({"a": 1, "b": 2})
    assert response.data == {"a": 1, "b": 2}

    response.merge_data({"b": 3, "c": [1, 2]})
    assert response.data == {"a": 1, "b": 3, "c": [1, 2]}


def test_merge_info_is_shallow() -> None:
    response = APIResponse().merge_info({"paging": {"page": 1, "size": 10}})
    response.merge_info({"paging": {"page": 2}})
    assert response.info == {"paging": {"page": 2}}
    assert response.data == {}


def test_serialize_returns_exactly_the_wire_fields() -> None:
    response = APIResponse().add_message({"code": 7}).merge_data({"item": "x"})
    payload = response.serialize()
    assert payload == {
        "success": False,
        "messages": [{"code": 7, "message": "7"}],
        "data": {"item": "x"},
        "info": {},
    }
    payload["data"]["item"] = "changed"
    assert response.data == {"item": "x"}
    assert json.loads(response.to_json()) == response.serialize()


def test_from_payload_copies_fields_and_keeps_defaults_for_nulls() -> None:
    response = APIResponse.from_payload(
        {
            "success": True,
            "messages": None,
            "data": {"item": "x"},
            "info": None,
            "unexpected": "ignored",
        }
    )
    assert response.success is True
    assert response.messages == []
    assert response.data == {"item": "x"}
    assert response.info == {}


def test_from_payload_normalizes_remote_messages() -> None:
    response = APIResponse.from_payload({"messages": [{"code": "REMOTE"}, {"code": 3, "message": "three"}]})
    assert response.success is False
    assert [(item.code, item.message) for item in response.messages] == [("REMOTE", "REMOTE"), (3, "three")]


def test_from_payload_rejects_non_object_payloads() -> None:
    with pytest.raises(TypeError):
        APIResponse.from_payload(["not", "an", "envelope"])
    with pytest.raises(ValidationError):
        APIResponse.from_payload({"data": ["not", "a", "mapping"]})
    with pytest.raises(ValidationError):
        APIResponse.from_payload({"info": "oops"})


def test_write_to_sets_json_media_type_and_body() -> None:
    sink = ResponseSink()
    APIResponse().set_success().write_to(sink)
    assert sink.media_type == "application/json"
    assert json.loads(sink.body) == {"success": True, "messages": [], "data": {}, "info": {}}


def test_from_payload_keeps_numeric_message_text_as_string() -> None:
    response = APIResponse.from_payload({"success": True, "messages": [{"code": 1, "message": 2}]})
    assert response.success is True
    assert response.messages[0].code == 1
    assert response.messages[0].message == "2"


def test_from_payload_keeps_extra_message_fields() -> None:
    response = APIResponse.from_payload(
        {"messages": [{"code": "BAD", "message": "bad", "field": "email"}]}
    )
    assert response.serialize()["messages"] == [{"code": "BAD", "message": "bad", "field": "email"}]


def test_from_payload_fills_missing_or_null_codes() -> None:
    response = APIResponse.from_payload(
        {"messages": [{"message": "no code here"}, {"code": None}, "BARE_CODE"]}
    )
    assert [(item.code, item.message) for item in response.messages] == [
        (MISSING_CODE, "no code here"),
        (MISSING_CODE, MISSING_CODE),
        ("BARE_CODE", "BARE_CODE"),
    ]


def test_from_payload_wraps_a_single_message_object() -> None:
    response = APIResponse.from_payload({"messages": {"code": "ONLY"}})
    assert [item.message for item in response.messages] == ["ONLY"]
