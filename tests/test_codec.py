# tests/test_codec.py

import base64
import json

import pytest

from agentrpc.protocol import codec
from agentrpc.protocol.errors import DecodeError
from agentrpc.protocol.models import CallRequest, CallResult


@pytest.mark.parametrize(
    "value",
    [
        None,
        True,
        0,
        -17,
        3.25,
        "",
        "héllo ☃",
        [],
        [1, "two", None, [3.0]],
        {"nested": {"list": [1, 2], "flag": False}, "empty": {}},
    ],
)
def test_round_trip(value):
    assert codec.deserialize(codec.serialize(value)) == value


def test_serialize_is_base64_of_json():
    text = codec.serialize({"name": "process.getpid", "arguments": []})
    decoded = json.loads(base64.b64decode(text))
    assert decoded == {"name": "process.getpid", "arguments": []}


def test_deserialize_accepts_bytes():
    assert codec.deserialize(codec.serialize([1, 2]).encode("ascii")) == [1, 2]


def test_malformed_base64_is_decode_error():
    with pytest.raises(DecodeError, match="base64"):
        codec.deserialize("not*base64!")


def test_embedded_nul_is_decode_error():
    text = codec.serialize(1) + "\0" + codec.serialize(2)
    with pytest.raises(DecodeError):
        codec.deserialize(text)


def test_malformed_json_is_decode_error():
    text = base64.b64encode(b"{not json").decode("ascii")
    with pytest.raises(DecodeError, match="JSON"):
        codec.deserialize(text)


def test_nesting_too_deep_to_parse_is_decode_error():
    text = base64.b64encode(b"[" * 200_000).decode("ascii")
    with pytest.raises(DecodeError, match="not valid JSON"):
        codec.deserialize(text)


def test_nan_is_not_serializable():
    with pytest.raises(ValueError):
        codec.serialize(float("nan"))


class TestRequestDecoding:
    def test_missing_arguments_default_to_empty(self):
        req = codec.decode_request(codec.serialize({"name": "a.b.c"}))
        assert req == CallRequest(name="a.b.c", arguments=[])

    def test_name_must_be_a_string(self):
        with pytest.raises(DecodeError, match="name"):
            codec.decode_request(codec.serialize({"name": 5, "arguments": []}))

    def test_arguments_must_be_a_list(self):
        with pytest.raises(DecodeError, match="arguments"):
            codec.decode_request(codec.serialize({"name": "x", "arguments": {"a": 1}}))

    def test_request_must_be_an_object(self):
        with pytest.raises(DecodeError):
            codec.decode_request(codec.serialize(["x"]))


class TestCallResult:
    def test_success_with_null_value_is_still_success(self):
        result = CallResult.success(None)
        assert result.ok
        assert result.to_dict() == {"return": None}

    def test_failure_shape(self):
        result = CallResult.failure("nope")
        assert not result.ok
        assert result.to_dict() == {"exception": "nope"}

    def test_decode_result(self):
        assert codec.decode_result(codec.serialize({"return": [1]})).value == [1]
        assert codec.decode_result(codec.serialize({"exception": "x"})).error == "x"

    def test_result_without_variant_is_decode_error(self):
        with pytest.raises(DecodeError):
            codec.decode_result(codec.serialize({}))
