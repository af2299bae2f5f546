"""
Envelope codec.

An envelope is the base64 text of a UTF-8 JSON document:

    serialize({"name": "process.getpid", "arguments": []})
      -> "eyJuYW1lIjoicHJvY2Vzcy5nZXRwaWQiLCJhcmd1bWVudHMiOltdfQ=="

The codec is symmetric and stateless. Decoding never substitutes defaults:
malformed base64 or JSON raises DecodeError and the caller decides how to
report it.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Union

from agentrpc.utils.json import json_dumps, json_loads

from .errors import DecodeError
from .models import CallRequest, CallResult


def serialize(value: Any) -> str:
    return base64.b64encode(json_dumps(value).encode("utf-8")).decode("ascii")


def deserialize(text: Union[str, bytes]) -> Any:
    if isinstance(text, str):
        try:
            text = text.encode("ascii")
        except UnicodeEncodeError:
            raise DecodeError("envelope is not valid base64") from None

    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as ex:
        raise DecodeError(f"envelope is not valid base64: {ex}") from ex

    try:
        return json_loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as ex:
        raise DecodeError(f"envelope is not valid JSON: {ex}") from ex


def decode_request(text: Union[str, bytes]) -> CallRequest:
    return CallRequest.from_dict(deserialize(text))


def encode_request(request: CallRequest) -> str:
    return serialize(request.to_dict())


def decode_result(text: Union[str, bytes]) -> CallResult:
    return CallResult.from_dict(deserialize(text))
