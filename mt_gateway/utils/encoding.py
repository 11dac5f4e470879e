"""Argument decoding utilities"""

import base64
import binascii
from mt_gateway.domain.exceptions import MalformedInputError


def decode_base64_text(value: str, name: str) -> str:
    """Decode standard (padded) base64 into UTF-8 text"""
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise MalformedInputError(f"{name} is not valid base64-encoded UTF-8 text") from e


def encode_base64_text(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")
