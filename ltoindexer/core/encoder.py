"""
Encoding helpers used when decoding anchor payloads.
"""

import base64
import binascii

import base58

from ltoindexer.core.errors import MalformedTransaction


def hex_encode(data: bytes) -> str:
    """Encode bytes as a lower-case hex string"""
    return binascii.hexlify(data).decode("ascii")


def base64_decode(value: str) -> bytes:
    """Decode a base64 string, raising MalformedTransaction on invalid input"""
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedTransaction(f"Invalid base64 value: {e}")


def base58_decode(value: str) -> bytes:
    """Decode a base58 (bitcoin alphabet) string, raising MalformedTransaction on invalid input"""
    try:
        return base58.b58decode(value)
    except ValueError as e:
        raise MalformedTransaction(f"Invalid base58 value: {e}")
