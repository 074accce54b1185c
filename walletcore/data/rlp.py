"""
Recursive Length Prefix (RLP) encoding, the binary serialization used for Ethereum transactions.

An item is either a byte string or a list of items. Integers are encoded as byte strings holding their minimal
big-endian form (0 is the empty string).

    single byte < 0x80           -> the byte itself
    string of 0..55 bytes        -> 0x80 + len, data
    string of more than 55 bytes -> 0xb7 + len(len), len, data
    list payload of 0..55 bytes  -> 0xc0 + len, payload
    list payload of > 55 bytes   -> 0xf7 + len(len), len, payload
"""
from io import BytesIO

from walletcore.core import RLP, EncodingError, ReadError, get_stream, read_stream, read_big_int, at_end

__all__ = ["encode", "decode", "encode_int", "decode_int"]

RLPItem = bytes | list


def encode_int(num: int) -> bytes:
    """Minimal big-endian bytes of a non-negative integer"""
    if isinstance(num, bool) or not isinstance(num, int):
        raise EncodingError(f"RLP integers must be int, got {type(num).__name__}")
    if num < 0:
        raise EncodingError("RLP cannot encode negative integers")
    return num.to_bytes((num.bit_length() + 7) // 8, "big")


def decode_int(data: bytes) -> int:
    """Inverse of encode_int. Leading zero bytes are non-canonical and rejected"""
    if not isinstance(data, bytes):
        raise EncodingError("Expected an RLP string for an integer, got a list")
    if data[:1] == b'\x00':
        raise EncodingError("Non-canonical RLP integer: leading zero byte")
    return int.from_bytes(data, "big")


def _length_prefix(length: int, short_offset: int, long_offset: int) -> bytes:
    if length <= RLP.SHORT_LIMIT:
        return bytes([short_offset + length])
    length_bytes = encode_int(length)
    return bytes([long_offset + len(length_bytes)]) + length_bytes


def encode(item) -> bytes:
    """
    Encode bytes, non-negative ints and (nested) lists or tuples of them
    """
    if isinstance(item, (bytes, bytearray)):
        data = bytes(item)
        if len(data) == 1 and data[0] < RLP.SHORT_STRING:
            return data
        return _length_prefix(len(data), RLP.SHORT_STRING, RLP.LONG_STRING) + data
    if isinstance(item, int):
        return encode(encode_int(item))
    if isinstance(item, (list, tuple)):
        payload = b''.join(encode(element) for element in item)
        return _length_prefix(len(payload), RLP.SHORT_LIST, RLP.LONG_LIST) + payload
    raise EncodingError(f"Cannot RLP encode object of type {type(item).__name__}")


def _read_length(stream: BytesIO, prefix: int, long_offset: int) -> int:
    """Read the long-form length that follows a 0xb8..0xbf or 0xf8..0xff prefix"""
    length_of_length = prefix - long_offset
    length_bytes = read_stream(stream, length_of_length, "RLP length")
    if length_bytes[0] == 0:
        raise EncodingError("Non-canonical RLP length: leading zero byte")
    length = int.from_bytes(length_bytes, "big")
    if length <= RLP.SHORT_LIMIT:
        raise EncodingError(f"Non-canonical RLP length: {length} should use the short form")
    return length


def _decode_item(stream: BytesIO, depth: int = 0) -> RLPItem:
    prefix = read_big_int(stream, 1, "RLP prefix")

    # Single byte
    if prefix < RLP.SHORT_STRING:
        return bytes([prefix])

    # Short string
    if prefix <= RLP.LONG_STRING:
        length = prefix - RLP.SHORT_STRING
        data = read_stream(stream, length, "RLP string")
        if length == 1 and data[0] < RLP.SHORT_STRING:
            raise EncodingError("Non-canonical RLP: single byte below 0x80 wrapped in a string prefix")
        return data

    # Long string
    if prefix < RLP.SHORT_LIST:
        length = _read_length(stream, prefix, RLP.LONG_STRING)
        return read_stream(stream, length, "RLP long string")

    # Lists
    if depth >= RLP.MAX_DEPTH:
        raise EncodingError(f"RLP lists nested deeper than {RLP.MAX_DEPTH} levels")
    if prefix <= RLP.LONG_LIST:
        length = prefix - RLP.SHORT_LIST
    else:
        length = _read_length(stream, prefix, RLP.LONG_LIST)

    payload = get_stream(read_stream(stream, length, "RLP list payload"))
    items = []
    while not at_end(payload):
        items.append(_decode_item(payload, depth + 1))
    return items


def decode(data: bytes) -> RLPItem:
    """
    Decode exactly one RLP item from data. Trailing bytes, truncation and non-canonical prefixes raise EncodingError
    """
    if not isinstance(data, (bytes, bytearray)):
        raise EncodingError(f"Expected bytes to decode, got {type(data).__name__}")
    stream = get_stream(bytes(data))
    try:
        item = _decode_item(stream)
    except ReadError as e:
        raise EncodingError(f"Truncated RLP data: {e}") from e
    if not at_end(stream):
        raise EncodingError("Trailing bytes after RLP item")
    return item
