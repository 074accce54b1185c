"""
Methods for reading byte streams
"""
from io import BytesIO
from typing import Union, Optional

from walletcore.core.exceptions import ReadError

__all__ = ["SERIALIZED", "get_stream", "read_stream", "read_big_int", "at_end"]

SERIALIZED = Union[bytes, BytesIO]


def get_stream(byte_stream: SERIALIZED) -> BytesIO:
    """Convert bytes or BytesIO to BytesIO stream"""
    if isinstance(byte_stream, (bytes, bytearray)):
        return BytesIO(bytes(byte_stream))
    elif isinstance(byte_stream, BytesIO):
        return byte_stream
    else:
        raise TypeError(f"Expected bytes or BytesIO but received: {type(byte_stream)}")


def read_stream(stream: BytesIO, length: int, data_type: Optional[str] = None) -> bytes:
    """Read exact number of bytes from stream with error checking"""
    data = stream.read(length)

    if len(data) != length:
        if data_type:
            raise ReadError(f"Error reading stream. Insufficient data. Data type: {data_type}")
        raise ReadError("Error reading stream. Insufficient data.")

    return data


def read_big_int(stream: BytesIO, length: int, data_type: Optional[str] = None) -> int:
    """Read big-endian integer from stream"""
    return int.from_bytes(read_stream(stream, length, data_type), "big")


def at_end(stream: BytesIO) -> bool:
    """True if nothing is left to read"""
    return stream.tell() == stream.getbuffer().nbytes
