"""
The PubKey class - given a private key we compute the secp256k1 public point, along with methods for serialization
"""
from walletcore.core import ECC, CryptoError, SERIALIZED, get_stream, read_stream, read_big_int, ReadError
from walletcore.cryptography.ecc import EllipticCurve, SECP256K1, Point

__all__ = ["PubKey", "private_key_to_int"]
BYTE_LEN = ECC.COORD_BYTES


def private_key_to_int(private_key: bytes | int, curve: EllipticCurve = SECP256K1) -> int:
    """
    Return the private key as an integer after checking it is a usable scalar, i.e. 1 <= k < n.
    Accepts the 32-byte big-endian encoding or an int.
    """
    if isinstance(private_key, (bytes, bytearray)):
        if len(private_key) != ECC.PRIVATE_KEY_BYTES:
            raise CryptoError(f"Private key must be {ECC.PRIVATE_KEY_BYTES} bytes, got {len(private_key)}")
        key_int = int.from_bytes(private_key, "big")
    elif isinstance(private_key, int) and not isinstance(private_key, bool):
        key_int = private_key
    else:
        raise CryptoError(f"Unsupported private key type: {type(private_key).__name__}")

    if not curve.is_valid_scalar(key_int):
        raise CryptoError("Private key out of range for secp256k1: must be nonzero and less than the curve order")
    return key_int


class PubKey:
    __slots__ = ("pub_key",)

    def __init__(self, private_key: bytes | int, curve: EllipticCurve = SECP256K1):
        self.pub_key = curve.multiply_generator(private_key_to_int(private_key, curve))

    def __eq__(self, other):
        if not isinstance(other, PubKey):
            return False
        return self.pub_key == other.pub_key

    def __hash__(self):
        return hash(self.pub_key.tuple)

    @classmethod
    def from_point(cls, point: Point, curve: EllipticCurve = SECP256K1) -> "PubKey":
        if not point or not curve.is_point_on_curve(point):
            raise CryptoError("Public key point is not a valid curve point")
        instance = cls.__new__(cls)
        instance.pub_key = point
        return instance

    @classmethod
    def from_bytes(cls, byte_stream: SERIALIZED, curve: EllipticCurve = SECP256K1) -> "PubKey":
        """
        Parse a 33-byte compressed, 65-byte uncompressed or 64-byte raw (X || Y) public key
        """
        stream = get_stream(byte_stream)
        length = stream.getbuffer().nbytes - stream.tell()

        try:
            if length == ECC.RAW_PUBKEY_BYTES:
                x_int = read_big_int(stream, BYTE_LEN, "pubkey_x")
                y_int = read_big_int(stream, BYTE_LEN, "pubkey_y")
                return cls.from_point(Point(x_int, y_int), curve)

            type_byte = read_stream(stream, 1, "pubkey type")
            x_int = read_big_int(stream, BYTE_LEN, "pubkey_x")
            if type_byte in (b'\x02', b'\x03') and length == ECC.COMPRESSED_BYTES:
                try:
                    point = curve.lift_x(x_int, odd_y=type_byte == b'\x03')
                except ValueError as e:
                    raise CryptoError(str(e)) from e
                return cls.from_point(point, curve)
            if type_byte == b'\x04' and length == ECC.UNCOMPRESSED_BYTES:
                y_int = read_big_int(stream, BYTE_LEN, "pubkey_y")
                return cls.from_point(Point(x_int, y_int), curve)
        except ReadError as e:
            raise CryptoError(f"Truncated public key: {e}") from e

        raise CryptoError(f"Unrecognised public key encoding of {length} bytes")

    def to_point(self) -> Point:
        return self.pub_key

    def _x_bytes(self):
        return self.pub_key.x.to_bytes(length=BYTE_LEN, byteorder='big')

    def _y_bytes(self):
        return self.pub_key.y.to_bytes(length=BYTE_LEN, byteorder='big')

    def raw(self) -> bytes:
        """The 64-byte X || Y form, i.e. the uncompressed key without its 0x04 tag"""
        return self._x_bytes() + self._y_bytes()

    def serial_pubkey(self) -> bytes:
        """Return the serialized 65-byte pubkey"""
        return b'\x04' + self.raw()

    def serial_compressed(self) -> bytes:
        """Returns the serialized compressed pubkey"""
        init_byte = b'\x02' if self.pub_key.y % 2 == 0 else b'\x03'
        return init_byte + self._x_bytes()
