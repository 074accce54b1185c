"""
Legacy Ethereum transactions with EIP-155 replay protection.

An unsigned Transaction is RLP encoded as

    [nonce, gas_price, gas_limit, to, value, data, chain_id, 0, 0]

and its Keccak-256 hash is signed. The SignedTransaction replaces the last three fields with (v, r, s), where
v = recovery_id + 2 * chain_id + 35.
"""
from dataclasses import dataclass
from io import BytesIO

from walletcore.core import TX, ADDRESS, Serializable, ValidationError, EncodingError, get_stream, get_logger
from walletcore.cryptography import keccak256, sign_recoverable, recover_public_key, private_key_to_int, PubKey
from walletcore.data import rlp
from walletcore.wallet.address import parse_address, public_key_to_address, to_checksum_address

__all__ = ["Transaction", "SignedTransaction", "build_and_sign"]

logger = get_logger(__name__)


def _check_uint(name: str, value: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValidationError(f"{name} must not be negative, got {value}")


def _check_fields(tx):
    for name in ("nonce", "gas_price", "gas_limit", "value", "chain_id"):
        _check_uint(name, getattr(tx, name))
    if not isinstance(tx.to, bytes) or len(tx.to) != ADDRESS.BYTES:
        raise ValidationError(f"Recipient must be {ADDRESS.BYTES} bytes")
    if not isinstance(tx.data, bytes):
        raise ValidationError("Transaction data must be bytes")


def _read_payload(byte_stream: bytes | BytesIO, field_count: int) -> list:
    stream = get_stream(byte_stream)
    fields = rlp.decode(stream.read())
    if not isinstance(fields, list) or len(fields) != field_count:
        raise EncodingError(f"Expected an RLP list of {field_count} fields")
    if not all(isinstance(item, bytes) for item in fields):
        raise EncodingError("Transaction fields must be RLP strings")
    if len(fields[3]) != ADDRESS.BYTES:
        raise EncodingError(f"Recipient must be {ADDRESS.BYTES} bytes, got {len(fields[3])}")
    return fields


@dataclass(frozen=True, eq=False, repr=False)
class Transaction(Serializable):
    """
    The fields of a transfer before signing
    """
    nonce: int
    gas_price: int
    gas_limit: int
    to: bytes
    value: int
    chain_id: int
    data: bytes = b''

    def __post_init__(self):
        _check_fields(self)

    @classmethod
    def build(cls, to_address: str, value: int, nonce: int, gas_price: int, gas_limit: int,
              chain_id: int) -> "Transaction":
        """Create a transaction from an address string in either rendering"""
        return cls(nonce=nonce, gas_price=gas_price, gas_limit=gas_limit, to=parse_address(to_address), value=value,
                   chain_id=chain_id)

    @classmethod
    def from_bytes(cls, byte_stream: bytes | BytesIO) -> "Transaction":
        fields = _read_payload(byte_stream, TX.FIELD_COUNT)
        nonce, gas_price, gas_limit, to, value, data, chain_id, zero_r, zero_s = fields
        if zero_r or zero_s:
            raise EncodingError("Unsigned transaction must end with two empty fields")
        return cls(nonce=rlp.decode_int(nonce), gas_price=rlp.decode_int(gas_price),
                   gas_limit=rlp.decode_int(gas_limit), to=to, value=rlp.decode_int(value),
                   chain_id=rlp.decode_int(chain_id), data=data)

    def _common_fields(self) -> list:
        return [self.nonce, self.gas_price, self.gas_limit, self.to, self.value, self.data]

    def to_bytes(self) -> bytes:
        return rlp.encode(self._common_fields() + [self.chain_id, 0, 0])

    def signing_hash(self) -> bytes:
        return keccak256(self.to_bytes())

    def sign(self, private_key: bytes | int) -> "SignedTransaction":
        """
        Sign with a deterministic (RFC 6979) recoverable signature. CryptoError for an invalid private key
        """
        key_int = private_key_to_int(private_key)
        r, s, recovery_id = sign_recoverable(key_int, self.signing_hash())
        v = recovery_id + self.chain_id * 2 + TX.EIP155_OFFSET
        logger.debug("Signed transaction nonce=%d chain_id=%d", self.nonce, self.chain_id)
        return SignedTransaction(nonce=self.nonce, gas_price=self.gas_price, gas_limit=self.gas_limit, to=self.to,
                                 value=self.value, data=self.data, v=v, r=r, s=s)

    def to_dict(self) -> dict:
        return {
            "nonce": self.nonce,
            "gas_price": self.gas_price,
            "gas_limit": self.gas_limit,
            "to": to_checksum_address(self.to),
            "value": self.value,
            "data": "0x" + self.data.hex(),
            "chain_id": self.chain_id,
        }


@dataclass(frozen=True, eq=False, repr=False)
class SignedTransaction(Serializable):
    """
    A transaction together with its signature (v, r, s). r and s are serialized as minimal big-endian integers.
    """
    nonce: int
    gas_price: int
    gas_limit: int
    to: bytes
    value: int
    data: bytes
    v: int
    r: int
    s: int

    def __post_init__(self):
        _check_fields(self)
        for name in ("r", "s"):
            _check_uint(name, getattr(self, name))
            if getattr(self, name).bit_length() > TX.SIGNATURE_BYTES * 8:
                raise ValidationError(f"{name} must fit in {TX.SIGNATURE_BYTES} bytes")
        _check_uint("v", self.v)
        if self.v < TX.EIP155_OFFSET:
            raise ValidationError(f"v = {self.v} is not an EIP-155 value")

    @classmethod
    def from_bytes(cls, byte_stream: bytes | BytesIO) -> "SignedTransaction":
        fields = _read_payload(byte_stream, TX.FIELD_COUNT)
        nonce, gas_price, gas_limit, to, value, data, v, r, s = fields
        try:
            return cls(nonce=rlp.decode_int(nonce), gas_price=rlp.decode_int(gas_price),
                       gas_limit=rlp.decode_int(gas_limit), to=to, value=rlp.decode_int(value), data=data,
                       v=rlp.decode_int(v), r=rlp.decode_int(r), s=rlp.decode_int(s))
        except ValidationError as e:
            raise EncodingError(f"Invalid signed transaction: {e}") from e

    @classmethod
    def from_hex(cls, raw: str) -> "SignedTransaction":
        body = raw[2:] if raw[:2] in ("0x", "0X") else raw
        try:
            data = bytes.fromhex(body)
        except ValueError as e:
            raise EncodingError(f"Invalid hex transaction: {e}") from e
        return cls.from_bytes(data)

    # --- PROPERTIES --- #
    @property
    def chain_id(self) -> int:
        return (self.v - TX.EIP155_OFFSET) // 2

    @property
    def recovery_id(self) -> int:
        return (self.v - TX.EIP155_OFFSET) % 2

    # --- METHODS --- #
    def unsigned(self) -> Transaction:
        return Transaction(nonce=self.nonce, gas_price=self.gas_price, gas_limit=self.gas_limit, to=self.to,
                           value=self.value, chain_id=self.chain_id, data=self.data)

    def to_bytes(self) -> bytes:
        return rlp.encode([self.nonce, self.gas_price, self.gas_limit, self.to, self.value, self.data, self.v,
                           self.r, self.s])

    def hex(self) -> str:
        """The broadcast payload: 0x + lowercase hex"""
        return "0x" + self.to_bytes().hex()

    def hash(self) -> bytes:
        """Transaction hash, the Keccak-256 of the signed encoding"""
        return keccak256(self.to_bytes())

    def recover_sender(self) -> str:
        """Checksummed address of the key that produced the signature"""
        point = recover_public_key(self.unsigned().signing_hash(), self.r, self.s, self.recovery_id)
        return to_checksum_address(public_key_to_address(PubKey.from_point(point).raw()))

    def to_dict(self) -> dict:
        return {
            "nonce": self.nonce,
            "gas_price": self.gas_price,
            "gas_limit": self.gas_limit,
            "to": to_checksum_address(self.to),
            "value": self.value,
            "data": "0x" + self.data.hex(),
            "chain_id": self.chain_id,
            "v": self.v,
            "r": hex(self.r),
            "s": hex(self.s),
        }


def build_and_sign(private_key: bytes | int, to_address: str, value: int, nonce: int, gas_price: int, gas_limit: int,
                   chain_id: int) -> str:
    """
    Build a legacy transfer, sign it for chain_id and return the "0x"-prefixed hex payload ready for broadcast.

    Raises:
        EncodingError: to_address is not hex
        ValidationError: to_address is not 20 bytes, or a numeric field is negative
        CryptoError: private_key is not a valid secp256k1 scalar
    """
    tx = Transaction.build(to_address, value=value, nonce=nonce, gas_price=gas_price, gas_limit=gas_limit,
                           chain_id=chain_id)
    return tx.sign(private_key).hex()
