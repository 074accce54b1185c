"""
Account addresses: the trailing 20 bytes of Keccak-256 of the 64-byte public key, rendered as "0x" + 40 hex characters,
optionally in the mixed-case checksum form (EIP-55)
"""
import string

from walletcore.core import ADDRESS, ECC, ValidationError, EncodingError
from walletcore.cryptography import PubKey, keccak256

__all__ = ["private_to_public_key", "private_to_compressed_public_key", "public_key_to_address",
           "to_checksum_address", "is_checksum_address", "parse_address", "address_from_private_key"]

HEX_DIGITS = set(string.hexdigits)


def private_to_public_key(private_key: bytes) -> bytes:
    """64-byte X || Y public key. CryptoError for an invalid private key"""
    return PubKey(private_key).raw()


def private_to_compressed_public_key(private_key: bytes) -> bytes:
    """33-byte compressed public key. CryptoError for an invalid private key"""
    return PubKey(private_key).serial_compressed()


def public_key_to_address(public_key: bytes) -> bytes:
    """
    Return the 20-byte address for a 64-byte X || Y public key. A 65-byte key with its 0x04 tag is also accepted;
    the tag is not hashed.
    """
    if len(public_key) == ECC.UNCOMPRESSED_BYTES and public_key[0] == 0x04:
        public_key = public_key[1:]
    if len(public_key) != ECC.RAW_PUBKEY_BYTES:
        raise ValidationError(f"Public key must be {ECC.RAW_PUBKEY_BYTES} bytes, got {len(public_key)}")
    return keccak256(bytes(public_key))[-ADDRESS.BYTES:]


def _strip_address(address: str) -> str:
    """
    Return the 40 hex characters of an address string, with or without its 0x prefix
    """
    if not isinstance(address, str):
        raise ValidationError(f"Address must be a string, got {type(address).__name__}")
    body = address[2:] if address[:2] in ("0x", "0X") else address
    if not all(c in HEX_DIGITS for c in body):
        raise EncodingError(f"Address {address!r} contains non-hex characters")
    if len(body) != ADDRESS.HEX_CHARS:
        raise ValidationError(f"Address must be {ADDRESS.HEX_CHARS} hex characters, got {len(body)}")
    return body


def parse_address(address: str) -> bytes:
    """
    Decode an address string in either the lowercase or the checksum rendering to its 20 bytes
    """
    return bytes.fromhex(_strip_address(address))


def to_checksum_address(address: str | bytes) -> str:
    """
    Mixed-case checksum encoding. The lowercase hex is hashed as ASCII text; each letter is uppercased when the hash
    nibble at the same position is 8 or more. Digits are copied unchanged.
    """
    if isinstance(address, (bytes, bytearray)):
        if len(address) != ADDRESS.BYTES:
            raise ValidationError(f"Address must be {ADDRESS.BYTES} bytes, got {len(address)}")
        lowered = bytes(address).hex()
    else:
        lowered = _strip_address(address).lower()

    hash_hex = keccak256(lowered.encode("ascii")).hex()
    checksummed = "".join(
        char.upper() if char.isalpha() and int(hash_hex[i], 16) >= 8 else char
        for i, char in enumerate(lowered)
    )
    return ADDRESS.PREFIX + checksummed


def is_checksum_address(address: str) -> bool:
    """True if the string is exactly the checksum rendering of itself"""
    try:
        return to_checksum_address(address) == address
    except (ValidationError, EncodingError):
        return False


def address_from_private_key(private_key: bytes) -> str:
    """Checksummed address string for a private key"""
    return to_checksum_address(public_key_to_address(private_to_public_key(private_key)))
