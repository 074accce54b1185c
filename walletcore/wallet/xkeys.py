"""
Extended private keys and the hierarchical key tree (BIP32 private derivation).

NOTE ON FINGERPRINTS: the parent fingerprint stored in each child is the first 4 bytes of KECCAK-256 of the parent's
compressed public key. BIP32 uses HASH160 (RIPEMD160 of SHA256) instead. Private keys and chain codes are BIP32
compatible, but fingerprints produced here will not match those of other HD-wallet tools and must not be mixed with
them.
"""
import json
import re
from dataclasses import dataclass, field

from walletcore.core import XKEYS, ECC, ValidationError, CryptoError, InvalidChildKeyError, get_logger
from walletcore.cryptography import (SECP256K1, PubKey, hmac_sha512, keccak256, private_key_to_int,
                                     is_valid_scalar)

__all__ = ["ExtendedKey", "master_key", "derive_child", "derive_path", "parse_path", "is_hardened"]

HARDENED_OFFSET = XKEYS.HARDENED_OFFSET
MAX_INDEX = XKEYS.MAX_INDEX
SEED_KEY = XKEYS.SEED_KEY
ORDER = SECP256K1.order

_PATH_SEGMENT = re.compile(r"([0-9]+)(['hH]?)")

logger = get_logger(__name__)


def is_hardened(index: int) -> bool:
    return index >= HARDENED_OFFSET


def _check_index(index: int):
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= MAX_INDEX:
        raise ValidationError(f"Child index {index!r} out of range [0, {MAX_INDEX}]")


def parse_path(path: str) -> list[int]:
    """
    Parse "m/44'/60'/0'/0/0" (the leading "m/" is optional) into child indexes. A trailing ', h or H marks a hardened
    index and adds 2^31. "m", "m/" and "" give an empty list.
    """
    if not isinstance(path, str):
        raise ValidationError(f"Derivation path must be a string, got {type(path).__name__}")

    body = path
    if body.startswith("m/"):
        body = body[2:]
    elif body == "m":
        body = ""
    if not body:
        return []

    indexes = []
    for segment in body.split("/"):
        match = _PATH_SEGMENT.fullmatch(segment)
        if match is None:
            raise ValidationError(f"Invalid path segment: {segment!r}")
        index = int(match.group(1))
        if index >= HARDENED_OFFSET:
            raise ValidationError(f"Path segment {segment!r} does not fit in 31 bits")
        if match.group(2):
            index += HARDENED_OFFSET
        indexes.append(index)
    return indexes


@dataclass(frozen=True)
class ExtendedKey:
    """
    A node of the key tree: a private key with its chain code and position. Nodes are immutable; derivation returns
    a new node.
    """
    private_key: bytes = field(repr=False)
    chain_code: bytes
    depth: int = 0
    parent_fingerprint: bytes = b'\x00' * XKEYS.FINGERPRINT_BYTES
    child_number: int = 0

    def __post_init__(self):
        if not isinstance(self.private_key, bytes):
            raise CryptoError(f"Private key must be bytes, got {type(self.private_key).__name__}")
        if len(self.chain_code) != XKEYS.CHAIN_LENGTH:
            raise ValidationError(f"Chain code must be {XKEYS.CHAIN_LENGTH} bytes")
        if len(self.parent_fingerprint) != XKEYS.FINGERPRINT_BYTES:
            raise ValidationError(f"Parent fingerprint must be {XKEYS.FINGERPRINT_BYTES} bytes")
        if not 0 <= self.depth <= XKEYS.MAX_DEPTH:
            raise ValidationError(f"Depth {self.depth} out of range [0, {XKEYS.MAX_DEPTH}]")
        _check_index(self.child_number)
        # Raises CryptoError for a zero or out of range scalar
        private_key_to_int(self.private_key)

    # --- CONSTRUCTORS --- #
    @classmethod
    def from_master_seed(cls, seed: bytes) -> "ExtendedKey":
        if not isinstance(seed, (bytes, bytearray)):
            raise ValidationError(f"Seed must be bytes, got {type(seed).__name__}")
        if not XKEYS.MIN_SEED_BYTES <= len(seed) <= XKEYS.MAX_SEED_BYTES:
            raise ValidationError(
                f"Seed must be between {XKEYS.MIN_SEED_BYTES} and {XKEYS.MAX_SEED_BYTES} bytes, got {len(seed)}")

        # 1. Run the HMAC-512
        seed_hash = hmac_sha512(key=SEED_KEY, message=bytes(seed))

        # 2. Left half is the private key, right half the chain code
        privkey, chain_code = seed_hash[:32], seed_hash[32:]
        if not is_valid_scalar(int.from_bytes(privkey, "big")):
            raise CryptoError("Seed produces an invalid master key; use a different seed")

        return cls(privkey, chain_code)

    # --- PROPERTIES --- #
    @property
    def is_hardened(self) -> bool:
        return is_hardened(self.child_number)

    @property
    def private_key_int(self) -> int:
        return int.from_bytes(self.private_key, "big")

    @property
    def private_key_hex(self) -> str:
        return "0x" + self.private_key.hex()

    # --- KEYS --- #
    def public_key(self) -> PubKey:
        return PubKey(self.private_key)

    def fingerprint(self) -> bytes:
        """
        First 4 bytes of Keccak-256 of the compressed public key. Not the BIP32 HASH160 fingerprint
        """
        return keccak256(self.public_key().serial_compressed())[:XKEYS.FINGERPRINT_BYTES]

    # --- DERIVATION --- #
    def _derive_child(self, index: int) -> "ExtendedKey":
        pubkey = self.public_key().serial_compressed()
        index_bytes = index.to_bytes(4, "big")

        if is_hardened(index):
            data = b'\x00' + self.private_key + index_bytes
        else:
            data = pubkey + index_bytes

        key_hash = hmac_sha512(key=self.chain_code, message=data)
        tweak_int = int.from_bytes(key_hash[:32], "big")
        child_chain_code = key_hash[32:]

        if tweak_int >= ORDER:
            raise InvalidChildKeyError(index)
        child_key_int = (tweak_int + self.private_key_int) % ORDER
        if child_key_int == 0:
            raise InvalidChildKeyError(index)

        return ExtendedKey(
            private_key=child_key_int.to_bytes(ECC.PRIVATE_KEY_BYTES, "big"),
            chain_code=child_chain_code,
            depth=self.depth + 1,
            parent_fingerprint=keccak256(pubkey)[:XKEYS.FINGERPRINT_BYTES],
            child_number=index,
        )

    def derive_child(self, index: int, auto_retry: bool = False) -> "ExtendedKey":
        """
        Derive the child at the given index. Indexes >= 2^31 are hardened.

        An index whose IL >= n or whose child key is zero raises InvalidChildKeyError. With auto_retry the next index
        in the same (hardened or normal) range is used instead, as BIP32 prescribes.
        """
        _check_index(index)
        if self.depth >= XKEYS.MAX_DEPTH:
            raise ValidationError(f"Cannot derive below maximum depth {XKEYS.MAX_DEPTH}")

        last_index = MAX_INDEX if is_hardened(index) else HARDENED_OFFSET - 1
        while True:
            try:
                return self._derive_child(index)
            except InvalidChildKeyError:
                if not auto_retry:
                    raise
                if index >= last_index:
                    raise InvalidChildKeyError(index, f"Child index {index} is invalid and is the last in its range")
                logger.warning("Child index %d at depth %d gives an invalid key, using %d", index, self.depth + 1,
                               index + 1)
                index += 1

    def derive_path(self, path: str, auto_retry: bool = False) -> "ExtendedKey":
        """
        Derive the key at the given path, relative to this key
        """
        key = self
        for index in parse_path(path):
            key = key.derive_child(index, auto_retry=auto_retry)
        logger.debug("Derived path %s to depth %d", path, key.depth)
        return key

    # --- DISPLAY --- #
    def to_dict(self):
        return {
            "private_key": self.private_key_hex,
            "chain_code": self.chain_code.hex(),
            "depth": self.depth,
            "parent_fingerprint": self.parent_fingerprint.hex(),
            "child_number": self.child_number,
            "hardened": self.is_hardened,
        }

    def to_json(self):
        return json.dumps(self.to_dict(), indent=2)


# --- FUNCTIONAL INTERFACE --- #

def master_key(seed: bytes) -> ExtendedKey:
    return ExtendedKey.from_master_seed(seed)


def derive_child(parent: ExtendedKey, index: int, auto_retry: bool = False) -> ExtendedKey:
    return parent.derive_child(index, auto_retry=auto_retry)


def derive_path(master: ExtendedKey, path: str, auto_retry: bool = False) -> ExtendedKey:
    return master.derive_path(path, auto_retry=auto_retry)
