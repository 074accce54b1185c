"""
The EntropySource class - produces the random bytes a new mnemonic is built from
"""
import secrets
from typing import Callable, Optional

from walletcore.core import WALLET, ValidationError, CryptoError

__all__ = ["EntropySource", "generate_entropy", "validate_entropy_bits"]

RandomBytes = Callable[[int], bytes]


def validate_entropy_bits(bits: int) -> int:
    """
    Return the byte length for the given entropy bit length. Only the five BIP39 sizes are accepted
    """
    if isinstance(bits, bool) or not isinstance(bits, int) or bits not in WALLET.ALLOWED_ENTROPY_BITS:
        raise ValidationError(
            f"Entropy bit length {bits!r} not supported. Must be one of {WALLET.ALLOWED_ENTROPY_BITS}")
    return bits // 8


class EntropySource:
    """
    Wraps a randomness source so tests can substitute a deterministic one and production code a hardware one.
    The default, secrets.token_bytes, reads the operating system CSPRNG and is safe to share between threads.
    """
    __slots__ = ("_randbytes",)

    def __init__(self, randbytes: Optional[RandomBytes] = None):
        self._randbytes = randbytes or secrets.token_bytes

    def generate(self, bits: int = WALLET.DEFAULT_ENTROPY_BITS) -> bytes:
        byte_len = validate_entropy_bits(bits)
        entropy = bytes(self._randbytes(byte_len))
        if len(entropy) != byte_len:
            raise CryptoError(f"Randomness source returned {len(entropy)} bytes, expected {byte_len}")
        return entropy


_DEFAULT_SOURCE = EntropySource()


def generate_entropy(bits: int = WALLET.DEFAULT_ENTROPY_BITS, source: Optional[EntropySource] = None) -> bytes:
    return (source or _DEFAULT_SOURCE).generate(bits)
