"""
Shortcuts for the hash functions used by the wallet. Each function returns the bytes digest
"""
import hashlib
import hmac

from Crypto.Hash import keccak

__all__ = ["sha256", "keccak256", "hmac_sha256", "hmac_sha512", "pbkdf2_hmac_sha512"]


# --- SHA --- #
def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


# --- KECCAK --- #

def keccak256(data: bytes) -> bytes:
    """
    Original Keccak-256 (pre-standard padding), as used for Ethereum addresses and transaction hashes.
    Not the same function as hashlib.sha3_256.
    """
    return keccak.new(digest_bits=256, data=data).digest()


# --- WALLET HASHES --- #
def hmac_sha256(key: bytes, message: bytes) -> bytes:
    return hmac.new(key=key, msg=message, digestmod=hashlib.sha256).digest()


def hmac_sha512(key: bytes, message: bytes) -> bytes:
    return hmac.new(key=key, msg=message, digestmod=hashlib.sha512).digest()


def pbkdf2_hmac_sha512(password: bytes, salt: bytes, iterations: int = 2048, dklen: int = 64) -> bytes:
    """
    PBKDF2 with HMAC-SHA512 as the pseudorandom function.

    password: The secret input, already encoded to bytes.
    salt: The salt bytes.
    iterations: Number of iterations (default: 2048).
    dklen: Length of the derived key in bytes (default: 64 bytes).
    return: The derived key bytes.
    """
    return hashlib.pbkdf2_hmac('sha512', password, salt, iterations, dklen)
