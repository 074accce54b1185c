"""
Methods to create, verify and recover from a recoverable ECDSA signature over secp256k1.

Nonces are deterministic (RFC 6979 with HMAC-SHA256), so signing the same hash with the same key always yields the
same (r, s, recovery_id).
"""
from typing import Iterator, Tuple

from walletcore.core import ECC, CryptoError
from walletcore.cryptography.ecc import SECP256K1, Point
from walletcore.cryptography.hash_functions import hmac_sha256

__all__ = ["sign_recoverable", "verify_ecdsa", "recover_public_key", "rfc6979_nonces"]

curve = SECP256K1
BYTE_LEN = ECC.COORD_BYTES


def _hash_to_int(message_hash: bytes) -> int:
    """Keep the n leftmost bits of the message hash"""
    z = int.from_bytes(message_hash, 'big')
    excess = len(message_hash) * 8 - curve.order.bit_length()
    if excess > 0:
        z >>= excess
    return z


def rfc6979_nonces(private_key: int, message_hash: bytes) -> Iterator[int]:
    """
    Yields the RFC 6979 (section 3.2) sequence of candidate nonces k in [1, n-1] for the given key and hash.

    Algorithm:
    ----------
    1) x = int2octets(private_key), h = bits2octets(message_hash)
    2) V = 0x01 * 32, K = 0x00 * 32
    3) K = HMAC_K(V || 0x00 || x || h), V = HMAC_K(V)
    4) K = HMAC_K(V || 0x01 || x || h), V = HMAC_K(V)
    5) V = HMAC_K(V), k = int(V). Yield k if 1 <= k < n.
    6) K = HMAC_K(V || 0x00), V = HMAC_K(V) and return to step 5.
    """
    n = curve.order
    x = private_key.to_bytes(BYTE_LEN, "big")
    h = (_hash_to_int(message_hash) % n).to_bytes(BYTE_LEN, "big")

    v = b'\x01' * BYTE_LEN
    k = b'\x00' * BYTE_LEN
    k = hmac_sha256(k, v + b'\x00' + x + h)
    v = hmac_sha256(k, v)
    k = hmac_sha256(k, v + b'\x01' + x + h)
    v = hmac_sha256(k, v)

    while True:
        v = hmac_sha256(k, v)
        candidate = int.from_bytes(v, "big")
        if curve.is_valid_scalar(candidate):
            yield candidate
        k = hmac_sha256(k, v + b'\x00')
        v = hmac_sha256(k, v)


def sign_recoverable(private_key: int, message_hash: bytes) -> Tuple[int, int, int]:
    """
    Generates a recoverable ECDSA signature for a given private_key and 32-byte message hash.

    Returns:
    --------
    tuple
        (r, s, recovery_id) with low s and recovery_id in {0, 1}.

    Algorithm:
    ----------
    1) Compute z as the integer value of the first n bits of the message hash.
    2) Take the next deterministic nonce k.
    3) Calculate R = k * generator.
    4) r = R.x (mod n), s = k^(-1)(z + r * private_key) (mod n). If r or s is 0, go to step 2.
    5) recovery_id = parity of R.y. If s > n/2, replace s with n - s and flip the parity.
    """
    n = curve.order
    if not curve.is_valid_scalar(private_key):
        raise CryptoError("Private key out of range for signing")
    if len(message_hash) != BYTE_LEN:
        raise CryptoError(f"Message hash must be {BYTE_LEN} bytes, got {len(message_hash)}")

    z = _hash_to_int(message_hash)

    for k in rfc6979_nonces(private_key, message_hash):
        big_r = curve.multiply_generator(k)
        r = big_r.x % n
        if r == 0:
            continue
        s = (pow(k, -1, n) * (z + r * private_key)) % n
        if s == 0:
            continue

        # R.x >= n would need recovery ids 2/3, which legacy transactions cannot carry
        if big_r.x >= n:
            raise CryptoError("Signature nonce point has x >= n; no 0/1 recovery id exists")

        recovery_id = big_r.y & 1
        if s > n // 2:
            s = n - s
            recovery_id ^= 1
        return r, s, recovery_id

    raise CryptoError("Nonce generator exhausted")  # pragma: no cover


def verify_ecdsa(signature: tuple, message_hash: bytes, public_key: Point) -> bool:
    """
    We verify that the given signature (r, s) corresponds to the public_key for the given message hash.

    Algorithm
    --------
    1) Verify that (r,s) are integers in the interval [1,n-1]
    2) Let z be the integer value of the first n bits of the hash
    3) Let u1 = z * s^(-1) (mod n) and u2 = r * s^(-1) (mod n)
    4) Calculate the curve point (x,y) = (u1 * generator) + (u2 * public_key)
    5) If r = x (mod n), the signature is valid.
    """
    n = curve.order
    r, s = signature[0], signature[1]

    if not (curve.is_valid_scalar(r) and curve.is_valid_scalar(s)):
        return False

    z = _hash_to_int(message_hash)
    s_inv = pow(s, -1, n)
    u1 = (z * s_inv) % n
    u2 = (r * s_inv) % n

    final_pt = curve.add_points(curve.multiply_generator(u1), curve.scalar_multiplication(u2, public_key))
    if not final_pt:
        return False
    return r == final_pt.x % n


def recover_public_key(message_hash: bytes, r: int, s: int, recovery_id: int) -> Point:
    """
    Recover the signer's public point Q = r^(-1) * (s * R - z * G), where R is the nonce point rebuilt from r and the
    recovery id.
    """
    n = curve.order
    if not (curve.is_valid_scalar(r) and curve.is_valid_scalar(s)):
        raise CryptoError("Signature values out of range")
    if recovery_id not in (0, 1, 2, 3):
        raise CryptoError(f"Invalid recovery id {recovery_id}")

    x = r + n if recovery_id & 2 else r
    try:
        big_r = curve.lift_x(x, odd_y=bool(recovery_id & 1))
    except ValueError as e:
        raise CryptoError(f"Cannot recover nonce point: {e}") from e

    z = _hash_to_int(message_hash)
    r_inv = pow(r, -1, n)
    s_r = curve.scalar_multiplication(s, big_r)
    z_g = curve.multiply_generator((-z) % n)
    public_point = curve.scalar_multiplication(r_inv, curve.add_points(s_r, z_g))
    if not public_point:
        raise CryptoError("Recovered public key is the point at infinity")
    return public_point
