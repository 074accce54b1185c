"""
Tests for the PubKey class and private key validation
"""
from secrets import randbelow

import pytest

from walletcore.core import CryptoError
from walletcore.cryptography import PubKey, SECP256K1, private_key_to_int

GX = "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
GY = "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8"


def test_generator_key():
    """
    Private key 1 gives the generator
    """
    pubkey = PubKey(1)
    assert pubkey.to_point() == SECP256K1.generator
    assert pubkey.raw().hex() == GX + GY
    assert pubkey.serial_pubkey().hex() == "04" + GX + GY
    assert pubkey.serial_compressed().hex() == "02" + GX, "Generator has even y"


def test_serialization_formats():
    """
    Compressed, uncompressed and raw encodings all parse back to the same key
    """
    pubkey = PubKey(randbelow(SECP256K1.order - 1) + 1)
    assert len(pubkey.raw()) == 64
    assert len(pubkey.serial_pubkey()) == 65
    assert len(pubkey.serial_compressed()) == 33

    for encoding in (pubkey.raw(), pubkey.serial_pubkey(), pubkey.serial_compressed()):
        assert PubKey.from_bytes(encoding) == pubkey, f"Failed to parse {len(encoding)}-byte public key"


def test_bytes_and_int_keys_agree():
    key_bytes = bytes.fromhex("4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318")
    assert PubKey(key_bytes) == PubKey(int.from_bytes(key_bytes, "big"))


@pytest.mark.parametrize("private_key", [
    0, SECP256K1.order, -1, b'\x00' * 32, b'\xff' * 32, b'\x01' * 31, b'\x01' * 33, "01" * 32, True, 1.0,
])
def test_invalid_private_keys(private_key):
    with pytest.raises(CryptoError):
        private_key_to_int(private_key)
    with pytest.raises(CryptoError):
        PubKey(private_key)


def test_invalid_public_keys():
    pubkey = PubKey(2)
    with pytest.raises(CryptoError):
        PubKey.from_bytes(pubkey.serial_compressed()[:-1])
    with pytest.raises(CryptoError):
        PubKey.from_bytes(b'\x05' + pubkey.raw())
    with pytest.raises(CryptoError):
        # Point (1, 1) is not on the curve
        PubKey.from_bytes((1).to_bytes(32, "big") * 2)
