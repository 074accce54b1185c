"""
Tests for the ExtendedKey class and path derivation
"""
import dataclasses

import pytest

from walletcore.core import ValidationError, CryptoError, InvalidChildKeyError
from walletcore.cryptography import SECP256K1, keccak256
from walletcore.wallet import ExtendedKey, master_key, derive_child, derive_path, parse_path
from walletcore.wallet import xkeys

H = 0x80000000
ORDER = SECP256K1.order


def test_master_key(bip32_master):
    """
    BIP32 test vector 1, chain m
    """
    assert bip32_master.private_key.hex() == "e8f32e723decf4051aefac8e2c93c9c5b214313817cdb01a1494b917c8436b35"
    assert bip32_master.chain_code.hex() == "873dff81c02f525623fd1fe5167eac3a55a049de3d314bb42ee227ffed37d508"
    assert bip32_master.depth == 0
    assert bip32_master.parent_fingerprint == b'\x00' * 4
    assert bip32_master.child_number == 0


def test_bip32_vector_one(bip32_master):
    """
    Private keys and chain codes for m/0H and m/0H/1
    """
    child = bip32_master.derive_child(H)
    assert child.private_key.hex() == "edb2e14f9ee77d26dd93b4ecede8d16ed408ce149b6cd80b0715a2d911a0afea"
    assert child.chain_code.hex() == "47fdacbd0f1097043b78c63c20c34ef4ed9a111d980047ad16282c7ae6236141"
    assert child.depth == 1
    assert child.child_number == H
    assert child.is_hardened

    grandchild = child.derive_child(1)
    assert grandchild.private_key.hex() == "3c6cb8d0f6a264c91ea8b5030fadaa8e538b020f0a387421a12de9319dc93368"
    assert grandchild.chain_code.hex() == "2a7857631386ba23dacac34180dd1983734e444fdbf774041578e9b6adb37c19"
    assert grandchild.depth == 2
    assert not grandchild.is_hardened

    for path in ("m/0'/1", "m/0h/1", "m/0H/1", "0'/1"):
        assert bip32_master.derive_path(path) == grandchild, f"Path {path} did not reach m/0H/1"


def test_fingerprint_is_keccak(bip32_master):
    """
    The parent fingerprint is the leading 4 bytes of Keccak-256 of the parent's compressed public key
    """
    child = bip32_master.derive_child(0)
    expected = keccak256(bip32_master.public_key().serial_compressed())[:4]
    assert bip32_master.fingerprint() == expected
    assert child.parent_fingerprint == expected


def test_functional_interface(bip32_master):
    master = master_key(bytes.fromhex("000102030405060708090a0b0c0d0e0f"))
    assert master == bip32_master
    assert derive_child(master, 5) == master.derive_child(5)
    assert derive_path(master, "m/1/2'") == master.derive_child(1).derive_child(2 + H)


def test_parse_path():
    assert parse_path("m/44'/60'/0'/0/0") == [44 + H, 60 + H, H, 0, 0]
    assert parse_path("44h/60H/7") == [44 + H, 60 + H, 7]
    assert parse_path("m/2147483647'") == [0xffffffff]
    for empty in ("m", "m/", ""):
        assert parse_path(empty) == [], f"{empty!r} should parse to the master path"


@pytest.mark.parametrize("path", ["abc", "m/2147483648'", "m/2147483648", "m/-1", "m//1", "m/1/", "m/1''", "n/0",
                                  "m/ 1"])
def test_parse_path_errors(path):
    with pytest.raises(ValidationError):
        parse_path(path)


def test_empty_path_returns_master(bip32_master):
    assert bip32_master.derive_path("m") is bip32_master
    assert bip32_master.derive_path("m/") is bip32_master


def test_child_index_range(bip32_master):
    with pytest.raises(ValidationError):
        bip32_master.derive_child(-1)
    with pytest.raises(ValidationError):
        bip32_master.derive_child(2 ** 32)


def test_seed_length():
    with pytest.raises(ValidationError):
        ExtendedKey.from_master_seed(None)
    with pytest.raises(ValidationError):
        ExtendedKey.from_master_seed("00" * 32)
    with pytest.raises(ValidationError):
        ExtendedKey.from_master_seed(b'\x01' * 15)
    with pytest.raises(ValidationError):
        ExtendedKey.from_master_seed(b'\x01' * 65)
    assert ExtendedKey.from_master_seed(b'\x01' * 64).depth == 0


def test_invalid_key_material():
    chain_code = b'\x00' * 32
    with pytest.raises(CryptoError):
        ExtendedKey(b'\x00' * 32, chain_code)
    with pytest.raises(CryptoError):
        ExtendedKey(ORDER.to_bytes(32, "big"), chain_code)
    with pytest.raises(CryptoError):
        ExtendedKey(b'\x01' * 31, chain_code)
    with pytest.raises(ValidationError):
        ExtendedKey(b'\x01' * 32, b'\x00' * 31)


def test_max_depth():
    deep = ExtendedKey(b'\x01' * 32, b'\x00' * 32, depth=255)
    with pytest.raises(ValidationError):
        deep.derive_child(0)


def test_immutability_and_repr(bip32_master):
    with pytest.raises(dataclasses.FrozenInstanceError):
        bip32_master.depth = 3
    assert bip32_master.private_key.hex() not in repr(bip32_master), "repr must not reveal the private key"


def _fail_for(chain_code: bytes, index: int, left: bytes):
    """
    Return a replacement for the HMAC that yields IL = left for one (parent, index) pair
    """
    real_hmac = xkeys.hmac_sha512

    def fake_hmac(key: bytes, message: bytes) -> bytes:
        if key == chain_code and message[-4:] == index.to_bytes(4, "big"):
            return left + b'\x11' * 32
        return real_hmac(key=key, message=message)

    return fake_hmac


def test_tweak_out_of_range(bip32_master, monkeypatch):
    """
    IL >= n is reported with the failing index, and auto_retry moves on to index + 1
    """
    expected_next = bip32_master.derive_child(1)
    monkeypatch.setattr(xkeys, "hmac_sha512", _fail_for(bip32_master.chain_code, 0, ORDER.to_bytes(32, "big")))

    with pytest.raises(InvalidChildKeyError) as excinfo:
        bip32_master.derive_child(0)
    assert excinfo.value.index == 0

    retried = bip32_master.derive_child(0, auto_retry=True)
    assert retried == expected_next
    assert retried.child_number == 1


def test_zero_child_key(bip32_master, monkeypatch):
    """
    IL + k = n gives a zero key, also rejected
    """
    left = (ORDER - bip32_master.private_key_int).to_bytes(32, "big")
    monkeypatch.setattr(xkeys, "hmac_sha512", _fail_for(bip32_master.chain_code, H + 3, left))

    with pytest.raises(InvalidChildKeyError):
        bip32_master.derive_path("m/3'")
    assert bip32_master.derive_path("m/3'", auto_retry=True).child_number == H + 4


def test_retry_stops_at_range_end(bip32_master, monkeypatch):
    last = H - 1
    monkeypatch.setattr(xkeys, "hmac_sha512", _fail_for(bip32_master.chain_code, last, b'\xff' * 32))
    with pytest.raises(InvalidChildKeyError):
        bip32_master.derive_child(last, auto_retry=True)


def test_to_dict(bip32_master):
    key_dict = bip32_master.derive_child(H).to_dict()
    assert key_dict["depth"] == 1
    assert key_dict["hardened"] is True
    assert key_dict["private_key"].startswith("0x")
